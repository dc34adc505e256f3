from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional


@dataclass(frozen=True)
class HostEnv:
    """Everything the bootstrapper needs to know about the machine it runs on.

    Steps only ever see this value; the single place that reads the real
    process environment is detect_host_env().
    """

    os_type: str
    search_path: str
    home: Path
    project_root: Path

    def is_os_family(self, family: str) -> bool:
        return self.os_type.lower().startswith(family.lower())


def detect_host_env(
    *,
    project_root: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    platform: Optional[str] = None,
) -> HostEnv:
    environ = os.environ if environ is None else environ
    home = environ.get("HOME") or str(Path.home())
    return HostEnv(
        os_type=platform or sys.platform,
        search_path=environ.get("PATH", os.defpath),
        home=Path(home).expanduser(),
        project_root=Path(project_root or os.getcwd()).expanduser().resolve(),
    )
