from __future__ import annotations

import logging
import re
from typing import Optional, Tuple

from ..errors import MissingRuntimeError
from .command import run_cmd, which
from .env import HostEnv

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"[0-9]+\.[0-9]+")


def find_runtime(env: HostEnv, executable: str, *, min_version: str, install_url: str) -> str:
    path = which(executable, env.search_path)
    if not path:
        raise MissingRuntimeError(executable, min_version=min_version, install_url=install_url)
    return path


def parse_runtime_version(output: str) -> Optional[str]:
    """Return the first major.minor found on the first line of `R --version`."""
    lines = output.strip().splitlines()
    if not lines:
        return None
    m = _VERSION_RE.search(lines[0])
    return m.group(0) if m else None


def probe_runtime_version(runtime_path: str) -> Optional[str]:
    r = run_cmd([runtime_path, "--version"], check=False)
    # Older R builds print the banner on stderr.
    return parse_runtime_version(r.stdout or r.stderr)


def _as_tuple(version: str) -> Tuple[int, ...]:
    return tuple(int(part) for part in version.split("."))


def version_at_least(version: str, minimum: str) -> bool:
    return _as_tuple(version) >= _as_tuple(minimum)
