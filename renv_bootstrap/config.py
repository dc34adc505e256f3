from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError

DEFAULT_SDK_PATH = "/Library/Developer/CommandLineTools/SDKs/MacOSX.sdk"
DEFAULT_MARKER = "tcga-hnsc-prognostic-signature"


@dataclass(frozen=True)
class BootstrapConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    def _section(self, name: str) -> Dict[str, Any]:
        return self.raw.get(name) or {}

    @property
    def runtime_executable(self) -> str:
        return str(self._section("runtime").get("executable") or "R")

    @property
    def runtime_min_version(self) -> str:
        return str(self._section("runtime").get("min_version") or "4.3")

    @property
    def runtime_install_url(self) -> str:
        return str(self._section("runtime").get("install_url") or "https://cran.r-project.org/")

    @property
    def toolchain_os_family(self) -> str:
        return str(self._section("toolchain").get("os_family") or "darwin")

    @property
    def sdk_path(self) -> str:
        return str(self._section("toolchain").get("sdk_path") or DEFAULT_SDK_PATH)

    @property
    def toolchain_config_dir(self) -> str:
        return str(self._section("toolchain").get("config_dir") or ".R")

    @property
    def toolchain_config_file(self) -> str:
        return str(self._section("toolchain").get("config_file") or "Makevars")

    @property
    def marker(self) -> str:
        return str(self._section("toolchain").get("marker") or DEFAULT_MARKER)

    @property
    def sdk_remediation(self) -> str:
        return str(self._section("toolchain").get("remediation") or "xcode-select --install")

    @property
    def lockfile_name(self) -> str:
        return str(self._section("renv").get("lockfile") or "renv.lock")

    def makevars_path(self, home: Path) -> Path:
        """Resolve the toolchain config file under the given home directory."""
        return home / self.toolchain_config_dir / self.toolchain_config_file


def load_config(path: Optional[str]) -> BootstrapConfig:
    if not path:
        return BootstrapConfig()

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigError("bootstrap config must be YAML")

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}") from e
    if not isinstance(raw, dict):
        raise ConfigError("bootstrap config must contain a mapping/object")

    return BootstrapConfig(raw=raw)
