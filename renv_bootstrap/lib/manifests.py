from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..errors import ConfigError

DEFAULT_CRAN_REPO = "https://cloud.r-project.org"
DEFAULT_REPO_MANAGER = "BiocManager"


def _package_root() -> Path:
    # renv_bootstrap/lib/manifests.py -> renv_bootstrap
    return Path(__file__).resolve().parents[1]


def default_manifest_path() -> Path:
    return _package_root() / "manifests" / "packages.yaml"


def _str_list(value: Any, *, where: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"{where} must be a list")
    return [str(v).strip() for v in value if str(v).strip()]


@dataclass(frozen=True)
class PackageManifest:
    raw: Dict[str, Any]

    @property
    def cran_repo(self) -> str:
        return str(((self.raw.get("cran") or {}).get("repo")) or DEFAULT_CRAN_REPO)

    @property
    def cran_packages(self) -> List[str]:
        return _str_list((self.raw.get("cran") or {}).get("packages"), where="cran.packages")

    @property
    def repo_manager(self) -> str:
        return str(((self.raw.get("bioconductor") or {}).get("manager")) or DEFAULT_REPO_MANAGER)

    @property
    def repo_packages(self) -> List[str]:
        return _str_list((self.raw.get("bioconductor") or {}).get("packages"), where="bioconductor.packages")


def load_manifest(path: Optional[str] = None) -> PackageManifest:
    p = Path(path) if path else default_manifest_path()
    if not p.exists():
        raise FileNotFoundError(str(p))

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid manifest YAML: {p}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"Manifest must be a mapping/dict: {p}")

    return PackageManifest(raw=raw)
