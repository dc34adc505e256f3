from __future__ import annotations

import stat
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pytest
import yaml

from renv_bootstrap.config import BootstrapConfig
from renv_bootstrap.errors import DelegatedInstallFailure
from renv_bootstrap.lib.env import HostEnv
from renv_bootstrap.lib.manifests import PackageManifest
from renv_bootstrap.pipeline import BootstrapCtx

R_VERSION_BANNER = 'R version 4.3.2 (2023-10-31) -- "Eye Holes"'


class FakePackageManager:
    """Records every call; optionally fails one operation."""

    def __init__(self, *, fail_on: Optional[str] = None, returncode: int = 1) -> None:
        self.calls: List[Tuple[str, tuple]] = []
        self.fail_on = fail_on
        self.returncode = returncode

    def _record(self, op: str, *args) -> None:
        self.calls.append((op, args))
        if op == self.fail_on:
            raise DelegatedInstallFailure(op, self.returncode)

    def ensure_initialized(self) -> bool:
        self._record("ensure_initialized")
        return True

    def install(self, packages: Sequence[str]) -> None:
        self._record("install", list(packages))

    def ensure_repository_manager(self) -> None:
        self._record("ensure_repository_manager")

    def snapshot(self) -> None:
        self._record("snapshot")

    @property
    def ops(self) -> List[str]:
        return [op for op, _ in self.calls]


def write_fake_r(bin_dir: Path, *, banner: str = R_VERSION_BANNER, exit_code: int = 0) -> Path:
    """A stand-in `R`: prints a version banner, or swallows stdin and exits."""
    bin_dir.mkdir(parents=True, exist_ok=True)
    script = bin_dir / "R"
    script.write_text(
        "\n".join(
            [
                "#!/bin/sh",
                'if [ "$1" = "--version" ]; then',
                f"  echo '{banner}'",
                "  exit 0",
                "fi",
                "while read -r line; do :; done",
                f"exit {exit_code}",
                "",
            ]
        ),
        encoding="utf-8",
    )
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def fake_r_bin(tmp_path):
    bin_dir = tmp_path / "bin"
    write_fake_r(bin_dir)
    return bin_dir


@pytest.fixture
def home(tmp_path):
    p = tmp_path / "home"
    p.mkdir()
    return p


@pytest.fixture
def project(tmp_path):
    p = tmp_path / "project"
    p.mkdir()
    return p


@pytest.fixture
def sdk_dir(tmp_path):
    p = tmp_path / "SDKs" / "MacOSX.sdk"
    p.mkdir(parents=True)
    return p


@pytest.fixture
def make_env(fake_r_bin, home, project):
    def _make(os_type: str = "darwin", search_path: Optional[str] = None) -> HostEnv:
        return HostEnv(
            os_type=os_type,
            search_path=str(fake_r_bin) if search_path is None else search_path,
            home=home,
            project_root=project,
        )

    return _make


@pytest.fixture
def config_file(tmp_path, sdk_dir):
    def _write(**toolchain) -> str:
        raw = {"toolchain": {"sdk_path": str(sdk_dir), **toolchain}}
        p = tmp_path / "bootstrap.yaml"
        p.write_text(yaml.safe_dump(raw), encoding="utf-8")
        return str(p)

    return _write


@pytest.fixture
def manifest():
    return PackageManifest(
        raw={
            "cran": {"repo": "https://cran.example.org", "packages": ["survival", "glmnet"]},
            "bioconductor": {"manager": "BiocManager", "packages": ["DOSE", "bioc::enrichplot"]},
        }
    )


@pytest.fixture
def make_ctx(make_env, manifest, sdk_dir):
    def _make(
        os_type: str = "darwin",
        *,
        sdk_path: Optional[str] = None,
        client: Optional[FakePackageManager] = None,
        dry_run: bool = False,
    ) -> BootstrapCtx:
        cfg = BootstrapConfig(raw={"toolchain": {"sdk_path": sdk_path or str(sdk_dir)}})
        return BootstrapCtx(
            cfg=cfg,
            env=make_env(os_type),
            manifest=manifest,
            client=client or FakePackageManager(),
            dry_run=dry_run,
        )

    return _make
