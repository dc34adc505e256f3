from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Protocol, Sequence

from ..errors import DelegatedInstallFailure
from .command import CommandError, run_cmd

logger = logging.getLogger(__name__)


class PackageManagerClient(Protocol):
    """What the install steps need from a package manager."""

    def ensure_initialized(self) -> bool:
        ...

    def install(self, packages: Sequence[str]) -> None:
        ...

    def ensure_repository_manager(self) -> None:
        ...

    def snapshot(self) -> None:
        ...


def r_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def r_vector(values: Sequence[str]) -> str:
    return "c(" + ", ".join(r_string(v) for v in values) + ")"


def repo_qualified(packages: Sequence[str], prefix: str = "bioc") -> List[str]:
    """Prefix names with the renv remote type (bioc::DOSE), leaving qualified names alone."""
    return [p if "::" in p else f"{prefix}::{p}" for p in packages]


class RenvClient:
    """Drives renv by piping short R programs into `R --quiet --no-save`."""

    def __init__(
        self,
        *,
        runtime: str,
        project_root: Path,
        cran_repo: str,
        repo_manager: str = "BiocManager",
        lockfile_name: str = "renv.lock",
        dry_run: bool = False,
    ) -> None:
        self.runtime = runtime
        self.project_root = Path(project_root)
        self.cran_repo = cran_repo
        self.repo_manager = repo_manager
        self.lockfile_name = lockfile_name
        self.dry_run = dry_run

    @property
    def lockfile(self) -> Path:
        return self.project_root / self.lockfile_name

    def render(self, body: str) -> str:
        return "\n".join(
            [
                f"options(repos = c(CRAN = {r_string(self.cran_repo)}))",
                body,
                "",
            ]
        )

    def _run_r(self, operation: str, body: str) -> None:
        try:
            run_cmd(
                [self.runtime, "--quiet", "--no-save"],
                cwd=str(self.project_root),
                input_text=self.render(body),
                dry_run=self.dry_run,
            )
        except CommandError as e:
            raise DelegatedInstallFailure(operation, e.returncode, e.stderr.strip()) from e

    def ensure_initialized(self) -> bool:
        if self.lockfile.exists():
            logger.info("renv already initialized (%s)", str(self.lockfile))
            return False
        self._run_r("init", "renv::init(bare = TRUE)")
        return True

    def install(self, packages: Sequence[str]) -> None:
        if not packages:
            return
        self._run_r("install", f"renv::install({r_vector(packages)})")

    def ensure_repository_manager(self) -> None:
        name = r_string(self.repo_manager)
        self._run_r(
            "repository_manager",
            f"if (!requireNamespace({name}, quietly = TRUE)) install.packages({name})",
        )

    def snapshot(self) -> None:
        self._run_r("snapshot", "renv::snapshot(prompt = FALSE)")
