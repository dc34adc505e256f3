from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, Optional

from .config import load_config
from .errors import BootstrapError
from .lib.command import which
from .lib.env import HostEnv, detect_host_env
from .lib.manifests import load_manifest
from .lib.pkg import PackageManagerClient, RenvClient
from .logging_utils import configure_logging
from .pipeline import BootstrapCtx, run_pipeline
from .report import new_report, save_report
from .steps import (
    CheckRuntimeStep,
    InitLockfileStep,
    InstallPackagesStep,
    InstallRepoPackagesStep,
    PatchToolchainStep,
    SnapshotStep,
)

logger = logging.getLogger(__name__)


def build_steps():
    return [
        CheckRuntimeStep(),
        PatchToolchainStep(),
        InitLockfileStep(),
        InstallPackagesStep(),
        InstallRepoPackagesStep(),
        SnapshotStep(),
    ]


def run(
    *,
    env: HostEnv,
    config_path: Optional[str] = None,
    manifest_path: Optional[str] = None,
    client: Optional[PackageManagerClient] = None,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    dry_run: bool = False,
    report_path: Optional[str] = None,
) -> Dict[str, Any]:
    """Run the bootstrap pipeline against an explicit host description."""

    cfg = load_config(config_path)
    manifest = load_manifest(manifest_path)

    if client is None:
        # Run the same binary the runtime check resolves; a miss is reported by that step.
        runtime = which(cfg.runtime_executable, env.search_path) or cfg.runtime_executable
        client = RenvClient(
            runtime=runtime,
            project_root=env.project_root,
            cran_repo=manifest.cran_repo,
            repo_manager=manifest.repo_manager,
            lockfile_name=cfg.lockfile_name,
            dry_run=dry_run,
        )

    ctx = BootstrapCtx(cfg=cfg, env=env, manifest=manifest, client=client, dry_run=dry_run)
    state = new_report()
    state["execution"]["project_root"] = str(env.project_root)
    state["execution"]["dry_run"] = dry_run

    try:
        result = run_pipeline(ctx=ctx, state=state, steps=build_steps(), start_at=start_at, stop_after=stop_after)
        state = result.state
        state.setdefault("execution", {}).setdefault("summary", {})["ran_steps"] = result.ran_steps
        state.setdefault("execution", {}).setdefault("summary", {})["skipped_steps"] = result.skipped_steps
        return state
    except Exception as e:
        state.setdefault("execution", {}).setdefault("errors", []).append(
            {
                "step": (state.get("execution") or {}).get("current_step"),
                "error": str(e),
            }
        )
        raise
    finally:
        if report_path:
            save_report(report_path, state)


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="renv-bootstrap", description="Set up the R environment for this project")
    p.add_argument("--project-root", default=None, help="Project directory holding renv.lock (default: cwd)")
    p.add_argument("--config", default=None, help="Optional bootstrap config (yaml)")
    p.add_argument("--manifest", default=None, help="Package manifest (yaml); defaults to the bundled one")
    p.add_argument("--log", default=None, help="Also write a detailed log to this file")
    p.add_argument("--report", default=None, help="Write a run report (json|yaml)")
    p.add_argument("--start-at", default=None, help="Start at step_id (e.g. 40_install_packages)")
    p.add_argument("--stop-after", default=None, help="Stop after step_id (e.g. 20_patch_toolchain)")
    p.add_argument("--dry-run", action="store_true", help="Log commands and file changes without applying them")
    p.add_argument("--no-color", action="store_true")
    p.add_argument("-v", "--verbose", action="store_true")

    args = p.parse_args(argv)

    configure_logging(
        log_path=args.log,
        level=logging.DEBUG if args.verbose else logging.INFO,
        color=False if args.no_color else None,
    )

    env = detect_host_env(project_root=args.project_root)

    try:
        run(
            env=env,
            config_path=args.config,
            manifest_path=args.manifest,
            start_at=args.start_at,
            stop_after=args.stop_after,
            dry_run=bool(args.dry_run),
            report_path=args.report,
        )
    except BootstrapError as e:
        logger.error("%s", e)
        return e.exit_code
    except (FileNotFoundError, ValueError) as e:
        # Missing config/manifest file or unknown --start-at/--stop-after ids.
        logger.error("%s", e)
        return 2

    logger.info("Setup complete! You can now run the analysis.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
