from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.runtime import find_runtime, probe_runtime_version, version_at_least
from ..pipeline import BootstrapCtx
from ..report import add_decision, add_warning

logger = logging.getLogger(__name__)


class CheckRuntimeStep:
    step_id = "10_check_runtime"
    # Runs even with --start-at so nothing touches disk without a runtime.
    required = True

    def run(self, ctx: BootstrapCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = ctx.cfg
        runtime = find_runtime(
            ctx.env,
            cfg.runtime_executable,
            min_version=cfg.runtime_min_version,
            install_url=cfg.runtime_install_url,
        )
        add_decision(state, "runtime_path", runtime)

        version = probe_runtime_version(runtime)
        add_decision(state, "runtime_version", version)
        if version is None:
            logger.warning("Could not determine %s version from %s --version", cfg.runtime_executable, runtime)
            return state

        logger.info("Found %s version: %s", cfg.runtime_executable, version)
        # Soft check: an old runtime is reported, never rejected.
        if not version_at_least(version, cfg.runtime_min_version):
            logger.warning(
                "%s %s is older than the supported minimum %s; package builds may fail",
                cfg.runtime_executable,
                version,
                cfg.runtime_min_version,
            )
            add_warning(state, {"runtime": "below_min_version", "version": version, "min": cfg.runtime_min_version})
        return state
