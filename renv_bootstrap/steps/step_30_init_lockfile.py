from __future__ import annotations

import logging
from typing import Any, Dict

from ..pipeline import BootstrapCtx
from ..report import add_decision

logger = logging.getLogger(__name__)


class InitLockfileStep:
    step_id = "30_init_lockfile"
    required = False

    def run(self, ctx: BootstrapCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        logger.info("Installing R packages (this may take 10-15 minutes on first run)...")
        initialized = ctx.client.ensure_initialized()
        if ctx.dry_run and initialized:
            add_decision(state, "lockfile_bootstrapped", "would_bootstrap")
        else:
            add_decision(state, "lockfile_bootstrapped", initialized)
        return state
