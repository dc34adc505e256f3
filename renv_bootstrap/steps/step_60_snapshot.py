from __future__ import annotations

import logging
from typing import Any, Dict

from ..pipeline import BootstrapCtx

logger = logging.getLogger(__name__)


class SnapshotStep:
    step_id = "60_snapshot"
    required = False

    def run(self, ctx: BootstrapCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        logger.info("[3/3] Creating lockfile snapshot...")
        ctx.client.snapshot()
        logger.info("All packages installed successfully")
        return state
