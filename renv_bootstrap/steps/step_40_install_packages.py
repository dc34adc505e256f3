from __future__ import annotations

import logging
from typing import Any, Dict

from ..pipeline import BootstrapCtx
from ..report import add_decision

logger = logging.getLogger(__name__)


class InstallPackagesStep:
    step_id = "40_install_packages"
    required = False

    def run(self, ctx: BootstrapCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        packages = ctx.manifest.cran_packages
        logger.info("[1/3] Installing CRAN packages (%d)...", len(packages))
        ctx.client.install(packages)
        add_decision(state, "cran_packages", packages)
        return state
