from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.pkg import repo_qualified
from ..pipeline import BootstrapCtx
from ..report import add_decision

logger = logging.getLogger(__name__)


class InstallRepoPackagesStep:
    step_id = "50_install_repo_packages"
    required = False

    def run(self, ctx: BootstrapCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        packages = repo_qualified(ctx.manifest.repo_packages)
        logger.info("[2/3] Installing Bioconductor packages (%d)...", len(packages))
        ctx.client.ensure_repository_manager()
        ctx.client.install(packages)
        add_decision(state, "bioc_packages", packages)
        return state
