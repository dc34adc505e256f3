from __future__ import annotations

import logging
from typing import Any, Dict

from ..errors import ToolchainConfigError, ToolchainSdkMissing
from ..lib.toolchain import apply_patch_block, locate_sdk, render_patch_block
from ..pipeline import BootstrapCtx
from ..report import add_decision, add_warning

logger = logging.getLogger(__name__)


class PatchToolchainStep:
    step_id = "20_patch_toolchain"
    required = False

    def run(self, ctx: BootstrapCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = ctx.cfg
        family = cfg.toolchain_os_family
        if not ctx.env.is_os_family(family):
            logger.debug("OS %s is not %s; toolchain untouched", ctx.env.os_type, family)
            add_decision(state, "toolchain_patch", "not_applicable")
            return state

        logger.info("Detected %s - checking C++ toolchain configuration...", family)

        try:
            sdk = locate_sdk(cfg.sdk_path, remediation=cfg.sdk_remediation)
        except ToolchainSdkMissing as e:
            logger.warning("SDK not found at %s. If compilation fails, run:", e.sdk_path)
            logger.warning("  %s", e.remediation)
            add_warning(state, {"toolchain": "sdk_missing", "sdk_path": e.sdk_path, "remediation": e.remediation})
            add_decision(state, "toolchain_patch", "sdk_missing")
            return state

        makevars = ctx.makevars_path
        block = render_patch_block(sdk_path=str(sdk), marker=cfg.marker)
        try:
            changed = apply_patch_block(makevars, block, marker=cfg.marker, dry_run=ctx.dry_run)
        except OSError as e:
            raise ToolchainConfigError(str(makevars), e) from e

        add_decision(state, "makevars_path", str(makevars))
        add_decision(state, "toolchain_patch", "applied" if changed else "already_configured")
        return state
