from __future__ import annotations

import logging
from pathlib import Path

from ..errors import ToolchainSdkMissing

logger = logging.getLogger(__name__)


def locate_sdk(sdk_path: str, *, remediation: str) -> Path:
    p = Path(sdk_path)
    if not p.is_dir():
        raise ToolchainSdkMissing(sdk_path, remediation=remediation)
    return p


def render_patch_block(*, sdk_path: str, marker: str) -> str:
    """Makevars lines pointing the compilers at the SDK.

    $(SDK_PATH) is left for make to expand; only the SDK_PATH assignment
    carries the literal path.
    """

    return "\n".join(
        [
            "",
            f"# Added by {marker} setup script",
            f"SDK_PATH = {sdk_path}",
            "CPPFLAGS += -isysroot $(SDK_PATH)",
            "CXXFLAGS += -isysroot $(SDK_PATH) -I$(SDK_PATH)/usr/include/c++/v1",
            "LDFLAGS += -isysroot $(SDK_PATH)",
            "",
        ]
    )


def has_marker(config_file: Path, marker: str) -> bool:
    if not config_file.exists():
        return False
    return marker in config_file.read_text(encoding="utf-8", errors="replace")


def apply_patch_block(config_file: Path, block: str, *, marker: str, dry_run: bool = False) -> bool:
    """Append block to config_file unless marker is already there.

    Returns True when the file was (or, in dry_run, would be) changed.
    """

    if has_marker(config_file, marker):
        logger.info("Makevars already configured (%s)", str(config_file))
        return False

    if dry_run:
        logger.info("Would append toolchain block to %s", str(config_file))
        return True

    config_file.parent.mkdir(parents=True, exist_ok=True)
    with config_file.open("a", encoding="utf-8") as f:
        f.write(block)
    logger.info("Makevars configured at %s", str(config_file))
    return True
