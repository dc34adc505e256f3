from .step_10_check_runtime import CheckRuntimeStep
from .step_20_patch_toolchain import PatchToolchainStep
from .step_30_init_lockfile import InitLockfileStep
from .step_40_install_packages import InstallPackagesStep
from .step_50_install_repo_packages import InstallRepoPackagesStep
from .step_60_snapshot import SnapshotStep

__all__ = [
    "CheckRuntimeStep",
    "PatchToolchainStep",
    "InitLockfileStep",
    "InstallPackagesStep",
    "InstallRepoPackagesStep",
    "SnapshotStep",
]
