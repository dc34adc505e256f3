from __future__ import annotations

from typing import Optional


class BootstrapError(RuntimeError):
    """Base class for every failure the bootstrapper reports on its own."""

    exit_code = 1


class ConfigError(BootstrapError):
    exit_code = 2


class MissingRuntimeError(BootstrapError):
    """The required interpreter is not on the search path."""

    def __init__(self, executable: str, *, min_version: str, install_url: str) -> None:
        self.executable = executable
        self.min_version = min_version
        self.install_url = install_url
        super().__init__(
            f"{executable} is not installed. Please install {executable} >= {min_version} from {install_url}"
        )


class ToolchainSdkMissing(BootstrapError):
    """Platform SDK directory not found. Non-fatal: callers warn and continue."""

    def __init__(self, sdk_path: str, *, remediation: str) -> None:
        self.sdk_path = sdk_path
        self.remediation = remediation
        super().__init__(f"SDK not found at {sdk_path}")


class DelegatedInstallFailure(BootstrapError):
    """A package-manager operation failed; carries the tool's exit status."""

    def __init__(self, operation: str, returncode: Optional[int], detail: str = "") -> None:
        self.operation = operation
        self.returncode = returncode
        msg = f"Package manager step '{operation}' failed (exit {returncode})"
        if detail:
            msg = f"{msg}\n{detail}"
        super().__init__(msg)

    @property
    def exit_code(self) -> int:  # type: ignore[override]
        if not self.returncode:
            return 1
        if self.returncode < 0:
            # Killed by signal N: report it the way a shell does.
            return 128 - self.returncode
        return self.returncode


class ToolchainConfigError(BootstrapError):
    """The toolchain config file could not be read or written."""

    def __init__(self, path: str, error: OSError) -> None:
        self.path = path
        self.error = error
        super().__init__(f"Cannot update {path}: {error}")
