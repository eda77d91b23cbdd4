"""
Exceptions raised while supervising the local API sidecar.

Every failure of `LocalApiSupervisor.start` is a `LocalApiError`, so the
lifecycle hooks can recover all of them at one boundary.
"""
from pathlib import Path


class LocalApiError(Exception):
    """Base class for local API sidecar failures."""


class ConfigurationError(LocalApiError):
    """The runtime resource directory could not be determined."""


class MissingEntrypointError(LocalApiError):
    """The sidecar script does not exist at its resolved path."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Local API sidecar script missing at {path}")


class SpawnError(LocalApiError):
    """The operating system refused to create the sidecar process."""

    def __init__(self, cause: OSError) -> None:
        self.cause = cause
        super().__init__(f"Failed to launch local API: {cause}")


class LockError(LocalApiError):
    """The supervisor state lock could not be acquired."""

    def __init__(self) -> None:
        super().__init__("Failed to lock local API state")
