import sys
import logging
from enum import Enum
from pathlib import Path
from typing import NamedTuple, Optional

from wmdesktop.local.config import effective_settings as config
from .errors import ConfigurationError

log = logging.getLogger(__name__)

_MODE_ALIASES = {
    "development": "development",
    "dev": "development",
    "debug": "development",
    "packaged": "packaged",
    "release": "packaged",
    "production": "packaged",
}


class BuildMode(Enum):
    DEVELOPMENT = "development"
    PACKAGED = "packaged"


class ResolvedPaths(NamedTuple):
    """Where the sidecar script lives and which directory it treats as its root."""
    entrypoint: Path
    resource_root: Path


def resolve_paths(mode: BuildMode, source_root: Path, resource_dir: Optional[Path]) -> ResolvedPaths:
    """
    Computes the sidecar entrypoint and resource root for a build mode.

    In development the script is read from the source checkout and the worker
    gets the checkout's parent as its root, so it can reach sibling project
    files. A packaged build keeps both under the runtime resource directory.
    This function never raises: an unknown resource directory becomes '.',
    and the existence check in the supervisor is what rejects a bad path.

    :param mode: The build mode of the running host.
    :param source_root: The directory the sidecar ships under in a checkout.
    :param resource_dir: The runtime resource directory, or None if it is unknown.
    :return ResolvedPaths: The entrypoint script and the worker's resource root.
    """
    subpath = config.SIDECAR_SCRIPT_SUBPATH

    if mode is BuildMode.DEVELOPMENT:
        source_root = Path(source_root)
        parent = source_root.parent
        # Path('/').parent is Path('/') itself.
        resource_root = parent if parent != source_root else Path(".")
        return ResolvedPaths(source_root / subpath, resource_root)

    base = Path(resource_dir) if resource_dir is not None else Path(".")
    return ResolvedPaths(base / subpath, base)


def detect_build_mode(value: Optional[str] = None) -> BuildMode:
    """
    Determines the build mode from a setting string or the interpreter.

    :param value: A mode name such as 'development' or 'packaged'. Defaults to BUILD_MODE.
    :return BuildMode: The parsed mode, or the frozen-interpreter guess.
    """
    if value is None:
        value = config.BUILD_MODE

    if value:
        normalized = _MODE_ALIASES.get(str(value).strip().lower())
        if normalized:
            return BuildMode(normalized)
        log.warning(f"Unknown build mode '{value}'. Falling back to interpreter detection.")

    return BuildMode.PACKAGED if getattr(sys, "frozen", False) else BuildMode.DEVELOPMENT


def detect_resource_dir() -> Path:
    """
    Locates the directory bundled resources are unpacked to at runtime.

    :return pathlib.Path: The configured or bundle-provided resource directory.
    :raises ConfigurationError: If neither a setting nor a frozen bundle provides one.
    """
    if config.RESOURCE_DIR:
        return Path(config.RESOURCE_DIR)

    if getattr(sys, "frozen", False):
        bundle_dir = getattr(sys, "_MEIPASS", None)
        if bundle_dir:
            return Path(bundle_dir)
        return Path(sys.executable).resolve().parent

    raise ConfigurationError("No runtime resource directory is available outside a packaged build.")
