"""
The local API sidecar package.
Supervises the Node.js worker that serves the desktop shell's local API.

It resolves where the worker script lives for the current build mode, spawns
it at most once, and kills it when the shell exits.
"""
from .errors import (
    ConfigurationError,
    LocalApiError,
    LockError,
    MissingEntrypointError,
    SpawnError,
)
from .paths import BuildMode, ResolvedPaths, detect_build_mode, detect_resource_dir, resolve_paths
from .supervisor import LocalApiSupervisor

__all__ = [
    'BuildMode',
    'ConfigurationError',
    'LocalApiError',
    'LocalApiSupervisor',
    'LockError',
    'MissingEntrypointError',
    'ResolvedPaths',
    'SpawnError',
    'detect_build_mode',
    'detect_resource_dir',
    'resolve_paths',
]
