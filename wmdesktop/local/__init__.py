"""
Local package for the World Monitor desktop shell.

This package provides the merged application settings through the
effective_settings object and the local API sidecar supervision.
"""

from .config import effective_settings

__all__ = ["effective_settings"]
