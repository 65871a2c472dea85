"""
crext - Lifecycle manager for browser-extension packages installed on disk.

This is the main package that exports the public API.
"""

__version__ = "0.1.0"

from crext.extension import (
    ExtensionError,
    ExtensionStore,
    ReconcileResult,
    ReconcileStatus,
    RemovalError,
    UnsafePathError,
    VersionInfo,
)

__all__ = [
    "__version__",
    "ExtensionError",
    "ExtensionStore",
    "ReconcileResult",
    "ReconcileStatus",
    "RemovalError",
    "UnsafePathError",
    "VersionInfo",
]
