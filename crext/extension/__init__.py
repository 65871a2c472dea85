"""
crext Extension Store - Discovery, versioning and removal of installed
extension packages.

This module handles:
- Manifest reading and localization
- Version directory scanning and validation
- Removal flags
- Reconciliation to a single current version
"""

from crext.extension.errors import (
    ExtensionError,
    ManifestError,
    RemovalError,
    UnsafePathError,
)
from crext.extension.reconciler import ReconcileResult, ReconcileStatus
from crext.extension.scanner import VersionInfo
from crext.extension.store import ExtensionStore
from crext.extension.version import SemanticVersion

__all__ = [
    "ExtensionError",
    "ExtensionStore",
    "ManifestError",
    "ReconcileResult",
    "ReconcileStatus",
    "RemovalError",
    "SemanticVersion",
    "UnsafePathError",
    "VersionInfo",
]
