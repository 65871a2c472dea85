"""
Lifecycle Reconciler.

Reduces the on-disk state of one extension to a single authoritative
version, or removes it entirely when it has been flagged.

Reconciliation is best-effort and idempotent: a failed deletion leaves extra
directories behind, and the next pass removes them.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from crext.extension.errors import UnsafePathError
from crext.extension.paths import join_under
from crext.extension.removal import is_set_for_removal, remove_root, remove_tree
from crext.extension.scanner import VersionInfo, list_installed_versions

logger = logging.getLogger("crext.extension.reconciler")


class ReconcileStatus(Enum):
    """Outcome of reconciling one extension."""

    REMOVED = "removed"
    UPGRADED = "upgraded"
    UNCHANGED = "unchanged"
    ABSENT = "absent"


@dataclass
class ReconcileResult:
    """
    Result of reconciling one extension.

    Attributes:
        extension_id: Extension id
        status: Outcome
        current: Surviving version (UPGRADED/UNCHANGED), else None
        removed: Versions targeted for deletion (UPGRADED only)
    """

    extension_id: str
    status: ReconcileStatus
    current: VersionInfo | None = None
    removed: list[VersionInfo] = field(default_factory=list)


def sort_versions(versions: list[VersionInfo]) -> list[VersionInfo]:
    """
    Sort versions newest first.

    Equal versions are ordered by revision string, greatest first, so the
    result never depends on directory listing order.
    """
    return sorted(versions, key=lambda v: (v.version, v.revision), reverse=True)


def reconcile(install_root: Path, extension_id: str, atomic_removal: bool = True) -> ReconcileResult:
    """
    Reconcile one extension.

    Steps:
    1. Flagged for removal: delete the extension root, return REMOVED
    2. No valid versions: return ABSENT
    3. One valid version: return UNCHANGED
    4. Several: keep the newest, delete the rest, return UPGRADED

    Args:
        install_root: Extension install root
        extension_id: Extension id
        atomic_removal: Rename a flagged root aside before deleting it

    Returns:
        ReconcileResult
    """
    try:
        extension_root = join_under(install_root, extension_id)
    except UnsafePathError as e:
        logger.warning(f"Refusing to reconcile {extension_id!r}: {e}")
        return ReconcileResult(extension_id, ReconcileStatus.ABSENT)

    if is_set_for_removal(extension_root):
        if remove_root(extension_root, atomic=atomic_removal):
            logger.info(f"Removed extension {extension_id}")
        else:
            logger.warning(f"Extension {extension_id} only partially removed")
        return ReconcileResult(extension_id, ReconcileStatus.REMOVED)

    versions = list_installed_versions(install_root, extension_id)

    if not versions:
        return ReconcileResult(extension_id, ReconcileStatus.ABSENT)

    if len(versions) == 1:
        return ReconcileResult(extension_id, ReconcileStatus.UNCHANGED, current=versions[0])

    latest, *stale = sort_versions(versions)
    for info in stale:
        # Each deletion is independent of the others
        remove_tree(info.path)

    logger.info(
        f"Upgraded extension {extension_id} to {latest.version_string}, "
        f"removing {', '.join(info.version_string for info in stale)}"
    )
    return ReconcileResult(
        extension_id, ReconcileStatus.UPGRADED, current=latest, removed=stale
    )
