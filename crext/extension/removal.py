"""
Removal Flag Protocol.

An installer marks an extension for deletion by writing a sentinel file into
the extension's root directory. The next reconciliation pass deletes the
whole root. The sentinel is the only signal; it has no owner and no expiry.
"""

import logging
import os
import shutil
import uuid
from pathlib import Path

from crext.extension.errors import RemovalError, UnsafePathError
from crext.extension.paths import join_under

logger = logging.getLogger("crext.extension.removal")

UNINSTALL_FLAG = "__uninstall__"

# Prefix for roots that were renamed aside and are waiting to be deleted
REMOVING_PREFIX = "."
REMOVING_MARKER = ".removing-"


def is_set_for_removal(root_path: Path) -> bool:
    """
    Check whether an extension root carries the removal sentinel.

    Args:
        root_path: Extension root directory

    Returns:
        True if the sentinel exists; False if it is absent or the path
        cannot be inspected
    """
    try:
        return os.path.lexists(Path(root_path) / UNINSTALL_FLAG)
    except (OSError, ValueError):
        return False


def set_for_removal(install_root: Path, extension_id: str) -> Path:
    """
    Flag an extension for removal on the next reconciliation pass.

    The extension root is expected to exist.

    Args:
        install_root: Extension install root
        extension_id: Extension id

    Returns:
        Path of the written sentinel

    Raises:
        RemovalError: If the id is unsafe or the sentinel cannot be written
    """
    try:
        flag_path = join_under(install_root, extension_id, UNINSTALL_FLAG)
    except UnsafePathError as e:
        raise RemovalError(f"Cannot flag {extension_id!r} for removal: {e}") from e

    try:
        flag_path.write_text(UNINSTALL_FLAG, encoding="utf-8")
    except OSError as e:
        raise RemovalError(
            f"Failed to write removal flag for {extension_id}: {e}"
        ) from e

    logger.info(f"Extension {extension_id} set for removal")
    return flag_path


def is_removing_entry(name: str) -> bool:
    """Check if a directory entry is a root renamed aside for deletion."""
    return name.startswith(REMOVING_PREFIX) and REMOVING_MARKER in name


def remove_tree(path: Path) -> bool:
    """
    Best-effort recursive delete.

    Args:
        path: Directory to delete

    Returns:
        True if the path no longer exists afterwards
    """
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        return True
    except OSError as e:
        logger.warning(f"Failed to remove {path}: {e}")
        return False
    return True


def remove_root(root_path: Path, atomic: bool = True) -> bool:
    """
    Delete a flagged extension root.

    With atomic set, the root is first renamed to a hidden sibling so that
    a half-deleted tree is never observed under the extension id. If the
    rename fails the root is deleted in place.

    Args:
        root_path: Extension root directory
        atomic: Rename aside before deleting

    Returns:
        True if the root no longer exists under its original name
    """
    root_path = Path(root_path)
    target = root_path

    if atomic:
        aside = root_path.with_name(
            f"{REMOVING_PREFIX}{root_path.name}{REMOVING_MARKER}{uuid.uuid4().hex[:8]}"
        )
        try:
            os.rename(root_path, aside)
            target = aside
        except FileNotFoundError:
            return True
        except OSError as e:
            logger.debug(f"Rename before removal failed for {root_path}: {e}")

    removed = remove_tree(target)
    return removed or target != root_path
