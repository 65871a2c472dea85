"""
Extension Store.

This module provides the entry point used by the extension loader.

Key features:
- Enumeration of installed extension ids
- Per-extension reconciliation (remove, upgrade, pass through)
- Path resolution for a chosen version
- Localized manifests
- Flagging extensions for removal
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from crext.config import DEFAULT_CONFIG_FILE, Settings, load_settings
from crext.extension.i18n import DEFAULT_LOCALE, load_translated_manifest
from crext.extension.manifest import Manifest, read_manifest
from crext.extension.paths import join_under
from crext.extension.reconciler import ReconcileResult, reconcile
from crext.extension.removal import is_removing_entry, remove_tree, set_for_removal
from crext.extension.scanner import VersionInfo, list_installed_versions

logger = logging.getLogger("crext.extension.store")


class ExtensionStore:
    """
    Lifecycle manager for extensions installed under one root directory.

    Holds no state besides its settings: every call reads the filesystem
    afresh, so calls for different extension ids may run concurrently.
    """

    def __init__(
        self,
        install_root: Path,
        default_locale: str = DEFAULT_LOCALE,
        atomic_removal: bool = True,
    ):
        """
        Initialize ExtensionStore.

        Args:
            install_root: Directory holding installed extensions
            default_locale: Fallback locale for manifests without one
            atomic_removal: Rename flagged extensions aside before deleting
        """
        self.install_root = Path(install_root)
        self.default_locale = default_locale
        self.atomic_removal = atomic_removal

    @classmethod
    def from_settings(cls, settings: Settings) -> "ExtensionStore":
        """Create a store from loaded settings."""
        return cls(
            settings.install_root,
            default_locale=settings.default_locale,
            atomic_removal=settings.atomic_removal,
        )

    @classmethod
    def from_config(cls, config_file: Path = DEFAULT_CONFIG_FILE) -> "ExtensionStore":
        """
        Create a store from a settings file.

        Raises:
            ConfigError: If the settings file is invalid
        """
        return cls.from_settings(load_settings(config_file))

    def list_installed_extension_ids(self) -> list[str]:
        """
        List the ids of installed extensions.

        Returns:
            Sorted extension ids; empty if the install root is unreadable
        """
        try:
            with os.scandir(self.install_root) as entries:
                return sorted(
                    entry.name
                    for entry in entries
                    if entry.is_dir() and not entry.name.startswith(".")
                )
        except OSError as e:
            logger.debug(f"Cannot list {self.install_root}: {e}")
            return []

    def list_installed_versions(self, extension_id: str) -> list[VersionInfo]:
        """List the valid installed versions of an extension."""
        return list_installed_versions(self.install_root, extension_id)

    def read_manifest(self, extension_id: str, version_string: str) -> Manifest:
        """Read a version's manifest, or {} if it is unavailable."""
        return read_manifest(self.install_root, extension_id, version_string)

    def resolve_path(self, extension_id: str, version_string: str) -> Path:
        """
        Resolve the directory of an installed version.

        Raises:
            UnsafePathError: If either argument could escape the install root
        """
        return join_under(self.install_root, extension_id, version_string)

    def load_translated_manifest(
        self, extension_id: str, version_string: str, locale: str
    ) -> Manifest:
        """Load a version's manifest translated into a locale. Never raises."""
        return load_translated_manifest(
            self.install_root,
            extension_id,
            version_string,
            locale,
            default_locale=self.default_locale,
        )

    def set_for_removal(self, extension_id: str) -> Path:
        """
        Flag an extension for removal on the next reconciliation.

        Raises:
            RemovalError: If the flag cannot be written
        """
        return set_for_removal(self.install_root, extension_id)

    def reconcile(self, extension_id: str) -> ReconcileResult:
        """Reconcile one extension. See crext.extension.reconciler.reconcile."""
        return reconcile(
            self.install_root, extension_id, atomic_removal=self.atomic_removal
        )

    def current_version(self, extension_id: str) -> VersionInfo | None:
        """Reconcile an extension and return its surviving version, if any."""
        return self.reconcile(extension_id).current

    def purge_pending_removals(self) -> int:
        """
        Delete roots left behind by interrupted removals.

        Returns:
            Number of leftover roots deleted
        """
        try:
            with os.scandir(self.install_root) as entries:
                leftovers = [
                    Path(entry.path) for entry in entries if is_removing_entry(entry.name)
                ]
        except OSError:
            return 0

        return sum(1 for path in leftovers if remove_tree(path))

    def reconcile_all(self, max_workers: int | None = None) -> dict[str, ReconcileResult]:
        """
        Reconcile every installed extension.

        Args:
            max_workers: Reconcile ids in parallel with this many threads;
                None or 1 runs sequentially

        Returns:
            Dict of extension_id -> ReconcileResult
        """
        self.purge_pending_removals()
        extension_ids = self.list_installed_extension_ids()

        if max_workers is None or max_workers <= 1:
            results = [self.reconcile(extension_id) for extension_id in extension_ids]
        else:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                results = list(executor.map(self.reconcile, extension_ids))

        return {result.extension_id: result for result in results}
