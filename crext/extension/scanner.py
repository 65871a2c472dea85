"""
Version Directory Scanner.

Enumerates the installed version directories of one extension and keeps the
ones whose name parses and whose manifest agrees with the directory path.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from crext.extension.errors import UnsafePathError
from crext.extension.manifest import EXTENSION_ID_FIELD, VERSION_FIELD, read_manifest
from crext.extension.paths import join_under
from crext.extension.version import InvalidVersion, SemanticVersion, split_version_string

logger = logging.getLogger("crext.extension.scanner")


@dataclass(frozen=True)
class VersionInfo:
    """
    One installed version of an extension, as found by a single scan.

    Attributes:
        extension_id: Extension id
        version: Parsed semantic version
        revision: Raw revision suffix of the directory name
        version_string: Original directory name
        path: Version directory path
    """

    extension_id: str
    version: SemanticVersion
    revision: str
    version_string: str
    path: Path


def list_subdirectories(path: Path) -> list[str]:
    """
    List the names of the immediate subdirectories of a path.

    Returns an empty list if the path is missing or unreadable.
    """
    try:
        with os.scandir(path) as entries:
            return [entry.name for entry in entries if entry.is_dir()]
    except OSError:
        return []


def parse_version_entry(extension_id: str, extension_root: Path, name: str) -> VersionInfo | None:
    """
    Build a VersionInfo from a version directory name.

    Args:
        extension_id: Extension id
        extension_root: Extension root directory
        name: Version directory name

    Returns:
        VersionInfo, or None if the name does not start with a semver
    """
    try:
        version, revision = split_version_string(name)
    except InvalidVersion:
        return None

    return VersionInfo(
        extension_id=extension_id,
        version=version,
        revision=revision,
        version_string=name,
        path=extension_root / name,
    )


def is_valid_candidate(install_root: Path, info: VersionInfo) -> bool:
    """
    Check that a candidate's manifest declares the same id and version.

    The declared version must equal the canonical parsed version exactly;
    "1.0" does not match a directory parsed as "1.0.0".
    """
    manifest = read_manifest(install_root, info.extension_id, info.version_string)
    if manifest.get(EXTENSION_ID_FIELD) != info.extension_id:
        return False
    if manifest.get(VERSION_FIELD) != info.version.canonical:
        return False
    return True


def list_installed_versions(install_root: Path, extension_id: str) -> list[VersionInfo]:
    """
    List the valid installed versions of an extension.

    Directories whose name is not a version, or whose manifest disagrees
    with the path, are skipped and left on disk. Order is unspecified.

    Args:
        install_root: Extension install root
        extension_id: Extension id

    Returns:
        Valid versions
    """
    try:
        extension_root = join_under(install_root, extension_id)
    except UnsafePathError:
        return []

    versions = []
    for name in list_subdirectories(extension_root):
        info = parse_version_entry(extension_id, extension_root, name)
        if info is None:
            logger.debug(f"Ignoring non-version directory {extension_id}/{name}")
            continue

        if not is_valid_candidate(install_root, info):
            logger.debug(f"Ignoring {extension_id}/{name}: manifest does not match path")
            continue

        versions.append(info)

    return versions
