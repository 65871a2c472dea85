"""
Extension Manifest Reader.

This module loads the manifest.json of one installed extension version.

Key features:
- Strict parsing for callers that need to know why a read failed
- Tolerant reads that treat any failure as an empty manifest
- Identity fields used to validate a version directory
"""

import json
import logging
from pathlib import Path
from typing import Any

from crext.extension.errors import ManifestError, UnsafePathError
from crext.extension.paths import MANIFEST_FILENAME, join_under

logger = logging.getLogger("crext.extension.manifest")

# Manifest fields that tie a version directory to its extension
EXTENSION_ID_FIELD = "wavebox_extension_id"
VERSION_FIELD = "version"
DEFAULT_LOCALE_FIELD = "default_locale"

Manifest = dict[str, Any]


def parse_manifest(manifest_path: Path) -> Manifest:
    """
    Parse a manifest.json file.

    Args:
        manifest_path: Path to manifest.json

    Returns:
        Parsed manifest document

    Raises:
        ManifestError: If the file cannot be read, is not valid JSON, or is
            not a JSON object
    """
    try:
        with open(manifest_path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ManifestError(f"Manifest file not found: {manifest_path}") from e
    except json.JSONDecodeError as e:
        raise ManifestError(f"Failed to parse manifest JSON: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(f"Failed to read manifest file: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(
            f"Manifest must be a JSON object, got {type(data).__name__}"
        )
    return data


def read_manifest(install_root: Path, extension_id: str, version_string: str) -> Manifest:
    """
    Read the manifest for one version of an extension.

    Never raises. A missing, unreadable or malformed manifest, or an unsafe
    id/version, yields an empty document which callers must read as "no
    information" rather than "extension absent".

    Args:
        install_root: Extension install root
        extension_id: Extension id
        version_string: Version directory name

    Returns:
        Parsed manifest, or {} on any failure
    """
    try:
        manifest_path = join_under(
            install_root, extension_id, version_string, MANIFEST_FILENAME
        )
        return parse_manifest(manifest_path)
    except (ManifestError, UnsafePathError) as e:
        logger.debug(f"No manifest for {extension_id}/{version_string}: {e}")
        return {}
