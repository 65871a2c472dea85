"""
Manifest Localization.

This module resolves an extension's message bundle for a locale and
substitutes ``__MSG_key__`` placeholders in its manifest.

Key features:
- Locale fallback: requested locale, its base language, then the
  manifest's default_locale
- Case-insensitive message keys
- Named $placeholder$ expansion inside messages
- Predefined @@extension_id and @@ui_locale messages
"""

import json
import logging
import re
from pathlib import Path
from typing import Any

from crext.extension.errors import UnsafePathError
from crext.extension.manifest import (
    DEFAULT_LOCALE_FIELD,
    Manifest,
    read_manifest,
)
from crext.extension.paths import (
    LOCALES_DIRNAME,
    MESSAGES_FILENAME,
    join_under,
    sanitize_path_value,
)

logger = logging.getLogger("crext.extension.i18n")

DEFAULT_LOCALE = "en"

_MESSAGE_RE = re.compile(r"__MSG_(@?@?\w+?)__")
_PLACEHOLDER_RE = re.compile(r"\$([A-Za-z0-9_@]+)\$")

Messages = dict[str, Any]


def normalize_locale(locale: str) -> str:
    """Convert a locale tag to _locales directory form (en-US -> en_US)."""
    return locale.strip().replace("-", "_") if isinstance(locale, str) else ""


def _read_messages(version_root: Path, locale: str) -> Messages | None:
    try:
        path = join_under(version_root, LOCALES_DIRNAME, locale, MESSAGES_FILENAME)
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, UnsafePathError):
        return None
    return data if isinstance(data, dict) else None


def locale_candidates(
    locale: str, manifest: Manifest, default_locale: str = DEFAULT_LOCALE
) -> list[str]:
    """
    List the locales to try, in order, for a requested locale.

    Args:
        locale: Requested locale
        manifest: Extension manifest (for default_locale)
        default_locale: Used when the manifest declares no default_locale

    Returns:
        Ordered, de-duplicated list of locale directory names
    """
    candidates = []
    requested = normalize_locale(locale)
    if requested:
        candidates.append(requested)
        if "_" in requested:
            candidates.append(requested.split("_", 1)[0])

    default = sanitize_path_value(
        normalize_locale(manifest.get(DEFAULT_LOCALE_FIELD) or default_locale)
    )
    candidates.append(
        default or sanitize_path_value(normalize_locale(default_locale)) or DEFAULT_LOCALE
    )

    return list(dict.fromkeys(candidates))


def load_messages(
    version_root: Path,
    locale: str,
    manifest: Manifest,
    default_locale: str = DEFAULT_LOCALE,
) -> tuple[Messages, str | None]:
    """
    Load the message bundle for a locale, falling back as needed.

    Args:
        version_root: Version directory of the extension
        locale: Requested locale
        manifest: Extension manifest
        default_locale: Used when the manifest declares no default_locale

    Returns:
        Tuple of (messages, resolved locale); ({}, None) if no bundle loads
    """
    for candidate in locale_candidates(locale, manifest, default_locale):
        messages = _read_messages(version_root, candidate)
        if messages is not None:
            return messages, candidate

    logger.debug(f"No message bundle for {locale!r} under {version_root}")
    return {}, None


def _message_text(entry: Any) -> str | None:
    if not isinstance(entry, dict) or not isinstance(entry.get("message"), str):
        return None

    text = entry["message"]
    placeholders = entry.get("placeholders")
    if not isinstance(placeholders, dict):
        return text

    lookup = {
        name.lower(): value.get("content", "")
        for name, value in placeholders.items()
        if isinstance(value, dict)
    }

    def expand(match: re.Match) -> str:
        content = lookup.get(match.group(1).lower())
        return content if isinstance(content, str) else match.group(0)

    return _PLACEHOLDER_RE.sub(expand, text)


def build_message_table(
    messages: Messages,
    extension_id: str | None = None,
    ui_locale: str | None = None,
) -> dict[str, str]:
    """
    Flatten a messages.json bundle into a lowercase key -> text table.

    Args:
        messages: Raw message bundle
        extension_id: Value for @@extension_id
        ui_locale: Value for @@ui_locale

    Returns:
        Message lookup table
    """
    table = {}
    for key, entry in messages.items():
        text = _message_text(entry)
        if text is not None:
            table[str(key).lower()] = text

    if extension_id is not None:
        table["@@extension_id"] = extension_id
    if ui_locale is not None:
        table["@@ui_locale"] = ui_locale
    return table


def _substitute(value: Any, table: dict[str, str]) -> Any:
    if isinstance(value, str):
        return _MESSAGE_RE.sub(
            lambda m: table.get(m.group(1).lower(), m.group(0)), value
        )
    if isinstance(value, dict):
        return {k: _substitute(v, table) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute(v, table) for v in value]
    return value


def translated_manifest(
    messages: Messages,
    manifest: Manifest,
    extension_id: str | None = None,
    ui_locale: str | None = None,
) -> Manifest:
    """
    Produce a copy of a manifest with message placeholders substituted.

    Placeholders whose key is missing from the bundle keep their literal
    ``__MSG_key__`` text.

    Args:
        messages: Raw message bundle
        manifest: Extension manifest
        extension_id: Value for @@extension_id
        ui_locale: Value for @@ui_locale

    Returns:
        Translated manifest (the input is not modified)
    """
    table = build_message_table(messages, extension_id, ui_locale)
    return _substitute(manifest, table)


def load_translated_manifest(
    install_root: Path,
    extension_id: str,
    version_string: str,
    locale: str,
    default_locale: str = DEFAULT_LOCALE,
) -> Manifest:
    """
    Load a manifest translated into the requested locale.

    Never raises. With no usable bundle the manifest comes back with its
    placeholders untouched; with no usable manifest the result is {}.

    Args:
        install_root: Extension install root
        extension_id: Extension id
        version_string: Version directory name
        locale: Requested locale (e.g., "en_US" or "en-US")
        default_locale: Used when the manifest declares no default_locale

    Returns:
        Translated manifest
    """
    manifest = read_manifest(install_root, extension_id, version_string)
    try:
        version_root = join_under(install_root, extension_id, version_string)
    except UnsafePathError:
        return manifest

    messages, resolved = load_messages(
        version_root, locale, manifest, default_locale
    )
    return translated_manifest(
        messages,
        manifest,
        extension_id=extension_id,
        ui_locale=resolved or normalize_locale(locale) or None,
    )
