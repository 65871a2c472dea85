"""
crext Configuration - TOML-based settings for the extension store.

Example settings file:

    [extensions]
    install_root = "~/.crext/extensions"
    default_locale = "en"
    atomic_removal = true

Example usage:
    from crext.config import load_settings

    settings = load_settings(Path("config/crext.toml"))
    print(settings.install_root)
"""

from dataclasses import dataclass
from pathlib import Path

from crext.config.schema import ConfigField, SchemaError, validate_config
from crext.config.toml_handler import (
    TOMLError,
    generate_toml_from_schema,
    read_toml,
    write_toml,
)

SECTION = "extensions"

# Default settings file path
DEFAULT_CONFIG_FILE = Path("config/crext.toml")

SETTINGS_SCHEMA: dict[str, ConfigField] = {
    "install_root": ConfigField(
        str, "~/.crext/extensions", "Directory holding installed extensions", min=1
    ),
    "default_locale": ConfigField(
        str, "en", "Locale used when a manifest declares no default_locale", min=1
    ),
    "atomic_removal": ConfigField(
        bool, True, "Rename flagged extensions aside before deleting them"
    ),
}


class ConfigError(Exception):
    """Raised when the settings file is unusable."""

    pass


@dataclass(frozen=True)
class Settings:
    """
    Extension store settings.

    Attributes:
        install_root: Directory holding installed extensions (expanded)
        default_locale: Fallback locale for manifests without default_locale
        atomic_removal: Rename flagged extensions aside before deleting
    """

    install_root: Path
    default_locale: str = "en"
    atomic_removal: bool = True


def load_settings(config_file: Path = DEFAULT_CONFIG_FILE) -> Settings:
    """
    Load settings from a TOML file.

    A missing file or missing [extensions] section yields defaults.

    Args:
        config_file: Path to the settings file

    Returns:
        Settings

    Raises:
        ConfigError: If the file cannot be parsed or holds invalid values
    """
    section = {}
    if config_file.exists():
        try:
            data = read_toml(config_file)
        except TOMLError as e:
            raise ConfigError(str(e)) from e

        section = data.get(SECTION, {})
        if not isinstance(section, dict):
            raise ConfigError(f"[{SECTION}] in {config_file} must be a table")

    try:
        values = validate_config(section, SETTINGS_SCHEMA)
    except SchemaError as e:
        raise ConfigError(f"Invalid settings in {config_file}: {e}") from e

    return Settings(
        install_root=Path(values["install_root"]).expanduser(),
        default_locale=values["default_locale"],
        atomic_removal=values["atomic_removal"],
    )


def write_default_config(config_file: Path = DEFAULT_CONFIG_FILE) -> None:
    """
    Write a settings file holding the default values.

    Raises:
        ConfigError: If the file cannot be written
    """
    content = generate_toml_from_schema(SECTION, SETTINGS_SCHEMA, {})
    try:
        write_toml(config_file, content)
    except TOMLError as e:
        raise ConfigError(str(e)) from e


__all__ = [
    "ConfigError",
    "Settings",
    "SETTINGS_SCHEMA",
    "load_settings",
    "write_default_config",
]
