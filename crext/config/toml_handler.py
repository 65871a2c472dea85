"""
TOML File I/O.

Settings are parsed with tomllib and written with tomlkit so that generated
files carry field descriptions as comments.
"""

import tomllib
from pathlib import Path
from typing import Any

import tomlkit

from crext.config.schema import ConfigField


class TOMLError(Exception):
    """Raised when a TOML file cannot be read or written."""

    pass


def read_toml(file_path: Path) -> dict[str, Any]:
    """
    Read and parse a TOML file.

    Raises:
        TOMLError: If the file cannot be read or parsed
    """
    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError as e:
        raise TOMLError(f"TOML file not found: {file_path}") from e
    except tomllib.TOMLDecodeError as e:
        raise TOMLError(f"Failed to parse TOML file {file_path}: {e}") from e
    except OSError as e:
        raise TOMLError(f"Failed to read TOML file {file_path}: {e}") from e


def write_toml(file_path: Path, content: str) -> None:
    """
    Write TOML text to a file, creating parent directories.

    Raises:
        TOMLError: If the file cannot be written
    """
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise TOMLError(f"Failed to write TOML file {file_path}: {e}") from e


def generate_toml_from_schema(
    section: str, schema: dict[str, ConfigField], values: dict[str, Any]
) -> str:
    """
    Render one settings section as TOML, with descriptions as comments.

    Args:
        section: Table name
        schema: Field definitions
        values: Field values (defaults are used for missing fields)

    Returns:
        TOML document text
    """
    doc = tomlkit.document()
    doc.add(tomlkit.comment(f"crext settings: [{section}]"))
    doc.add(tomlkit.nl())

    table = tomlkit.table()
    for field_name, field in schema.items():
        if field.description:
            table.add(tomlkit.comment(field.description))
        if field.choices is not None:
            table.add(tomlkit.comment(f"Choices: {field.choices}"))
        table.add(field_name, values.get(field_name, field.default))

    doc.add(section, table)
    return tomlkit.dumps(doc)
