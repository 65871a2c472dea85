"""
Settings Schema.

Typed field definitions for the crext settings file and validation of loaded
values against them.
"""

from dataclasses import dataclass
from typing import Any


class SchemaError(Exception):
    """Raised when a field definition is inconsistent."""

    pass


class ValidationError(SchemaError):
    """Raised when a settings value does not satisfy its field."""

    pass


@dataclass
class ConfigField:
    """
    One settings field.

    Attributes:
        type_: Expected value type
        default: Value used when the field is not set
        description: Written as a comment into generated settings files
        min: Minimum value (numbers) or length (strings)
        max: Maximum value (numbers) or length (strings)
        choices: Allowed values
    """

    type_: type
    default: Any
    description: str = ""
    min: Any = None
    max: Any = None
    choices: list[Any] | None = None

    def __post_init__(self):
        if not isinstance(self.default, self.type_):
            raise SchemaError(
                f"Default value {self.default!r} does not match type {self.type_.__name__}"
            )
        if self.choices is not None and self.default not in self.choices:
            raise SchemaError(
                f"Default value {self.default!r} not in choices {self.choices}"
            )

    def validate(self, value: Any) -> None:
        """
        Validate a value against this field.

        Raises:
            ValidationError: If the value has the wrong type or breaks a
                constraint
        """
        # bool is an int subclass; keep them apart
        if not isinstance(value, self.type_) or (
            self.type_ is not bool and isinstance(value, bool)
        ):
            raise ValidationError(
                f"Expected type {self.type_.__name__}, got {type(value).__name__}"
            )

        if self.choices is not None and value not in self.choices:
            raise ValidationError(
                f"Value {value!r} not in allowed choices {self.choices}"
            )

        measured = len(value) if self.type_ is str else value
        if self.type_ in (int, float, str):
            if self.min is not None and measured < self.min:
                raise ValidationError(f"Value {value!r} is below minimum {self.min}")
            if self.max is not None and measured > self.max:
                raise ValidationError(f"Value {value!r} is above maximum {self.max}")


def validate_config(config: dict[str, Any], schema: dict[str, ConfigField]) -> dict[str, Any]:
    """
    Validate a settings section and fill in defaults for missing fields.

    Args:
        config: Section as read from the settings file
        schema: Field definitions

    Returns:
        Complete section with defaults applied

    Raises:
        ValidationError: On unknown fields or invalid values
    """
    for key in config:
        if key not in schema:
            raise ValidationError(f"Unknown configuration field: {key}")

    merged = generate_default_config(schema)
    for field_name, value in config.items():
        try:
            schema[field_name].validate(value)
        except ValidationError as e:
            raise ValidationError(f"Field '{field_name}': {e}") from e
        merged[field_name] = value

    return merged


def generate_default_config(schema: dict[str, ConfigField]) -> dict[str, Any]:
    """Build a section holding every field's default value."""
    return {field_name: field.default for field_name, field in schema.items()}
