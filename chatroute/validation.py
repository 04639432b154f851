"""Declarative checks for configuration sections.

A schema is a `ConfigItems` list of `ConfigField`. `ConfigValidator` reports
missing required keys, values of the wrong type and custom validator
failures as ready-to-log messages, and points out unknown keys, suggesting
the closest known one.
"""

import difflib
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from .config import BOOL_STRINGS

__all__ = [
    "ConfigField",
    "ConfigItems",
    "ConfigValidator",
    "format_config_error",
]


@dataclass
class ConfigField:
    """One expected key of a configuration section.

    Attributes:
        name: The configuration key
        field_type: Expected type: str, bool or list
        required: Whether the key must be present
        default: Value used when the key is absent
        description: Short explanation, appended to the missing-field hint
        validator: Extra check returning a list of error messages
    """

    name: str
    field_type: type = str
    required: bool = False
    default: Any = None
    description: str = ""
    validator: Callable[[Any], list[str]] | None = None


class ConfigItems(list):
    """The fields of a section, in documentation order."""

    def __init__(self, *args: ConfigField) -> None:
        super().__init__(args)

    def names(self) -> list[str]:
        """Return the known keys, sorted."""
        return sorted(field.name for field in self)


# How to write a value of each type in TOML, used in error hints
_TOML_SYNTAX = {
    str: '{name} = "value"',
    bool: "{name} = true/false (without quotes)",
    list: '{name} = ["item1", "item2"]',
}


def _accepts(field_type: type, value: Any) -> bool:  # noqa: ANN401
    """Tell whether `value` is usable as `field_type`."""
    if field_type is bool:
        return isinstance(value, bool) or (isinstance(value, str) and value.lower() in BOOL_STRINGS)
    return isinstance(value, field_type)


def _find_similar_key(unknown_key: str, known_keys: list[str]) -> str | None:
    """Return the known key closest to `unknown_key`, if any is close enough."""
    matches = difflib.get_close_matches(unknown_key, known_keys, n=1)
    return matches[0] if matches else None


def format_config_error(section: str, field: str, message: str, suggestion: str = "") -> str:
    """Format a configuration error message.

    Args:
        section: Configuration section name
        field: Field name that has the error
        message: Error description
        suggestion: Optional hint to fix the error

    Returns:
        Formatted error message
    """
    msg = f"[{section}] Config error for '{field}': {message}"
    if suggestion:
        msg += f" -> {suggestion}"
    return msg


class ConfigValidator:
    """Checks one configuration section against a schema."""

    def __init__(self, config: dict, section: str, logger: logging.Logger) -> None:
        """Initialize the validator.

        Args:
            config: The section to check
            section: Name of the section, for messages
            logger: Where unknown keys are reported
        """
        self.config = config
        self.section = section
        self.log = logger

    def validate(self, schema: ConfigItems) -> list[str]:
        """Check every field of `schema`.

        Returns:
            Error messages, empty when the section is valid
        """
        errors: list[str] = []
        for field_def in schema:
            errors.extend(self._field_errors(field_def))
        return errors

    def _field_errors(self, field_def: ConfigField) -> Iterator[str]:
        value = self.config.get(field_def.name)
        if value is None:
            if field_def.required:
                hint = f"Add {self._syntax(field_def)} to [{self.section}]"
                if field_def.description:
                    hint += f" ({field_def.description})"
                yield self._error(field_def, "Missing required field", hint)
            return
        if not _accepts(field_def.field_type, value):
            expected = field_def.field_type.__name__
            yield self._error(field_def, f"Expected {expected}, got {type(value).__name__}", f"Use {self._syntax(field_def)}")
            return
        if field_def.validator:
            for message in field_def.validator(value):
                yield self._error(field_def, message)

    def _error(self, field_def: ConfigField, message: str, suggestion: str = "") -> str:
        return format_config_error(self.section, field_def.name, message, suggestion)

    @staticmethod
    def _syntax(field_def: ConfigField) -> str:
        template = _TOML_SYNTAX.get(field_def.field_type, "'{name}'")
        return template.format(name=field_def.name)

    def warn_unknown_keys(self, schema: ConfigItems) -> list[str]:
        """Log a warning for each key of the section missing from `schema`.

        Returns:
            The warning messages
        """
        known_keys = schema.names()
        warnings = []
        for key in self.config:
            if key in known_keys:
                continue
            similar = _find_similar_key(key, known_keys)
            hint = f"did you mean '{similar}'?" if similar else "will be ignored"
            msg = f"[{self.section}] Unknown option '{key}' ({hint})"
            self.log.warning(msg)
            warnings.append(msg)
        return warnings
