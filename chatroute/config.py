"""Typed access to a configuration section."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import logging

    from .validation import ConfigItems

__all__ = ["BOOL_FALSE_STRINGS", "BOOL_STRINGS", "BOOL_TRUE_STRINGS", "Configuration", "coerce_to_bool"]

ConfigValueType = bool | str | list | dict

BOOL_TRUE_STRINGS = frozenset({"true", "yes", "on", "1", "enabled"})
BOOL_FALSE_STRINGS = frozenset({"false", "no", "off", "0", "disabled"})
BOOL_STRINGS = BOOL_TRUE_STRINGS | BOOL_FALSE_STRINGS


def coerce_to_bool(value: ConfigValueType | None, default: bool = False) -> bool:
    """Read a loosely typed boolean.

    None gives `default`. Strings are true unless blank or one of
    BOOL_FALSE_STRINGS (case and surrounding spaces ignored). Anything else
    goes through `bool()`.
    """
    if value is None:
        return default
    if not isinstance(value, str):
        return bool(value)
    text = value.strip().lower()
    return bool(text) and text not in BOOL_FALSE_STRINGS


class Configuration(dict):
    """A configuration section falling back to schema defaults."""

    def __init__(
        self,
        *args: Any,  # noqa: ANN401
        logger: logging.Logger,
        schema: ConfigItems | None = None,
        **kwargs: Any,  # noqa: ANN401
    ):
        """Wrap a section.

        Args:
            *args: Passed to dict
            logger: Used to report badly typed values
            schema: Fields whose defaults apply to missing keys
            **kwargs: Passed to dict
        """
        super().__init__(*args, **kwargs)
        self.log = logger
        self.defaults: dict[str, ConfigValueType] = {}
        if schema:
            self.set_schema(schema)

    def set_schema(self, schema: ConfigItems) -> None:
        """Use the defaults declared by `schema` for missing keys."""
        self.defaults = {field.name: field.default for field in schema if field.default is not None}

    def get(self, name: str, default: ConfigValueType | None = None) -> ConfigValueType | None:  # type: ignore[override]
        """Return the value of `name`, else its schema default, else `default`."""
        if name in self:
            return self[name]  # type: ignore[no-any-return]
        return self.defaults.get(name, default)

    def get_bool(self, name: str, default: bool = False) -> bool:
        """Return `name` as a boolean (see `coerce_to_bool`)."""
        return coerce_to_bool(self.get(name), default)

    def get_str(self, name: str, default: str = "") -> str:
        """Return `name` as a string, `default` when missing."""
        value = self.get(name)
        return default if value is None else str(value)

    def get_list(self, name: str) -> list[str]:
        """Return `name` as a list of strings.

        A scalar is logged and wrapped in a list; a missing key gives [].
        """
        value = self.get(name)
        if value is None:
            return []
        if not isinstance(value, list):
            self.log.warning("Expected a list for %s, got %r", name, value)
            value = [value]
        return [str(item) for item in value]
