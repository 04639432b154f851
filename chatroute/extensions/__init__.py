"""Extension loading.

An extension is a module exposing `setup(router)`, which registers commands
and state listeners. `setup` may be a coroutine function.
"""

from __future__ import annotations

import importlib
import inspect
import sys
from collections.abc import Iterable
from typing import TYPE_CHECKING

from ..constants import EXTENSIONS_PACKAGE
from ..models import ConfigError

if TYPE_CHECKING:
    from ..router import Router

__all__ = ["load_extensions", "module_name"]


def module_name(name: str) -> str:
    """Return the module to import for the extension `name`.

    Dotted names are used as-is, short names are looked up in the bundled
    extensions.
    """
    if "." in name:
        return name
    return f"{EXTENSIONS_PACKAGE}.{name}"


async def _load_extension(router: Router, name: str) -> bool:
    """Import the extension `name` and run its `setup`.

    Returns:
        False if the module can't be found

    Raises:
        ConfigError: if the module has no `setup` or if it failed
    """
    modname = module_name(name)
    try:
        module = importlib.import_module(modname)
    except ModuleNotFoundError:
        router.log.exception("Unable to locate extension called '%s'", name)
        return False
    setup = getattr(module, "setup", None)
    if not callable(setup):
        router.log.critical("Extension %s has no setup(router) function", modname)
        raise ConfigError(name)
    try:
        result = setup(router)
        if inspect.isawaitable(result):
            await result
    except Exception as e:
        router.log.exception("Error loading extension %s:", name)
        raise ConfigError(name) from e
    router.log.info("extension %s loaded", name)
    return True


async def load_extensions(router: Router, names: Iterable[str], paths: Iterable[str] = ()) -> list[str]:
    """Load every extension in `names`, in order.

    Args:
        router: The router passed to each `setup`
        names: Extension names (short or dotted)
        paths: Folders appended to the import path first

    Returns:
        The names of the extensions actually loaded
    """
    for path in paths:
        if path not in sys.path:
            sys.path.append(path)
    loaded = []
    for name in names:
        if await _load_extension(router, name):
            loaded.append(name)
    return loaded
