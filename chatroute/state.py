"""Router-owned mutable state with change notification.

The state is a single mapping replaced on every update by the shallow
union of the previous value and the supplied keys. Listeners are called
synchronously, in registration order, after each update, even when no
value changed.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import logging

__all__ = ["StateContainer", "StateListener"]

StateListener = Callable[[Mapping[str, Any] | None, Mapping[str, Any], Any], Awaitable[None] | None]


class StateContainer:
    """Holds the state value and the ordered listener set."""

    def __init__(self, owner: Any, logger: logging.Logger) -> None:  # noqa: ANN401
        """Initialize an empty state.

        Args:
            owner: Passed as last argument to every listener (the router)
            logger: Logger used to report asynchronous listener failures
        """
        self.owner = owner
        self.log = logger
        self.value: dict[str, Any] | None = None
        self._listeners: dict[StateListener, None] = {}
        self._pending: set[asyncio.Task] = set()

    @property
    def listeners(self) -> list[StateListener]:
        """Registered listeners, in call order."""
        return list(self._listeners)

    def subscribe(self, listener: StateListener) -> None:
        """Add `listener`; adding the same callable twice keeps its first position."""
        self._listeners.setdefault(listener, None)

    def update(self, partial: Mapping[str, Any] | None) -> dict[str, Any]:
        """Merge `partial` into the state and notify listeners.

        Args:
            partial: Keys to overwrite; None is treated as an empty mapping

        Returns:
            The new state value (always a new dict)
        """
        previous = self.value
        current = {**(previous or {}), **(partial or {})}
        self.value = current
        for listener in list(self._listeners):
            result = listener(previous, current, self.owner)
            if inspect.isawaitable(result):
                self._schedule(listener, result)
        return current

    def _schedule(self, listener: StateListener, awaitable: Awaitable[None]) -> None:
        """Run an asynchronous listener result in the background."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.log.warning("No running event loop, dropping asynchronous state listener %r", listener)
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            return
        task = loop.create_task(self._run_listener(listener, awaitable))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _run_listener(self, listener: StateListener, awaitable: Awaitable[None]) -> None:
        try:
            await awaitable
        except Exception:  # pylint: disable=W0718
            self.log.exception("State listener %r failed", listener)

    async def drain(self) -> None:
        """Wait for asynchronous listeners still running."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
