"""Base manager class for orgboard managers."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from .. import const
from ..rules import DEFAULT_RULES

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

    from ..rules import RuleSet


class BaseManager:
    """Base class for orgboard managers with owned listeners and tasks.

    Provides:
    - Listener registration (async_add_listener) returning a remove callable
    - Event emitting to registered listeners (emit)
    - Tracked background tasks (_create_task) and async_block_till_done()

    Listeners and tasks belong to the manager instance; nothing is stored
    globally, so releasing a manager releases everything it registered.
    """

    def __init__(self, rules: RuleSet | None = None) -> None:
        """Initialize manager.

        Args:
            rules: Rule tables (defaults to DEFAULT_RULES)
        """
        self.rules: RuleSet = rules or DEFAULT_RULES
        self._listeners: list[Callable[[Any], None]] = []
        self._tasks: set[asyncio.Task[Any]] = set()

    def async_add_listener(self, callback: Callable[[Any], None]) -> Callable[[], None]:
        """Register a listener and return a callable that removes it.

        Removing twice is harmless.
        """
        self._listeners.append(callback)

        def remove_listener() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return remove_listener

    def emit(self, payload: Any) -> None:
        """Deliver payload to every listener.

        A failing listener is logged and does not prevent delivery to others.
        """
        const.LOGGER.debug(
            "%s emitting to %d listener(s)",
            self.__class__.__name__,
            len(self._listeners),
        )
        for callback in list(self._listeners):
            try:
                callback(payload)
            except Exception:
                const.LOGGER.exception(
                    "Error in %s listener %s", self.__class__.__name__, callback
                )

    def _clear_listeners(self) -> None:
        self._listeners.clear()

    def _create_task(
        self, coro: Coroutine[Any, Any, Any], name: str | None = None
    ) -> asyncio.Task[Any] | None:
        """Schedule coro on the running loop and track it until done.

        Returns None (and closes coro) when called outside an event loop.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            const.LOGGER.warning(
                "%s cannot schedule %s: no running event loop",
                self.__class__.__name__,
                name or "background task",
            )
            return None
        task = loop.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _cancel_tasks(self) -> None:
        for task in list(self._tasks):
            task.cancel()

    @property
    def pending_task_count(self) -> int:
        """Number of background tasks not yet finished."""
        return len(self._tasks)

    async def async_block_till_done(self) -> None:
        """Wait until all tracked tasks, including ones they spawn, are done."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
