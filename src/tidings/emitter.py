"""Multi-event emitter keyed by event name."""

from __future__ import annotations

import asyncio
from types import MappingProxyType
from typing import Any, AsyncIterator, Generic, Mapping

from tidings.config import EmitterConfig
from tidings.registry import K, Listener, ListenerRegistry


class EventEmitter(Generic[K]):
    """Publish/subscribe emitter for named events.

    *events* optionally declares how many positional arguments each event
    carries; listeners and emissions for declared events are checked against
    it. Undeclared events accept any shape.

    Example::

        events = EventEmitter({"message": 2})
        events.on("message", lambda user, text: print(user, text))
        await events.emit("message", "ada", "hello")
    """

    def __init__(
        self,
        events: Mapping[K, int] | None = None,
        *,
        config: EmitterConfig | None = None,
    ) -> None:
        self._registry: ListenerRegistry[K] = ListenerRegistry(events, config)

    @property
    def config(self) -> EmitterConfig:
        return self._registry.config

    def add_listener(self, event: K, *listeners: Listener) -> None:
        """Register one or more listeners for *event*."""
        self._registry.register(event, *listeners)

    def on(self, event: K, *listeners: Listener) -> None:
        """Alias of add_listener."""
        self._registry.register(event, *listeners)

    async def once(self, event: K, *listeners: Listener) -> list[Any]:
        """Run *listeners* once with the args of the next *event* emission."""
        return await self._registry.once(event, *listeners)

    def remove_listener(self, event: K, listener: Listener) -> None:
        """Remove every registration of *listener* for *event*."""
        self._registry.unregister(event, listener)

    def remove_listeners(self, event: K) -> None:
        """Remove all listeners for *event*."""
        self._registry.unregister_all(event)

    def clear(self) -> None:
        """Remove all listeners for all events."""
        self._registry.clear()

    def listeners(self, event: K) -> list[Listener]:
        return self._registry.listeners(event)

    def listener_count(self, event: K) -> int:
        return self._registry.count(event)

    def event_names(self) -> list[K]:
        """Return the events that currently have listeners."""
        return self._registry.keys()

    def set_max_listeners(self, event: K, limit: int) -> None:
        """Cap listeners for *event*; 0 removes the cap."""
        self._registry.set_max_listeners(event, limit)

    @property
    def max_listeners(self) -> Mapping[K, int]:
        """Read-only snapshot of the per-event limits."""
        return MappingProxyType(self._registry.max_listeners())

    async def emit(self, event: K, *args: Any) -> list[Any]:
        """Emit *event* and await every listener's result."""
        return await self._registry.dispatch_async(event, *args)

    def emit_sync(self, event: K, *args: Any) -> list[Any]:
        """Emit *event* without awaiting listener results."""
        return self._registry.dispatch_sync(event, *args)

    def wait(self, event: K, timeout_ms: int | None = None) -> asyncio.Future[tuple[Any, ...]]:
        """Return a future for the args of the next *event* emission."""
        return self._registry.wait_once(event, timeout_ms)

    def iterate(self, event: K, timeout_ms: int | None = None) -> AsyncIterator[tuple[Any, ...]]:
        """Async-iterate over the args of successive *event* emissions."""
        return self._registry.iterate(event, timeout_ms)
