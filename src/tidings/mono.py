"""Single-channel emitter: one implicit event, one listener list."""

from __future__ import annotations

import asyncio
from typing import Any, AsyncIterator

from tidings.config import EmitterConfig
from tidings.registry import Listener, ListenerRegistry

_CHANNEL = None


class MonoEmitter:
    """Emitter for exactly one event.

    Behaves like EventEmitter with the event argument removed. *arity*
    optionally declares the number of positional arguments per emission.
    """

    def __init__(
        self,
        arity: int | None = None,
        *,
        max_listeners: int = 0,
        config: EmitterConfig | None = None,
    ) -> None:
        arities = {_CHANNEL: arity} if arity is not None else None
        self._registry: ListenerRegistry[None] = ListenerRegistry(arities, config)
        if max_listeners:
            self._registry.set_max_listeners(_CHANNEL, max_listeners)

    @property
    def config(self) -> EmitterConfig:
        return self._registry.config

    @property
    def max_listeners(self) -> int:
        """Listener cap for the channel; 0 means unlimited."""
        return self._registry.limit(_CHANNEL)

    @max_listeners.setter
    def max_listeners(self, limit: int) -> None:
        self._registry.set_max_listeners(_CHANNEL, limit)

    def add_listener(self, *listeners: Listener) -> None:
        self._registry.register(_CHANNEL, *listeners)

    def on(self, *listeners: Listener) -> None:
        self._registry.register(_CHANNEL, *listeners)

    async def once(self, *listeners: Listener) -> list[Any]:
        return await self._registry.once(_CHANNEL, *listeners)

    def remove_listener(self, listener: Listener) -> None:
        self._registry.unregister(_CHANNEL, listener)

    def clear(self) -> None:
        self._registry.clear()

    @property
    def listeners(self) -> list[Listener]:
        """Copy of the registered listeners in dispatch order."""
        return self._registry.listeners(_CHANNEL)

    @property
    def listener_count(self) -> int:
        return self._registry.count(_CHANNEL)

    async def emit(self, *args: Any) -> list[Any]:
        return await self._registry.dispatch_async(_CHANNEL, *args)

    def emit_sync(self, *args: Any) -> list[Any]:
        return self._registry.dispatch_sync(_CHANNEL, *args)

    def wait(self, timeout_ms: int | None = None) -> asyncio.Future[tuple[Any, ...]]:
        return self._registry.wait_once(_CHANNEL, timeout_ms)

    def iterate(self, timeout_ms: int | None = None) -> AsyncIterator[tuple[Any, ...]]:
        return self._registry.iterate(_CHANNEL, timeout_ms)
