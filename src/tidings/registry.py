"""Listener registry: the dispatch core shared by both emitters.

A registry maps a key to an ordered list of listeners plus an optional
per-key listener cap. The keyed emitter uses arbitrary hashable keys; the
single-channel emitter uses the unit key ``None``.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, AsyncIterator, Awaitable, Callable, Generic, Hashable, Mapping, TypeVar

from tidings.config import EmitterConfig
from tidings.errors import LimitExceededError, ListenerError, WaitTimeoutError
from tidings.signature import check_args, check_listener

K = TypeVar("K", bound=Hashable)

Listener = Callable[..., Any]


class ListenerRegistry(Generic[K]):
    """Ordered listener lists per key with sync/async dispatch and waiting.

    Dispatch always works on a snapshot taken at call time, so listeners may
    add or remove listeners (including themselves) while being invoked.
    Listener lists are replaced, never mutated in place.
    """

    def __init__(
        self,
        arities: Mapping[K, int] | None = None,
        config: EmitterConfig | None = None,
    ) -> None:
        self.config = config or EmitterConfig()
        self._listeners: dict[K, list[Listener]] = {}
        self._limits: dict[K, int] = {}
        self._arities: dict[K, int] = dict(arities or {})
        self._log = logging.getLogger(self.config.logger_name)

    # --- registration ---------------------------------------------------------

    def register(self, key: K, *listeners: Listener) -> None:
        """Add *listeners* for *key* as one group.

        Raises LimitExceededError (adding nothing) when the group would push
        the key over its max-listener limit.
        """
        self._register(key, listeners)

    def _register(self, key: K, listeners: tuple[Listener, ...], *, enforce_limit: bool = True) -> None:
        for listener in listeners:
            if not callable(listener):
                raise TypeError(f"Listener must be callable, got {listener!r}")
            self._check_listener(key, listener)
        if not listeners:
            return

        limit = self.limit(key)
        attempted = self.count(key) + len(listeners)
        if enforce_limit and limit and attempted > limit:
            raise LimitExceededError(key, limit, attempted)

        existing = self._listeners.get(key, [])
        if self.config.prepend:
            self._listeners[key] = [*listeners, *existing]
        else:
            self._listeners[key] = [*existing, *listeners]
        self._log.debug("Registered %d listener(s) for %r (total=%d)", len(listeners), key, attempted)

    def unregister(self, key: K, listener: Listener) -> None:
        """Remove every occurrence of *listener* for *key*. No-op if absent."""
        current = self._listeners.get(key)
        if not current:
            return
        remaining = [x for x in current if x != listener]
        if len(remaining) == len(current):
            return
        if remaining:
            self._listeners[key] = remaining
        else:
            del self._listeners[key]
        self._log.debug("Removed %d listener(s) for %r", len(current) - len(remaining), key)

    def unregister_all(self, key: K) -> None:
        """Drop every listener for *key*. No-op if absent."""
        if self._listeners.pop(key, None) is not None:
            self._log.debug("Removed all listeners for %r", key)

    def clear(self) -> None:
        """Drop every listener for every key. Limits are kept."""
        self._listeners.clear()

    # --- inspection -----------------------------------------------------------

    def listeners(self, key: K) -> list[Listener]:
        """Return a copy of the listeners for *key* in dispatch order."""
        return list(self._listeners.get(key, ()))

    def count(self, key: K) -> int:
        return len(self._listeners.get(key, ()))

    def keys(self) -> list[K]:
        """Return every key that currently has listeners."""
        return list(self._listeners)

    # --- limits ---------------------------------------------------------------

    def set_max_listeners(self, key: K, limit: int) -> None:
        """Cap the number of listeners for *key*. 0 means unlimited."""
        self._limits[key] = _validate_limit(limit)

    def limit(self, key: K) -> int:
        """Return the effective max-listener limit for *key* (0 = unlimited)."""
        return self._limits.get(key, self.config.default_max_listeners)

    def max_listeners(self) -> dict[K, int]:
        """Return a copy of the explicitly configured per-key limits."""
        return dict(self._limits)

    # --- dispatch -------------------------------------------------------------

    def dispatch_sync(self, key: K, *args: Any) -> list[Any]:
        """Call every listener for *key* in order and return raw results.

        Awaitables returned by listeners are passed through unresolved. An
        exception from a listener propagates and skips the rest.
        """
        self._check_args(key, args)
        snapshot = self.listeners(key)
        self._log.debug("Dispatching %r to %d listener(s) (sync)", key, len(snapshot))
        return [listener(*args) for listener in snapshot]

    async def dispatch_async(self, key: K, *args: Any) -> list[Any]:
        """Call every listener for *key* in order and await all results.

        Returns resolved results in listener order. The first failure is
        raised as ListenerError; other pending listeners keep running.
        """
        self._check_args(key, args)
        snapshot = self.listeners(key)
        self._log.debug("Dispatching %r to %d listener(s)", key, len(snapshot))
        return await _settle_all(snapshot, args)

    # --- waiting --------------------------------------------------------------

    def wait_once(self, key: K, timeout_ms: int | None = None) -> asyncio.Future[tuple[Any, ...]]:
        """Return a future resolving to the args of the next emission on *key*.

        The one-shot listener is registered immediately. With a non-zero
        *timeout_ms* the future fails with WaitTimeoutError once the window
        passes, and the one-shot listener is removed first. Cancelling the
        future also removes it.
        """
        future, _ = self._arm(key, timeout_ms)
        return future

    async def iterate(self, key: K, timeout_ms: int | None = None) -> AsyncIterator[tuple[Any, ...]]:
        """Yield the args of each emission on *key*, one wait per step.

        Emissions between pulls are not buffered. Cancelling a pending pull
        or closing the generator removes the pending one-shot listener.
        """
        while True:
            future, one_shot = self._arm(key, timeout_ms)
            try:
                args = await future
            finally:
                if not future.done():
                    future.cancel()
                self.unregister(key, one_shot)
            yield args

    async def once(self, key: K, *listeners: Listener) -> list[Any]:
        """Wait for the next emission on *key* and hand its args to *listeners*."""
        for listener in listeners:
            self._check_listener(key, listener)
        args = await self.wait_once(key)
        return await _settle_all(list(listeners), args)

    def _arm(self, key: K, timeout_ms: int | None) -> tuple[asyncio.Future[tuple[Any, ...]], Listener]:
        if timeout_ms is not None and timeout_ms < 0:
            raise ValueError(f"timeout_ms must be >= 0, got {timeout_ms}")
        loop = asyncio.get_running_loop()
        future: asyncio.Future[tuple[Any, ...]] = loop.create_future()

        def one_shot(*args: Any) -> None:
            self.unregister(key, one_shot)
            if not future.done():
                future.set_result(args)

        def expire() -> None:
            self.unregister(key, one_shot)
            if not future.done():
                self._log.debug("Wait on %r expired after %dms", key, timeout_ms)
                future.set_exception(WaitTimeoutError(key, timeout_ms))

        # Pending waits do not count against the listener limit.
        self._register(key, (one_shot,), enforce_limit=False)
        if timeout_ms:
            timer = loop.call_later(timeout_ms / 1000, expire)
            future.add_done_callback(lambda _: timer.cancel())
        future.add_done_callback(lambda _: self.unregister(key, one_shot))
        return future, one_shot

    # --- signatures -----------------------------------------------------------

    def _check_listener(self, key: K, listener: Listener) -> None:
        if self.config.validate_signatures and key in self._arities:
            check_listener(key, listener, self._arities[key])

    def _check_args(self, key: K, args: tuple[Any, ...]) -> None:
        if self.config.validate_signatures and key in self._arities:
            check_args(key, args, self._arities[key])


async def _settle_all(listeners: list[Listener], args: tuple[Any, ...]) -> list[Any]:
    """Invoke *listeners* in order, then await every awaitable result."""
    results: list[Any] = []
    pending: list[tuple[int, asyncio.Future[Any]]] = []
    for index, listener in enumerate(listeners):
        try:
            result = listener(*args)
        except Exception as exc:
            # Started listeners keep running; their outcome is discarded.
            for _, task in pending:
                task.add_done_callback(_discard_outcome)
            raise ListenerError(listener, exc) from exc
        if inspect.isawaitable(result):
            pending.append((index, asyncio.ensure_future(_resolve(listener, result))))
        results.append(result)

    if pending:
        values = await asyncio.gather(*(task for _, task in pending))
        for (index, _), value in zip(pending, values):
            results[index] = value
    return results


async def _resolve(listener: Listener, awaitable: Awaitable[Any]) -> Any:
    try:
        return await awaitable
    except Exception as exc:
        raise ListenerError(listener, exc) from exc


def _validate_limit(limit: int) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise TypeError(f"Max listeners must be an int, got {limit!r}")
    if limit < 0:
        raise ValueError(f"Max listeners must be >= 0, got {limit}")
    return limit


def _discard_outcome(task: asyncio.Future[Any]) -> None:
    if not task.cancelled():
        task.exception()
