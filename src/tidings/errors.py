"""Error hierarchy for tidings emitters."""
from __future__ import annotations

from typing import Any, Callable, Hashable


class TidingsError(Exception):
    """Base error for all tidings errors."""

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class LimitExceededError(TidingsError):
    """Registering listeners would exceed the max-listener limit of a key.

    Nothing from the rejected group is added.
    """

    def __init__(self, key: Hashable, limit: int, attempted: int) -> None:
        super().__init__(
            f"Maximum listeners reached for {_describe(key)}! "
            f"Maximum count: {limit}, attempted: {attempted}"
        )
        self.key = key
        self.limit = limit
        self.attempted = attempted


class WaitTimeoutError(TidingsError, TimeoutError):
    """No emission arrived on a key before the wait timed out."""

    def __init__(self, key: Hashable, timeout_ms: int) -> None:
        super().__init__(
            f"Timed out after {timeout_ms}ms waiting for an emission on {_describe(key)}"
        )
        self.key = key
        self.timeout_ms = timeout_ms


class ListenerError(TidingsError):
    """A listener failed during an async dispatch.

    The original exception is kept on ``cause`` and chained as ``__cause__``.
    """

    def __init__(self, listener: Callable[..., Any], cause: BaseException) -> None:
        name = getattr(listener, "__qualname__", None) or repr(listener)
        super().__init__(f"Listener {name} failed: {cause!r}", cause=cause)
        self.listener = listener


class SignatureMismatchError(TidingsError, TypeError):
    """A listener or an emission does not match the declared event arity."""

    def __init__(self, message: str, *, key: Hashable = None) -> None:
        super().__init__(message)
        self.key = key


def _describe(key: Hashable) -> str:
    return "the mono emitter" if key is None else f"the event {key!r}"
