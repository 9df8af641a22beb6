"""Runtime arity checks for declared event signatures.

Python has no static key-to-signature mapping for events, so an emitter can
declare how many positional arguments each event carries. Listeners are
checked on registration and emissions are checked on dispatch.
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Hashable, Sequence

from tidings.errors import SignatureMismatchError

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def arity_of(listener: Callable[..., Any]) -> tuple[int, int | None]:
    """Return the (min, max) positional arguments *listener* accepts.

    ``max`` is None when the callable takes ``*args`` or cannot be inspected.
    """
    try:
        sig = inspect.signature(listener)
    except (TypeError, ValueError):
        return 0, None

    required = 0
    maximum: int | None = 0
    for param in sig.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            maximum = None
        elif param.kind in _POSITIONAL:
            if maximum is not None:
                maximum += 1
            if param.default is inspect.Parameter.empty:
                required += 1
    return required, maximum


def check_listener(key: Hashable, listener: Callable[..., Any], arity: int) -> None:
    """Raise SignatureMismatchError if *listener* can't take *arity* args."""
    low, high = arity_of(listener)
    if arity < low or (high is not None and arity > high):
        accepts = f"{low}+" if high is None else (f"{low}" if low == high else f"{low}-{high}")
        raise SignatureMismatchError(
            f"Listener {getattr(listener, '__qualname__', listener)!s} accepts "
            f"{accepts} positional args but {_label(key)} emits {arity}",
            key=key,
        )


def check_args(key: Hashable, args: Sequence[Any], arity: int) -> None:
    """Raise SignatureMismatchError if *args* doesn't match *arity*."""
    if len(args) != arity:
        raise SignatureMismatchError(
            f"{_sentence(_label(key))} expects {arity} args, got {len(args)}",
            key=key,
        )


def _label(key: Hashable) -> str:
    return "the channel" if key is None else f"event {key!r}"


def _sentence(text: str) -> str:
    return text[:1].upper() + text[1:]
