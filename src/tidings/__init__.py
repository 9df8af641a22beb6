"""Tidings: typed in-process publish/subscribe with sync and async dispatch."""

from tidings.config import EmitterConfig
from tidings.emitter import EventEmitter
from tidings.errors import (
    LimitExceededError,
    ListenerError,
    SignatureMismatchError,
    TidingsError,
    WaitTimeoutError,
)
from tidings.mono import MonoEmitter
from tidings.registry import Listener, ListenerRegistry
from tidings.tracing import EmissionCounter, counting_listener, logging_listener

__all__ = [
    # Emitters
    "EventEmitter",
    "MonoEmitter",
    "ListenerRegistry",
    "Listener",
    # Configuration
    "EmitterConfig",
    # Errors
    "TidingsError",
    "LimitExceededError",
    "ListenerError",
    "SignatureMismatchError",
    "WaitTimeoutError",
    # Tracing
    "EmissionCounter",
    "counting_listener",
    "logging_listener",
]
