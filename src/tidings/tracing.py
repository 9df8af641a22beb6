"""Listeners for tracing emissions."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable


def logging_listener(
    name: str,
    logger: logging.Logger | None = None,
    level: int = logging.INFO,
) -> Callable[..., None]:
    """Create a listener that logs every emission it receives."""
    log = logger or logging.getLogger("tidings")

    def listener(*args: Any) -> None:
        log.log(level, "Emission: event=%s args=%r", name, args)

    return listener


@dataclass
class EmissionCounter:
    """Tracks how many emissions a channel has seen."""

    emissions: int = 0
    last_args: tuple[Any, ...] | None = None


def counting_listener(counter: EmissionCounter) -> Callable[..., None]:
    """Create a listener that records emissions on an EmissionCounter."""

    def listener(*args: Any) -> None:
        counter.emissions += 1
        counter.last_args = args

    return listener
