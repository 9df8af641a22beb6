"""Emitter configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EmitterConfig:
    """Configuration shared by the keyed and single-channel emitters."""

    default_max_listeners: int = 0  # 0 = unlimited
    prepend: bool = False  # True = newest listener group runs first
    validate_signatures: bool = True
    logger_name: str = "tidings"

    def __post_init__(self) -> None:
        if self.default_max_listeners < 0:
            raise ValueError(
                f"default_max_listeners must be >= 0, got {self.default_max_listeners}"
            )
