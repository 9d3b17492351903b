"""Version 1 parameters of the mint module, kept for reading old state."""

from __future__ import annotations

from dataclasses import dataclass

BLOCKS_PER_DAY_KEY = b"BlocksPerDay"
DEFAULT_BLOCKS_PER_DAY = 17280


def validate_blocks_per_day(value: object) -> None:
    """Raise unless ``value`` is a positive integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"invalid parameter type: {type(value).__name__}")
    if value <= 0:
        raise ValueError(f"blocks per day must be positive: {value}")


@dataclass(frozen=True)
class LegacyParams:
    """Version 1 mint parameters: the expected number of blocks per day."""

    blocks_per_day: int = DEFAULT_BLOCKS_PER_DAY

    def validate(self) -> None:
        validate_blocks_per_day(self.blocks_per_day)


def default_legacy_params() -> LegacyParams:
    """Defaults assume five-second blocks."""
    return LegacyParams(DEFAULT_BLOCKS_PER_DAY)