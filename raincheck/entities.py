from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

from .providers.base import DataUnavailable


def safe_mm(value: object) -> float:
    """Coerce a provider value to millimetres, treating anything non-numeric as 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    value = float(value)
    if not math.isfinite(value):
        return 0.0
    return value


def _aligned(values: Optional[Iterable[object]], length: int) -> Tuple[float, ...]:
    values = list(values or [])[:length]
    values.extend([0.0] * (length - len(values)))
    return tuple(safe_mm(value) for value in values)


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Place:
    """A resolved location: coordinates plus a human readable label."""

    coordinates: Coordinates
    label: str = ""


@dataclass(frozen=True)
class HourlySeries:
    """Index-aligned hourly observations.

    ``timestamps`` are provider-local ISO strings without a timezone suffix,
    so they order lexicographically. ``rain`` and ``precipitation`` are in
    millimetres; ``precipitation`` only drives the sample list.
    """

    timestamps: Tuple[str, ...]
    rain: Tuple[float, ...]
    precipitation: Tuple[float, ...] = ()

    def __post_init__(self) -> None:
        if not self.timestamps:
            raise DataUnavailable("No hourly rain data available for this location.")

    @classmethod
    def from_lists(
        cls,
        timestamps: Sequence[str],
        rain: Optional[Iterable[object]],
        precipitation: Optional[Iterable[object]] = None,
    ) -> "HourlySeries":
        length = len(timestamps)
        return cls(
            timestamps=tuple(timestamps),
            rain=_aligned(rain, length),
            precipitation=_aligned(precipitation, length),
        )

    def __len__(self) -> int:
        return len(self.timestamps)


@dataclass(frozen=True)
class Observations:
    """Fetcher output: the series, the provider's "now" and its timezone."""

    series: HourlySeries
    now_marker: Optional[str]
    timezone_name: str


@dataclass(frozen=True)
class RainVerdict:
    rained: bool
    total_rain_mm: float
    hours_with_rain: int
    last_hour_checked: str
    timezone_name: str
    sample_hours: Tuple[str, ...]
    now_index: int
    start_index: int

    @property
    def hours_checked(self) -> int:
        return self.now_index - self.start_index + 1


__all__ = [
    "Coordinates",
    "HourlySeries",
    "Observations",
    "Place",
    "RainVerdict",
    "safe_mm",
]
