"""Device position acquisition.

A :class:`PositionSource` hands back the caller's coordinates for a
:class:`PositionRequest`. ``timeout`` bounds how long a source that has to
wait for a fix may block. ``maximum_age`` is how old a cached fix may be
before it counts as unavailable. :class:`StaticPositionSource` never waits,
so only the age applies to it.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from .entities import Coordinates


class PositionError(RuntimeError):
    """Base error for device position acquisition."""


class PermissionDenied(PositionError):
    """The user declined to share their position."""


class PositionUnavailable(PositionError):
    """No position could be obtained in time."""


@dataclass(frozen=True)
class PositionRequest:
    timeout: float = 10.0
    maximum_age: float = 60.0


class PositionSource(Protocol):
    def current_position(self, request: PositionRequest) -> Coordinates:
        ...


class StaticPositionSource:
    """Position source backed by a configured fix, e.g. from settings."""

    def __init__(
        self,
        coordinates: Optional[Coordinates] = None,
        *,
        allowed: bool = True,
        fixed_at: Optional[float] = None,
        time_func: Callable[[], float] = time.monotonic,
    ) -> None:
        self._coordinates = coordinates
        self._allowed = allowed
        self._time_func = time_func
        # None marks a fix that never goes stale.
        self._fixed_at = fixed_at

    def update(self, coordinates: Coordinates) -> None:
        self._coordinates = coordinates
        self._fixed_at = self._time_func()

    def current_position(self, request: PositionRequest) -> Coordinates:
        if not self._allowed:
            raise PermissionDenied("Failed to get location permission.")
        if self._coordinates is None:
            raise PositionUnavailable("Position unavailable.")
        if self._fixed_at is not None:
            age = self._time_func() - self._fixed_at
            if age > request.maximum_age:
                raise PositionUnavailable(f"Last known position is {age:.0f}s old.")
        return self._coordinates


__all__ = [
    "PermissionDenied",
    "PositionError",
    "PositionRequest",
    "PositionSource",
    "PositionUnavailable",
    "StaticPositionSource",
]
