"""Trailing 24-hour rain window over an hourly series."""
from __future__ import annotations

from typing import List, Optional, Sequence

from ..entities import HourlySeries, Observations, RainVerdict, safe_mm

WINDOW_HOURS = 24
MAX_SAMPLES = 6
# Totals at or above this count as rain even without a positive hour.
RAIN_THRESHOLD_MM = 0.1


def find_now_index(timestamps: Sequence[str], now_marker: Optional[str]) -> int:
    """Return the last index whose timestamp is not after ``now_marker``.

    Forecast hours may follow "now" in the same array, so the scan runs from
    the end. Without a marker, or when every timestamp is later than it, the
    final entry is treated as "now".
    """
    last = len(timestamps) - 1
    if not now_marker:
        return last
    for index in range(last, -1, -1):
        if timestamps[index] <= now_marker:
            return index
    return last


def _value_at(values: Sequence[float], index: int) -> float:
    try:
        return safe_mm(values[index])
    except IndexError:
        return 0.0


def evaluate_rain_window(
    series: HourlySeries,
    now_marker: Optional[str] = None,
    timezone_name: str = "",
) -> RainVerdict:
    now_index = find_now_index(series.timestamps, now_marker)
    start_index = max(0, now_index - (WINDOW_HOURS - 1))

    total_rain = 0.0
    hours_with_rain = 0
    samples: List[str] = []
    for index in range(start_index, now_index + 1):
        rain = _value_at(series.rain, index)
        precipitation = _value_at(series.precipitation, index)
        total_rain += rain
        if rain > 0:
            hours_with_rain += 1
        if len(samples) < MAX_SAMPLES and (rain > 0 or precipitation > 0):
            samples.append(f"{series.timestamps[index]} → rain {rain:.1f}mm")

    # Compare the unrounded sum; rounding is for display only.
    rained = total_rain >= RAIN_THRESHOLD_MM or hours_with_rain > 0
    return RainVerdict(
        rained=rained,
        total_rain_mm=round(total_rain, 2),
        hours_with_rain=hours_with_rain,
        last_hour_checked=series.timestamps[now_index],
        timezone_name=timezone_name,
        sample_hours=tuple(samples),
        now_index=now_index,
        start_index=start_index,
    )


def evaluate_observations(observations: Observations) -> RainVerdict:
    return evaluate_rain_window(
        observations.series,
        observations.now_marker,
        observations.timezone_name,
    )


__all__ = [
    "MAX_SAMPLES",
    "RAIN_THRESHOLD_MM",
    "WINDOW_HOURS",
    "evaluate_observations",
    "evaluate_rain_window",
    "find_now_index",
]
