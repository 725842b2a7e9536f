from __future__ import annotations

from typing import List

import pytest

from raincheck.entities import Coordinates, HourlySeries, Observations, Place
from raincheck.position import (
    PermissionDenied,
    PositionRequest,
    PositionUnavailable,
    StaticPositionSource,
)
from raincheck.presentation import format_report_text, render_report
from raincheck.providers.base import DataUnavailable, ResolutionFailure, TransportError
from raincheck.services.rain_check import DEMO_PLACE, RainCheckService
from raincheck.services.rain_window import evaluate_rain_window


STAMPS = [f"2025-06-01T{hour:02d}:00" for hour in range(24)]


class ObservationStub:
    def __init__(self, rain: List[float], error: Exception | None = None) -> None:
        self.rain = rain
        self.error = error
        self.calls: List[Coordinates] = []

    def fetch_observations(self, coords: Coordinates) -> Observations:
        self.calls.append(coords)
        if self.error is not None:
            raise self.error
        return Observations(
            series=HourlySeries.from_lists(STAMPS, self.rain),
            now_marker=STAMPS[-1],
            timezone_name="Asia/Tokyo",
        )


class GeocoderStub:
    def __init__(self, place: Place | None = None) -> None:
        self.place = place
        self.queries: List[str] = []

    def resolve(self, name: str) -> Place:
        self.queries.append(name)
        if self.place is None:
            raise ResolutionFailure("No matching place found.")
        return self.place


class ReverseStub:
    def __init__(self, label: str = "", error: Exception | None = None) -> None:
        self.label = label
        self.error = error

    def describe(self, coords: Coordinates) -> str:
        if self.error is not None:
            raise self.error
        return self.label


def make_service(rain=None, place=None, reverse=None, error=None):
    observations = ObservationStub(rain or [0.0] * 24, error=error)
    geocoder = GeocoderStub(place)
    service = RainCheckService(
        observations=observations,
        geocoder=geocoder,
        reverse_geocoder=reverse or ReverseStub(),
    )
    return service, observations, geocoder


TOKYO = Place(Coordinates(35.6895, 139.69171), "Tokyo, Tokyo, JP")


def test_check_place_geocodes_then_fetches():
    rain = [0.0] * 24
    rain[20] = 1.4
    service, observations, geocoder = make_service(rain=rain, place=TOKYO)

    report = service.check_place("Tokyo")

    assert geocoder.queries == ["Tokyo"]
    assert observations.calls == [TOKYO.coordinates]
    assert report.answer == "YES"
    assert report.label == "Tokyo, Tokyo, JP"
    assert report.verdict.total_rain_mm == 1.4


def test_resolution_failure_short_circuits():
    service, observations, _ = make_service(place=None)

    with pytest.raises(ResolutionFailure):
        service.check_place("Atlantis")
    assert observations.calls == []


def test_fetch_errors_propagate_unchanged():
    error = TransportError("HTTP 503 Service Unavailable - rate limited", status_code=503)
    service, _, _ = make_service(error=error)

    with pytest.raises(TransportError) as excinfo:
        service.check_coordinates(Coordinates(1.0, 2.0))
    assert excinfo.value is error


def test_check_demo_uses_demo_place():
    service, _, geocoder = make_service(place=TOKYO)

    report = service.check_demo()

    assert geocoder.queries == [DEMO_PLACE]
    assert report.answer == "NO"


def test_check_position_uses_reverse_label():
    service, observations, _ = make_service(reverse=ReverseStub(label="Shibuya, Tokyo, JP"))
    source = StaticPositionSource(Coordinates(35.66, 139.7))

    report = service.check_position(source)

    assert observations.calls == [Coordinates(35.66, 139.7)]
    assert report.label == "Shibuya, Tokyo, JP"
    assert "for Shibuya, Tokyo, JP." in report.details


def test_reverse_geocoding_failure_degrades_to_empty_label():
    reverse = ReverseStub(error=TransportError("HTTP 500 Internal Server Error"))
    service, observations, _ = make_service(reverse=reverse)

    report = service.check_position(StaticPositionSource(Coordinates(35.66, 139.7)))

    assert report.label == ""
    assert len(observations.calls) == 1
    assert report.details.startswith("Based on hourly observations in the previous 24 hours.")


def test_denied_position_aborts_query():
    service, observations, _ = make_service()

    with pytest.raises(PermissionDenied):
        service.check_position(StaticPositionSource(Coordinates(1.0, 1.0), allowed=False))
    assert observations.calls == []


def test_unknown_position_is_unavailable():
    service, _, _ = make_service()

    with pytest.raises(PositionUnavailable):
        service.check_position(StaticPositionSource())


def test_stale_position_is_unavailable():
    now = [100.0]
    source = StaticPositionSource(Coordinates(1.0, 1.0), fixed_at=0.0, time_func=lambda: now[0])

    with pytest.raises(PositionUnavailable):
        source.current_position(PositionRequest(maximum_age=60.0))

    source.update(Coordinates(2.0, 2.0))
    assert source.current_position(PositionRequest()) == Coordinates(2.0, 2.0)


def test_render_report_facts_and_details():
    rain = [0.0] * 24
    rain[22] = 0.25
    verdict = evaluate_rain_window(HourlySeries.from_lists(STAMPS, rain), STAMPS[-1], "Asia/Tokyo")

    report = render_report(verdict, "Tokyo, Tokyo, JP")

    assert report.answer == "YES"
    assert report.facts == (
        "Total rain: 0.25 mm",
        "Rainy hours: 1/24",
        "Timezone: Asia/Tokyo",
    )
    assert report.details == (
        "Based on hourly observations in the previous 24 hours for Tokyo, Tokyo, JP. "
        "Last hour checked: 2025-06-01T23:00 (Asia/Tokyo)."
    )
    assert report.samples == ("2025-06-01T22:00 → rain 0.2mm",)


def test_format_report_text_lists_samples():
    rain = [0.0] * 24
    rain[1] = 3.0
    verdict = evaluate_rain_window(HourlySeries.from_lists(STAMPS, rain), None, "UTC")

    text = format_report_text(render_report(verdict))

    lines = text.splitlines()
    assert lines[0] == "YES"
    assert lines[2] == "Total rain: 3.0 mm | Rainy hours: 1/24 | Timezone: UTC"
    assert lines[3] == "  - 2025-06-01T01:00 → rain 3.0mm"


def test_data_unavailable_series_cannot_be_built():
    with pytest.raises(DataUnavailable):
        HourlySeries(timestamps=(), rain=())


def test_static_source_answers_without_waiting():
    request = PositionRequest(timeout=0.0)
    source = StaticPositionSource(Coordinates(1.0, 1.0))

    assert PositionRequest() == PositionRequest(timeout=10.0, maximum_age=60.0)
    assert source.current_position(request) == Coordinates(1.0, 1.0)
