from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from .base import DataUnavailable, HttpProvider
from ..entities import Coordinates, HourlySeries, Observations
from ..schemas import ForecastResponse

# Two trailing days keep a 24-hour lookback inside the array even when "now"
# is shortly after local midnight.
PAST_DAYS = 2


class OpenMeteoObservationProvider(HttpProvider):
    base_url = "https://api.open-meteo.com/v1/forecast"

    def build_params(self, coords: Coordinates) -> dict:
        return {
            "latitude": str(coords.latitude),
            "longitude": str(coords.longitude),
            "hourly": "rain,precipitation",
            "past_days": str(PAST_DAYS),
            "timezone": "auto",
            "current_weather": "true",
        }

    def fetch_observations(self, coords: Coordinates) -> Observations:
        self._log.info("Fetching hourly rain for %.4f,%.4f", coords.latitude, coords.longitude)
        data = self._get(self.build_params(coords))
        forecast = self._parse(data)
        hourly = forecast.hourly
        if not hourly.time or not hourly.rain:
            raise DataUnavailable("No hourly rain data available for this location.")
        series = HourlySeries.from_lists(hourly.time, hourly.rain, hourly.precipitation)
        return Observations(
            series=series,
            now_marker=forecast.current_weather.time or None,
            timezone_name=forecast.timezone,
        )

    # helpers ------------------------------------------------------------
    def _parse(self, data: Any) -> ForecastResponse:
        try:
            return ForecastResponse.model_validate(data)
        except ValidationError as exc:
            self._log.error("Unexpected forecast payload", exc_info=exc)
            raise DataUnavailable("No hourly rain data available for this location.") from exc


__all__ = ["OpenMeteoObservationProvider", "PAST_DAYS"]
