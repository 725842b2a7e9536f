from __future__ import annotations

import logging
from typing import Optional

from ..entities import Coordinates
from ..position import PositionRequest, PositionSource
from ..presentation import RainReport, render_report
from ..providers.base import ProviderError
from ..providers.geocoding import OpenMeteoGeocoder
from ..providers.openmeteo import OpenMeteoObservationProvider
from ..providers.reverse import BigDataCloudReverseGeocoder
from .rain_window import evaluate_observations

DEMO_PLACE = "Tokyo"


class RainCheckService:
    """Resolve coordinates, fetch observations and evaluate the last 24 hours.

    Each query runs as one sequential chain and owns its data; a failing
    stage raises and the remaining stages are skipped.
    """

    def __init__(
        self,
        *,
        observations: Optional[OpenMeteoObservationProvider] = None,
        geocoder: Optional[OpenMeteoGeocoder] = None,
        reverse_geocoder: Optional[BigDataCloudReverseGeocoder] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.observations = observations or OpenMeteoObservationProvider()
        self.geocoder = geocoder or OpenMeteoGeocoder()
        self.reverse_geocoder = reverse_geocoder or BigDataCloudReverseGeocoder()
        self._log = logger or logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    # Public API ---------------------------------------------------------
    def check_coordinates(self, coords: Coordinates, label: str = "") -> RainReport:
        observations = self.observations.fetch_observations(coords)
        verdict = evaluate_observations(observations)
        self._log.info(
            "Rain check for %s: rained=%s total=%.2fmm hours=%d",
            label or f"{coords.latitude:.4f},{coords.longitude:.4f}",
            verdict.rained,
            verdict.total_rain_mm,
            verdict.hours_with_rain,
        )
        return render_report(verdict, label)

    def check_place(self, name: str) -> RainReport:
        place = self.geocoder.resolve(name)
        return self.check_coordinates(place.coordinates, place.label)

    def check_position(
        self,
        source: PositionSource,
        request: Optional[PositionRequest] = None,
    ) -> RainReport:
        coords = source.current_position(request or PositionRequest())
        return self.check_coordinates(coords, self._describe(coords))

    def check_demo(self) -> RainReport:
        return self.check_place(DEMO_PLACE)

    # Helpers ------------------------------------------------------------
    def _describe(self, coords: Coordinates) -> str:
        # The label is cosmetic; the coordinates stay valid without it.
        try:
            return self.reverse_geocoder.describe(coords)
        except ProviderError as exc:
            self._log.warning("Reverse geocoding failed: %s", exc)
            return ""


__all__ = ["DEMO_PLACE", "RainCheckService"]
