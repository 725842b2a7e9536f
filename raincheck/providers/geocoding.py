"""Forward geocoding: place name to coordinates and a display label."""
from __future__ import annotations

from pydantic import ValidationError

from .base import HttpProvider, ResolutionFailure
from ..entities import Coordinates, Place
from ..schemas import GeocodingResponse


class OpenMeteoGeocoder(HttpProvider):
    base_url = "https://geocoding-api.open-meteo.com/v1/search"

    def resolve(self, name: str) -> Place:
        query = (name or "").strip()
        if not query:
            raise ValueError("Please enter a location.")
        data = self._get({"name": query, "count": "1", "language": "en", "format": "json"})
        try:
            response = GeocodingResponse.model_validate(data)
        except ValidationError as exc:
            self._log.error("Unexpected geocoding payload", exc_info=exc)
            raise ResolutionFailure("No matching place found.") from exc
        if not response.results:
            self._log.info("No place matched %r", query)
            raise ResolutionFailure("No matching place found.")
        match = response.results[0]
        return Place(
            coordinates=Coordinates(latitude=match.latitude, longitude=match.longitude),
            label=match.label,
        )


__all__ = ["OpenMeteoGeocoder"]
