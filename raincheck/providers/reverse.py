from __future__ import annotations

from pydantic import ValidationError

from .base import DataUnavailable, HttpProvider
from ..entities import Coordinates
from ..schemas import ReverseGeocodeResponse


class BigDataCloudReverseGeocoder(HttpProvider):
    """Turn device coordinates into an approximate place label."""

    base_url = "https://api.bigdatacloud.net/data/reverse-geocode-client"

    def describe(self, coords: Coordinates) -> str:
        data = self._get(
            {
                "latitude": str(coords.latitude),
                "longitude": str(coords.longitude),
                "localityLanguage": "en",
            }
        )
        try:
            return ReverseGeocodeResponse.model_validate(data).label
        except ValidationError as exc:
            raise DataUnavailable("unexpected reverse geocoding payload") from exc


__all__ = ["BigDataCloudReverseGeocoder"]
