"""Pydantic models for the provider payloads.

Responses are validated once at the fetch boundary: absent arrays become
empty lists, absent or non-numeric readings become ``0.0`` and unknown keys
are ignored, so the evaluator never has to check the shape again.
"""
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .entities import safe_mm

__all__ = [
    "CurrentWeather",
    "ForecastResponse",
    "GeocodingResponse",
    "GeocodingResult",
    "HourlyBlock",
    "ReverseGeocodeResponse",
]


def _readings(value: Any) -> List[float]:
    if not isinstance(value, list):
        return []
    return [safe_mm(item) for item in value]


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class HourlyBlock(_Payload):
    time: List[str] = Field(default_factory=list)
    rain: List[float] = Field(default_factory=list)
    precipitation: List[float] = Field(default_factory=list)

    @field_validator("time", mode="before")
    @classmethod
    def _time(cls, value: Any) -> List[str]:
        if not isinstance(value, list):
            return []
        # Missing timestamps stay in place as "" so readings keep their index.
        return ["" if item is None else str(item) for item in value]

    @field_validator("rain", "precipitation", mode="before")
    @classmethod
    def _mm(cls, value: Any) -> List[float]:
        return _readings(value)


class CurrentWeather(_Payload):
    time: Optional[str] = None


class ForecastResponse(_Payload):
    timezone: str = ""
    hourly: HourlyBlock = Field(default_factory=HourlyBlock)
    current_weather: CurrentWeather = Field(default_factory=CurrentWeather)

    @field_validator("timezone", mode="before")
    @classmethod
    def _timezone(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("hourly", "current_weather", mode="before")
    @classmethod
    def _block(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else {}


class GeocodingResult(_Payload):
    latitude: float
    longitude: float
    name: Optional[str] = None
    admin1: Optional[str] = None
    country_code: Optional[str] = None

    @property
    def label(self) -> str:
        return ", ".join(bit for bit in (self.name, self.admin1, self.country_code) if bit)


class GeocodingResponse(_Payload):
    results: List[GeocodingResult] = Field(default_factory=list)

    @field_validator("results", mode="before")
    @classmethod
    def _results(cls, value: Any) -> Any:
        return value if isinstance(value, list) else []


class ReverseGeocodeResponse(_Payload):
    city: Optional[str] = None
    locality: Optional[str] = None
    principalSubdivision: Optional[str] = None
    countryCode: Optional[str] = None

    @property
    def label(self) -> str:
        bits = (self.city or self.locality, self.principalSubdivision, self.countryCode)
        return ", ".join(bit for bit in bits if bit)
