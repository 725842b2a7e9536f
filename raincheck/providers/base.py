from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests
from requests import Response


BODY_EXCERPT_LIMIT = 140


class ProviderError(RuntimeError):
    """Base provider error."""


class TransportError(ProviderError):
    """Raised when a request does not complete with a success status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DataUnavailable(ProviderError):
    """Raised when a request succeeded but returned no usable hourly series."""


class ResolutionFailure(ProviderError):
    """Raised when a place name matched no location."""


@dataclass
class RequestConfig:
    # None means no explicit timeout; the request runs once, without retries.
    timeout: Optional[float] = None


def _excerpt(text: str, limit: int = BODY_EXCERPT_LIMIT) -> str:
    return text[:limit].strip()


class HttpProvider:
    """Base class for the JSON-over-HTTP providers."""

    base_url = ""

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.base_url = base_url or self.base_url
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self._log = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def _handle_response(self, response: Response) -> Response:
        if response.status_code >= 400:
            body = _excerpt(response.text or "")
            self._log.error("Provider returned %s: %s", response.status_code, body)
            message = f"HTTP {response.status_code} {response.reason or ''}".rstrip()
            if body:
                message = f"{message} - {body}"
            raise TransportError(message, status_code=response.status_code)
        return response

    def _get(self, params: dict) -> Any:
        try:
            response = self.session.get(
                self.base_url,
                params=params,
                timeout=self.request_config.timeout,
            )
        except requests.RequestException as exc:
            self._log.error("Request to %s failed", self.base_url, exc_info=exc)
            raise TransportError(f"request failed: {_excerpt(str(exc))}") from exc
        return self._json(self._handle_response(response))

    def _json(self, response: Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON", exc_info=exc)
            raise DataUnavailable("provider returned invalid json") from exc


__all__ = [
    "HttpProvider",
    "ProviderError",
    "TransportError",
    "DataUnavailable",
    "ResolutionFailure",
    "RequestConfig",
]
