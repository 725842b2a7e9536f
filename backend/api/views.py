"""REST API view answering whether it rained in the last 24 hours."""
from __future__ import annotations

import logging
import math
from functools import lru_cache, partial

from django.conf import settings
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from raincheck.entities import Coordinates
from raincheck.providers.base import DataUnavailable, ResolutionFailure, TransportError
from raincheck.providers.geocoding import OpenMeteoGeocoder
from raincheck.providers.openmeteo import OpenMeteoObservationProvider
from raincheck.providers.reverse import BigDataCloudReverseGeocoder
from raincheck.services.rain_check import RainCheckService

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_rain_check_service() -> RainCheckService:
    return RainCheckService(
        observations=OpenMeteoObservationProvider(base_url=settings.RAINCHECK_FORECAST_URL),
        geocoder=OpenMeteoGeocoder(base_url=settings.RAINCHECK_GEOCODING_URL),
        reverse_geocoder=BigDataCloudReverseGeocoder(
            base_url=settings.RAINCHECK_REVERSE_GEOCODING_URL
        ),
    )


def parse_coordinates(latitude: str, longitude: str) -> Coordinates:
    coords = Coordinates(float(latitude), float(longitude))
    if not (math.isfinite(coords.latitude) and math.isfinite(coords.longitude)):
        raise ValueError("lat and lon must be finite numbers")
    return coords


def _detail(message: str, code: int) -> Response:
    return Response({"detail": message}, status=code)


class RainCheckView(APIView):
    """Report rain over the trailing 24 hours for a place or coordinates."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return the rendered rain report."""
        params = request.query_params
        service = get_rain_check_service()

        if "lat" in params or "lon" in params:
            try:
                coords = parse_coordinates(params["lat"], params["lon"])
            except KeyError:
                return _detail("lat and lon query parameters are required", status.HTTP_400_BAD_REQUEST)
            except ValueError:
                return _detail("lat and lon must be valid floating point numbers", status.HTTP_400_BAD_REQUEST)
            run = partial(service.check_coordinates, coords, params.get("label", ""))
        elif "place" in params:
            run = partial(service.check_place, params["place"])
        elif params.get("demo") in ("1", "true"):
            run = service.check_demo
        else:
            return _detail("place or lat/lon query parameters are required", status.HTTP_400_BAD_REQUEST)

        try:
            report = run()
        except ValueError as exc:
            return _detail(str(exc), status.HTTP_400_BAD_REQUEST)
        except ResolutionFailure as exc:
            return _detail(str(exc), status.HTTP_404_NOT_FOUND)
        except TransportError as exc:
            logger.warning("Rain check transport failure: %s", exc)
            return _detail(str(exc), status.HTTP_502_BAD_GATEWAY)
        except DataUnavailable as exc:
            logger.warning("Rain check without data: %s", exc)
            return _detail(str(exc), status.HTTP_503_SERVICE_UNAVAILABLE)
        return Response(report.as_dict(), status=status.HTTP_200_OK)
