"""Management command answering the rain question from the terminal."""
from __future__ import annotations

import json
from typing import Any

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from backend.api.views import get_rain_check_service, parse_coordinates
from raincheck.entities import Coordinates
from raincheck.position import PositionError, StaticPositionSource
from raincheck.presentation import format_report_text
from raincheck.providers.base import ProviderError


def configured_position_source() -> StaticPositionSource:
    latitude = settings.RAINCHECK_DEVICE_LATITUDE
    longitude = settings.RAINCHECK_DEVICE_LONGITUDE
    if latitude is None or longitude is None:
        return StaticPositionSource()
    return StaticPositionSource(Coordinates(latitude, longitude))


class Command(BaseCommand):
    help = "Report whether it rained in the last 24 hours at a place or coordinates"

    def add_arguments(self, parser) -> None:  # noqa: D401
        target = parser.add_mutually_exclusive_group()
        target.add_argument("--place", type=str, help="Place name to geocode")
        target.add_argument("--here", action="store_true", help="Use the configured device position")
        target.add_argument("--demo", action="store_true", help="Check the demo place")
        parser.add_argument("--lat", type=str, help="Latitude")
        parser.add_argument("--lon", type=str, help="Longitude")
        parser.add_argument("--json", action="store_true", help="Print the report as JSON")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        service = get_rain_check_service()
        latitude = options.get("lat")
        longitude = options.get("lon")

        try:
            if options.get("place") is not None:
                report = service.check_place(options["place"])
            elif options.get("here"):
                report = service.check_position(configured_position_source())
            elif options.get("demo"):
                report = service.check_demo()
            else:
                if latitude is None or longitude is None:
                    raise CommandError("--lat and --lon are required unless using --place, --here or --demo")
                report = service.check_coordinates(parse_coordinates(latitude, longitude))
        except (ProviderError, PositionError, ValueError) as exc:
            raise CommandError(str(exc)) from exc

        if options.get("json"):
            self.stdout.write(json.dumps(report.as_dict(), ensure_ascii=False))
        else:
            self.stdout.write(format_report_text(report))
