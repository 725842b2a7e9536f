"""Django settings for the rain check service."""
from __future__ import annotations

from pathlib import Path
import os

from django.core.exceptions import ImproperlyConfigured

BASE_DIR = Path(__file__).resolve().parent.parent


def env(name: str, default: str | None = None) -> str:
    """Fetch environment variables while allowing explicit defaults."""

    value = os.environ.get(name, default)
    if value is None:
        raise ImproperlyConfigured(f"Environment variable {name} is required")
    return value


def env_float(name: str) -> float | None:
    value = os.environ.get(name)
    if value in (None, ""):
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise ImproperlyConfigured(f"Environment variable {name} must be a number") from exc


SECRET_KEY = env("DJANGO_SECRET_KEY")
DEBUG = os.environ.get("DJANGO_DEBUG", "0") == "1"
ALLOWED_HOSTS = os.environ.get("DJANGO_ALLOWED_HOSTS", "*").split(",")

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "backend.api",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "backend.urls"

WSGI_APPLICATION = "backend.wsgi.application"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Nothing is persisted; the database is only here to satisfy contrib apps.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("DB_NAME", str(BASE_DIR / "db.sqlite3")),
    }
}

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "UNAUTHENTICATED_USER": None,
}

RAINCHECK_FORECAST_URL = env("RAINCHECK_FORECAST_URL", "https://api.open-meteo.com/v1/forecast")
RAINCHECK_GEOCODING_URL = env(
    "RAINCHECK_GEOCODING_URL", "https://geocoding-api.open-meteo.com/v1/search"
)
RAINCHECK_REVERSE_GEOCODING_URL = env(
    "RAINCHECK_REVERSE_GEOCODING_URL",
    "https://api.bigdatacloud.net/data/reverse-geocode-client",
)
RAINCHECK_DEVICE_LATITUDE = env_float("RAINCHECK_DEVICE_LATITUDE")
RAINCHECK_DEVICE_LONGITUDE = env_float("RAINCHECK_DEVICE_LONGITUDE")
RAINCHECK_LOG_LEVEL = os.environ.get("RAINCHECK_LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
    "loggers": {
        "raincheck": {"handlers": ["console"], "level": RAINCHECK_LOG_LEVEL, "propagate": False},
        "backend": {"handlers": ["console"], "level": RAINCHECK_LOG_LEVEL, "propagate": False},
    },
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True
