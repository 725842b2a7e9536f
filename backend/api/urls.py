"""API URL configuration."""
from __future__ import annotations

from django.urls import path

from backend.api.views import RainCheckView

urlpatterns = [
    path("rain", RainCheckView.as_view(), name="rain"),
]
