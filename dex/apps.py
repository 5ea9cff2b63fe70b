"""App configuration for the `dex` Django app."""

from __future__ import annotations

from django.apps import AppConfig


class DexConfig(AppConfig):
    """Configuration for the `dex` app (management commands only)."""

    name = "dex"
