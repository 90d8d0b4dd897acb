"""Shared helpers for the Trivy task."""

from .config import TaskSettings, get_settings, reset_settings_cache
from .logging import configure_logging

__all__ = [
    "TaskSettings",
    "configure_logging",
    "get_settings",
    "reset_settings_cache",
]
