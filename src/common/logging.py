"""Shared logging helpers for the Trivy task."""
from __future__ import annotations

import logging
from typing import Union

_LOGGER_CONFIGURED = False


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure the root logger if it has not been configured yet."""

    global _LOGGER_CONFIGURED
    if _LOGGER_CONFIGURED:
        return

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    _LOGGER_CONFIGURED = True


__all__ = ["configure_logging"]
