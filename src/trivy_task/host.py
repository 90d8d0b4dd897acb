"""Host environment probing.

The values gathered here are handed to the orchestrator explicitly so that the
resolver and invocation builder never consult the process environment
themselves.
"""

from __future__ import annotations

import os
import platform
import sys
from dataclasses import dataclass
from pathlib import Path

from .errors import UnsupportedPlatformError

_MACHINE_ALIASES = {
    "arm": "arm",
    "armv6l": "arm",
    "armv7l": "arm",
    "arm64": "arm64",
    "aarch64": "arm64",
    "i386": "x86_32",
    "i686": "x86_32",
    "x86": "x86_32",
    "x86_32": "x86_32",
    "amd64": "x86_64",
    "x86_64": "x86_64",
}


def normalize_architecture(machine: str) -> str:
    """Map a raw machine name to one of ``arm``, ``arm64``, ``x86_32``, ``x86_64``.

    Unknown names are returned lower-cased and unchanged so that resolution can
    report them.
    """

    normalized = machine.strip().lower()
    return _MACHINE_ALIASES.get(normalized, normalized)


def ensure_supported_platform(system: str) -> None:
    """Raise :class:`UnsupportedPlatformError` unless ``system`` is Linux."""

    if system.startswith("win"):
        raise UnsupportedPlatformError("Windows is not currently supported")
    if not system.startswith("linux"):
        raise UnsupportedPlatformError("Only Linux is currently supported")


@dataclass(frozen=True)
class HostEnvironment:
    """Facts about the machine the task runs on."""

    system: str
    architecture: str
    home_directory: Path
    working_directory: Path

    @classmethod
    def detect(cls) -> "HostEnvironment":
        return cls(
            system=sys.platform,
            architecture=normalize_architecture(platform.machine()),
            home_directory=Path.home(),
            working_directory=Path(os.getcwd()),
        )


__all__ = ["HostEnvironment", "ensure_supported_platform", "normalize_architecture"]
