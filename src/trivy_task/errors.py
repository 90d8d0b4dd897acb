"""Exception hierarchy for the scan pipeline."""

from __future__ import annotations


class TrivyTaskError(RuntimeError):
    """Base class for failures that abort a task run."""


class InputValidationError(TrivyTaskError, ValueError):
    """Raised when the task inputs do not describe exactly one scan target."""


class ResolutionError(TrivyTaskError):
    """Raised when no release artifact matches the host."""


class UnsupportedPlatformError(ResolutionError):
    """Raised on any host operating system other than Linux."""


class UnsupportedArchitectureError(ResolutionError):
    """Raised when the host CPU has no published release archive."""


class InstallationError(TrivyTaskError):
    """Raised when the scanner binary cannot be prepared locally."""


class DownloadError(InstallationError):
    """Raised when the release archive cannot be fetched."""


class ExtractionError(InstallationError):
    """Raised when the release archive cannot be unpacked."""


class PermissionSetupError(InstallationError):
    """Raised when the extracted binary cannot be marked executable."""


class ScannerExecutionError(TrivyTaskError):
    """Raised when the scanner process cannot be started.

    A scanner that starts and exits nonzero is not an error; the exit code is
    reported as a failed outcome instead.
    """


__all__ = [
    "DownloadError",
    "ExtractionError",
    "InputValidationError",
    "InstallationError",
    "PermissionSetupError",
    "ResolutionError",
    "ScannerExecutionError",
    "TrivyTaskError",
    "UnsupportedArchitectureError",
    "UnsupportedPlatformError",
]
