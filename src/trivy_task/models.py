"""Data models passed between the stages of a scan."""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from .errors import InputValidationError

DEFAULT_EXIT_CODE_THRESHOLD = "1"

MISSING_TARGET_MESSAGE = (
    "You must specify something to scan. Use either the 'image' or 'path' option."
)
AMBIGUOUS_TARGET_MESSAGE = (
    "You must specify only one of the 'image' or 'path' options. "
    "Use multiple task definitions if you want to scan multiple targets."
)


class TargetKind(str, Enum):
    """Kind of scan target; the value is the scanner's scan-type token."""

    FILESYSTEM = "fs"
    IMAGE = "image"


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def select_target(path: Optional[str], image: Optional[str]) -> Tuple[TargetKind, str]:
    """Return the kind and value of the single target among ``path`` and ``image``.

    Exactly one of the two must be set; blank values count as unset.
    """

    path = _blank_to_none(path)
    image = _blank_to_none(image)
    if path is None and image is None:
        raise InputValidationError(MISSING_TARGET_MESSAGE)
    if path is not None and image is not None:
        raise InputValidationError(AMBIGUOUS_TARGET_MESSAGE)
    if path is not None:
        return TargetKind.FILESYSTEM, path
    return TargetKind.IMAGE, image


@dataclass(frozen=True)
class ScanRequest:
    """A single scan as requested by the pipeline inputs."""

    target_kind: TargetKind
    target_value: str
    requested_version: str
    exit_code_threshold: str = DEFAULT_EXIT_CODE_THRESHOLD
    debug: bool = False
    use_container: bool = False

    def __post_init__(self) -> None:
        if not self.target_value or not self.target_value.strip():
            raise InputValidationError(MISSING_TARGET_MESSAGE)

    @classmethod
    def from_targets(
        cls,
        *,
        path: Optional[str],
        image: Optional[str],
        requested_version: str,
        exit_code_threshold: Optional[str] = None,
        debug: bool = False,
        use_container: bool = False,
    ) -> "ScanRequest":
        """Build a request from the optional ``path`` and ``image`` inputs."""

        kind, value = select_target(path, image)
        return cls(
            target_kind=kind,
            target_value=value,
            requested_version=requested_version,
            exit_code_threshold=_blank_to_none(exit_code_threshold) or DEFAULT_EXIT_CODE_THRESHOLD,
            debug=debug,
            use_container=use_container,
        )


@dataclass(frozen=True)
class ResolvedArtifact:
    """Release archive matching a scanner version and host architecture."""

    version: str
    architecture_tag: str
    download_url: str

    @property
    def archive_name(self) -> str:
        return self.download_url.rsplit("/", 1)[-1]


@dataclass(frozen=True)
class Toolchain:
    """A locally installed scanner binary."""

    executable_path: Path


@dataclass(frozen=True)
class ExecutionMode:
    """Whether the scanner runs from a local toolchain or inside a container."""

    toolchain: Optional[Toolchain] = None

    @classmethod
    def local(cls, toolchain: Toolchain) -> "ExecutionMode":
        return cls(toolchain=toolchain)

    @classmethod
    def container(cls) -> "ExecutionMode":
        return cls(toolchain=None)

    @property
    def is_container(self) -> bool:
        return self.toolchain is None


@dataclass(frozen=True)
class Invocation:
    """Program and ordered arguments for one scanner run."""

    program: str
    arguments: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def command(self) -> List[str]:
        """Return the full argv list."""

        return [self.program, *self.arguments]

    def render(self) -> str:
        """Return a shell-quoted representation of the command for logging."""

        return " ".join(shlex.quote(part) for part in self.command)


@dataclass(frozen=True)
class ScanOutcome:
    """Exit status of a finished scan and where its findings were written."""

    exit_code: int
    output_file_path: Path

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


class TaskResult(str, Enum):
    """Overall result reported to the pipeline."""

    SUCCEEDED = "Succeeded"
    FAILED = "Failed"


__all__ = [
    "AMBIGUOUS_TARGET_MESSAGE",
    "DEFAULT_EXIT_CODE_THRESHOLD",
    "ExecutionMode",
    "Invocation",
    "MISSING_TARGET_MESSAGE",
    "ResolvedArtifact",
    "ScanOutcome",
    "ScanRequest",
    "TargetKind",
    "TaskResult",
    "Toolchain",
    "select_target",
]
