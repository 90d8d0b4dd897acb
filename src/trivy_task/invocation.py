"""Command line construction for scanner runs."""

from __future__ import annotations

from pathlib import Path
from typing import List

from common.config import TaskSettings

from .models import ExecutionMode, Invocation, ScanRequest
from .resolver import strip_version_prefix

OUTPUT_FORMAT = "json"
SECURITY_CHECKS = "vuln,config,secret"


def scan_arguments(request: ScanRequest, output_path: Path) -> List[str]:
    """Return the scanner arguments shared by local and container runs."""

    arguments: List[str] = []
    if request.debug:
        arguments.append("--debug")
    arguments.append(request.target_kind.value)
    arguments.extend(["--exit-code", request.exit_code_threshold])
    arguments.extend(["--format", OUTPUT_FORMAT])
    arguments.extend(["--output", str(output_path)])
    arguments.extend(["--security-checks", SECURITY_CHECKS])
    arguments.append(request.target_value)
    return arguments


class InvocationBuilder:
    """Assembles the scanner invocation for either execution mode."""

    def __init__(
        self,
        settings: TaskSettings,
        *,
        home_directory: Path,
        working_directory: Path,
    ) -> None:
        self.settings = settings
        self.home_directory = home_directory
        self.working_directory = working_directory

    def build(self, mode: ExecutionMode, request: ScanRequest, output_path: Path) -> Invocation:
        scanner_args = scan_arguments(request, output_path)
        if mode.is_container:
            return Invocation(
                program=self.settings.container_runtime,
                arguments=tuple(self.container_arguments(request) + scanner_args),
            )
        return Invocation(
            program=str(mode.toolchain.executable_path),
            arguments=tuple(scanner_args),
        )

    def container_arguments(self, request: ScanRequest) -> List[str]:
        """Return the runtime arguments preceding the scanner's own."""

        settings = self.settings
        registry_config = self.home_directory / ".docker" / "config.json"
        tmp_dir = str(settings.tmp_dir)
        image = f"{settings.container_image}:{strip_version_prefix(request.requested_version)}"
        return [
            "run",
            "--rm",
            "-v",
            f"{registry_config}:/root/.docker/config.json",
            "-v",
            f"{tmp_dir}:{tmp_dir}",
            "-v",
            f"{self.working_directory}:{settings.container_workdir}",
            "--workdir",
            settings.container_workdir,
            image,
        ]


__all__ = ["InvocationBuilder", "OUTPUT_FORMAT", "SECURITY_CHECKS", "scan_arguments"]
