"""Synchronous execution of a scanner invocation."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, Optional, Sequence

from .errors import ScannerExecutionError
from .models import Invocation, ScanOutcome

LOGGER = logging.getLogger("trivy_task.executor")

Runner = Callable[[Sequence[str]], int]


def _run_subprocess(command: Sequence[str]) -> int:
    """Run ``command`` to completion with stdout/stderr passed through."""

    return subprocess.run(list(command), check=False).returncode


class ScanExecutor:
    """Runs an invocation and records its exit code."""

    def __init__(self, *, runner: Optional[Runner] = None) -> None:
        self.runner = runner or _run_subprocess

    def execute(self, invocation: Invocation, *, output_path: Path) -> ScanOutcome:
        LOGGER.info("Running Trivy: %s", invocation.render())
        try:
            exit_code = self.runner(invocation.command)
        except OSError as exc:
            raise ScannerExecutionError(f"Unable to start {invocation.program}: {exc}") from exc

        LOGGER.info("Trivy exited with code %s", exit_code)
        return ScanOutcome(exit_code=exit_code, output_file_path=output_path)


__all__ = ["Runner", "ScanExecutor"]
