"""Command line entry point for the Trivy scan task."""
from __future__ import annotations

import argparse
import sys
from typing import Dict, Iterable, Optional

from pydantic import ValidationError

from common.config import get_settings
from common.logging import configure_logging
from pipeline.inputs import EnvironmentInputs, MappingInputs
from pipeline.reporter import AgentReporter

from .models import TaskResult
from .orchestrator import ScanOrchestrator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trivy-task",
        description=(
            "Scan a filesystem path or container image with Trivy. "
            "Flags override the INPUT_* variables provided by the pipeline agent."
        ),
    )
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--path", help="Filesystem path to scan")
    target.add_argument("--image", help="Container image reference to scan")
    parser.add_argument("--version", dest="scanner_version", help="Trivy version or 'latest'")
    parser.add_argument(
        "--docker",
        action="store_true",
        default=None,
        help="Run Trivy through the container runtime instead of a local binary",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Pass --debug to Trivy",
    )
    parser.add_argument("--exit-code", help="Exit code Trivy uses when problems are found")
    return parser


def _explicit_inputs(args: argparse.Namespace) -> Dict[str, Optional[str]]:
    """Translate parsed flags into task input values; unset flags stay ``None``."""

    return {
        "path": args.path,
        "image": args.image,
        "version": args.scanner_version,
        "docker": "true" if args.docker else None,
        "debug": "true" if args.debug else None,
        "exitCode": args.exit_code,
    }


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        settings = get_settings()
    except ValidationError as exc:
        message = f"Invalid task settings: {exc.errors()[0]['msg']}"
        AgentReporter().set_result(TaskResult.FAILED, message)
        return 1
    configure_logging(settings.log_level)

    inputs = MappingInputs(_explicit_inputs(args), fallback=EnvironmentInputs())
    orchestrator = ScanOrchestrator(settings, inputs, AgentReporter())
    result = orchestrator.run()
    return 0 if result is TaskResult.SUCCEEDED else 1


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
