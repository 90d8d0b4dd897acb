"""Top-level scan workflow."""

from __future__ import annotations

import logging
import uuid
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional

import requests

from common.config import TaskSettings

from .errors import TrivyTaskError
from .executor import Runner, ScanExecutor
from .host import HostEnvironment, ensure_supported_platform
from .installer import ToolchainInstaller, remove_path
from .invocation import InvocationBuilder
from .models import (
    DEFAULT_EXIT_CODE_THRESHOLD,
    ExecutionMode,
    ScanOutcome,
    ScanRequest,
    TaskResult,
    select_target,
)
from .resolver import ArtifactResolver

if TYPE_CHECKING:
    from pipeline.inputs import TaskInputs
    from pipeline.reporter import PipelineReporter

LOGGER = logging.getLogger("trivy_task.orchestrator")

SUCCESS_MESSAGE = "No problems found."
FAILURE_MESSAGE = "Failed: Trivy detected problems."

IdGenerator = Callable[[], str]


def _random_id() -> str:
    return uuid.uuid4().hex


class OrchestratorState(str, Enum):
    VALIDATING_INPUTS = "ValidatingInputs"
    SELECTING_EXECUTION_MODE = "SelectingExecutionMode"
    INSTALLING = "Installing"
    CONFIGURING_CONTAINER = "ConfiguringContainer"
    CONFIGURING_SCAN = "ConfiguringScan"
    EXECUTING = "Executing"
    REPORTING_RESULT = "ReportingResult"
    DONE = "Done"
    FAILED = "Failed"


class ScanOrchestrator:
    """Drives one task run from input validation to result reporting.

    The HTTP session, the process runner, the host facts and the id
    generator are injectable. Every run ends in exactly one
    ``set_result`` call on the reporter.
    """

    def __init__(
        self,
        settings: TaskSettings,
        inputs: "TaskInputs",
        reporter: "PipelineReporter",
        *,
        host: Optional[HostEnvironment] = None,
        id_generator: Optional[IdGenerator] = None,
        runner: Optional[Runner] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.settings = settings
        self.inputs = inputs
        self.reporter = reporter
        self.host = host or HostEnvironment.detect()
        self.id_generator = id_generator or _random_id
        self.resolver = ArtifactResolver(settings)
        self.installer = ToolchainInstaller(settings, session=session)
        self.builder = InvocationBuilder(
            settings,
            home_directory=self.host.home_directory,
            working_directory=self.host.working_directory,
        )
        self.executor = ScanExecutor(runner=runner)
        self.state = OrchestratorState.VALIDATING_INPUTS

    def _transition(self, state: OrchestratorState) -> None:
        LOGGER.debug("%s -> %s", self.state.value, state.value)
        self.state = state

    def run(self) -> TaskResult:
        """Execute the workflow and return the reported result."""

        try:
            outcome = self._scan()
        except TrivyTaskError as exc:
            return self._fail(str(exc))
        except Exception as exc:  # pragma: no cover - guardrail for unexpected errors
            LOGGER.exception("Unexpected error during scan")
            return self._fail(str(exc) or exc.__class__.__name__)

        self._transition(OrchestratorState.REPORTING_RESULT)
        result = self.report(outcome)
        self._transition(OrchestratorState.DONE)
        LOGGER.info("Done!")
        return result

    def _fail(self, message: str) -> TaskResult:
        LOGGER.error("Task failed in state %s: %s", self.state.value, message)
        self._transition(OrchestratorState.FAILED)
        self.reporter.set_result(TaskResult.FAILED, message)
        return TaskResult.FAILED

    def read_request(self) -> ScanRequest:
        """Read and validate the task inputs."""

        inputs = self.inputs
        kind, target = select_target(inputs.get_input("path"), inputs.get_input("image"))
        version = inputs.get_input("version", required=True)
        return ScanRequest(
            target_kind=kind,
            target_value=target,
            requested_version=version,
            exit_code_threshold=inputs.get_input("exitCode") or DEFAULT_EXIT_CODE_THRESHOLD,
            debug=inputs.get_bool_input("debug"),
            use_container=inputs.get_bool_input("docker"),
        )

    def select_mode(self, request: ScanRequest) -> ExecutionMode:
        if request.use_container:
            self._transition(OrchestratorState.CONFIGURING_CONTAINER)
            LOGGER.info("Run requested using %s...", self.settings.container_runtime)
            return ExecutionMode.container()

        self._transition(OrchestratorState.INSTALLING)
        LOGGER.info("Run requested using local Trivy binary...")
        LOGGER.info("Finding correct Trivy version to install...")
        ensure_supported_platform(self.host.system)
        artifact = self.resolver.resolve(request.requested_version, self.host.architecture)
        toolchain = self.installer.install(artifact)
        return ExecutionMode.local(toolchain)

    def prepare_output(self) -> Path:
        LOGGER.info("Preparing output location...")
        output_path = self.settings.tmp_dir / f"trivy-results-{self.id_generator()}.json"
        remove_path(output_path)
        return output_path

    def _scan(self) -> ScanOutcome:
        self._transition(OrchestratorState.VALIDATING_INPUTS)
        request = self.read_request()

        self._transition(OrchestratorState.SELECTING_EXECUTION_MODE)
        mode = self.select_mode(request)

        self._transition(OrchestratorState.CONFIGURING_SCAN)
        LOGGER.info("Configuring options for %s scan...", request.target_kind.name.lower())
        output_path = self.prepare_output()
        invocation = self.builder.build(mode, request, output_path)

        self._transition(OrchestratorState.EXECUTING)
        return self.executor.execute(invocation, output_path=output_path)

    def report(self, outcome: ScanOutcome) -> TaskResult:
        """Publish the result and attach the findings file."""

        if outcome.succeeded:
            result, message = TaskResult.SUCCEEDED, SUCCESS_MESSAGE
        else:
            result, message = TaskResult.FAILED, FAILURE_MESSAGE
        self.reporter.set_result(result, message)

        LOGGER.info("Publishing JSON results...")
        if not outcome.output_file_path.exists():
            LOGGER.warning("Scan output %s was not written", outcome.output_file_path)
        self.reporter.add_attachment(
            self.settings.attachment_type,
            f"trivy-{self.id_generator()}.json",
            outcome.output_file_path,
        )
        return result


__all__ = [
    "FAILURE_MESSAGE",
    "IdGenerator",
    "OrchestratorState",
    "SUCCESS_MESSAGE",
    "ScanOrchestrator",
]
