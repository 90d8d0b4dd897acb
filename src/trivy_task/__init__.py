"""Trivy scan task: resolve, install, run and report."""

from .errors import (
    DownloadError,
    ExtractionError,
    InputValidationError,
    InstallationError,
    PermissionSetupError,
    ResolutionError,
    ScannerExecutionError,
    TrivyTaskError,
    UnsupportedArchitectureError,
    UnsupportedPlatformError,
)
from .executor import ScanExecutor
from .host import HostEnvironment
from .installer import ToolchainInstaller
from .invocation import InvocationBuilder, scan_arguments
from .models import (
    ExecutionMode,
    Invocation,
    ResolvedArtifact,
    ScanOutcome,
    ScanRequest,
    TargetKind,
    TaskResult,
    Toolchain,
)
from .orchestrator import OrchestratorState, ScanOrchestrator
from .resolver import ArtifactResolver, strip_version_prefix

__all__ = [
    "ArtifactResolver",
    "DownloadError",
    "ExecutionMode",
    "ExtractionError",
    "HostEnvironment",
    "InputValidationError",
    "InstallationError",
    "Invocation",
    "InvocationBuilder",
    "OrchestratorState",
    "PermissionSetupError",
    "ResolutionError",
    "ResolvedArtifact",
    "ScanExecutor",
    "ScanOrchestrator",
    "ScanOutcome",
    "ScanRequest",
    "ScannerExecutionError",
    "TargetKind",
    "TaskResult",
    "Toolchain",
    "ToolchainInstaller",
    "TrivyTaskError",
    "UnsupportedArchitectureError",
    "UnsupportedPlatformError",
    "scan_arguments",
    "strip_version_prefix",
]
