"""Tests for scanner command line construction."""

from __future__ import annotations

from pathlib import Path

import pytest

from common.config import TaskSettings
from trivy_task.invocation import InvocationBuilder, scan_arguments
from trivy_task.models import ExecutionMode, ScanRequest, TargetKind, Toolchain

OUTPUT = Path("/tmp/trivy-results-abc.json")


@pytest.fixture
def builder() -> InvocationBuilder:
    return InvocationBuilder(
        TaskSettings(),
        home_directory=Path("/home/agent"),
        working_directory=Path("/agent/_work/1/s"),
    )


def _request(**overrides: object) -> ScanRequest:
    values = {"path": "./src", "image": None, "requested_version": "latest"}
    values.update(overrides)
    return ScanRequest.from_targets(**values)  # type: ignore[arg-type]


def test_filesystem_arguments_golden() -> None:
    assert scan_arguments(_request(), OUTPUT) == [
        "fs",
        "--exit-code",
        "1",
        "--format",
        "json",
        "--output",
        "/tmp/trivy-results-abc.json",
        "--security-checks",
        "vuln,config,secret",
        "./src",
    ]


def test_image_arguments_with_debug_and_threshold() -> None:
    request = _request(path=None, image="alpine:3.16", debug=True, exit_code_threshold="5")

    assert request.target_kind is TargetKind.IMAGE
    assert scan_arguments(request, OUTPUT) == [
        "--debug",
        "image",
        "--exit-code",
        "5",
        "--format",
        "json",
        "--output",
        "/tmp/trivy-results-abc.json",
        "--security-checks",
        "vuln,config,secret",
        "alpine:3.16",
    ]


def test_arguments_are_deterministic() -> None:
    request = _request(debug=True)

    assert scan_arguments(request, OUTPUT) == scan_arguments(request, OUTPUT)


def test_local_mode_runs_toolchain_binary(builder: InvocationBuilder) -> None:
    mode = ExecutionMode.local(Toolchain(executable_path=Path("/tmp/trivy")))

    invocation = builder.build(mode, _request(), OUTPUT)

    assert invocation.program == "/tmp/trivy"
    assert list(invocation.arguments) == scan_arguments(_request(), OUTPUT)
    assert invocation.command[0] == "/tmp/trivy"


def test_container_mode_mounts_credentials_tmp_and_workdir(builder: InvocationBuilder) -> None:
    request = _request(requested_version="v0.30.4", use_container=True)

    invocation = builder.build(ExecutionMode.container(), request, OUTPUT)

    assert invocation.program == "docker"
    assert list(invocation.arguments) == [
        "run",
        "--rm",
        "-v",
        "/home/agent/.docker/config.json:/root/.docker/config.json",
        "-v",
        "/tmp:/tmp",
        "-v",
        "/agent/_work/1/s:/src",
        "--workdir",
        "/src",
        "aquasec/trivy:0.30.4",
        *scan_arguments(request, OUTPUT),
    ]


def test_container_mode_keeps_latest_tag(builder: InvocationBuilder) -> None:
    invocation = builder.build(ExecutionMode.container(), _request(), OUTPUT)

    assert "aquasec/trivy:latest" in invocation.arguments


def test_container_mode_uses_configured_runtime() -> None:
    builder = InvocationBuilder(
        TaskSettings(container_runtime="podman", container_image="ghcr.io/aquasecurity/trivy"),
        home_directory=Path("/root"),
        working_directory=Path("/work"),
    )

    invocation = builder.build(ExecutionMode.container(), _request(requested_version="v0.29.2"), OUTPUT)

    assert invocation.program == "podman"
    assert "ghcr.io/aquasecurity/trivy:0.29.2" in invocation.arguments


def test_render_quotes_arguments() -> None:
    builder = InvocationBuilder(
        TaskSettings(),
        home_directory=Path("/root"),
        working_directory=Path("/work"),
    )
    mode = ExecutionMode.local(Toolchain(executable_path=Path("/tmp/trivy")))

    rendered = builder.build(mode, _request(path="my project"), OUTPUT).render()

    assert rendered.startswith("/tmp/trivy fs --exit-code 1")
    assert rendered.endswith("'my project'")
