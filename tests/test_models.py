from __future__ import annotations

from pathlib import Path

import pytest

from trivy_task.errors import InputValidationError
from trivy_task.models import (
    AMBIGUOUS_TARGET_MESSAGE,
    MISSING_TARGET_MESSAGE,
    ExecutionMode,
    ScanOutcome,
    ScanRequest,
    TargetKind,
    Toolchain,
    select_target,
)


def test_path_only_builds_filesystem_request() -> None:
    request = ScanRequest.from_targets(path="a", image=None, requested_version="latest")

    assert request.target_kind is TargetKind.FILESYSTEM
    assert request.target_value == "a"
    assert request.exit_code_threshold == "1"
    assert request.debug is False
    assert request.use_container is False


def test_image_only_builds_image_request() -> None:
    request = ScanRequest.from_targets(path=None, image="nginx:1.23", requested_version="v0.29.2")

    assert request.target_kind is TargetKind.IMAGE
    assert request.target_value == "nginx:1.23"


@pytest.mark.parametrize(
    "path, image, message",
    [
        (None, None, MISSING_TARGET_MESSAGE),
        ("", "   ", MISSING_TARGET_MESSAGE),
        ("a", "nginx", AMBIGUOUS_TARGET_MESSAGE),
    ],
)
def test_exactly_one_target_is_required(path, image, message) -> None:  # type: ignore[no-untyped-def]
    with pytest.raises(InputValidationError) as excinfo:
        ScanRequest.from_targets(path=path, image=image, requested_version="latest")

    assert str(excinfo.value) == message
    assert isinstance(excinfo.value, ValueError)


def test_blank_threshold_falls_back_to_default() -> None:
    request = ScanRequest.from_targets(
        path="a", image=None, requested_version="latest", exit_code_threshold=" "
    )

    assert request.exit_code_threshold == "1"


def test_execution_mode_kinds() -> None:
    toolchain = Toolchain(executable_path=Path("/tmp/trivy"))

    assert ExecutionMode.container().is_container
    assert not ExecutionMode.local(toolchain).is_container
    assert ExecutionMode.local(toolchain).toolchain is toolchain


def test_outcome_success_is_exit_code_zero() -> None:
    assert ScanOutcome(exit_code=0, output_file_path=Path("/tmp/o.json")).succeeded
    assert not ScanOutcome(exit_code=1, output_file_path=Path("/tmp/o.json")).succeeded
    assert not ScanOutcome(exit_code=2, output_file_path=Path("/tmp/o.json")).succeeded


@pytest.mark.parametrize("target", ["", "   "])
def test_direct_construction_rejects_blank_target(target: str) -> None:
    with pytest.raises(InputValidationError, match="You must specify something to scan"):
        ScanRequest(target_kind=TargetKind.FILESYSTEM, target_value=target, requested_version="latest")


def test_select_target_strips_and_picks_single_target() -> None:
    assert select_target(" ./src ", None) == (TargetKind.FILESYSTEM, "./src")
    assert select_target("", "nginx") == (TargetKind.IMAGE, "nginx")
