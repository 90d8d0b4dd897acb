"""Result and attachment publishing through agent logging commands."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Mapping, Optional, Protocol, Sequence, TextIO, Tuple, Union

from trivy_task.models import TaskResult

_PROPERTY_ESCAPES = (
    ("%", "%AZP25"),
    ("\r", "%0D"),
    ("\n", "%0A"),
    ("]", "%5D"),
    (";", "%3B"),
)
_DATA_ESCAPES = (
    ("%", "%AZP25"),
    ("\r", "%0D"),
    ("\n", "%0A"),
)


def _escape(value: str, escapes: Sequence[Tuple[str, str]]) -> str:
    for raw, escaped in escapes:
        value = value.replace(raw, escaped)
    return value


def format_command(command: str, properties: Mapping[str, str], data: str) -> str:
    """Render a ``##vso[command key=value;]data`` logging command."""

    rendered = "".join(
        f"{key}={_escape(str(value), _PROPERTY_ESCAPES)};" for key, value in properties.items()
    )
    separator = " " if rendered else ""
    return f"##vso[{command}{separator}{rendered}]{_escape(data, _DATA_ESCAPES)}"


class PipelineReporter(Protocol):
    """Destination for the task result and its attachments."""

    def set_result(self, result: TaskResult, message: str) -> None:
        ...

    def add_attachment(self, attachment_type: str, name: str, path: Union[str, Path]) -> None:
        ...


class AgentReporter:
    """Writes logging commands that the pipeline agent interprets."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream

    def _emit(self, line: str) -> None:
        stream = self.stream or sys.stdout
        stream.write(line + "\n")
        stream.flush()

    def set_result(self, result: TaskResult, message: str) -> None:
        if result is TaskResult.FAILED:
            self._emit(format_command("task.issue", {"type": "error"}, message))
        self._emit(format_command("task.complete", {"result": result.value}, message))

    def add_attachment(self, attachment_type: str, name: str, path: Union[str, Path]) -> None:
        self._emit(
            format_command(
                "task.addattachment",
                {"type": attachment_type, "name": name},
                str(path),
            )
        )


__all__ = ["AgentReporter", "PipelineReporter", "format_command"]
