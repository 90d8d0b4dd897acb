"""Task input readers.

Agents expose task inputs as ``INPUT_<NAME>`` environment variables, with the
name upper-cased and spaces replaced by underscores. Empty values are treated
as unset.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import Mapping, Optional

from trivy_task.errors import InputValidationError


class TaskInputs(ABC):
    """Reads named string and boolean inputs."""

    @abstractmethod
    def _lookup(self, name: str) -> Optional[str]:
        """Return the raw value for ``name`` or ``None`` when it is not set."""

    def get_input(self, name: str, required: bool = False) -> Optional[str]:
        raw = self._lookup(name)
        value = raw.strip() if raw is not None else None
        if not value:
            if required:
                raise InputValidationError(f"Input required: {name}")
            return None
        return value

    def get_bool_input(self, name: str, required: bool = False) -> bool:
        value = self.get_input(name, required)
        return (value or "").upper() == "TRUE"


class EnvironmentInputs(TaskInputs):
    """Inputs provided by the agent through environment variables."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self.environ = os.environ if environ is None else environ

    @staticmethod
    def variable_name(name: str) -> str:
        return "INPUT_" + name.replace(" ", "_").upper()

    def _lookup(self, name: str) -> Optional[str]:
        return self.environ.get(self.variable_name(name))


class MappingInputs(TaskInputs):
    """Inputs given explicitly, optionally falling back to another reader."""

    def __init__(
        self,
        values: Mapping[str, Optional[str]],
        fallback: Optional[TaskInputs] = None,
    ) -> None:
        self.values = dict(values)
        self.fallback = fallback

    def _lookup(self, name: str) -> Optional[str]:
        value = self.values.get(name)
        if value is None and self.fallback is not None:
            return self.fallback._lookup(name)
        return value


__all__ = ["EnvironmentInputs", "MappingInputs", "TaskInputs"]
