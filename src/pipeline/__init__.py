"""Adapters for the hosting pipeline agent."""

from .inputs import EnvironmentInputs, MappingInputs, TaskInputs
from .reporter import AgentReporter, PipelineReporter, format_command

__all__ = [
    "AgentReporter",
    "EnvironmentInputs",
    "MappingInputs",
    "PipelineReporter",
    "TaskInputs",
    "format_command",
]
