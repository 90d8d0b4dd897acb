"""Task configuration management using Pydantic settings."""
from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TaskSettings(BaseSettings):
    """Immutable configuration shared by every stage of the scan pipeline."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="TRIVY_TASK_",
        extra="ignore",
        frozen=True,
    )

    pinned_version: str = Field(
        default="v0.29.2",
        description="Scanner release installed when the requested version is 'latest'.",
    )
    release_base_url: str = Field(
        default="https://github.com/aquasecurity/trivy/releases/download",
        description="Base URL hosting the scanner release archives.",
    )
    tmp_dir: Path = Field(
        default=Path("/tmp"),
        description="Scratch directory for the archive, the binary and scan output.",
    )
    binary_name: str = Field(
        default="trivy",
        description="Name of the executable inside the release archive.",
    )
    container_runtime: str = Field(
        default="docker",
        description="Container runtime used when the scan runs in a container.",
    )
    container_image: str = Field(
        default="aquasec/trivy",
        description="Scanner image repository; the requested version is used as the tag.",
    )
    container_workdir: str = Field(
        default="/src",
        description="Mount point of the working directory inside the container.",
    )
    attachment_type: str = Field(
        default="JSON_RESULT",
        description="Attachment type used when publishing the findings file.",
    )
    download_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Optional timeout in seconds for the archive download.",
    )
    download_chunk_size: int = Field(
        default=64 * 1024,
        ge=1,
        description="Chunk size used when streaming the archive to disk.",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level for the task process.",
    )

    @field_validator("release_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def binary_path(self) -> Path:
        """Location of the extracted scanner executable."""

        return self.tmp_dir / self.binary_name


@lru_cache
def get_settings() -> TaskSettings:
    """Return the cached task settings instance."""

    return TaskSettings()


def reset_settings_cache() -> None:
    """Clear the cached settings so future calls reflect new environment values."""

    get_settings.cache_clear()


__all__ = [
    "TaskSettings",
    "get_settings",
    "reset_settings_cache",
]
