"""Release artifact resolution for the scanner binary."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping

from common.config import TaskSettings

from .errors import UnsupportedArchitectureError
from .models import ResolvedArtifact

LOGGER = logging.getLogger("trivy_task.resolver")

LATEST = "latest"

ARCHITECTURE_TAGS: Mapping[str, str] = MappingProxyType(
    {
        "arm": "ARM",
        "arm64": "ARM64",
        "x86_32": "32bit",
        "x86_64": "64bit",
    }
)


def strip_version_prefix(version: str) -> str:
    """Remove the leading ``v`` from a release tag (``v0.29.2`` -> ``0.29.2``)."""

    return version.lstrip("v")


def architecture_tag(host_arch: str) -> str:
    """Return the release archive tag for ``host_arch``."""

    try:
        return ARCHITECTURE_TAGS[host_arch]
    except KeyError:
        raise UnsupportedArchitectureError(f"unsupported architecture: {host_arch}") from None


class ArtifactResolver:
    """Computes the download URL of the release archive for a host."""

    def __init__(self, settings: TaskSettings) -> None:
        self.settings = settings

    def effective_version(self, requested_version: str) -> str:
        if requested_version == LATEST:
            return self.settings.pinned_version
        return requested_version

    def resolve(self, requested_version: str, host_arch: str) -> ResolvedArtifact:
        version = self.effective_version(requested_version)
        LOGGER.info("Required Trivy version is %s", version)

        tag = architecture_tag(host_arch)
        normalized = strip_version_prefix(version)
        archive = f"trivy_{normalized}_Linux-{tag}.tar.gz"
        url = f"{self.settings.release_base_url}/{version}/{archive}"
        LOGGER.debug("Resolved %s (%s) to %s", version, host_arch, url)
        return ResolvedArtifact(version=normalized, architecture_tag=tag, download_url=url)


__all__ = [
    "ARCHITECTURE_TAGS",
    "ArtifactResolver",
    "LATEST",
    "architecture_tag",
    "strip_version_prefix",
]
