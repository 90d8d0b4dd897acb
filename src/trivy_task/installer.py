"""Download and preparation of the scanner binary."""

from __future__ import annotations

import logging
import os
import shutil
import stat
import tarfile
from pathlib import Path
from typing import Optional

import requests

from common.config import TaskSettings

from .errors import DownloadError, ExtractionError, PermissionSetupError
from .models import ResolvedArtifact, Toolchain

LOGGER = logging.getLogger("trivy_task.installer")

_EXECUTE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def remove_path(path: Path) -> None:
    """Delete ``path`` if present, logging rather than raising on failure."""

    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink(missing_ok=True)
    except OSError as exc:
        LOGGER.warning("Unable to remove %s: %s", path, exc)


class ToolchainInstaller:
    """Fetches a release archive and unpacks an executable scanner binary.

    Every call reinstalls from scratch; nothing is cached between runs.
    """

    def __init__(
        self,
        settings: TaskSettings,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.settings = settings
        self.session = session

    def install(self, artifact: ResolvedArtifact) -> Toolchain:
        tmp_dir = self.settings.tmp_dir
        binary_path = self.settings.binary_path
        archive_path = tmp_dir / artifact.archive_name

        remove_path(binary_path)
        remove_path(archive_path)
        tmp_dir.mkdir(parents=True, exist_ok=True)

        LOGGER.info("Downloading Trivy...")
        self._download(artifact.download_url, archive_path)

        LOGGER.info("Extracting Trivy...")
        self._extract(archive_path, tmp_dir)
        if not binary_path.is_file():
            raise ExtractionError(
                f"{artifact.archive_name} did not contain a '{self.settings.binary_name}' executable"
            )

        LOGGER.info("Setting permissions...")
        self._make_executable(binary_path)
        return Toolchain(executable_path=binary_path)

    def _download(self, url: str, destination: Path) -> None:
        http_client = self.session or requests
        try:
            with http_client.get(
                url,
                stream=True,
                allow_redirects=True,
                timeout=self.settings.download_timeout,
            ) as response:
                response.raise_for_status()
                with destination.open("wb") as handle:
                    for chunk in response.iter_content(chunk_size=self.settings.download_chunk_size):
                        if chunk:
                            handle.write(chunk)
        except requests.RequestException as exc:
            remove_path(destination)
            raise DownloadError(f"Failed to download {url}: {exc}") from exc
        except OSError as exc:
            remove_path(destination)
            raise DownloadError(f"Failed to write {destination}: {exc}") from exc

        LOGGER.debug("Downloaded %s to %s", url, destination)

    def _extract(self, archive_path: Path, destination: Path) -> None:
        try:
            with tarfile.open(archive_path, "r:*") as archive:
                archive.extractall(destination, filter="data")
        except (tarfile.TarError, OSError) as exc:
            raise ExtractionError(f"Failed to extract {archive_path}: {exc}") from exc

    def _make_executable(self, binary_path: Path) -> None:
        try:
            mode = binary_path.stat().st_mode
            os.chmod(binary_path, mode | _EXECUTE_BITS)
        except OSError as exc:
            raise PermissionSetupError(f"Failed to mark {binary_path} executable: {exc}") from exc


__all__ = ["ToolchainInstaller", "remove_path"]
