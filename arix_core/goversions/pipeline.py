"""Fetch, select, download and install a Go release in one pass."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import requests

from .catalog import Catalog
from .config import GoInstallConfig
from .download import download_artifact, download_url
from .errors import GoVersionsError
from .fetch import fetch_catalog
from .install import InstallerExecutor, SubprocessExecutor, install_artifact
from .selector import HostPlatform, select_artifact
from .types import Artifact, InstallResult

logger = logging.getLogger(__name__)

STAGE_IDLE = "idle"
STAGE_FETCHING = "fetching"
STAGE_SELECTING = "selecting"
STAGE_DOWNLOADING = "downloading"
STAGE_INSTALLING = "installing"
STAGE_DONE = "done"
STAGE_FAILED = "failed"


class GoInstaller:
    """Sequential install pipeline; any stage failure aborts the attempt."""

    def __init__(
        self,
        config: GoInstallConfig | None = None,
        *,
        session: requests.Session | None = None,
        executor: InstallerExecutor | None = None,
        host: HostPlatform | None = None,
    ) -> None:
        self.config = config or GoInstallConfig()
        self.session = session
        self.executor = executor or SubprocessExecutor(timeout_seconds=self.config.install_timeout_seconds)
        self.host = host
        self.stage = STAGE_IDLE
        self._catalog: Catalog | None = None

    @contextmanager
    def _stage(self, stage: str) -> Iterator[None]:
        self.stage = stage
        logger.info("go install stage=%s", stage)
        try:
            yield
        except GoVersionsError as exc:
            if exc.stage is None:
                exc.stage = stage
            self.stage = STAGE_FAILED
            logger.debug("go install failed stage=%s error=%s", stage, exc)
            raise

    def load_catalog(self) -> Catalog:
        if self._catalog is None:
            with self._stage(STAGE_FETCHING):
                self._catalog = fetch_catalog(
                    self.config.catalog_url,
                    timeout_seconds=self.config.timeout_seconds,
                    session=self.session,
                )
        return self._catalog

    def stable_version(self) -> str:
        return self.load_catalog().stable_version()

    def find_version(self, version: str) -> str | None:
        return self.load_catalog().find_version(version)

    def download_url(self, filename: str) -> str:
        return download_url(self.config.download_base_url, filename)

    def select(self, version: str) -> Artifact:
        catalog = self.load_catalog()
        with self._stage(STAGE_SELECTING):
            return select_artifact(catalog, version, host_match=self.config.host_match, host=self.host)

    def download_and_install(self, artifact: Artifact) -> Path:
        url = self.download_url(artifact.filename)
        with self._stage(STAGE_DOWNLOADING):
            path = download_artifact(
                url,
                self.config.download_dir,
                timeout_seconds=self.config.timeout_seconds,
                session=self.session,
                artifact=artifact,
                verify_checksum=self.config.verify_checksum,
                chunk_size=self.config.chunk_size,
            )
        with self._stage(STAGE_INSTALLING):
            install_artifact(path, self.config.install_dir, executor=self.executor)
        return path

    def install_version(self, version: str) -> InstallResult:
        artifact = self.select(version)
        path = self.download_and_install(artifact)
        self.stage = STAGE_DONE
        logger.info("go install complete version=%s install_dir=%s", version, self.config.install_dir)
        return InstallResult(
            version=version,
            artifact=artifact,
            archive_path=path,
            install_dir=self.config.install_dir,
        )

    def install_stable(self) -> InstallResult:
        catalog = self.load_catalog()
        with self._stage(STAGE_SELECTING):
            version = catalog.stable_version()
        return self.install_version(version)
