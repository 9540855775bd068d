"""Resolve, download and install Go toolchain releases."""

from .catalog import Catalog
from .config import (
    GO_CATALOG_URL,
    GO_DOWNLOAD_BASE_URL,
    GoInstallConfig,
    config_from_mapping,
    default_install_dir,
    load_go_config,
)
from .download import download_artifact, download_url, filename_from_url
from .errors import (
    ChecksumMismatchError,
    DownloadError,
    EmptyCatalogError,
    GoVersionsError,
    InstallError,
    NetworkError,
    ParseError,
    SelectionError,
    UnsupportedFormatError,
)
from .fetch import fetch_catalog
from .install import InstallerExecutor, SubprocessExecutor, extract_zip, install_artifact
from .pipeline import GoInstaller
from .selector import HostPlatform, detect_host, select_artifact
from .semver import SemVer, parse_semver, release_semver
from .types import Artifact, InstallResult, Release

__all__ = [
    "Artifact",
    "Catalog",
    "ChecksumMismatchError",
    "DownloadError",
    "EmptyCatalogError",
    "GO_CATALOG_URL",
    "GO_DOWNLOAD_BASE_URL",
    "GoInstallConfig",
    "GoInstaller",
    "GoVersionsError",
    "HostPlatform",
    "InstallError",
    "InstallResult",
    "InstallerExecutor",
    "NetworkError",
    "ParseError",
    "Release",
    "SelectionError",
    "SemVer",
    "SubprocessExecutor",
    "UnsupportedFormatError",
    "config_from_mapping",
    "default_install_dir",
    "detect_host",
    "download_artifact",
    "download_url",
    "extract_zip",
    "fetch_catalog",
    "filename_from_url",
    "install_artifact",
    "load_go_config",
    "parse_semver",
    "release_semver",
    "select_artifact",
]
