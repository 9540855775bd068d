"""Go toolchain install errors."""

from __future__ import annotations


class GoVersionsError(Exception):
    """Base error for catalog, selection, download and install failures."""

    stage: str | None = None


class NetworkError(GoVersionsError):
    """Transport failure or HTTP error status while talking to go.dev."""


class ParseError(GoVersionsError):
    """Catalog payload could not be decoded."""


class EmptyCatalogError(GoVersionsError):
    """Catalog holds no releases."""


class SelectionError(GoVersionsError):
    """No release or artifact matches the requested version and platform."""


class DownloadError(GoVersionsError):
    """Downloaded artifact could not be written to disk."""


class ChecksumMismatchError(DownloadError):
    """Downloaded bytes do not match the catalog sha256 or size."""


class UnsupportedFormatError(GoVersionsError):
    """Artifact file type has no install strategy."""


class InstallError(GoVersionsError):
    """Installer subprocess or archive extraction failed."""
