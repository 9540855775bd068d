"""Stream Go artifacts from the download endpoint to local disk."""

from __future__ import annotations

import hashlib
import logging
import posixpath
from pathlib import Path
from urllib.parse import unquote, urlsplit

import requests
from requests.exceptions import RequestException

from .errors import ChecksumMismatchError, DownloadError, NetworkError
from .fetch import close_response, http_get
from .types import Artifact

logger = logging.getLogger(__name__)


def download_url(base_url: str, filename: str) -> str:
    return f"{base_url.rstrip('/')}/{filename.lstrip('/')}"


def filename_from_url(url: str) -> str:
    name = posixpath.basename(unquote(urlsplit(url).path))
    if not name or name in {".", ".."}:
        raise DownloadError(f"cannot derive a file name from download url {url!r}")
    return name


def _remove_partial(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("failed to remove partial download path=%s: %s", path, exc)


def _verify(path: Path, digest: str, written: int, artifact: Artifact) -> None:
    expected = artifact.sha256.strip().lower()
    if expected and digest != expected:
        raise ChecksumMismatchError(f"sha256 mismatch for {path.name}: expected {expected}, got {digest}")
    if artifact.size > 0 and written != artifact.size:
        raise ChecksumMismatchError(f"size mismatch for {path.name}: expected {artifact.size} bytes, got {written}")


def download_artifact(
    url: str,
    dest_dir: Path,
    *,
    timeout_seconds: float = 5.0,
    session: requests.Session | None = None,
    artifact: Artifact | None = None,
    verify_checksum: bool = False,
    chunk_size: int = 1024 * 1024,
) -> Path:
    """Download ``url`` into ``dest_dir`` and return the written file path.

    The file is named after the last URL path segment. When ``verify_checksum``
    is set and ``artifact`` is given, the bytes are checked against its sha256
    and size. A partially written file is removed on any failure.
    """
    target = (Path(dest_dir) / filename_from_url(url)).resolve()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DownloadError(f"unable to create download directory {target.parent}: {exc}") from exc

    logger.debug("go download url=%s target=%s", url, target)
    response = http_get(url, timeout_seconds=timeout_seconds, session=session, stream=True)
    hasher = hashlib.sha256()
    written = 0
    completed = False
    try:
        with open(target, "wb") as handle:
            for chunk in response.iter_content(chunk_size=chunk_size):
                if not chunk:
                    continue
                handle.write(chunk)
                hasher.update(chunk)
                written += len(chunk)
        if verify_checksum and artifact is not None:
            _verify(target, hasher.hexdigest(), written, artifact)
        completed = True
    except RequestException as exc:
        raise NetworkError(f"download of {url} failed: {exc}") from exc
    except OSError as exc:
        raise DownloadError(f"unable to write {target}: {exc}") from exc
    finally:
        close_response(response)
        if not completed:
            _remove_partial(target)

    logger.info("go download complete path=%s bytes=%s", target, written)
    return target
