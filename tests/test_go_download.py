from __future__ import annotations

import hashlib
from pathlib import Path

import pytest
import requests

from arix_core.goversions import (
    Artifact,
    ChecksumMismatchError,
    DownloadError,
    NetworkError,
    download_artifact,
    download_url,
    filename_from_url,
)


def _artifact(body: bytes, filename: str = "go1.22.5.linux-amd64.zip") -> Artifact:
    return Artifact(
        version="go1.22.5",
        filename=filename,
        os="linux",
        arch="amd64",
        kind="archive",
        sha256=hashlib.sha256(body).hexdigest(),
        size=len(body),
    )


def test_download_url_joins_base_and_filename() -> None:
    assert download_url("https://go.dev/dl/", "go1.22.5.linux-amd64.tar.gz") == (
        "https://go.dev/dl/go1.22.5.linux-amd64.tar.gz"
    )
    assert download_url("https://go.dev/dl", "/x.zip") == "https://go.dev/dl/x.zip"


def test_filename_from_url_uses_last_path_segment() -> None:
    assert filename_from_url("https://go.dev/dl/go1.22.5.windows-386.zip?x=1") == "go1.22.5.windows-386.zip"
    with pytest.raises(DownloadError):
        filename_from_url("https://go.dev/dl/")


def test_download_streams_body_into_created_directory(go_dl_server, tmp_path: Path) -> None:
    body = b"PK" + bytes(range(256)) * 64
    url = go_dl_server.add("/dl/go1.22.5.linux-amd64.zip", body)
    dest = tmp_path / "nested" / "downloads"

    path = download_artifact(url, dest, timeout_seconds=2.0, chunk_size=1000)

    assert path == (dest / "go1.22.5.linux-amd64.zip").resolve()
    assert path.read_bytes() == body


def test_download_verifies_checksum_and_size(go_dl_server, tmp_path: Path) -> None:
    body = b"go toolchain bytes"
    url = go_dl_server.add("/dl/go1.22.5.linux-amd64.zip", body)

    path = download_artifact(url, tmp_path, timeout_seconds=2.0, artifact=_artifact(body), verify_checksum=True)

    assert path.exists()


def test_checksum_mismatch_removes_partial_file(go_dl_server, tmp_path: Path) -> None:
    url = go_dl_server.add("/dl/go1.22.5.linux-amd64.zip", b"tampered")

    with pytest.raises(ChecksumMismatchError, match="sha256 mismatch"):
        download_artifact(
            url,
            tmp_path,
            timeout_seconds=2.0,
            artifact=_artifact(b"original"),
            verify_checksum=True,
        )
    assert not (tmp_path / "go1.22.5.linux-amd64.zip").exists()


def test_size_mismatch_is_reported_when_hash_is_missing(go_dl_server, tmp_path: Path) -> None:
    url = go_dl_server.add("/dl/go1.22.5.linux-amd64.zip", b"short")
    artifact = Artifact(version="go1.22.5", filename="go1.22.5.linux-amd64.zip", size=999)

    with pytest.raises(ChecksumMismatchError, match="size mismatch"):
        download_artifact(url, tmp_path, timeout_seconds=2.0, artifact=artifact, verify_checksum=True)


def test_checksum_is_ignored_when_verification_is_disabled(go_dl_server, tmp_path: Path) -> None:
    url = go_dl_server.add("/dl/go1.22.5.linux-amd64.zip", b"tampered")

    path = download_artifact(url, tmp_path, timeout_seconds=2.0, artifact=_artifact(b"original"))

    assert path.read_bytes() == b"tampered"


def test_http_error_status_is_a_network_error(go_dl_server, tmp_path: Path) -> None:
    url = f"{go_dl_server.base_url}/dl/missing.zip"

    with pytest.raises(NetworkError, match="status=404"):
        download_artifact(url, tmp_path, timeout_seconds=2.0)
    assert not (tmp_path / "missing.zip").exists()


def test_interrupted_stream_removes_partial_file(tmp_path: Path) -> None:
    closed: list[bool] = []

    class _BrokenResponse:
        status_code = 200
        url = "https://go.dev/dl/go1.22.5.windows-amd64.zip"

        def iter_content(self, chunk_size: int):
            yield b"partial"
            raise requests.exceptions.ChunkedEncodingError("connection reset")

        def close(self) -> None:
            closed.append(True)

    class _FakeSession:
        def get(self, url, **kwargs):
            assert kwargs["stream"] is True
            return _BrokenResponse()

    with pytest.raises(NetworkError, match="connection reset"):
        download_artifact(
            "https://go.dev/dl/go1.22.5.windows-amd64.zip",
            tmp_path,
            session=_FakeSession(),
        )
    assert not (tmp_path / "go1.22.5.windows-amd64.zip").exists()
    assert closed == [True]


def test_keyboard_interrupt_mid_stream_removes_partial_file(tmp_path: Path) -> None:
    closed: list[bool] = []

    class _InterruptedResponse:
        status_code = 200
        url = "https://go.dev/dl/go1.22.5.linux-amd64.zip"

        def iter_content(self, chunk_size: int):
            yield b"first chunk"
            raise KeyboardInterrupt

        def close(self) -> None:
            closed.append(True)

    class _FakeSession:
        def get(self, url, **kwargs):
            return _InterruptedResponse()

    with pytest.raises(KeyboardInterrupt):
        download_artifact("https://go.dev/dl/go1.22.5.linux-amd64.zip", tmp_path, session=_FakeSession())
    assert not (tmp_path / "go1.22.5.linux-amd64.zip").exists()
    assert closed == [True]


def test_unwritable_destination_is_a_download_error(go_dl_server, tmp_path: Path) -> None:
    blocker = tmp_path / "file-not-dir"
    blocker.write_text("x", encoding="utf-8")
    url = go_dl_server.add("/dl/go1.22.5.linux-amd64.zip", b"data")

    with pytest.raises(DownloadError):
        download_artifact(url, blocker / "downloads", timeout_seconds=2.0)
