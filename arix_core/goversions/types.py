"""Go release catalog datatypes."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .errors import ParseError

SOURCE_KIND = "source"
ANY_PLATFORM = "any"


@dataclass(frozen=True)
class Artifact:
    version: str
    filename: str
    os: str = ""
    arch: str = ""
    sha256: str = ""
    size: int = 0
    kind: str = ""
    id: int = 0
    stable: bool = False

    def platform_independent(self) -> "Artifact":
        """Source archives build anywhere, so they advertise the ``any`` platform."""
        if self.kind != SOURCE_KIND:
            return self
        return replace(self, os=ANY_PLATFORM, arch=ANY_PLATFORM)


@dataclass(frozen=True)
class Release:
    version: str
    stable: bool = False
    files: tuple[Artifact, ...] = ()
    id: int = 0


@dataclass(frozen=True)
class InstallResult:
    version: str
    artifact: Artifact
    archive_path: Path
    install_dir: Path


def _as_int(value: Any, field: str) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ParseError(f"invalid catalog field {field!r}: expected integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ParseError(f"invalid catalog field {field!r}: expected integer") from exc


def artifact_from_payload(payload: Any) -> Artifact:
    if not isinstance(payload, dict):
        raise ParseError("invalid catalog file entry: expected object")
    return Artifact(
        version=str(payload.get("version") or ""),
        filename=str(payload.get("filename") or ""),
        os=str(payload.get("os") or ""),
        arch=str(payload.get("arch") or ""),
        sha256=str(payload.get("sha256") or ""),
        size=_as_int(payload.get("size"), "size"),
        kind=str(payload.get("kind") or ""),
        id=_as_int(payload.get("id"), "id"),
        stable=bool(payload.get("stable", False)),
    )


def release_from_payload(payload: Any) -> Release:
    if not isinstance(payload, dict):
        raise ParseError("invalid catalog release entry: expected object")
    files = payload.get("files")
    if files is None:
        files = []
    if not isinstance(files, list):
        raise ParseError("invalid catalog release entry: 'files' must be a list")
    return Release(
        version=str(payload.get("version") or ""),
        stable=bool(payload.get("stable", False)),
        files=tuple(artifact_from_payload(item) for item in files),
        id=_as_int(payload.get("id"), "id"),
    )


def releases_from_payload(payload: Any) -> list[Release]:
    if not isinstance(payload, list):
        raise ParseError("invalid catalog payload: expected a JSON array of releases")
    return [release_from_payload(item) for item in payload]
