"""In-memory Go version catalog."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Iterator

from .errors import EmptyCatalogError
from .semver import release_sort_key
from .types import Release


class Catalog:
    """Releases sorted newest first, plus the payload's original head entry."""

    def __init__(self, releases: Iterable[Release], *, release_candidate: str | None = None) -> None:
        self.releases: tuple[Release, ...] = tuple(
            sorted(releases, key=lambda release: release_sort_key(release.version), reverse=True)
        )
        self.release_candidate = release_candidate

    @classmethod
    def from_releases(cls, releases: Iterable[Release]) -> "Catalog":
        items = list(releases)
        release_candidate = items[0].version if items else None
        normalized = [
            replace(release, files=tuple(item.platform_independent() for item in release.files))
            for release in items
        ]
        return cls(normalized, release_candidate=release_candidate)

    def __len__(self) -> int:
        return len(self.releases)

    def __iter__(self) -> Iterator[Release]:
        return iter(self.releases)

    def stable_version(self) -> str:
        if not self.releases:
            raise EmptyCatalogError("Go version catalog is empty")
        return self.releases[0].version

    def find_release(self, version: str) -> Release | None:
        for release in self.releases:
            if release.version == version:
                return release
        return None

    def find_version(self, version: str) -> str | None:
        release = self.find_release(version)
        return release.version if release is not None else None

    def stable_releases(self) -> list[Release]:
        return [release for release in self.releases if release.stable]
