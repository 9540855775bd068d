"""Semantic version helpers for Go release tags."""

from __future__ import annotations

import re
from dataclasses import dataclass

_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)
_PREFIX_RE = re.compile(r"^[^0-9]+")


@dataclass(frozen=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()

    def sort_key(self) -> tuple:
        # A release ranks above any of its pre-releases; build metadata is ignored.
        pre = tuple(
            (0, int(part), "") if part.isdigit() else (1, 0, part)
            for part in self.prerelease
        )
        return (self.major, self.minor, self.patch, 0 if self.prerelease else 1, pre)

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text


ZERO_VERSION = SemVer(0, 0, 0)


def strip_version_prefix(value: str) -> str:
    """Drop a leading non-numeric tag such as ``go`` from ``go1.22.5``."""
    return _PREFIX_RE.sub("", (value or "").strip())


def parse_semver(value: str) -> SemVer:
    match = _SEMVER_RE.match((value or "").strip())
    if not match:
        raise ValueError(f"invalid semver: {value!r}")
    prerelease = tuple(match.group(4).split(".")) if match.group(4) else ()
    for part in prerelease:
        if part.isdigit() and len(part) > 1 and part.startswith("0"):
            raise ValueError(f"invalid semver: {value!r} (leading zero in pre-release)")
    build = tuple(match.group(5).split(".")) if match.group(5) else ()
    return SemVer(
        major=int(match.group(1)),
        minor=int(match.group(2)),
        patch=int(match.group(3)),
        prerelease=prerelease,
        build=build,
    )


def release_semver(version: str) -> SemVer:
    """Parse a release tag, mapping anything unparsable to the zero version."""
    try:
        return parse_semver(strip_version_prefix(version))
    except ValueError:
        return ZERO_VERSION


def release_sort_key(version: str) -> tuple:
    return release_semver(version).sort_key()
