"""Pick the Go distribution file to install for a release."""

from __future__ import annotations

import logging
import platform
from dataclasses import dataclass

from .catalog import Catalog
from .errors import SelectionError
from .types import Artifact

logger = logging.getLogger(__name__)

ARCHIVE_KIND = "archive"
LEGACY_OS = frozenset({"linux", "windows"})
LEGACY_ARCH = frozenset({"amd64", "386"})

_ARCH_ALIASES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "x64": "amd64",
    "i386": "386",
    "i486": "386",
    "i586": "386",
    "i686": "386",
    "x86": "386",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv6l": "armv6l",
    "armv7l": "armv6l",
    "ppc64le": "ppc64le",
    "s390x": "s390x",
    "riscv64": "riscv64",
    "loongarch64": "loong64",
}


@dataclass(frozen=True)
class HostPlatform:
    os: str
    arch: str


def go_arch(machine: str) -> str:
    value = (machine or "").strip().lower()
    return _ARCH_ALIASES.get(value, value)


def detect_host() -> HostPlatform:
    return HostPlatform(os=platform.system().lower(), arch=go_arch(platform.machine()))


def matches_legacy(artifact: Artifact) -> bool:
    return artifact.kind == ARCHIVE_KIND and artifact.os in LEGACY_OS and artifact.arch in LEGACY_ARCH


def matches_host(artifact: Artifact, host: HostPlatform) -> bool:
    return artifact.kind == ARCHIVE_KIND and artifact.os == host.os and artifact.arch == host.arch


def select_artifact(
    catalog: Catalog,
    version: str,
    *,
    host_match: str = "legacy",
    host: HostPlatform | None = None,
) -> Artifact:
    """Return the first archive of ``version`` that fits the platform predicate.

    ``legacy`` accepts any linux/windows amd64/386 archive regardless of the
    running host; ``strict`` requires the archive to match ``host`` (detected
    when omitted).
    """
    if host_match == "strict":
        target = host or detect_host()

        def predicate(artifact: Artifact) -> bool:
            return matches_host(artifact, target)

    elif host_match == "legacy":
        predicate = matches_legacy
    else:
        raise ValueError(f"unknown host_match mode: {host_match!r}")

    release = catalog.find_release(version)
    if release is None:
        raise SelectionError(f"no suitable Go package found: version {version!r} is not in the catalog")
    for artifact in release.files:
        if predicate(artifact):
            logger.debug(
                "go artifact selected version=%s filename=%s os=%s arch=%s",
                version,
                artifact.filename,
                artifact.os,
                artifact.arch,
            )
            return artifact
    raise SelectionError(f"no suitable Go package found for version {version} ({host_match} platform match)")
