"""Build identity for the arix distribution."""

from __future__ import annotations

import os
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version as distribution_version

DISTRIBUTION_NAME = "arix"
DEVELOPMENT_VERSION = "development"


@dataclass(frozen=True)
class BuildInfo:
    version: str
    commit_hash: str = ""
    date: str = ""


def build_info() -> BuildInfo:
    try:
        current = distribution_version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        current = DEVELOPMENT_VERSION
    return BuildInfo(
        version=current,
        commit_hash=os.environ.get("ARIX_COMMIT", "").strip(),
        date=os.environ.get("ARIX_BUILD_DATE", "").strip(),
    )


def version_string(info: BuildInfo | None = None) -> str:
    """Format as ``version[-commit][-yyyy-mm-dd]``."""
    info = info or build_info()
    parts = [info.version]
    if info.commit_hash:
        parts.append(info.commit_hash)
    if info.date:
        parts.append(info.date[:10])
    return "-".join(parts)
