"""Go installer configuration and workspace config loading."""

from __future__ import annotations

import logging
import os
import sys
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

logger = logging.getLogger(__name__)

GO_CATALOG_URL = "https://go.dev/dl/?mode=json&include=all"
GO_DOWNLOAD_BASE_URL = "https://go.dev/dl/"
LINUX_INSTALL_DIR = Path("/usr/local/go")
WINDOWS_INSTALL_DIR = Path("C:\\go")
HOST_MATCH_MODES = ("legacy", "strict")


def default_install_dir(platform: str | None = None) -> Path:
    name = (platform or sys.platform).lower()
    if name.startswith("win"):
        return WINDOWS_INSTALL_DIR
    return LINUX_INSTALL_DIR


def default_workspace_root() -> Path:
    configured = os.environ.get("ARIX_HOME", "").strip()
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".arix"


@dataclass(frozen=True)
class GoInstallConfig:
    catalog_url: str = GO_CATALOG_URL
    download_base_url: str = GO_DOWNLOAD_BASE_URL
    timeout_seconds: float = 5.0
    install_timeout_seconds: float | None = None
    install_dir: Path = field(default_factory=default_install_dir)
    download_dir: Path = field(default_factory=lambda: default_workspace_root() / "cache" / "downloads")
    verify_checksum: bool = True
    host_match: str = "legacy"
    chunk_size: int = 1024 * 1024

    def __post_init__(self) -> None:
        if self.host_match not in HOST_MATCH_MODES:
            raise ValueError(
                f"invalid host_match {self.host_match!r}: expected one of {', '.join(HOST_MATCH_MODES)}"
            )
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        if self.install_timeout_seconds is not None and self.install_timeout_seconds <= 0:
            raise ValueError("install_timeout_seconds must be positive")
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be positive")


def _load_go_section(workspace_root: Path) -> dict[str, Any]:
    config_path = workspace_root / "config" / "config.toml"
    if not config_path.exists():
        return {}
    try:
        payload = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("ignoring unreadable config path=%s: %s", config_path, exc)
        return {}
    section = payload.get("go")
    return section if isinstance(section, dict) else {}


def _workspace_path(value: str, workspace_root: Path) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else workspace_root / path


def config_from_mapping(section: Mapping[str, Any], *, workspace_root: Path) -> GoInstallConfig:
    install_dir = str(section.get("install_dir") or "").strip()
    download_dir = str(section.get("download_dir") or "").strip()
    install_timeout = section.get("install_timeout_seconds")
    return GoInstallConfig(
        catalog_url=str(section.get("catalog_url") or GO_CATALOG_URL),
        download_base_url=str(section.get("download_base_url") or GO_DOWNLOAD_BASE_URL),
        timeout_seconds=float(section.get("timeout_seconds", 5.0)),
        install_timeout_seconds=float(install_timeout) if install_timeout is not None else None,
        install_dir=_workspace_path(install_dir, workspace_root) if install_dir else default_install_dir(),
        download_dir=(
            _workspace_path(download_dir, workspace_root) if download_dir else workspace_root / "cache" / "downloads"
        ),
        verify_checksum=bool(section.get("verify_checksum", True)),
        host_match=str(section.get("host_match") or "legacy").strip().lower(),
        chunk_size=int(section.get("chunk_size", 1024 * 1024)),
    )


def load_go_config(workspace_root: Path | None = None) -> GoInstallConfig:
    root = (workspace_root or default_workspace_root()).resolve()
    return config_from_mapping(_load_go_section(root), workspace_root=root)
