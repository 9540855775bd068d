"""Install a downloaded Go artifact onto the host."""

from __future__ import annotations

import logging
import os
import subprocess
import zipfile
from pathlib import Path
from typing import Protocol, Sequence

from .errors import InstallError, UnsupportedFormatError

logger = logging.getLogger(__name__)

MSI_INSTALLER = "msiexec"


class InstallerExecutor(Protocol):
    def run(self, command: Sequence[str]) -> None: ...


class SubprocessExecutor:
    """Run installer commands with the parent's stdout/stderr attached."""

    def __init__(self, timeout_seconds: float | None = None) -> None:
        self.timeout_seconds = timeout_seconds

    def run(self, command: Sequence[str]) -> None:
        args = [str(item) for item in command]
        logger.debug("installer command cmd=%s timeout=%s", " ".join(args), self.timeout_seconds)
        try:
            result = subprocess.run(args, check=False, timeout=self.timeout_seconds)
        except FileNotFoundError as exc:
            raise InstallError(f"installer executable not found: {args[0]}") from exc
        except subprocess.TimeoutExpired as exc:
            raise InstallError(f"installer timed out after {self.timeout_seconds}s: {args[0]}") from exc
        if result.returncode != 0:
            raise InstallError(f"installer failed (exit={result.returncode}) cmd='{' '.join(args)}'")


def install_msi(path: Path, executor: InstallerExecutor) -> None:
    executor.run([MSI_INSTALLER, "/i", str(path)])


def _safe_member_path(base_dir: Path, name: str) -> Path:
    root = base_dir.resolve()
    target = (root / name).resolve()
    if target != root and root not in target.parents:
        raise InstallError(f"unsafe archive member path: {name}")
    return target


def extract_zip(path: Path, install_dir: Path) -> list[Path]:
    """Extract every member of ``path`` below ``install_dir``; returns written files."""
    written: list[Path] = []
    try:
        install_dir.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(path) as archive:
            members = archive.infolist()
            for member in members:
                _safe_member_path(install_dir, member.filename)
            for member in members:
                extracted = Path(archive.extract(member, install_dir))
                if member.is_dir():
                    continue
                mode = (member.external_attr >> 16) & 0o777
                if mode:
                    os.chmod(extracted, mode)
                written.append(extracted)
    except zipfile.BadZipFile as exc:
        raise InstallError(f"corrupt zip archive {path}: {exc}") from exc
    except OSError as exc:
        raise InstallError(f"unable to extract {path} into {install_dir}: {exc}") from exc
    logger.info("go archive extracted path=%s install_dir=%s files=%s", path, install_dir, len(written))
    return written


def install_artifact(path: Path, install_dir: Path, *, executor: InstallerExecutor | None = None) -> None:
    """Dispatch on the file suffix: ``.msi`` runs the installer, ``.zip`` extracts."""
    name = path.name.lower()
    if name.endswith(".msi"):
        install_msi(path, executor or SubprocessExecutor())
        return
    if name.endswith(".zip"):
        extract_zip(path, install_dir)
        return
    raise UnsupportedFormatError(f"unsupported file type: {path.name}")
