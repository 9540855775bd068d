"""Command line entrypoint for arix."""

from __future__ import annotations

import json
import logging
from argparse import ArgumentParser, Namespace
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from arix_core.goversions import GoInstaller, GoInstallConfig, GoVersionsError, load_go_config
from arix_core.goversions.config import default_workspace_root
from arix_core.version import version_string

logger = logging.getLogger(__name__)

HELP = """Arix Utility

Arix is a utility that combines various tools into a single binary."""


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="arix", description=HELP)
    parser.add_argument("--workspace-dir", default="", help="Workspace root (defaults to $ARIX_HOME or ~/.arix)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command")

    commands.add_parser("version", help="Show build version information")

    go = commands.add_parser("go", help="Resolve and install Go toolchain releases")
    go_commands = go.add_subparsers(dest="go_command")

    stable = go_commands.add_parser("stable", help="Show the current stable Go version")
    stable.add_argument("--format", choices=["text", "json"], default="text")

    listing = go_commands.add_parser("list", help="List Go versions from the release catalog")
    listing.add_argument("--limit", type=int, default=0, help="Show at most N versions (0 = all)")
    listing.add_argument("--stable-only", action="store_true", help="Only show stable releases")
    listing.add_argument("--format", choices=["text", "json"], default="text")

    install = go_commands.add_parser("install", help="Download and install a Go release")
    install.add_argument("--version", default="", help="Go version to install, e.g. go1.22.5 (default: stable)")
    install.add_argument("--install-dir", default="", help="Installation root directory")
    install.add_argument("--download-dir", default="", help="Directory for downloaded artifacts")
    install.add_argument("--strict-host", action="store_true", help="Only accept artifacts built for this host")
    install.add_argument("--no-verify", action="store_true", help="Skip sha256/size verification")
    install.add_argument("--timeout", type=float, default=None, help="Network timeout in seconds")
    install.add_argument("--install-timeout", type=float, default=None, help="Installer subprocess timeout in seconds")
    return parser


def _workspace_root(argv: Namespace, start_dir: Path | None) -> Path:
    raw = str(getattr(argv, "workspace_dir", "") or "").strip()
    if not raw:
        return default_workspace_root()
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (start_dir or Path.cwd()) / path
    return path.resolve()


def _install_config(argv: Namespace, base: GoInstallConfig, start_dir: Path | None) -> GoInstallConfig:
    overrides: dict[str, object] = {}
    for flag, key in (("install_dir", "install_dir"), ("download_dir", "download_dir")):
        raw = str(getattr(argv, flag, "") or "").strip()
        if raw:
            path = Path(raw).expanduser()
            overrides[key] = path if path.is_absolute() else (start_dir or Path.cwd()) / path
    if getattr(argv, "strict_host", False):
        overrides["host_match"] = "strict"
    if getattr(argv, "no_verify", False):
        overrides["verify_checksum"] = False
    if getattr(argv, "timeout", None) is not None:
        overrides["timeout_seconds"] = float(argv.timeout)
    if getattr(argv, "install_timeout", None) is not None:
        overrides["install_timeout_seconds"] = float(argv.install_timeout)
    return replace(base, **overrides) if overrides else base


def _cmd_stable(argv: Namespace, installer: GoInstaller) -> int:
    catalog = installer.load_catalog()
    stable = catalog.stable_version()
    if argv.format == "json":
        print(json.dumps({"stable": stable, "release_candidate": catalog.release_candidate}, indent=2))
        return 0
    print(f"[arix:go] stable={stable}")
    if catalog.release_candidate and catalog.release_candidate != stable:
        print(f"[arix:go] release_candidate={catalog.release_candidate}")
    return 0


def _cmd_list(argv: Namespace, installer: GoInstaller) -> int:
    catalog = installer.load_catalog()
    releases = catalog.stable_releases() if argv.stable_only else list(catalog)
    if argv.limit and argv.limit > 0:
        releases = releases[: argv.limit]
    if argv.format == "json":
        payload = [{"version": item.version, "stable": item.stable, "files": len(item.files)} for item in releases]
        print(json.dumps(payload, indent=2))
        return 0
    if not releases:
        print("[arix:go] no versions found")
        return 0
    for item in releases:
        marker = " (stable)" if item.stable else ""
        print(f"{item.version}{marker}")
    return 0


def _cmd_install(argv: Namespace, installer: GoInstaller) -> int:
    requested = str(argv.version or "").strip()
    if requested:
        result = installer.install_version(requested)
    else:
        result = installer.install_stable()
    print(f"[arix:go] installed {result.version} from {result.artifact.filename}")
    print(f"[arix:go] dir={result.install_dir}")
    return 0


_GO_COMMANDS = {
    "stable": _cmd_stable,
    "list": _cmd_list,
    "install": _cmd_install,
}


def main(argv: Sequence[str] | None = None, *, start_dir: Path | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "version":
        print(version_string())
        return 0
    if args.command != "go" or not args.go_command:
        parser.print_help()
        return 1

    workspace_root = _workspace_root(args, start_dir)
    try:
        config = _install_config(args, load_go_config(workspace_root), start_dir)
    except ValueError as exc:
        print(f"[arix:go] invalid configuration: {exc}")
        return 1

    installer = GoInstaller(config)
    try:
        return _GO_COMMANDS[args.go_command](args, installer)
    except GoVersionsError as exc:
        logger.debug("go command failed stage=%s", exc.stage, exc_info=True)
        print(f"[arix:go] {exc}")
        return 1
