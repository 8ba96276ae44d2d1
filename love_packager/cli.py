"""Command-line entry point for packaging LÖVE games."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from love_packager.engine.builder import PackageBuilder, PackageConfig
from love_packager.engine.manifest import load_manifest, verify_blob
from love_packager.errors import ManifestValidationError, PackagingError
from love_packager.output import write_package
from love_packager.schemas.manifest import PackageManifest
from love_packager.settings import describe_settings, resolve_settings


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    if args.command == "build":
        return _handle_build(args)
    if args.command == "manifest":
        if args.manifest_command == "validate":
            return _handle_manifest_validate(args)
        parser.error("manifest command requires a subcommand")
    if args.command == "settings":
        if args.settings_command == "describe":
            return _handle_settings_describe(args)
        parser.error("settings command requires a subcommand")

    parser.error(f"Unknown command '{args.command}'")
    return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="love-packager", description="Package LÖVE games for the web runtime.")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level (default: WARNING).")
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Build game.data, manifest.json and create_paths.js.")
    build.add_argument("input", nargs="?", help="Game directory or .love archive.")
    build.add_argument("--output-dir")
    build.add_argument("-m", "--memory", help="Memory budget in bytes [16777216].")
    build.add_argument("--env-file", help="Optional .env file consulted after the environment.")
    build.add_argument("--workspace-root")
    build.add_argument("--dry-run", action="store_true", help="Build in memory without writing artifacts.")

    manifest = subparsers.add_parser("manifest", help="Manifest utilities.")
    manifest_sub = manifest.add_subparsers(dest="manifest_command", required=True)
    manifest_validate = manifest_sub.add_parser("validate", help="Validate a package manifest.")
    manifest_validate.add_argument("--manifest", required=True)
    manifest_validate.add_argument("--data", help="Data blob the manifest indexes into.")
    manifest_validate.add_argument("--workspace-root")

    settings = subparsers.add_parser("settings", help="Settings utilities.")
    settings_sub = settings.add_subparsers(dest="settings_command", required=True)
    settings_describe = settings_sub.add_parser("describe", help="Show where each setting resolves from.")
    settings_describe.add_argument("--env-file")
    settings_describe.add_argument("--workspace-root")

    return parser


def _handle_build(args: argparse.Namespace) -> int:
    workspace = _resolve_workspace(args.workspace_root)
    try:
        settings = resolve_settings(
            input_path=args.input,
            output_dir=args.output_dir,
            memory_bytes=args.memory,
            env_file=_resolve_optional_path(args.env_file, workspace),
            workspace_root=workspace,
        )
        result = PackageBuilder().build(
            PackageConfig(input_path=settings.input_path, memory_bytes=settings.memory_bytes)
        )
        artifacts = None if args.dry_run else write_package(result, settings.output_dir)
    except (PackagingError, OSError) as exc:
        print(str(exc), file=sys.stderr)
        return 1

    logs: List[str] = []
    payload: dict[str, object] = {
        "input_path": str(settings.input_path),
        "memory_bytes": settings.memory_bytes,
        "sources": settings.sources,
        "package_uuid": str(result.manifest.package_uuid),
        "total_size": result.total_size,
        "file_count": len(result.manifest.files),
        "directory_count": len(result.directory_ops),
        "launch_arguments": list(result.launch_arguments),
        "dry_run": args.dry_run,
    }
    if artifacts is not None:
        payload.update(
            {
                "data_path": str(artifacts.data_path),
                "manifest_path": str(artifacts.manifest_path),
                "create_paths_path": str(artifacts.create_paths_path),
                "checksum": {"sha256": artifacts.sha256},
            }
        )
        logs.extend(
            [
                f"Data written to {artifacts.data_path}",
                f"Manifest written to {artifacts.manifest_path}",
                f"Directory directives written to {artifacts.create_paths_path}",
            ]
        )
    payload["logs"] = logs
    _print_json(payload)
    return 0


def _handle_manifest_validate(args: argparse.Namespace) -> int:
    workspace = _resolve_workspace(args.workspace_root)
    manifest_path = _resolve_path(args.manifest, workspace)
    data_path = _resolve_optional_path(args.data, workspace)

    errors: List[str] = []
    manifest = _load_manifest_safe(manifest_path, errors)
    if manifest is not None and data_path is not None:
        try:
            verify_blob(manifest, data_path)
        except ManifestValidationError as exc:
            errors.append(str(exc))

    payload = {
        "manifest_path": str(manifest_path),
        "data_path": str(data_path) if data_path else None,
        "valid": manifest is not None and not errors,
        "errors": errors,
        "manifest": manifest.model_dump(mode="json") if manifest else None,
    }
    _print_json(payload)
    return 0


def _handle_settings_describe(args: argparse.Namespace) -> int:
    workspace = _resolve_workspace(args.workspace_root)
    payload = {"settings": describe_settings(env_file=_resolve_optional_path(args.env_file, workspace))}
    _print_json(payload)
    return 0


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def _resolve_workspace(value: Optional[str]) -> Path:
    return Path(value).resolve() if value else Path.cwd()


def _resolve_path(value: str, workspace: Path) -> Path:
    path = Path(value)
    if not path.is_absolute():
        path = workspace / path
    return path.resolve()


def _resolve_optional_path(value: Optional[str], workspace: Path) -> Optional[Path]:
    if value is None:
        return None
    return _resolve_path(value, workspace)


def _load_manifest_safe(path: Path, errors: List[str]) -> Optional[PackageManifest]:
    try:
        return load_manifest(path)
    except (OSError, ValueError, ManifestValidationError) as exc:
        errors.append(str(exc))
        return None


def _print_json(payload: Mapping[str, object]) -> None:
    print(json.dumps(payload, indent=2, default=str))


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
