"""Command line interface for direct_upload package."""
from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

import httpx
from rich.logging import RichHandler

from .auth import set_auth_token
from .cli_progress import SingleFileUploadProgress, render_configuration_summary
from .coordinator import UploadCoordinator
from .errors import UploadError
from .models import UploadConfig, UploadRequest


class CLIError(RuntimeError):
    """Raised when CLI validation/execution fails."""


def _setup_logging(debug: bool, silent: bool, log_level: Optional[str]) -> str:
    """
    Configure logging.

    Default behavior is silent unless --debug or --log-level is provided.
    Returns a string describing effective mode.
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    logging.disable(logging.NOTSET)

    if silent or (not debug and not log_level):
        logging.disable(logging.CRITICAL)
        root_logger.setLevel(logging.CRITICAL + 1)
        return "silent"

    if debug:
        level = logging.DEBUG
    else:
        level = getattr(logging, log_level.upper(), logging.INFO)

    handler = RichHandler(
        rich_tracebacks=True,
        markup=False,
        show_time=False,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    return logging.getLevelName(level)


def _strip_optional_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        return value[1:-1]
    return value


def _load_env_file(path: Path, override: bool = False) -> None:
    if not path.exists():
        raise CLIError(f"env file not found: {path}")
    if not path.is_file():
        raise CLIError(f"env path is not a file: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CLIError(f"could not read env file {path}: {exc}") from exc

    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :].strip()
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        if not key:
            continue

        value = _strip_optional_quotes(value.strip())
        if override or key not in os.environ:
            os.environ[key] = value


def _resolve_default_env_file() -> Optional[Path]:
    default_env = Path(".env")
    return default_env if default_env.exists() and default_env.is_file() else None


def _build_config(api_url: Optional[str], storage_host: Optional[str]) -> UploadConfig:
    try:
        config = UploadConfig.from_env()
    except ValueError as exc:
        raise CLIError(str(exc)) from exc

    overrides = {}
    if api_url:
        overrides["api_url"] = api_url
    if storage_host:
        overrides["storage_host"] = storage_host
    return replace(config, **overrides) if overrides else config


def _build_request(
    source: Path,
    route: str,
    mime_type: Optional[str],
    name: Optional[str],
) -> UploadRequest:
    if not source.is_file():
        raise CLIError(f"source is not a file: {source}")
    try:
        return UploadRequest.from_path(route, source, mime_type=mime_type, file_name=name)
    except OSError as exc:
        raise CLIError(f"cannot stat {source}: {exc}") from exc


async def _run_upload(request: UploadRequest, config: UploadConfig) -> int:
    progress = SingleFileUploadProgress(request.file_name, request.size_bytes)
    progress.start()
    try:
        async with UploadCoordinator(config) as coordinator:
            result = await coordinator.upload(request, progress.get_callback())
    except UploadError as exc:
        progress.complete(error=str(exc))
        return 1
    except httpx.HTTPError as exc:
        progress.complete(error=f"network error: {exc}")
        return 1
    except OSError as exc:
        progress.complete(error=f"cannot read {request.file_ref}: {exc}")
        return 1
    except (KeyboardInterrupt, asyncio.CancelledError):
        progress.complete(error="interrupted")
        raise
    except BaseException:
        progress.complete(error="unexpected error")
        raise

    progress.complete(result=result)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="direct-up",
        description="Upload a file straight to object storage through a presigned URL.",
    )
    parser.add_argument("source", nargs="?", type=Path, help="Local file to upload")
    parser.add_argument(
        "-r",
        "--route",
        default=None,
        help="Upload route slug configured on the server (example: evaluationUpload)",
    )
    parser.add_argument(
        "-t",
        "--mime-type",
        default=None,
        help="Declared content type (default: guessed from the file name)",
    )
    parser.add_argument(
        "-n",
        "--name",
        default=None,
        help="File name sent to the server (default: source file name)",
    )
    parser.add_argument(
        "--api-url",
        default=None,
        help="Origin API base URL (default from DIRECT_UPLOAD_API_URL or production)",
    )
    parser.add_argument(
        "--storage-host",
        default=None,
        help="Host serving uploaded files (default from DIRECT_UPLOAD_STORAGE_HOST or utfs.io)",
    )
    parser.add_argument(
        "--token",
        default=None,
        help="Bearer token (default from DIRECT_UPLOAD_TOKEN)",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Load environment variables from this .env file",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logs")
    parser.add_argument("--silent", action="store_true", help="Only print errors")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Explicit log level (DEBUG/INFO/WARNING/ERROR)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="direct-up (from direct_upload)",
    )
    return parser


def run_cli(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    used_env_file = args.env_file or _resolve_default_env_file()
    if used_env_file is not None:
        try:
            _load_env_file(Path(used_env_file))
        except CLIError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 1

    effective_log_mode = _setup_logging(
        debug=args.debug,
        silent=args.silent,
        log_level=args.log_level,
    )

    if args.source is None:
        parser.print_help()
        return 0

    if not args.route:
        print("ERROR: --route is required", file=sys.stderr)
        return 1

    source = Path(args.source).expanduser()
    if not source.exists():
        print(f"ERROR: source does not exist: {source}", file=sys.stderr)
        return 1

    token = args.token or os.getenv("DIRECT_UPLOAD_TOKEN")
    set_auth_token((lambda: token) if token else None)

    try:
        config = _build_config(args.api_url, args.storage_host)
        request = _build_request(source, args.route, args.mime_type, args.name)
    except CLIError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    render_configuration_summary(
        {
            "Source": str(source),
            "Name": request.file_name,
            "Type": request.mime_type,
            "Size": request.size_bytes,
            "Route": request.route_slug,
            "API": config.callback_url,
            "Storage Host": config.storage_host,
            "Token": "set" if token else "(missing)",
            "Env File": str(used_env_file) if used_env_file else "-",
            "Logging": effective_log_mode,
        }
    )

    try:
        return asyncio.run(_run_upload(request, config))
    except KeyboardInterrupt:
        print("Cancelled.", file=sys.stderr)
        return 130


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()
