"""CLI entrypoint for the monorepo tooling.

Subcommands:
- gitignore generate
- tracking list
- todo
- license add-headers / license check
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from valesc_tools import __version__
from valesc_tools.config import ToolSettings
from valesc_tools.github.client import IssueTrackerClient
from valesc_tools.gitignore import GitignoreError, generate_gitignore
from valesc_tools.license import LicenseStamper
from valesc_tools.logging import build_console, configure_logging, log
from valesc_tools.paths import RepoPaths, discover_root
from valesc_tools.process import (
    TOOL_NOT_FOUND_EXIT_CODE,
    CommandResult,
    ExternalCommandError,
    ToolNotFoundError,
)
from valesc_tools.todo import list_todos
from valesc_tools.tracking.annotator import IssueAnnotator
from valesc_tools.tracking.scanner import TRACK_MARKER, MarkerScanner

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="valesc",
        description="Developer tooling for the VALESC monorepo",
    )
    parser.add_argument("--version", action="version", version=f"valesc-tools {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    gitignore = subparsers.add_parser("gitignore", help="Manage the generated .gitignore")
    gitignore_actions = gitignore.add_subparsers(dest="action")
    gitignore_actions.add_parser(
        "generate", help="Rebuild .gitignore from the fragment directory"
    )
    gitignore.set_defaults(group_parser=gitignore)

    tracking = subparsers.add_parser("tracking", help="Inspect TRACK: marker comments")
    tracking_actions = tracking.add_subparsers(dest="action")
    tracking_actions.add_parser(
        "list", help="List tracked URLs, with live status for GitHub issues"
    )
    tracking.set_defaults(group_parser=tracking)

    subparsers.add_parser("todo", help="Print TODO:, CHECK: and FIXME: markers")

    license_cmd = subparsers.add_parser("license", help="Manage license headers")
    license_actions = license_cmd.add_subparsers(dest="action")
    license_actions.add_parser("add-headers", help="Stamp license headers with addlicense")
    license_actions.add_parser("check", help="Report files missing a license header")
    license_cmd.set_defaults(group_parser=license_cmd)

    return parser


def _resolve_paths(settings: ToolSettings) -> RepoPaths:
    root = settings.root if settings.root is not None else discover_root(Path.cwd())
    return RepoPaths(root)


def _own_source_exclusions(paths: RepoPaths) -> list[str]:
    own_sources = paths.relative(PACKAGE_DIR)
    if own_sources is None:
        return []
    return [f"/{own_sources.as_posix()}/**"]


def _tracking_exclusions(settings: ToolSettings, paths: RepoPaths) -> list[str]:
    exclude = list(settings.tracking_exclude)
    for pattern in _own_source_exclusions(paths):
        if pattern not in exclude:
            exclude.append(pattern)
    return exclude


def _emit(result: CommandResult) -> int:
    if result.stdout:
        sys.stdout.write(result.stdout)
    if result.stderr:
        sys.stderr.write(result.stderr)
    return result.returncode


def _tracking_list(settings: ToolSettings, paths: RepoPaths) -> int:
    scanner = MarkerScanner(paths, rg_executable=settings.rg_executable)
    urls = scanner.scan(TRACK_MARKER, _tracking_exclusions(settings, paths))
    if not urls:
        log("info", "No tracked URLs found")
        return 0

    client = IssueTrackerClient(
        base_url=settings.github_api_url,
        token=settings.github_token,
        timeout_seconds=settings.http_timeout_seconds,
    )
    try:
        annotator = IssueAnnotator(client, tracker_host=settings.github_web_host)
        for url in urls:
            log("info", annotator.annotate(url))
    finally:
        client.close()
    return 0


def _todo(settings: ToolSettings, paths: RepoPaths) -> int:
    scanner = MarkerScanner(paths, rg_executable=settings.rg_executable)
    color = settings.color and build_console(color=settings.color).is_terminal
    for output in list_todos(scanner, _own_source_exclusions(paths), color=color):
        sys.stdout.write(output)
    return 0


def _license(settings: ToolSettings, paths: RepoPaths, *, check: bool) -> int:
    stamper = LicenseStamper(
        paths,
        holder=settings.license_holder,
        license_type=settings.license_type,
        spdx=settings.license_spdx,
        exclude_globs=settings.license_exclude,
        executable=settings.addlicense_executable,
    )
    result = stamper.check() if check else stamper.add_headers()
    code = _emit(result)
    if check and code == 0:
        log("info", "All files carry a license header")
    return code


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    group_parser = getattr(args, "group_parser", None)
    if group_parser is not None and args.action is None:
        group_parser.print_help()
        return 0

    try:
        settings = ToolSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment or .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level, color=settings.color)
    paths = _resolve_paths(settings)
    logger.debug(f"Monorepo root: {paths.root}")

    try:
        if args.command == "gitignore" and args.action == "generate":
            generate_gitignore(paths, settings.fragments_dir)
            return 0

        if args.command == "tracking" and args.action == "list":
            return _tracking_list(settings, paths)

        if args.command == "todo":
            return _todo(settings, paths)

        if args.command == "license" and args.action == "add-headers":
            return _license(settings, paths, check=False)

        if args.command == "license" and args.action == "check":
            return _license(settings, paths, check=True)

        logger.error(f"Unknown command: {args.command}")
        return 2

    except GitignoreError as e:
        log("error", str(e))
        return 1

    except ToolNotFoundError as e:
        log("error", str(e))
        return TOOL_NOT_FOUND_EXIT_CODE

    except ExternalCommandError as e:
        if e.result.stderr:
            sys.stderr.write(e.result.stderr)
        return e.returncode

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
