"""Marker comment scanning.

Runs ripgrep for a literal marker string and extracts whatever follows the
marker on each matching line. Results keep the order ripgrep reports them in.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from valesc_tools.paths import RepoPaths
from valesc_tools.process import (
    CommandResult,
    CommandRunner,
    ExternalCommandError,
    SubprocessRunner,
)

logger = logging.getLogger(__name__)

TRACK_MARKER = "TRACK: "

# ripgrep: 0 = matches, 1 = no matches, 2 = error.
_RG_NO_MATCH = 1


@dataclass(frozen=True, slots=True)
class MarkerMatch:
    """One line of source text containing a marker."""

    path: str
    line_number: int
    text: str


def build_search_command(
    marker: str,
    exclude_globs: Iterable[str],
    *,
    rg_executable: str = "rg",
    color: bool = False,
    machine_readable: bool = True,
) -> list[str]:
    """Build the ripgrep argv for a literal marker search rooted at the cwd."""

    args = [rg_executable]
    if machine_readable:
        args += ["--no-heading", "--with-filename", "--line-number", "--null"]
    else:
        args += ["--line-number"]
    args += ["--color", "always" if color else "never", "--fixed-strings"]
    for pattern in exclude_globs:
        args += ["--glob", f"!{pattern}"]
    args += ["--", marker, "."]
    return args


def marker_pattern(marker: str) -> re.Pattern[str]:
    """Everything up to and including the first marker, then capture the remainder."""

    return re.compile(rf"^.*?{re.escape(marker)}(.*)$", re.DOTALL)


def extract_after_marker(marker: str, text: str) -> str | None:
    """Return the text after `marker` with trailing newlines removed, or None."""

    match = marker_pattern(marker).match(text)
    if match is None:
        return None
    value = match.group(1).rstrip("\r\n")
    return value or None


def _parse_rg_line(line: str) -> MarkerMatch | None:
    # `--null` terminates the file name with NUL, then "<line>:<text>".
    path, sep, rest = line.partition("\0")
    if not sep:
        return None
    number, sep, text = rest.partition(":")
    if not sep or not number.isdigit():
        return None
    return MarkerMatch(path=path, line_number=int(number), text=text)


class MarkerScanner:
    """Search the monorepo for marker comments."""

    def __init__(
        self,
        paths: RepoPaths,
        runner: CommandRunner | None = None,
        *,
        rg_executable: str = "rg",
    ) -> None:
        self._paths = paths
        self._runner = runner or SubprocessRunner()
        self._rg = rg_executable

    def search(
        self, marker: str, exclude_globs: Iterable[str] = (), *, color: bool = False
    ) -> CommandResult:
        """Run a human-readable search and return the raw tool result.

        A "no matches" status is reported as success.
        """

        args = build_search_command(
            marker, exclude_globs, rg_executable=self._rg, color=color, machine_readable=False
        )
        result = self._runner.run(args, cwd=self._paths.root)
        if result.returncode not in (0, _RG_NO_MATCH):
            raise ExternalCommandError(result)
        return result

    def find_matches(self, marker: str, exclude_globs: Iterable[str] = ()) -> list[MarkerMatch]:
        args = build_search_command(marker, exclude_globs, rg_executable=self._rg)
        result = self._runner.run(args, cwd=self._paths.root)

        if result.returncode == _RG_NO_MATCH:
            return []
        if result.returncode != 0:
            raise ExternalCommandError(result)

        matches: list[MarkerMatch] = []
        for line in result.stdout.split("\n"):
            if not line:
                continue
            parsed = _parse_rg_line(line)
            if parsed is None:
                logger.debug(f"Ignoring unparseable search output: {line!r}")
                continue
            matches.append(parsed)
        return matches

    def scan(self, marker: str, exclude_globs: Iterable[str] = ()) -> list[str]:
        """Return the text following `marker` on every matching line, in search order.

        Lines where nothing follows the marker are skipped with a warning.
        """

        values: list[str] = []
        for match in self.find_matches(marker, exclude_globs):
            value = extract_after_marker(marker, match.text)
            if value is None:
                logger.warning(
                    f"Empty {marker.strip()} marker at {match.path}:{match.line_number}, skipping"
                )
                continue
            values.append(value)
        return values


def scan(
    marker: str,
    exclude_globs: Iterable[str],
    root: Path,
    runner: CommandRunner | None = None,
) -> list[str]:
    """Scan `root` for `marker` and return the extracted strings."""

    return MarkerScanner(RepoPaths(root), runner).scan(marker, exclude_globs)
