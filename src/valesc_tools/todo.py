"""Raw listing of work-in-progress markers."""

from __future__ import annotations

from collections.abc import Iterable

from valesc_tools.tracking.scanner import MarkerScanner

TODO_MARKERS: tuple[str, ...] = ("TODO: ", "CHECK: ", "FIXME: ")


def list_todos(
    scanner: MarkerScanner,
    exclude_globs: Iterable[str] = (),
    *,
    markers: Iterable[str] = TODO_MARKERS,
    color: bool = False,
) -> list[str]:
    """Run one search per marker and return each raw tool output, unparsed."""

    excluded = list(exclude_globs)
    return [scanner.search(marker, excluded, color=color).stdout for marker in markers]
