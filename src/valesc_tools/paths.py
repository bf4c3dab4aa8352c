"""Monorepo root resolution."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

ROOT_MARKER = "flake.nix"


@dataclass(frozen=True, slots=True)
class RepoPaths:
    """The monorepo root, passed explicitly to every component that touches files."""

    root: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "root", self.root.resolve())

    def join(self, relative: str | Path) -> Path:
        """Return `relative` anchored at the monorepo root."""

        return self.root / relative

    def relative(self, path: Path) -> Path | None:
        """Return `path` relative to the root, or None when it lies outside."""

        try:
            return path.resolve().relative_to(self.root)
        except ValueError:
            return None


def discover_root(start: Path) -> Path:
    """Walk up from `start` to the first directory containing `flake.nix`.

    Falls back to `start` itself when no parent carries the marker.
    """

    start = start.resolve()
    for candidate in (start, *start.parents):
        if (candidate / ROOT_MARKER).is_file():
            return candidate
    return start
