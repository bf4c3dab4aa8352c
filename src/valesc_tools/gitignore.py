"""Generate the root `.gitignore` from fragment files.

Each file in the fragment directory becomes one section of the generated file,
titled after the fragment's file name without its extension.
"""

from __future__ import annotations

import logging
from pathlib import Path

from valesc_tools.paths import RepoPaths

logger = logging.getLogger(__name__)

GENERATED_FILE = ".gitignore"


class GitignoreError(RuntimeError):
    """Raised when the generated file cannot be produced."""


def warning_header(fragments_dir: Path) -> str:
    return (
        "# THIS FILE IS GENERATED AUTOMATICALLY, DO NOT EDIT IT BY HAND.\n"
        f"# Edit the fragments in `{fragments_dir.as_posix()}/` "
        "and run `valesc gitignore generate`.\n"
    )


def discover_fragments(fragments_path: Path) -> list[Path]:
    """Return fragment files in a stable (file name) order."""

    if not fragments_path.is_dir():
        raise GitignoreError(f"Fragment directory not found: {fragments_path}")

    candidates = [p for p in fragments_path.iterdir() if p.is_file()]
    return sorted(candidates, key=lambda p: p.name)


def render_section(fragment: Path) -> bytes:
    header = f"\n## {fragment.stem}\n\n".encode()
    return header + fragment.read_bytes()


def generate_gitignore(paths: RepoPaths, fragments_dir: Path = Path("gitignore.d")) -> Path:
    """Rebuild `<root>/.gitignore` from `<root>/<fragments_dir>`.

    Returns:
        The path of the generated file.

    Raises:
        GitignoreError: If the fragment directory is missing or a file cannot be
            read or written.
    """

    fragments_path = paths.join(fragments_dir)
    target = paths.join(GENERATED_FILE)

    fragments = discover_fragments(fragments_path)

    try:
        chunks = [warning_header(fragments_dir).encode()]
        chunks.extend(render_section(fragment) for fragment in fragments)

        target.unlink(missing_ok=True)
        target.write_bytes(b"".join(chunks))
    except OSError as e:
        raise GitignoreError(f"Failed to generate {target}: {e}") from e

    logger.info(f"Generated {target} from {len(fragments)} fragment(s)")
    return target
