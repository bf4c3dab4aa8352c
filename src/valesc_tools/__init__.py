"""VALESC monorepo tooling.

Provides the `valesc` command line:
- `.gitignore` generation from fragments
- TRACK:/TODO:/CHECK:/FIXME: marker listings, with live GitHub issue status
- license headers through addlicense
"""

__version__ = "0.1.0"

from valesc_tools.config import ToolSettings

__all__ = ["__version__", "ToolSettings"]
