"""License headers through `addlicense`."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from valesc_tools.paths import RepoPaths
from valesc_tools.process import CommandResult, CommandRunner, SubprocessRunner

logger = logging.getLogger(__name__)


def build_addlicense_command(
    *,
    holder: str,
    license_type: str,
    exclude_globs: Iterable[str],
    check: bool = False,
    spdx: bool = True,
    executable: str = "addlicense",
) -> list[str]:
    args = [executable]
    if check:
        args.append("-check")
    args += ["-c", holder, "-l", license_type]
    if spdx:
        args.append("-s")
    for pattern in exclude_globs:
        args += ["-ignore", pattern]
    args.append(".")
    return args


class LicenseStamper:
    """Run addlicense over the monorepo root.

    The tool's result is returned as-is; callers decide how to surface a failure.
    """

    def __init__(
        self,
        paths: RepoPaths,
        runner: CommandRunner | None = None,
        *,
        holder: str,
        license_type: str = "mpl",
        spdx: bool = True,
        exclude_globs: Iterable[str] = (),
        executable: str = "addlicense",
    ) -> None:
        self._paths = paths
        self._runner = runner or SubprocessRunner()
        self._holder = holder
        self._license_type = license_type
        self._spdx = spdx
        self._exclude = list(exclude_globs)
        self._executable = executable

    def _run(self, *, check: bool) -> CommandResult:
        args = build_addlicense_command(
            holder=self._holder,
            license_type=self._license_type,
            exclude_globs=self._exclude,
            check=check,
            spdx=self._spdx,
            executable=self._executable,
        )
        return self._runner.run(args, cwd=self._paths.root)

    def add_headers(self) -> CommandResult:
        logger.debug(f"Stamping {self._license_type} headers for {self._holder}")
        return self._run(check=False)

    def check(self) -> CommandResult:
        return self._run(check=True)
