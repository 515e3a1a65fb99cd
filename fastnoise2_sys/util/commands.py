# SPDX-License-Identifier: MIT
"""External command and file helpers.

Every external tool (cmake, curl, wget, tar, clang) is invoked through a
CommandRunner, so the acquisition logic can be exercised with a fake
runner that never touches the network or a real toolchain.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of an external command.

    Attributes:
        returncode: Process exit code. 127 when the program could not be
            started at all.
        stdout: Captured standard output.
        stderr: Captured standard error.
    """

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        return "\n".join(part for part in (self.stdout, self.stderr) if part)


@runtime_checkable
class CommandRunner(Protocol):
    """Protocol for running external commands."""

    def run(self, args: list[str], *, cwd: Path | None = None) -> CommandResult:
        """Run a command to completion and return its result."""
        ...

    def which(self, name: str) -> str | None:
        """Locate an executable, returning None when it is not installed."""
        ...


class SubprocessRunner:
    """CommandRunner backed by subprocess.run.

    Calls block until the command exits; there is no timeout.
    """

    def run(self, args: list[str], *, cwd: Path | None = None) -> CommandResult:
        logger.debug("Running: %s", " ".join(args))
        try:
            result = subprocess.run(
                args,
                cwd=cwd,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            logger.debug("Failed to start %s: %s", args[0], e)
            return CommandResult(returncode=127, stderr=str(e))
        return CommandResult(result.returncode, result.stdout, result.stderr)

    def which(self, name: str) -> str | None:
        return shutil.which(name)


def copy(src: Path | str, dest: Path | str) -> None:
    """Copy a file, creating parent directories as needed."""
    dest_path = Path(dest)
    dest_path.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dest_path)


def copy_missing_tree(src: Path, dest: Path) -> bool:
    """Copy the files of ``src`` into ``dest`` if ``dest`` does not exist yet.

    Files are staged in a sibling directory and renamed into place, so
    ``dest`` only ever appears complete. Existing destinations are left
    untouched, so repeated calls are idempotent.

    Returns:
        True if files were copied.
    """
    if not src.is_dir() or dest.exists():
        return False
    staging = dest.with_name(f"{dest.name}.partial")
    if staging.exists():
        logger.debug("Removing leftover %s", staging)
        shutil.rmtree(staging)
    staging.mkdir(parents=True)
    try:
        for entry in sorted(src.iterdir()):
            if entry.is_file():
                shutil.copy2(entry, staging / entry.name)
        staging.rename(dest)
    except OSError:
        shutil.rmtree(staging, ignore_errors=True)
        raise
    return True
