# SPDX-License-Identifier: MIT
"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from fastnoise2_sys.util.commands import CommandResult

Handler = Callable[[list[str]], CommandResult]


class FakeRunner:
    """CommandRunner that records calls instead of running anything.

    Programs are "installed" with on(); a handler decides the result and
    may create files to simulate the program's side effects. Calls to
    programs without a handler fail with exit code 127.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.handlers: dict[str, Handler] = {}

    def on(self, program: str, handler: Handler | CommandResult | int = 0) -> None:
        if isinstance(handler, int):
            handler = CommandResult(handler)
        if isinstance(handler, CommandResult):
            result = handler
            self.handlers[program] = lambda args: result
        else:
            self.handlers[program] = handler

    def run(self, args: list[str], *, cwd: Path | None = None) -> CommandResult:
        self.calls.append(list(args))
        handler = self.handlers.get(args[0])
        if handler is None:
            return CommandResult(127, stderr=f"{args[0]}: not found")
        return handler(list(args))

    def which(self, name: str) -> str | None:
        if name in self.handlers:
            return f"/usr/bin/{name}"
        return None

    def programs(self) -> list[str]:
        """Programs invoked, in order."""
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


def make_source_tree(root: Path, header: str = "") -> Path:
    """Create a minimal FastNoise2 source checkout under ``root``."""
    include = root / "include" / "FastNoise"
    (include / "Utility").mkdir(parents=True)
    (include / "FastNoise_C.h").write_text(header or "/* FastNoise C API */\n")
    (include / "Utility" / "Export.h").write_text("#define FASTNOISE_API\n")
    (root / "CMakeLists.txt").write_text("project(FastNoise2)\n")
    return root


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    return make_source_tree(tmp_path / "FastNoise2")
