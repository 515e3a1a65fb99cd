# SPDX-License-Identifier: MIT
"""Custom exceptions for fastnoise2_sys.

Every fatal condition raises a subclass of FastNoiseBuildError. Soft
failures (a prebuilt download that did not work out, an unknown platform
in the runtime table) are logged and never raise.
"""

from __future__ import annotations


class FastNoiseBuildError(Exception):
    """Base class for all fastnoise2_sys exceptions.

    Attributes:
        message: The error message.
        hint: Optional suggestion for how to fix the problem.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        self.message = message
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.hint:
            return f"{self.message}\nHint: {self.hint}"
        return self.message


class ConfigureError(FastNoiseBuildError):
    """Invalid build configuration."""


class MissingVariableError(ConfigureError):
    """A required environment variable is not set.

    Attributes:
        variable: The name of the missing variable.
    """

    def __init__(self, variable: str, hint: str | None = None) -> None:
        self.variable = variable
        super().__init__(f"required environment variable not set: {variable}", hint)


class ToolNotFoundError(ConfigureError):
    """Required external tool was not found.

    Attributes:
        tool: The name of the tool that was not found.
    """

    def __init__(self, tool: str, hint: str | None = None) -> None:
        self.tool = tool
        super().__init__(f"tool not found: {tool}", hint)


class MissingSourceError(FastNoiseBuildError):
    """A source file or directory does not exist.

    Attributes:
        path: The missing path.
    """

    def __init__(self, path: str, hint: str | None = None) -> None:
        self.path = path
        super().__init__(f"source not found: {path}", hint)


class BuildToolError(FastNoiseBuildError):
    """An external build command exited with a failure.

    Attributes:
        command: The command line that failed.
        returncode: The exit code of the command.
        output: Captured output of the command.
    """

    def __init__(self, command: list[str], returncode: int, output: str = "") -> None:
        self.command = list(command)
        self.returncode = returncode
        self.output = output
        message = f"command failed with exit code {returncode}: {' '.join(command)}"
        if output:
            message = f"{message}\n{output.rstrip()}"
        super().__init__(message)


class BindingsError(FastNoiseBuildError):
    """Bindings could not be produced."""
