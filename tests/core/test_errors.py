# SPDX-License-Identifier: MIT
"""Tests for fastnoise2_sys.core.errors."""

from __future__ import annotations

from fastnoise2_sys.core.errors import (
    BindingsError,
    BuildToolError,
    ConfigureError,
    FastNoiseBuildError,
    MissingSourceError,
    MissingVariableError,
    ToolNotFoundError,
)


class TestFastNoiseBuildError:
    def test_message_only(self):
        err = FastNoiseBuildError("something broke")
        assert str(err) == "something broke"
        assert err.hint is None

    def test_hint_appended(self):
        err = FastNoiseBuildError("something broke", hint="try again")
        assert str(err) == "something broke\nHint: try again"


class TestHierarchy:
    def test_configure_errors(self):
        assert issubclass(MissingVariableError, ConfigureError)
        assert issubclass(ToolNotFoundError, ConfigureError)

    def test_all_derive_from_base(self):
        for cls in (ConfigureError, MissingSourceError, BuildToolError, BindingsError):
            assert issubclass(cls, FastNoiseBuildError)


class TestMissingVariableError:
    def test_hint_in_message(self):
        err = MissingVariableError("EMSDK", hint="install emscripten")
        assert err.variable == "EMSDK"
        assert "required environment variable not set: EMSDK" in str(err)
        assert "Hint: install emscripten" in str(err)


class TestToolNotFoundError:
    def test_tool_recorded(self):
        err = ToolNotFoundError("clang")
        assert err.tool == "clang"
        assert str(err) == "tool not found: clang"


class TestMissingSourceError:
    def test_path_recorded(self):
        err = MissingSourceError("/src/FastNoise2")
        assert err.path == "/src/FastNoise2"
        assert "source not found: /src/FastNoise2" in str(err)


class TestBuildToolError:
    def test_includes_command_and_output(self):
        err = BuildToolError(["cmake", "--build", "b"], 2, "error: boom\n")
        assert err.returncode == 2
        assert "cmake --build b" in str(err)
        assert "error: boom" in str(err)
