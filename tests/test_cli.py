# SPDX-License-Identifier: MIT
"""Tests for fastnoise2_sys CLI."""

from __future__ import annotations

import json
import logging
import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from fastnoise2_sys.acquire import BuildResult, Strategy
from fastnoise2_sys.bindings.generator import BindingsArtifact, Provenance
from fastnoise2_sys.builders.cmake import NativeArtifact
from fastnoise2_sys.cli import main, parse_variables, setup_logging
from fastnoise2_sys.core.errors import BuildToolError

TRIPLE = {
    "FASTNOISE2_TARGET_ARCH": "x86_64",
    "FASTNOISE2_TARGET_OS": "linux",
    "FASTNOISE2_TARGET_ENV": "gnu",
}


@pytest.fixture
def triple_env(monkeypatch):
    for key, value in TRIPLE.items():
        monkeypatch.setenv(key, value)
    for key in ("FASTNOISE2_LIB_DIR", "FASTNOISE2_OUT_DIR", "FASTNOISE2_JOBS"):
        monkeypatch.delenv(key, raising=False)


def _result() -> BuildResult:
    result = BuildResult(
        strategy=Strategy.PRECOMPILED,
        artifact=NativeArtifact(Path("/opt/lib"), (Path("/opt/lib"),)),
        bindings=BindingsArtifact(Path("/out/bindings.h"), Provenance.GENERATED),
    )
    result.directives.add_search_path(Path("/opt/lib"))
    result.directives.add_library("FastNoise")
    result.directives.add_library("stdc++", kind="dylib")
    return result


class TestParseVariables:
    def test_splits_variables(self):
        variables, remaining = parse_variables(["A=1", "B=x=y", "target", "=bad"])
        assert variables == {"A": "1", "B": "x=y"}
        assert remaining == ["target", "=bad"]

    def test_flags_are_not_variables(self):
        variables, remaining = parse_variables(["--opt=1"])
        assert variables == {}
        assert remaining == ["--opt=1"]


class TestSetupLogging:
    @pytest.mark.parametrize(
        ("verbose", "debug", "level"),
        [
            (False, False, logging.WARNING),
            (True, False, logging.INFO),
            (False, True, logging.DEBUG),
            (True, True, logging.DEBUG),
        ],
    )
    def test_levels(self, verbose, debug, level):
        with patch("fastnoise2_sys.cli.logging.basicConfig") as basic_config:
            setup_logging(verbose=verbose, debug=debug)
        assert basic_config.call_args.kwargs["level"] == level

    def test_debug_format_names_logger(self):
        with patch("fastnoise2_sys.cli.logging.basicConfig") as basic_config:
            setup_logging(debug=True)
        assert "%(name)s" in basic_config.call_args.kwargs["format"]


class TestMain:
    def test_prints_lines(self, triple_env, capsys):
        with patch("fastnoise2_sys.cli.acquire", return_value=_result()) as acquire:
            assert main([]) == 0

        target, config = acquire.call_args[0]
        assert target.os == "linux"
        out = capsys.readouterr().out.splitlines()
        assert out == [
            "link-search=native=/opt/lib",
            "link-lib=static=FastNoise",
            "link-lib=dylib=stdc++",
            "bindings=/out/bindings.h",
        ]

    def test_json(self, triple_env, capsys):
        with patch("fastnoise2_sys.cli.acquire", return_value=_result()):
            assert main(["--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["strategy"] == "precompiled"
        assert data["link"]["search_paths"] == ["/opt/lib"]

    def test_overrides(self, triple_env):
        with patch("fastnoise2_sys.cli.acquire", return_value=_result()) as acquire:
            main(["-B", "/tmp/fn-out", "-j", "3", "FASTNOISE2_LIB_DIR=/opt/lib"])
        _, config = acquire.call_args[0]
        assert config.out_dir == Path("/tmp/fn-out")
        assert config.jobs == 3
        assert config.lib_dir == Path("/opt/lib")

    def test_variables_override_environment(self, triple_env):
        with patch("fastnoise2_sys.cli.acquire", return_value=_result()) as acquire:
            main(["FASTNOISE2_TARGET_OS=macos"])
        target, _ = acquire.call_args[0]
        assert target.os == "macos"

    def test_missing_triple(self, monkeypatch, caplog):
        for key in TRIPLE:
            monkeypatch.delenv(key, raising=False)
        assert main([]) == 1
        assert "FASTNOISE2_TARGET_ARCH" in caplog.text

    def test_fatal_error(self, triple_env, caplog):
        error = BuildToolError(["cmake", "--build", "b"], 1)
        with patch("fastnoise2_sys.cli.acquire", side_effect=error):
            assert main([]) == 1
        assert "cmake --build b" in caplog.text

    def test_rejects_non_variables(self, triple_env):
        with pytest.raises(SystemExit):
            main(["target"])


class TestCLICommands:
    def test_help(self) -> None:
        result = subprocess.run(
            [sys.executable, "-m", "fastnoise2_sys.cli", "--help"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        assert "fastnoise2-sys" in result.stdout
        assert "--out-dir" in result.stdout

    def test_version(self) -> None:
        result = subprocess.run(
            [sys.executable, "-m", "fastnoise2_sys.cli", "--version"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        assert "0.1.0" in result.stdout
