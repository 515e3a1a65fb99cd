# SPDX-License-Identifier: MIT
"""Tests for fastnoise2_sys.configure.environment."""

from __future__ import annotations

from pathlib import Path

import pytest

from fastnoise2_sys.configure.environment import (
    DEFAULT_OUT_DIR,
    AcquisitionConfig,
    BuildTarget,
    read_config,
    read_environment,
    read_target,
)
from fastnoise2_sys.core.errors import ConfigureError, MissingVariableError

TRIPLE = {
    "FASTNOISE2_TARGET_ARCH": "x86_64",
    "FASTNOISE2_TARGET_OS": "linux",
    "FASTNOISE2_TARGET_ENV": "gnu",
}


class TestBuildTarget:
    def test_is_wasm(self):
        assert BuildTarget("wasm32", "emscripten", "").is_wasm
        assert not BuildTarget("x86_64", "linux", "gnu").is_wasm

    def test_str(self):
        assert str(BuildTarget("x86_64", "windows", "msvc")) == "x86_64-windows-msvc"
        assert str(BuildTarget("wasm32", "emscripten", "")) == "wasm32-emscripten"

    def test_frozen(self):
        target = BuildTarget("x86_64", "linux", "gnu")
        with pytest.raises(AttributeError):
            target.arch = "aarch64"  # type: ignore[misc]


class TestReadTarget:
    def test_reads_triple(self):
        target = read_target(TRIPLE)
        assert target == BuildTarget("x86_64", "linux", "gnu")

    def test_empty_env_is_allowed(self):
        target = read_target({**TRIPLE, "FASTNOISE2_TARGET_ENV": ""})
        assert target.env == ""

    @pytest.mark.parametrize("missing", sorted(TRIPLE))
    def test_missing_part_is_fatal(self, missing):
        environ = {k: v for k, v in TRIPLE.items() if k != missing}
        with pytest.raises(MissingVariableError) as excinfo:
            read_target(environ)
        assert excinfo.value.variable == missing
        assert missing in str(excinfo.value)


class TestReadConfig:
    def test_defaults_when_unset(self):
        config = read_config({})
        assert config == AcquisitionConfig()
        assert config.out_dir == DEFAULT_OUT_DIR
        assert config.source_dir is None
        assert config.lib_dir is None
        assert config.bindings_cache_dir is None
        assert config.emsdk is None
        assert not config.build_from_source
        assert not config.build_wasm_from_source
        assert not config.docs_only

    def test_paths(self):
        config = read_config(
            {
                "FASTNOISE2_SOURCE_DIR": "/src/FastNoise2",
                "FASTNOISE2_LIB_DIR": "/opt/lib",
                "FASTNOISE2_BINDINGS_DIR": "/cache",
                "EMSDK": "/emsdk",
                "FASTNOISE2_OUT_DIR": "/out",
            }
        )
        assert config.source_dir == Path("/src/FastNoise2")
        assert config.lib_dir == Path("/opt/lib")
        assert config.bindings_cache_dir == Path("/cache")
        assert config.emsdk == Path("/emsdk")
        assert config.out_dir == Path("/out")

    def test_empty_value_is_not_unset(self):
        config = read_config({"FASTNOISE2_LIB_DIR": ""})
        assert config.lib_dir is not None

    def test_flags_use_presence(self):
        config = read_config(
            {
                "FASTNOISE2_BUILD_FROM_SOURCE": "",
                "FASTNOISE2_BUILD_WASM_FROM_SOURCE": "0",
                "FASTNOISE2_DOCS_ONLY": "1",
            }
        )
        assert config.build_from_source
        assert config.build_wasm_from_source
        assert config.docs_only

    def test_tool_overrides(self):
        config = read_config({"CMAKE": "/opt/cmake/bin/cmake", "CLANG_PATH": "clang-18"})
        assert config.cmake == "/opt/cmake/bin/cmake"
        assert config.clang == "clang-18"

    def test_jobs(self):
        assert read_config({"FASTNOISE2_JOBS": "8"}).jobs == 8

    @pytest.mark.parametrize("value", ["many", "0", "-2"])
    def test_invalid_jobs(self, value):
        with pytest.raises(ConfigureError):
            read_config({"FASTNOISE2_JOBS": value})


class TestReadEnvironment:
    def test_reads_both(self):
        target, config = read_environment({**TRIPLE, "FASTNOISE2_LIB_DIR": "/opt/lib"})
        assert target.os == "linux"
        assert config.lib_dir == Path("/opt/lib")

    def test_uses_process_environment(self, monkeypatch):
        for key, value in TRIPLE.items():
            monkeypatch.setenv(key, value)
        monkeypatch.setenv("FASTNOISE2_BUILD_FROM_SOURCE", "1")
        target, config = read_environment()
        assert target.arch == "x86_64"
        assert config.build_from_source
