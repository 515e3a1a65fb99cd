# SPDX-License-Identifier: MIT
"""Build target and acquisition settings read from the environment.

This is the only module that looks at environment variables. Everything
downstream receives a BuildTarget and an AcquisitionConfig.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from fastnoise2_sys.core.errors import ConfigureError, MissingVariableError

TARGET_ARCH_KEY = "FASTNOISE2_TARGET_ARCH"
TARGET_OS_KEY = "FASTNOISE2_TARGET_OS"
TARGET_ENV_KEY = "FASTNOISE2_TARGET_ENV"

SOURCE_DIR_KEY = "FASTNOISE2_SOURCE_DIR"
LIB_DIR_KEY = "FASTNOISE2_LIB_DIR"
BINDINGS_CACHE_KEY = "FASTNOISE2_BINDINGS_DIR"
BUILD_FROM_SOURCE_KEY = "FASTNOISE2_BUILD_FROM_SOURCE"
BUILD_WASM_FROM_SOURCE_KEY = "FASTNOISE2_BUILD_WASM_FROM_SOURCE"
DOCS_ONLY_KEY = "FASTNOISE2_DOCS_ONLY"
EMSDK_KEY = "EMSDK"
OUT_DIR_KEY = "FASTNOISE2_OUT_DIR"
CMAKE_KEY = "CMAKE"
CLANG_KEY = "CLANG_PATH"
JOBS_KEY = "FASTNOISE2_JOBS"

WASM_ARCH = "wasm32"
DEFAULT_OUT_DIR = Path("build") / "fastnoise2"

# Every variable the reader consumes, for diagnostics.
ENVIRONMENT_KEYS = (
    TARGET_ARCH_KEY,
    TARGET_OS_KEY,
    TARGET_ENV_KEY,
    SOURCE_DIR_KEY,
    LIB_DIR_KEY,
    BINDINGS_CACHE_KEY,
    BUILD_FROM_SOURCE_KEY,
    BUILD_WASM_FROM_SOURCE_KEY,
    DOCS_ONLY_KEY,
    EMSDK_KEY,
    OUT_DIR_KEY,
    CMAKE_KEY,
    CLANG_KEY,
    JOBS_KEY,
)


@dataclass(frozen=True)
class BuildTarget:
    """The (architecture, operating system, ABI) triple being built for.

    Attributes:
        arch: Target architecture, e.g. 'x86_64', 'aarch64', 'wasm32'.
        os: Target operating system, e.g. 'linux', 'windows', 'macos'.
        env: Target ABI, e.g. 'gnu', 'msvc', 'musl'. May be empty.
    """

    arch: str
    os: str
    env: str

    @property
    def is_wasm(self) -> bool:
        return self.arch == WASM_ARCH

    def __str__(self) -> str:
        if self.env:
            return f"{self.arch}-{self.os}-{self.env}"
        return f"{self.arch}-{self.os}"


@dataclass(frozen=True)
class AcquisitionConfig:
    """Optional overrides controlling how the native library is obtained.

    Path overrides are None when the variable is unset. Flags are True
    when the variable is present, whatever its value.
    """

    out_dir: Path = DEFAULT_OUT_DIR
    source_dir: Path | None = None
    lib_dir: Path | None = None
    bindings_cache_dir: Path | None = None
    build_from_source: bool = False
    build_wasm_from_source: bool = False
    docs_only: bool = False
    emsdk: Path | None = None
    cmake: str = "cmake"
    clang: str = "clang"
    jobs: int | None = None


def _optional_path(environ: Mapping[str, str], key: str) -> Path | None:
    value = environ.get(key)
    if value is None:
        return None
    return Path(value)


def _required(environ: Mapping[str, str], key: str) -> str:
    value = environ.get(key)
    if value is None:
        raise MissingVariableError(
            key, hint="the target triple is normally supplied by the build frontend"
        )
    return value


def read_target(environ: Mapping[str, str] | None = None) -> BuildTarget:
    """Read the target triple.

    Raises:
        MissingVariableError: If any part of the triple is unset.
    """
    if environ is None:
        environ = os.environ
    return BuildTarget(
        arch=_required(environ, TARGET_ARCH_KEY),
        os=_required(environ, TARGET_OS_KEY),
        env=_required(environ, TARGET_ENV_KEY),
    )


def read_config(environ: Mapping[str, str] | None = None) -> AcquisitionConfig:
    """Read the optional acquisition overrides.

    Raises:
        ConfigureError: If FASTNOISE2_JOBS is not a positive integer.
    """
    if environ is None:
        environ = os.environ

    jobs: int | None = None
    jobs_value = environ.get(JOBS_KEY)
    if jobs_value is not None:
        try:
            jobs = int(jobs_value)
        except ValueError:
            raise ConfigureError(
                f"{JOBS_KEY} must be an integer, got {jobs_value!r}"
            ) from None
        if jobs < 1:
            raise ConfigureError(f"{JOBS_KEY} must be at least 1, got {jobs}")

    return AcquisitionConfig(
        out_dir=_optional_path(environ, OUT_DIR_KEY) or DEFAULT_OUT_DIR,
        source_dir=_optional_path(environ, SOURCE_DIR_KEY),
        lib_dir=_optional_path(environ, LIB_DIR_KEY),
        bindings_cache_dir=_optional_path(environ, BINDINGS_CACHE_KEY),
        build_from_source=BUILD_FROM_SOURCE_KEY in environ,
        build_wasm_from_source=BUILD_WASM_FROM_SOURCE_KEY in environ,
        docs_only=DOCS_ONLY_KEY in environ,
        emsdk=_optional_path(environ, EMSDK_KEY),
        cmake=environ.get(CMAKE_KEY, "cmake"),
        clang=environ.get(CLANG_KEY, "clang"),
        jobs=jobs,
    )


def read_environment(
    environ: Mapping[str, str] | None = None,
) -> tuple[BuildTarget, AcquisitionConfig]:
    """Read the build target and acquisition config in one pass."""
    if environ is None:
        environ = os.environ
    return read_target(environ), read_config(environ)
