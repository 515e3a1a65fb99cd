# SPDX-License-Identifier: MIT
"""Optimization flags for release builds of FastNoise2."""

from __future__ import annotations

from fastnoise2_sys.configure.environment import BuildTarget

# Matches what a manual `cmake --build build --config Release` produces.
# Keyed by (os, env); everything else is a GCC/Clang style compiler.
RELEASE_CXX_FLAGS: dict[tuple[str, str], str] = {
    ("windows", "msvc"): "/MD /O2 /Ob2 /DNDEBUG",
}
DEFAULT_RELEASE_CXX_FLAGS = "-O3 -DNDEBUG"

WASM_SIMD_FLAGS = "-msimd128"


def release_flags(target: BuildTarget) -> str:
    """Return CMAKE_CXX_FLAGS_RELEASE for a target."""
    return RELEASE_CXX_FLAGS.get((target.os, target.env), DEFAULT_RELEASE_CXX_FLAGS)
