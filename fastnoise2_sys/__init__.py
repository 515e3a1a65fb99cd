# SPDX-License-Identifier: MIT
"""
fastnoise2_sys: build-time acquisition of the FastNoise2 native library.

Obtains a static FastNoise2 library (built with CMake, supplied by the
user, or downloaded prebuilt for WebAssembly), produces cffi declarations
for its C API and reports the directives needed to link it.
"""

from __future__ import annotations

from fastnoise2_sys.acquire import BuildResult, Strategy, acquire
from fastnoise2_sys.configure.environment import (
    AcquisitionConfig,
    BuildTarget,
    read_environment,
)
from fastnoise2_sys.core.errors import FastNoiseBuildError

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AcquisitionConfig",
    "BuildResult",
    "BuildTarget",
    "FastNoiseBuildError",
    "Strategy",
    "acquire",
    "read_environment",
]
