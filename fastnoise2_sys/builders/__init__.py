# SPDX-License-Identifier: MIT
"""Native source builders."""

from fastnoise2_sys.builders.cmake import (
    CMakeBuilder,
    NativeArtifact,
    repair_utility_headers,
)

__all__ = [
    "CMakeBuilder",
    "NativeArtifact",
    "repair_utility_headers",
]
