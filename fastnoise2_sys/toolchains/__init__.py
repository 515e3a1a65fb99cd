# SPDX-License-Identifier: MIT
"""Per-platform toolchain policy (runtime libraries, release flags)."""

from fastnoise2_sys.toolchains.flags import release_flags
from fastnoise2_sys.toolchains.runtime import cxx_runtime_library, emit_cxx_runtime

__all__ = [
    "cxx_runtime_library",
    "emit_cxx_runtime",
    "release_flags",
]
