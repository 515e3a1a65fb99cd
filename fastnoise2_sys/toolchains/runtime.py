# SPDX-License-Identifier: MIT
"""C++ runtime library selection.

FastNoise2 is C++, so a static libFastNoise pulls in the C++ standard
library. Which one to link depends on the target OS and ABI.
"""

from __future__ import annotations

import logging

from fastnoise2_sys.configure.environment import BuildTarget
from fastnoise2_sys.core.link import LinkDirectives

logger = logging.getLogger(__name__)

GNU_RUNTIME = "stdc++"
LLVM_RUNTIME = "c++"

# Operating systems whose default toolchain ships libc++.
LLVM_RUNTIME_OSES = frozenset(
    {"macos", "ios", "freebsd", "openbsd", "netbsd", "dragonfly"}
)


def cxx_runtime_library(target: BuildTarget) -> str | None:
    """Return the C++ runtime library name to link for a target.

    Returns None for MSVC, whose linker pulls in the runtime on its own,
    and for platforms that are not recognized (with a warning).
    """
    if target.os == "linux":
        return GNU_RUNTIME
    if target.os == "windows":
        if target.env == "gnu":
            return GNU_RUNTIME
        if target.env == "msvc":
            return None
    elif target.os in LLVM_RUNTIME_OSES:
        return LLVM_RUNTIME

    logger.warning("Unknown target for C++ stdlib linking: %s", target)
    return None


def emit_cxx_runtime(target: BuildTarget, directives: LinkDirectives) -> None:
    """Append the C++ runtime library for ``target`` to ``directives``."""
    runtime = cxx_runtime_library(target)
    if runtime is not None:
        logger.debug("Linking C++ runtime %s for %s", runtime, target)
        directives.add_library(runtime, kind="dylib")
