# SPDX-License-Identifier: MIT
"""cffi build support for FastNoise2.

Usage in a cffi build script:

    from fastnoise2_sys import acquire, read_environment
    from fastnoise2_sys.ffi import make_ffibuilder

    target, config = read_environment()
    ffibuilder = make_ffibuilder(acquire(target, config))

    if __name__ == "__main__":
        ffibuilder.compile(verbose=True)
"""

from __future__ import annotations

import cffi

from fastnoise2_sys.acquire import BuildResult
from fastnoise2_sys.bindings.generator import HEADER_NAME, STATIC_LIB_MACRO
from fastnoise2_sys.core.errors import BindingsError

DEFAULT_MODULE_NAME = "_fastnoise2"
DEFAULT_SOURCE = f'#include "{HEADER_NAME}"'


def make_ffibuilder(
    result: BuildResult,
    module_name: str = DEFAULT_MODULE_NAME,
    source: str = DEFAULT_SOURCE,
) -> cffi.FFI:
    """Create an FFI builder declaring the FastNoise2 C API.

    The bindings file is passed to ``cdef()`` unchanged; the header
    location and link directives become ``set_source()`` arguments.
    FastNoise is always linked statically, so the C++ stub is compiled
    with the same static-library define the bindings were generated with.

    Raises:
        BindingsError: If ``result`` carries no native library (a
            documentation-only build).
    """
    if result.artifact is None:
        raise BindingsError(
            f"{result.strategy.value} build has no native library to link against"
        )

    ffibuilder = cffi.FFI()
    ffibuilder.cdef(result.bindings.read())
    ffibuilder.set_source(
        module_name,
        source,
        source_extension=".cpp",
        include_dirs=[str(result.include_dir)],
        define_macros=[(STATIC_LIB_MACRO, None)],
        **result.directives.cffi_kwargs(),
    )
    return ffibuilder
