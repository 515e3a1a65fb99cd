# SPDX-License-Identifier: MIT
"""cffi declarations for the FastNoise2 C API."""

from fastnoise2_sys.bindings.generator import (
    BINDINGS_NAME,
    BindingsArtifact,
    BindingsGenerator,
    Provenance,
)

__all__ = [
    "BINDINGS_NAME",
    "BindingsArtifact",
    "BindingsGenerator",
    "Provenance",
]
