# SPDX-License-Identifier: MIT
"""Link directives handed to the consumer of the native library."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

LIB_NAME = "FastNoise"


@dataclass(frozen=True)
class LinkLibrary:
    """A library to link.

    Attributes:
        name: Library name without prefix or suffix (e.g. 'FastNoise').
        kind: 'static' or 'dylib'.
    """

    name: str
    kind: str = "static"


@dataclass
class LinkDirectives:
    """Library search paths and libraries for the final link.

    Example:
        directives = LinkDirectives()
        directives.add_search_path(Path("/opt/fastnoise/lib"))
        directives.add_library("FastNoise")
        directives.add_library("stdc++", kind="dylib")
    """

    search_paths: list[Path] = field(default_factory=list)
    libraries: list[LinkLibrary] = field(default_factory=list)

    def add_search_path(self, path: Path) -> None:
        if path not in self.search_paths:
            self.search_paths.append(path)

    def add_library(self, name: str, *, kind: str = "static") -> None:
        library = LinkLibrary(name, kind)
        if library not in self.libraries:
            self.libraries.append(library)

    def as_lines(self) -> list[str]:
        """Render as one directive per line.

        Search paths come first, then libraries in link order.
        """
        lines = [f"link-search=native={path}" for path in self.search_paths]
        lines.extend(f"link-lib={lib.kind}={lib.name}" for lib in self.libraries)
        return lines

    def cffi_kwargs(self) -> dict[str, list[str]]:
        """Keyword arguments for cffi's FFI.set_source()."""
        return {
            "library_dirs": [str(path) for path in self.search_paths],
            "libraries": [lib.name for lib in self.libraries],
        }

    def to_dict(self) -> dict[str, object]:
        return {
            "search_paths": [str(path) for path in self.search_paths],
            "libraries": [
                {"name": lib.name, "kind": lib.kind} for lib in self.libraries
            ],
        }
