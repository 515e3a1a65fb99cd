# SPDX-License-Identifier: MIT
"""Generate cffi declarations for the FastNoise2 C API.

The declarations file (bindings.h) can come from three places, tried in
order until one supplies it:

1. A vendored snapshot shipped with this package (WASM targets only).
   The C API is plain C declarations and does not depend on the target,
   while running clang against an Emscripten sysroot is fragile.
2. An external cache directory (FASTNOISE2_BINDINGS_DIR). The file is
   used as-is whenever it exists.
3. Fresh generation: FastNoise_C.h is run through the clang preprocessor
   as C++, translated to cffi syntax and checked by cffi's own parser.
   The result is written through to the cache directory, if one is set.
"""

from __future__ import annotations

import enum
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

import cffi

from fastnoise2_sys.bindings.translate import translate
from fastnoise2_sys.configure.environment import BuildTarget
from fastnoise2_sys.core.errors import BindingsError, ToolNotFoundError
from fastnoise2_sys.util.commands import CommandRunner, copy

logger = logging.getLogger(__name__)

BINDINGS_NAME = "bindings.h"
HEADER_NAME = "FastNoise_C.h"
# Selects the static-library branch of FASTNOISE_API in Utility/Export.h.
STATIC_LIB_MACRO = "FASTNOISE_STATIC_LIB"
VENDORED_BINDINGS = Path(__file__).parent / "vendored.h"

GENERATED_BANNER = "/* Generated by fastnoise2_sys from {header}. Do not edit. */\n"


class Provenance(enum.Enum):
    """Where a bindings file came from."""

    VENDORED = "vendored"
    CACHE = "cache"
    PREBUILT = "prebuilt"
    GENERATED = "generated"


@dataclass(frozen=True)
class BindingsArtifact:
    """A declarations file ready to pass to ``FFI.cdef()``.

    Attributes:
        path: Location of the declarations file.
        provenance: How the file was produced.
    """

    path: Path
    provenance: Provenance

    def read(self) -> str:
        return self.path.read_text(encoding="utf-8")


def header_path(source_root: Path) -> Path:
    """Return the location of FastNoise_C.h under a source or install root."""
    return source_root / "include" / "FastNoise" / HEADER_NAME


def _copy_into(src: Path, dest: Path) -> None:
    try:
        copy(src, dest)
    except OSError as e:
        raise BindingsError(f"cannot write bindings to {dest}: {e}") from e


class BindingsSource(ABC):
    """One way of obtaining the bindings file."""

    @abstractmethod
    def attempt(self, source_root: Path, dest: Path) -> BindingsArtifact | None:
        """Write the bindings to ``dest``, or return None to pass."""
        ...


class VendoredBindings(BindingsSource):
    """Copy the snapshot shipped with the package."""

    def __init__(self, vendored: Path = VENDORED_BINDINGS) -> None:
        self.vendored = vendored

    def attempt(self, source_root: Path, dest: Path) -> BindingsArtifact | None:
        if not self.vendored.exists():
            logger.warning("Vendored bindings not found, will attempt to generate")
            return None
        logger.info("Using vendored bindings from '%s'", self.vendored)
        _copy_into(self.vendored, dest)
        return BindingsArtifact(dest, Provenance.VENDORED)


class CachedBindings(BindingsSource):
    """Copy bindings from a cache directory when present."""

    def __init__(self, cache_dir: Path) -> None:
        self.cache_dir = cache_dir

    @property
    def cached_file(self) -> Path:
        return self.cache_dir / BINDINGS_NAME

    def attempt(self, source_root: Path, dest: Path) -> BindingsArtifact | None:
        if not self.cached_file.exists():
            return None
        logger.info("Using cached bindings from '%s'", self.cached_file)
        _copy_into(self.cached_file, dest)
        return BindingsArtifact(dest, Provenance.CACHE)


class GeneratedBindings(BindingsSource):
    """Preprocess FastNoise_C.h with clang and translate it for cffi."""

    def __init__(
        self,
        runner: CommandRunner,
        *,
        clang: str = "clang",
        cache_dir: Path | None = None,
    ) -> None:
        self.runner = runner
        self.clang = clang
        self.cache_dir = cache_dir

    def command(self, header: Path) -> list[str]:
        include_dir = header.parent
        return [
            self.clang,
            "-E",
            # `bool` is a C++ keyword; in C it needs stdbool.h.
            "-xc++",
            "-fno-exceptions",
            f"-D{STATIC_LIB_MACRO}",
            # For relative includes like "Utility/Export.h".
            f"-I{include_dir}",
            str(header),
        ]

    def attempt(self, source_root: Path, dest: Path) -> BindingsArtifact | None:
        header = header_path(source_root)
        if not header.is_file():
            raise BindingsError(
                f"header not found: {header}",
                hint="run `git submodule update --init` to fetch the FastNoise2 sources",
            )
        if self.runner.which(self.clang) is None:
            raise ToolNotFoundError(
                self.clang,
                hint="install clang or point CLANG_PATH at it, "
                "or set FASTNOISE2_BINDINGS_DIR to a directory with cached bindings",
            )

        logger.warning(
            "Generating bindings for FastNoise2 "
            "(this is slow, set FASTNOISE2_BINDINGS_DIR to cache)"
        )
        args = self.command(header)
        result = self.runner.run(args)
        if not result.ok:
            raise BindingsError(
                f"unable to generate bindings: {' '.join(args)} "
                f"exited with {result.returncode}\n{result.stderr.rstrip()}"
            )

        declarations = translate(result.stdout, header.parent)
        if not declarations:
            raise BindingsError(f"no declarations found in {header}")
        self._validate(declarations, header)

        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_text(
                GENERATED_BANNER.format(header=HEADER_NAME) + declarations,
                encoding="utf-8",
            )
        except OSError as e:
            raise BindingsError(f"couldn't write bindings to {dest}: {e}") from e
        logger.info("Bindings generated and written to '%s'", dest)

        if self.cache_dir is not None:
            self._store(dest, self.cache_dir)
        return BindingsArtifact(dest, Provenance.GENERATED)

    def _validate(self, declarations: str, header: Path) -> None:
        ffi = cffi.FFI()
        try:
            ffi.cdef(declarations)
        except (cffi.CDefError, cffi.FFIError) as e:
            raise BindingsError(f"cffi cannot parse declarations from {header}: {e}") from e

    def _store(self, generated: Path, cache_dir: Path) -> None:
        cached = cache_dir / BINDINGS_NAME
        try:
            copy(generated, cached)
        except OSError as e:
            logger.warning("Could not cache bindings in '%s': %s", cache_dir, e)
            return
        logger.info("Bindings cached to '%s'", cached)


class BindingsGenerator:
    """Produce bindings.h in the output directory.

    Example:
        generator = BindingsGenerator(target, out_dir, runner)
        bindings = generator.generate(artifact.root)
    """

    def __init__(
        self,
        target: BuildTarget,
        out_dir: Path,
        runner: CommandRunner,
        *,
        cache_dir: Path | None = None,
        clang: str = "clang",
        vendored: Path = VENDORED_BINDINGS,
    ) -> None:
        self.target = target
        self.out_dir = out_dir
        self.sources: list[BindingsSource] = []
        if target.is_wasm:
            self.sources.append(VendoredBindings(vendored))
        if cache_dir is not None:
            self.sources.append(CachedBindings(cache_dir))
        self.sources.append(GeneratedBindings(runner, clang=clang, cache_dir=cache_dir))

    @property
    def output_path(self) -> Path:
        return self.out_dir / BINDINGS_NAME

    def generate(self, source_root: Path) -> BindingsArtifact:
        """Write bindings.h, using the first source that supplies it.

        Args:
            source_root: Directory whose include/FastNoise holds the header.

        Raises:
            BindingsError: If the bindings cannot be produced.
        """
        for source in self.sources:
            artifact = source.attempt(source_root, self.output_path)
            if artifact is not None:
                return artifact
        raise BindingsError("no bindings source produced bindings")

    def adopt(self, bindings_file: Path, provenance: Provenance) -> BindingsArtifact:
        """Copy an existing bindings file (e.g. from a prebuilt bundle)."""
        _copy_into(bindings_file, self.output_path)
        return BindingsArtifact(self.output_path, provenance)
