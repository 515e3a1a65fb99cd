# SPDX-License-Identifier: MIT
"""Decide how to obtain FastNoise2 and its bindings for a build.

The strategies below are tried in order and the first one that applies
produces the build result:

    DocsOnlyStrategy        FASTNOISE2_DOCS_ONLY: bindings only, no library
    WasmStrategy            wasm32: prebuilt bundle, else Emscripten build
    ForceSourceStrategy     FASTNOISE2_BUILD_FROM_SOURCE: CMake build
    PrecompiledStrategy     FASTNOISE2_LIB_DIR: link the given library
    SourceFallbackStrategy  CMake build

Exactly one strategy produces the native library. Native (non-WASM)
strategies finish by linking the C++ runtime; WASM builds carry their own.
"""

from __future__ import annotations

import enum
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from fastnoise2_sys.bindings.generator import (
    BindingsArtifact,
    BindingsGenerator,
    Provenance,
    header_path,
)
from fastnoise2_sys.builders.cmake import CMakeBuilder, NativeArtifact
from fastnoise2_sys.configure.environment import (
    LIB_DIR_KEY,
    AcquisitionConfig,
    BuildTarget,
)
from fastnoise2_sys.core.errors import ConfigureError
from fastnoise2_sys.core.link import LIB_NAME, LinkDirectives
from fastnoise2_sys.fetch.prebuilt import PrebuiltFetcher
from fastnoise2_sys.toolchains.runtime import emit_cxx_runtime
from fastnoise2_sys.util.commands import CommandRunner, SubprocessRunner

logger = logging.getLogger(__name__)

# FastNoise2 sources shipped inside the package (git submodule, package data).
DEFAULT_SOURCE_DIR = Path(__file__).resolve().parent / "vendor" / "FastNoise2"


class Strategy(enum.Enum):
    """How the native library was obtained."""

    DOCS_ONLY = "docs-only"
    WASM_PREBUILT = "wasm-prebuilt"
    WASM_SOURCE = "wasm-source"
    SOURCE = "source"
    PRECOMPILED = "precompiled"


@dataclass
class BuildResult:
    """Everything a consumer needs to compile against FastNoise2.

    Attributes:
        strategy: The strategy that produced the result.
        bindings: The cffi declarations file.
        artifact: The native library, None for documentation-only builds.
        header_root: Tree holding include/FastNoise/FastNoise_C.h to compile
            against. Defaults to the artifact root.
        directives: Search paths and libraries for the final link.
    """

    strategy: Strategy
    bindings: BindingsArtifact
    artifact: NativeArtifact | None = None
    header_root: Path | None = None
    directives: LinkDirectives = field(default_factory=LinkDirectives)

    def __post_init__(self) -> None:
        if self.header_root is None and self.artifact is not None:
            self.header_root = self.artifact.root

    @property
    def include_dir(self) -> Path | None:
        if self.header_root is None:
            return None
        return header_path(self.header_root).parent

    def to_dict(self) -> dict[str, object]:
        return {
            "strategy": self.strategy.value,
            "bindings": {
                "path": str(self.bindings.path),
                "provenance": self.bindings.provenance.value,
            },
            "artifact": str(self.artifact.root) if self.artifact else None,
            "include_dir": str(self.include_dir) if self.include_dir else None,
            "link": self.directives.to_dict(),
        }


@dataclass
class AcquisitionContext:
    """Inputs shared by all strategies.

    Attributes:
        target: Target triple.
        config: Acquisition overrides.
        runner: Runs every external command.
        default_source_dir: FastNoise2 sources used when no override is set.
    """

    target: BuildTarget
    config: AcquisitionConfig
    runner: CommandRunner
    default_source_dir: Path = DEFAULT_SOURCE_DIR

    @property
    def source_dir(self) -> Path:
        return self.config.source_dir or self.default_source_dir

    def bindings_generator(self) -> BindingsGenerator:
        return BindingsGenerator(
            self.target,
            self.config.out_dir,
            self.runner,
            cache_dir=self.config.bindings_cache_dir,
            clang=self.config.clang,
        )

    def cmake_builder(self) -> CMakeBuilder:
        return CMakeBuilder(self.runner, cmake=self.config.cmake, jobs=self.config.jobs)

    def prebuilt_fetcher(self) -> PrebuiltFetcher:
        return PrebuiltFetcher(self.config.out_dir, self.runner)


def link_artifact(artifact: NativeArtifact, directives: LinkDirectives) -> None:
    """Add the artifact's library directories and FastNoise itself."""
    for path in artifact.library_dirs:
        directives.add_search_path(path)
    directives.add_library(LIB_NAME)


def build_from_source(
    ctx: AcquisitionContext, strategy: Strategy = Strategy.SOURCE
) -> BuildResult:
    """Build with CMake, then generate bindings from the install tree."""
    wasm = strategy is Strategy.WASM_SOURCE
    artifact = ctx.cmake_builder().build(
        ctx.source_dir,
        ctx.target,
        ctx.config.out_dir,
        wasm=wasm,
        emsdk=ctx.config.emsdk,
    )
    result = BuildResult(
        strategy=strategy,
        artifact=artifact,
        bindings=ctx.bindings_generator().generate(artifact.root),
    )
    link_artifact(artifact, result.directives)
    return result


class AcquisitionStrategy(ABC):
    """One way of obtaining the native library."""

    #: Whether the native C++ runtime is linked after this strategy.
    links_cxx_runtime = True

    @abstractmethod
    def attempt(self, ctx: AcquisitionContext) -> BuildResult | None:
        """Return a result, or None if this strategy does not apply."""
        ...


class DocsOnlyStrategy(AcquisitionStrategy):
    """Generate bindings without building or linking anything."""

    links_cxx_runtime = False

    def attempt(self, ctx: AcquisitionContext) -> BuildResult | None:
        if not ctx.config.docs_only:
            return None
        logger.warning("Documentation-only build detected, only bindings will be generated")
        bindings = ctx.bindings_generator().generate(ctx.default_source_dir)
        return BuildResult(strategy=Strategy.DOCS_ONLY, bindings=bindings)


class WasmStrategy(AcquisitionStrategy):
    """Use the prebuilt WASM bundle, falling back to an Emscripten build."""

    links_cxx_runtime = False

    def attempt(self, ctx: AcquisitionContext) -> BuildResult | None:
        if not ctx.target.is_wasm:
            return None

        fetcher = ctx.prebuilt_fetcher()
        artifact = fetcher.fetch(force_source=ctx.config.build_wasm_from_source)
        if artifact is None:
            logger.warning(
                "Prebuilt not available, building FastNoise2 for WASM with Emscripten"
            )
            return build_from_source(ctx, Strategy.WASM_SOURCE)

        logger.warning("Using prebuilt WASM binaries from GitHub releases")
        generator = ctx.bindings_generator()
        if fetcher.bindings_file.exists():
            bindings = generator.adopt(fetcher.bindings_file, Provenance.PREBUILT)
        else:
            logger.warning("Prebuilt bundle has no bindings, using the generator")
            bindings = generator.generate(artifact.root)

        result = BuildResult(
            strategy=Strategy.WASM_PREBUILT, artifact=artifact, bindings=bindings
        )
        link_artifact(artifact, result.directives)
        return result


class ForceSourceStrategy(AcquisitionStrategy):
    def attempt(self, ctx: AcquisitionContext) -> BuildResult | None:
        if not ctx.config.build_from_source:
            return None
        logger.warning("Build from source requested; building FastNoise2 from source")
        return build_from_source(ctx)


class PrecompiledStrategy(AcquisitionStrategy):
    """Link a library the user compiled themselves."""

    def attempt(self, ctx: AcquisitionContext) -> BuildResult | None:
        lib_dir = ctx.config.lib_dir
        if lib_dir is None:
            return None
        logger.warning("Using precompiled library located in '%s'", lib_dir)
        artifact = NativeArtifact(root=lib_dir, library_dirs=(lib_dir,))
        result = BuildResult(
            strategy=Strategy.PRECOMPILED,
            artifact=artifact,
            header_root=ctx.default_source_dir,
            bindings=ctx.bindings_generator().generate(ctx.default_source_dir),
        )
        link_artifact(artifact, result.directives)
        return result


class SourceFallbackStrategy(AcquisitionStrategy):
    def attempt(self, ctx: AcquisitionContext) -> BuildResult | None:
        logger.warning("%s is not set; falling back to building from source", LIB_DIR_KEY)
        return build_from_source(ctx)


DEFAULT_STRATEGIES: tuple[AcquisitionStrategy, ...] = (
    DocsOnlyStrategy(),
    WasmStrategy(),
    ForceSourceStrategy(),
    PrecompiledStrategy(),
    SourceFallbackStrategy(),
)


def acquire(
    target: BuildTarget,
    config: AcquisitionConfig,
    *,
    runner: CommandRunner | None = None,
    default_source_dir: Path = DEFAULT_SOURCE_DIR,
    strategies: tuple[AcquisitionStrategy, ...] = DEFAULT_STRATEGIES,
) -> BuildResult:
    """Obtain FastNoise2 and its bindings for ``target``.

    Raises:
        FastNoiseBuildError: On any fatal failure. Soft failures (such as
            an unavailable prebuilt bundle) are logged and fall through.
    """
    ctx = AcquisitionContext(
        target=target,
        config=config,
        runner=runner or SubprocessRunner(),
        default_source_dir=default_source_dir,
    )
    logger.info("Acquiring FastNoise2 for %s", target)
    for strategy in strategies:
        result = strategy.attempt(ctx)
        if result is None:
            continue
        if strategy.links_cxx_runtime:
            emit_cxx_runtime(target, result.directives)
        return result
    raise ConfigureError(f"no acquisition strategy applies to {target}")
