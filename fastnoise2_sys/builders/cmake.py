# SPDX-License-Identifier: MIT
"""Build FastNoise2 from source with CMake.

The library is configured as a static, release-only build with its tools,
tests and utility targets switched off, then installed into the output
directory:

    <out_dir>/build/            CMake binary tree
    <out_dir>/lib/, lib64/      libFastNoise.a (or FastNoise.lib)
    <out_dir>/include/FastNoise headers

This is the last resort of every acquisition path, so all failures are
fatal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from fastnoise2_sys.configure.environment import EMSDK_KEY, BuildTarget
from fastnoise2_sys.core.errors import (
    BuildToolError,
    MissingSourceError,
    MissingVariableError,
    ToolNotFoundError,
)
from fastnoise2_sys.toolchains.flags import WASM_SIMD_FLAGS, release_flags
from fastnoise2_sys.util.commands import CommandRunner, copy_missing_tree

logger = logging.getLogger(__name__)

BUILD_TYPE = "Release"

# Options always passed to FastNoise2's CMakeLists.txt.
FASTNOISE2_OPTIONS: dict[str, str] = {
    "FASTNOISE2_TOOLS": "OFF",
    "FASTNOISE2_TESTS": "OFF",
    # The utility target pulls in Corrade.
    "FASTNOISE2_UTILITY": "OFF",
    "BUILD_SHARED_LIBS": "OFF",
}

EMSCRIPTEN_TOOLCHAIN = Path(
    "upstream", "emscripten", "cmake", "Modules", "Platform", "Emscripten.cmake"
)


@dataclass(frozen=True)
class NativeArtifact:
    """A compiled static library and its installed header tree.

    Attributes:
        root: Installation directory.
        library_dirs: Directories that may hold the static library.
    """

    root: Path
    library_dirs: tuple[Path, ...] = field(default=())

    @property
    def include_dir(self) -> Path:
        return self.root / "include" / "FastNoise"

    @classmethod
    def from_install_dir(cls, root: Path) -> NativeArtifact:
        """Create an artifact for a CMake install prefix.

        Both lib/ and lib64/ are listed; which one CMake picks depends on
        the platform's GNUInstallDirs conventions.
        """
        return cls(root=root, library_dirs=(root / "lib", root / "lib64"))


def repair_utility_headers(source_dir: Path, install_dir: Path) -> bool:
    """Copy include/FastNoise/Utility into the install tree.

    FastNoise2's install step does not install the Utility headers, but
    FastNoise_C.h includes them. The copy only happens when the
    destination is missing, so an existing tree is never overwritten.

    Returns:
        True if the headers were copied.
    """
    src_utility = source_dir / "include" / "FastNoise" / "Utility"
    dst_utility = install_dir / "include" / "FastNoise" / "Utility"
    copied = copy_missing_tree(src_utility, dst_utility)
    if copied:
        logger.info("Copied Utility headers to %s", dst_utility)
    return copied


class CMakeBuilder:
    """Configure, build and install FastNoise2 with CMake.

    Example:
        builder = CMakeBuilder(SubprocessRunner())
        artifact = builder.build(source_dir, target, out_dir)
    """

    def __init__(
        self,
        runner: CommandRunner,
        *,
        cmake: str = "cmake",
        jobs: int | None = None,
    ) -> None:
        self.runner = runner
        self.cmake = cmake
        self.jobs = jobs

    def configure_args(
        self,
        source_dir: Path,
        target: BuildTarget,
        out_dir: Path,
        *,
        wasm: bool = False,
        emsdk: Path | None = None,
    ) -> list[str]:
        """Return the cmake configure command line.

        Raises:
            MissingVariableError: If ``wasm`` is set and no Emscripten SDK
                root was given.
        """
        defines: dict[str, str] = {
            "CMAKE_INSTALL_PREFIX": str(out_dir),
            "CMAKE_BUILD_TYPE": BUILD_TYPE,
        }
        defines.update(FASTNOISE2_OPTIONS)

        cxx_flags_release = release_flags(target)
        logger.info(
            "Target os '%s' and env '%s' => CMAKE_CXX_FLAGS_RELEASE='%s'",
            target.os,
            target.env,
            cxx_flags_release,
        )
        defines["CMAKE_CXX_FLAGS_RELEASE"] = cxx_flags_release

        if wasm:
            if emsdk is None:
                raise MissingVariableError(
                    EMSDK_KEY,
                    hint=(
                        "WASM source builds need the Emscripten SDK; install it "
                        "from https://emscripten.org or use the prebuilt binaries"
                    ),
                )
            logger.info("EMSDK path: %s", emsdk)
            defines["CMAKE_TOOLCHAIN_FILE"] = str(emsdk / EMSCRIPTEN_TOOLCHAIN)
            # SIMD128 only; threads would also need -pthread on the Python side.
            defines["CMAKE_C_FLAGS"] = WASM_SIMD_FLAGS
            defines["CMAKE_CXX_FLAGS"] = WASM_SIMD_FLAGS

        args = [self.cmake, "-S", str(source_dir), "-B", str(out_dir / "build")]
        args.extend(f"-D{key}={value}" for key, value in defines.items())
        return args

    def build_args(self, out_dir: Path) -> list[str]:
        """Return the cmake build-and-install command line."""
        args = [
            self.cmake,
            "--build",
            str(out_dir / "build"),
            "--target",
            "install",
            "--config",
            BUILD_TYPE,
        ]
        if self.jobs:
            args.extend(["--parallel", str(self.jobs)])
        return args

    def build(
        self,
        source_dir: Path,
        target: BuildTarget,
        out_dir: Path,
        *,
        wasm: bool = False,
        emsdk: Path | None = None,
    ) -> NativeArtifact:
        """Build and install FastNoise2 into ``out_dir``.

        Raises:
            MissingSourceError: If ``source_dir`` does not exist.
            MissingVariableError: If ``wasm`` is set without ``emsdk``.
            ToolNotFoundError: If cmake is not installed.
            BuildToolError: If a cmake invocation fails.
        """
        configure = self.configure_args(
            source_dir, target, out_dir, wasm=wasm, emsdk=emsdk
        )
        if not source_dir.is_dir():
            raise MissingSourceError(
                str(source_dir),
                hint="run `git submodule update --init` or set FASTNOISE2_SOURCE_DIR",
            )
        if self.runner.which(self.cmake) is None:
            raise ToolNotFoundError(
                self.cmake, hint="install CMake: https://cmake.org/download/"
            )

        if wasm:
            logger.info("Building FastNoise2 for WASM with SIMD128 support")
        else:
            logger.info("Building from source files located in '%s'", source_dir)

        (out_dir / "build").mkdir(parents=True, exist_ok=True)
        self._check(configure)
        self._check(self.build_args(out_dir))

        repair_utility_headers(source_dir, out_dir)
        return NativeArtifact.from_install_dir(out_dir)

    def _check(self, args: list[str]) -> None:
        logger.info("Running: %s", " ".join(args))
        result = self.runner.run(args)
        if not result.ok:
            raise BuildToolError(args, result.returncode, result.output)
