# SPDX-License-Identifier: MIT
"""Prebuilt FastNoise2 binaries for WebAssembly targets.

Building FastNoise2 for wasm32 needs the Emscripten SDK. To spare users
that, a prebuilt bundle is published as a GitHub release asset:

    fastnoise2-wasm-prebuilt.tar.gz
        libFastNoise.a
        bindings.h
        include/FastNoise/...

The bundle is downloaded once and extracted under the build output
directory. Later builds reuse it as long as libFastNoise.a is present.

Nothing here is fatal: when the bundle cannot be obtained the fetcher
returns None and the caller falls back to a source build.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from fastnoise2_sys.builders.cmake import NativeArtifact
from fastnoise2_sys.util.commands import CommandRunner

logger = logging.getLogger(__name__)

# TODO: switch to the upstream FastNoise2 repository once it publishes
# WASM release assets.
WASM_PREBUILT_REPO = "api-haus/fastnoise2-rs"
WASM_PREBUILT_TAG = "wasm-prebuilt-v1"
ARCHIVE_NAME = "fastnoise2-wasm-prebuilt.tar.gz"
RELEASE_URL = "https://github.com/{repo}/releases/download/{tag}/{archive}"

PREBUILT_DIR_NAME = "wasm-prebuilt"
PREBUILT_LIB_NAME = "libFastNoise.a"
PREBUILT_BINDINGS_NAME = "bindings.h"


@dataclass(frozen=True)
class DownloadTool:
    """A command-line downloader.

    Attributes:
        name: Executable name.
        flags: Arguments placed before the output path.
        output_flag: Flag that names the output file.
    """

    name: str
    flags: tuple[str, ...]
    output_flag: str

    def command(self, url: str, dest: Path) -> list[str]:
        return [self.name, *self.flags, self.output_flag, str(dest), url]


# Tried in order; the first zero exit status wins.
DOWNLOAD_TOOLS: tuple[DownloadTool, ...] = (
    DownloadTool("curl", ("-fsSL",), "-o"),
    DownloadTool("wget", ("-q",), "-O"),
)


def prebuilt_dir(out_dir: Path) -> Path:
    """Return the directory the prebuilt bundle is extracted into."""
    return out_dir / PREBUILT_DIR_NAME


class PrebuiltFetcher:
    """Download and cache the prebuilt WASM bundle.

    Example:
        fetcher = PrebuiltFetcher(out_dir, SubprocessRunner())
        artifact = fetcher.fetch()
        if artifact is None:
            ...  # build from source instead
    """

    def __init__(
        self,
        out_dir: Path,
        runner: CommandRunner,
        *,
        repo: str = WASM_PREBUILT_REPO,
        tag: str = WASM_PREBUILT_TAG,
        tools: tuple[DownloadTool, ...] = DOWNLOAD_TOOLS,
    ) -> None:
        self.out_dir = out_dir
        self.runner = runner
        self.repo = repo
        self.tag = tag
        self.tools = tools

    @property
    def url(self) -> str:
        return RELEASE_URL.format(repo=self.repo, tag=self.tag, archive=ARCHIVE_NAME)

    @property
    def prebuilt_dir(self) -> Path:
        return prebuilt_dir(self.out_dir)

    @property
    def archive_path(self) -> Path:
        return self.out_dir / ARCHIVE_NAME

    @property
    def lib_file(self) -> Path:
        return self.prebuilt_dir / PREBUILT_LIB_NAME

    @property
    def bindings_file(self) -> Path:
        return self.prebuilt_dir / PREBUILT_BINDINGS_NAME

    def cached(self) -> NativeArtifact | None:
        """Return the cached bundle if its library is already extracted."""
        if self.lib_file.exists():
            return self._artifact()
        return None

    def fetch(self, *, force_source: bool = False) -> NativeArtifact | None:
        """Return the prebuilt artifact, downloading it if needed.

        Args:
            force_source: Skip the download (the cache is still honoured).

        Returns:
            The artifact, or None if the bundle is unavailable.
        """
        artifact = self.cached()
        if artifact is not None:
            logger.info("Using cached WASM prebuilt from %s", self.prebuilt_dir)
            return artifact

        if force_source:
            logger.warning(
                "FASTNOISE2_BUILD_WASM_FROM_SOURCE set, skipping prebuilt download"
            )
            return None

        logger.info("Downloading WASM prebuilt from %s", self.url)
        try:
            self.prebuilt_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning("Cannot create %s: %s", self.prebuilt_dir, e)
            return None

        if not self._download():
            logger.warning(
                "Failed to download WASM prebuilt "
                "(curl/wget failed or release not found)"
            )
            return None

        if not self._extract():
            logger.warning("Failed to extract WASM prebuilt archive")
            return None

        if not self.lib_file.exists():
            logger.warning("WASM prebuilt archive missing %s", PREBUILT_LIB_NAME)
            return None

        logger.info("Downloaded WASM prebuilt to %s", self.prebuilt_dir)
        return self._artifact()

    def _download(self) -> bool:
        for tool in self.tools:
            result = self.runner.run(tool.command(self.url, self.archive_path))
            if result.ok:
                return True
            logger.debug("%s failed with exit code %d", tool.name, result.returncode)
        return False

    def _extract(self) -> bool:
        result = self.runner.run(
            ["tar", "-xzf", str(self.archive_path), "-C", str(self.prebuilt_dir)]
        )
        if not result.ok:
            logger.debug("tar failed: %s", result.output)
        return result.ok

    def _artifact(self) -> NativeArtifact:
        return NativeArtifact(root=self.prebuilt_dir, library_dirs=(self.prebuilt_dir,))
