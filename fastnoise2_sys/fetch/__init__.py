# SPDX-License-Identifier: MIT
"""Fetching prebuilt binaries."""

from fastnoise2_sys.fetch.prebuilt import DOWNLOAD_TOOLS, DownloadTool, PrebuiltFetcher

__all__ = [
    "DOWNLOAD_TOOLS",
    "DownloadTool",
    "PrebuiltFetcher",
]
