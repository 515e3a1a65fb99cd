# SPDX-License-Identifier: MIT
"""Configuration read at the start of a build."""

from fastnoise2_sys.configure.environment import (
    AcquisitionConfig,
    BuildTarget,
    read_config,
    read_environment,
    read_target,
)

__all__ = [
    "AcquisitionConfig",
    "BuildTarget",
    "read_config",
    "read_environment",
    "read_target",
]
