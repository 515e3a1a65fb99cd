# SPDX-License-Identifier: MIT
"""Core types shared by every fastnoise2_sys component."""
