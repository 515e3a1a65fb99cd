# SPDX-License-Identifier: MIT
"""Utility helpers for fastnoise2_sys."""
