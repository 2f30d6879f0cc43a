"""Utility helpers."""

from lexhighlight.util.fs_util import FSUtil

__all__ = ["FSUtil"]
