"""Keyboard renderings of calendar grids."""

from .keyboard import build_flat_inline, build_inline_keyboard

__all__ = ["build_flat_inline", "build_inline_keyboard"]
