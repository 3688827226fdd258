"""Wrap-aware layout of logical lines onto viewport rows."""

from .mapper import Viewport, VisualRow, WrapMapper

__all__ = ["Viewport", "VisualRow", "WrapMapper"]
