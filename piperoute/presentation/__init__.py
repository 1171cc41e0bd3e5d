"""Presentation helpers."""
from .text_renderer import render_text, cell_glyph

__all__ = ['render_text', 'cell_glyph']
