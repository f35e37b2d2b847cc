"""Themes and stylesheets for the QuizLive windows."""

from .color_palette import ColorPalette, Swatch, Theme

__all__ = ["ColorPalette", "Swatch", "Theme"]
