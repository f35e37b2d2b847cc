"""Light and dark colors for the host console and participant window."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum, auto


class Theme(Enum):
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        return self.dark if theme == Theme.DARK else self.light


@dataclass(frozen=True, slots=True)
class Swatch:
    """Every color role resolved for one theme."""

    text: str
    muted_text: str
    surface: str
    raised_surface: str
    border: str
    accent: str
    accent_text: str
    button: str
    button_hover: str
    correct: str
    wrong: str
    pending: str


class ColorPalette:
    TEXT = ThemeColors(light="#111827", dark="#F3F4F6")
    MUTED_TEXT = ThemeColors(light="#4B5563", dark="#9CA3AF")

    SURFACE = ThemeColors(light="#FFFFFF", dark="#111827")
    RAISED_SURFACE = ThemeColors(light="#F3F4F6", dark="#1F2937")
    BORDER = ThemeColors(light="#D1D5DB", dark="#374151")

    # Teal marks the running timer, the selected option and primary actions
    ACCENT = ThemeColors(light="#0D9488", dark="#14B8A6")
    ACCENT_TEXT = ThemeColors(light="#FFFFFF", dark="#0F172A")

    BUTTON = ThemeColors(light="#F3F4F6", dark="#374151")
    BUTTON_HOVER = ThemeColors(light="#E5E7EB", dark="#4B5563")

    CORRECT = ThemeColors(light="#15803D", dark="#4ADE80")
    WRONG = ThemeColors(light="#B91C1C", dark="#F87171")
    PENDING = ThemeColors(light="#B45309", dark="#FBBF24")

    @classmethod
    def swatch(cls, theme: Theme) -> Swatch:
        colors = {field.name: getattr(cls, field.name.upper()).get(theme) for field in fields(Swatch)}
        return Swatch(**colors)
