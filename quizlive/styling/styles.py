"""Qt stylesheets shared by the host console and the participant window."""

from .color_palette import ColorPalette, Swatch, Theme

DEFAULT_THEME = Theme.DARK


def _input_rules(colors: Swatch) -> str:
    return f"""
        QLineEdit, QPlainTextEdit, QSpinBox, QComboBox, QDateTimeEdit {{
            background: {colors.raised_surface};
            color: {colors.text};
            border: 1px solid {colors.border};
            border-radius: 4px;
            padding: 4px;
        }}
        QLineEdit:focus, QPlainTextEdit:focus {{
            border-color: {colors.accent};
        }}
    """


def _list_rules(colors: Swatch) -> str:
    return f"""
        QListWidget, QTableWidget {{
            background: {colors.raised_surface};
            border: 1px solid {colors.border};
            border-radius: 4px;
        }}
        QHeaderView::section {{
            background: {colors.surface};
            color: {colors.muted_text};
            border: none;
            border-bottom: 1px solid {colors.border};
            padding: 4px;
        }}
        QProgressBar {{
            border: 1px solid {colors.border};
            border-radius: 4px;
            text-align: center;
        }}
        QProgressBar::chunk {{
            background: {colors.accent};
        }}
    """


class Styles:
    @staticmethod
    def get_main_window_style(theme: Theme = DEFAULT_THEME) -> str:
        colors = ColorPalette.swatch(theme)
        base = f"""
            QMainWindow, QWidget {{
                background: {colors.surface};
                color: {colors.text};
            }}
            QWidget {{
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QPushButton {{
                background: {colors.button};
                color: {colors.text};
                border: 1px solid {colors.border};
                border-radius: 4px;
                padding: 6px 12px;
            }}
            QPushButton:hover {{
                background: {colors.button_hover};
            }}
            QPushButton:disabled {{
                color: {colors.muted_text};
            }}
            QPushButton:checked, QPushButton[primary="true"] {{
                background: {colors.accent};
                color: {colors.accent_text};
                border-color: {colors.accent};
            }}
            QGroupBox {{
                border: 1px solid {colors.border};
                border-radius: 6px;
                margin-top: 6px;
                padding-top: 10px;
            }}
            QGroupBox::title {{
                subcontrol-origin: margin;
                left: 10px;
            }}
        """
        return base + _input_rules(colors) + _list_rules(colors)

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"

    @staticmethod
    def get_countdown_style(urgent: bool, theme: Theme = DEFAULT_THEME) -> str:
        colors = ColorPalette.swatch(theme)
        return f"font-size: 20pt; font-weight: bold; color: {colors.wrong if urgent else colors.accent};"

    @staticmethod
    def get_feedback_style(is_correct: bool | None, theme: Theme = DEFAULT_THEME) -> str:
        """Green for a right answer, red for a wrong one, amber while unknown."""
        colors = ColorPalette.swatch(theme)
        if is_correct is None:
            color = colors.pending
        else:
            color = colors.correct if is_correct else colors.wrong
        return f"font-size: 14pt; font-weight: bold; color: {color};"
