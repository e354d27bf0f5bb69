"""Light and dark palettes plus the Qt stylesheet built from them."""

from sw.core.snapshot import THEME_LIGHT, THEME_DARK

THEMES = {
    THEME_LIGHT: {
        "bg": "#f5f5f7",
        "text": "#1d1d1f",
        "muted_text": "#6e6e73",
        "button_bg": "#ffffff",
        "button_text": "#1d1d1f",
        "button_active": "#e0e0e5",
        "border": 1,
        "separator": "#d2d2d7",
    },
    THEME_DARK: {
        "bg": "#1c1c1e",
        "text": "#f5f5f7",
        "muted_text": "#98989d",
        "button_bg": "#2c2c2e",
        "button_text": "#f5f5f7",
        "button_active": "#3a3a3c",
        "border": 1,
        "separator": "#3a3a3c",
    },
}


def build_stylesheet(theme_name):
    """Build a Qt stylesheet string from a theme name."""
    t = THEMES.get(theme_name, THEMES[THEME_LIGHT])
    return (
        f"QMainWindow, QWidget {{ background-color: {t['bg']}; }}"
        f"QLabel {{ color: {t['text']}; background: transparent; }}"
        f"QLabel#timeField {{ font-size: 40px; font-family: monospace; }}"
        f"QLabel#footer {{ color: {t['muted_text']}; }}"
        f"QCheckBox {{ color: {t['text']}; }}"
        f"QPushButton {{"
        f"  color: {t['button_text']};"
        f"  background-color: {t['button_bg']};"
        f"  border: {t['border']}px solid rgba(128,128,128,0.4);"
        f"  padding: 4px 8px;"
        f"}}"
        f"QPushButton:hover, QPushButton:pressed {{"
        f"  background-color: {t['button_active']};"
        f"}}"
        f"QPushButton:disabled {{ color: {t['muted_text']}; }}"
        f"QListWidget {{"
        f"  background-color: {t['button_bg']};"
        f"  border: 1px solid {t['separator']};"
        f"  outline: none;"
        f"}}"
        f"QListWidget::item {{"
        f"  color: {t['button_text']};"
        f"  padding: 4px 8px;"
        f"}}"
    )
