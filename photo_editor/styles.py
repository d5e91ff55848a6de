from PySide6.QtGui import QColor, QFont, QPalette
from PySide6.QtWidgets import QApplication

# -----------------------------------------------------------------------------
# Brand palette
# -----------------------------------------------------------------------------


class BrandColors:
    PRIMARY = "#0EA5E9"  # Sky
    SECONDARY = "#6366F1"  # Indigo
    ERROR_TEXT = "#B91C1C"
    ERROR_BG = "#FEE2E2"
    ERROR_BORDER = "#EF4444"

    # Dark Theme
    DARK_WINDOW = "#111827"
    DARK_SURFACE = "#1F2937"
    DARK_SURFACE_ALT = "#374151"
    DARK_BORDER = "#4B5563"
    DARK_TEXT = "#E2E8F0"
    DARK_TEXT_SEC = "#94A3B8"

    # Light Theme
    LIGHT_WINDOW = "#F1F5F9"
    LIGHT_SURFACE = "#FFFFFF"
    LIGHT_SURFACE_ALT = "#F8FAFC"
    LIGHT_BORDER = "#D1D5DB"
    LIGHT_TEXT = "#1E293B"
    LIGHT_TEXT_SEC = "#64748B"


# -----------------------------------------------------------------------------
# Common QSS Templates
# -----------------------------------------------------------------------------

COMMON_QSS = """
    * {
        font-size: {{font_size}}pt;
    }

    QLabel#title {
        color: {{accent}};
        font-size: {{title_font_size}}pt;
        font-weight: bold;
    }
    QLabel#subtitle {
        color: {{text_sec}};
    }

    /* Upload drop zone */
    QLabel#uploadBox {
        border: 2px dashed {{border}};
        border-radius: 12px;
        background-color: {{surface}};
        color: {{text_sec}};
    }
    QLabel#uploadBox[dragging="true"] {
        border-color: {{accent}};
        background-color: {{surface_alt}};
    }

    /* Option cards */
    QRadioButton#optionCard {
        border: 1px solid {{border}};
        border-radius: 8px;
        padding: 12px;
        background-color: {{surface}};
    }
    QRadioButton#optionCard:checked {
        border: 2px solid {{accent}};
    }

    QPushButton#processButton, QPushButton#downloadButton {
        color: #FFFFFF;
        font-weight: bold;
        border: none;
        border-radius: 10px;
        padding: 12px 24px;
        background-color: qlineargradient(x1:0, y1:0, x2:1, y2:0, stop:0 {{accent}}, stop:1 {{accent2}});
    }
    QPushButton#processButton:disabled {
        background-color: {{border}};
        color: {{text_sec}};
    }

    QLabel#errorBanner {
        color: {{error_text}};
        background-color: {{error_bg}};
        border-left: 4px solid {{error_border}};
        border-radius: 6px;
        padding: 10px;
    }

    QLabel#imagePanel {
        background-color: {{surface_alt}};
        border-radius: 12px;
        color: {{text_sec}};
    }

    QWidget#busyOverlay {
        background-color: rgba(0, 0, 0, 150);
    }
    QLabel#busyText {
        color: #FFFFFF;
        font-size: {{title_font_size}}pt;
    }
"""


def _apply_style(app: QApplication, pal_def: dict, font_size: int = 10) -> None:
    """Apply palette and QSS based on definition dict."""
    app.setStyle("Fusion")

    palette = QPalette()

    c_window = QColor(pal_def["window"])
    c_surface = QColor(pal_def["surface"])
    c_text = QColor(pal_def["text"])
    c_accent = QColor(pal_def["accent"])
    c_disabled = QColor(pal_def["text_sec"])

    palette.setColor(QPalette.Window, c_window)
    palette.setColor(QPalette.WindowText, c_text)
    palette.setColor(QPalette.Base, c_surface)
    palette.setColor(QPalette.AlternateBase, QColor(pal_def["surface_alt"]))
    palette.setColor(QPalette.Text, c_text)
    palette.setColor(QPalette.Button, c_surface)
    palette.setColor(QPalette.ButtonText, c_text)
    palette.setColor(QPalette.Link, c_accent)
    palette.setColor(QPalette.Highlight, c_accent)
    palette.setColor(QPalette.HighlightedText, QColor("#FFFFFF"))

    # Disabled states
    palette.setColor(QPalette.Disabled, QPalette.Text, c_disabled)
    palette.setColor(QPalette.Disabled, QPalette.ButtonText, c_disabled)
    palette.setColor(QPalette.Disabled, QPalette.WindowText, c_disabled)

    app.setPalette(palette)

    font = QFont("Segoe UI")
    font.setStyleHint(QFont.SansSerif)
    font.setPointSize(font_size)
    app.setFont(font)

    qss = COMMON_QSS.replace("{{font_size}}", str(font_size))
    qss = qss.replace("{{title_font_size}}", str(font_size + 12))

    for key, val in pal_def.items():
        qss = qss.replace(f"{{{{{key}}}}}", val)

    app.setStyleSheet(qss)


def apply_theme(app: QApplication, theme: str = "light", font_size: int = 10) -> None:
    """Apply a theme to the application.

    Args:
        app: QApplication instance
        theme: Theme name ("dark" or "light")
        font_size: Base font size in points (default: 10)
    """
    common = {
        "accent": BrandColors.PRIMARY,
        "accent2": BrandColors.SECONDARY,
        "error_text": BrandColors.ERROR_TEXT,
        "error_bg": BrandColors.ERROR_BG,
        "error_border": BrandColors.ERROR_BORDER,
    }
    if theme == "dark":
        pal_def = {
            "window": BrandColors.DARK_WINDOW,
            "surface": BrandColors.DARK_SURFACE,
            "surface_alt": BrandColors.DARK_SURFACE_ALT,
            "border": BrandColors.DARK_BORDER,
            "text": BrandColors.DARK_TEXT,
            "text_sec": BrandColors.DARK_TEXT_SEC,
            **common,
        }
    else:
        pal_def = {
            "window": BrandColors.LIGHT_WINDOW,
            "surface": BrandColors.LIGHT_SURFACE,
            "surface_alt": BrandColors.LIGHT_SURFACE_ALT,
            "border": BrandColors.LIGHT_BORDER,
            "text": BrandColors.LIGHT_TEXT,
            "text_sec": BrandColors.LIGHT_TEXT_SEC,
            **common,
        }

    _apply_style(app, pal_def, font_size)
