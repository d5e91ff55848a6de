from __future__ import annotations

from PySide6.QtCore import QEvent, QObject, Qt, Signal
from PySide6.QtGui import QDragEnterEvent, QDropEvent, QMouseEvent, QPixmap, QResizeEvent
from PySide6.QtWidgets import (
    QButtonGroup,
    QGroupBox,
    QLabel,
    QRadioButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from .ops.file_operations import is_supported_image
from .options import BackgroundOption

UPLOAD_HINT = "Click to upload or drag and drop\nPNG, JPG, WEBP up to 10MB"


def _scaled(pixmap: QPixmap, target: QWidget, margin: int = 8) -> QPixmap:
    w = max(1, target.width() - margin * 2)
    h = max(1, target.height() - margin * 2)
    return pixmap.scaled(w, h, Qt.AspectRatioMode.KeepAspectRatio, Qt.TransformationMode.SmoothTransformation)


class UploadBox(QLabel):
    """Drop zone + click-to-browse. Shows the preview once a file is chosen."""

    fileDropped = Signal(str)
    browseRequested = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("uploadBox")
        self.setAcceptDrops(True)
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setMinimumHeight(256)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setProperty("dragging", False)
        self._pixmap: QPixmap | None = None
        self.setText(UPLOAD_HINT)

    def set_preview(self, pixmap: QPixmap | None) -> None:
        self._pixmap = pixmap if pixmap is not None and not pixmap.isNull() else None
        if self._pixmap is None:
            self.clear()
            self.setText(UPLOAD_HINT)
        else:
            self.setPixmap(_scaled(self._pixmap, self))

    def _set_dragging(self, dragging: bool) -> None:
        self.setProperty("dragging", dragging)
        # Re-polish so the [dragging="true"] selector applies.
        self.style().unpolish(self)
        self.style().polish(self)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self.browseRequested.emit()
        super().mouseReleaseEvent(event)

    def dragEnterEvent(self, event: QDragEnterEvent) -> None:
        if event.mimeData().hasUrls():
            self._set_dragging(True)
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragLeaveEvent(self, event: QEvent) -> None:
        self._set_dragging(False)
        super().dragLeaveEvent(event)

    def dropEvent(self, event: QDropEvent) -> None:
        self._set_dragging(False)
        for url in event.mimeData().urls():
            if url.isLocalFile() and is_supported_image(url.toLocalFile()):
                self.fileDropped.emit(url.toLocalFile())
                event.acceptProposedAction()
                return
        event.ignore()

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        if self._pixmap is not None:
            self.setPixmap(_scaled(self._pixmap, self))


class OptionsSelector(QGroupBox):
    """Background style radio cards, one per BackgroundOption."""

    optionChanged = Signal(str)

    def __init__(self, selected: BackgroundOption, parent: QWidget | None = None) -> None:
        super().__init__("Background Style", parent)
        self._group = QButtonGroup(self)
        self._buttons: dict[BackgroundOption, QRadioButton] = {}

        layout = QVBoxLayout(self)
        for option in BackgroundOption:
            btn = QRadioButton(f"{option.label}\n{option.description}")
            btn.setObjectName("optionCard")
            btn.setProperty("option", option.value)
            self._group.addButton(btn)
            self._buttons[option] = btn
            layout.addWidget(btn)

        self.set_selected(selected)
        self._group.buttonToggled.connect(self._on_toggled)

    def _on_toggled(self, button: QRadioButton, checked: bool) -> None:
        if checked:
            self.optionChanged.emit(str(button.property("option")))

    def set_selected(self, option: BackgroundOption | str) -> None:
        btn = self._buttons[BackgroundOption(option)]
        if not btn.isChecked():
            btn.setChecked(True)

    def button_for(self, option: BackgroundOption | str) -> QRadioButton:
        return self._buttons[BackgroundOption(option)]


class ImagePanel(QWidget):
    """Titled image slot with a placeholder text when empty."""

    def __init__(self, title: str, placeholder: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._placeholder = placeholder
        self._pixmap: QPixmap | None = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self.title_label = QLabel(title)
        self.title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.image_label = QLabel(placeholder)
        self.image_label.setObjectName("imagePanel")
        self.image_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.image_label.setMinimumSize(280, 280)
        self.image_label.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.image_label.installEventFilter(self)
        self.caption_label = QLabel("")
        self.caption_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.caption_label.setObjectName("subtitle")

        layout.addWidget(self.title_label)
        layout.addWidget(self.image_label, 1)
        layout.addWidget(self.caption_label)

    @property
    def has_image(self) -> bool:
        return self._pixmap is not None

    def set_pixmap(self, pixmap: QPixmap | None, caption: str = "") -> None:
        self._pixmap = pixmap if pixmap is not None and not pixmap.isNull() else None
        if self._pixmap is None:
            self.image_label.clear()
            self.image_label.setText(self._placeholder)
        else:
            self.image_label.setPixmap(_scaled(self._pixmap, self.image_label))
        self.caption_label.setText(caption if self._pixmap is not None else "")

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if watched is self.image_label and event.type() == QEvent.Type.Resize and self._pixmap is not None:
            self.image_label.setPixmap(_scaled(self._pixmap, self.image_label))
        return super().eventFilter(watched, event)


class BusyOverlay(QWidget):
    """Dimmed cover over the parent window while an attempt is running."""

    def __init__(self, parent: QWidget) -> None:
        super().__init__(parent)
        self.setObjectName("busyOverlay")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        layout = QVBoxLayout(self)
        self.text_label = QLabel("Enhancing your photo, please wait...")
        self.text_label.setObjectName("busyText")
        self.text_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addStretch()
        layout.addWidget(self.text_label)
        layout.addStretch()
        parent.installEventFilter(self)
        self.hide()

    def show_over_parent(self) -> None:
        parent = self.parentWidget()
        if parent is not None:
            self.setGeometry(parent.rect())
        self.raise_()
        self.show()

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if watched is self.parentWidget() and event.type() == QEvent.Type.Resize and self.isVisible():
            self.setGeometry(self.parentWidget().rect())
        return super().eventFilter(watched, event)
