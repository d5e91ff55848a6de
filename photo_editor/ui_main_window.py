from __future__ import annotations

import os

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent, QPixmap
from PySide6.QtWidgets import (
    QApplication,
    QFileDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from .app.workflow import WorkflowController
from .encoder import UploadedFile
from .image_info import read_image_info
from .image_refs import ImageRef
from .logger import get_logger
from .ops.file_operations import OPEN_FILTER, SAVE_FILTER, save_image_ref, suggest_result_name
from .settings_manager import SettingsManager
from .ui_widgets import BusyOverlay, ImagePanel, OptionsSelector, UploadBox

_logger = get_logger("ui_main")

PROCESS_TEXT = "Enhance My Photo"
PROCESSING_TEXT = "Processing..."


class PhotoEditorWindow(QMainWindow):
    """Main window. Reads WorkflowState and forwards user intents to the controller."""

    def __init__(self, controller: WorkflowController, settings: SettingsManager, parent: QWidget | None = None):
        super().__init__(parent)
        self.setWindowTitle("Photo Editor")
        self.resize(1100, 900)

        self._controller = controller
        self._settings = settings
        self._pixmaps: dict[int, QPixmap] = {}
        self._cursor_overridden = False
        controller.registry.add_release_listener(self._on_ref_released)

        self._build_ui()
        self._bind_state()
        self._sync_from_state()

    # ---- layout ----
    def _build_ui(self) -> None:
        central = QWidget()
        root = QVBoxLayout(central)
        root.setContentsMargins(24, 24, 24, 24)
        root.setSpacing(16)

        title = QLabel("Photo Editor")
        title.setObjectName("title")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        subtitle = QLabel("Transform your photos into professional portraits with a single click.")
        subtitle.setObjectName("subtitle")
        subtitle.setAlignment(Qt.AlignmentFlag.AlignCenter)
        root.addWidget(title)
        root.addWidget(subtitle)

        top = QHBoxLayout()
        self.upload_box = UploadBox()
        top.addWidget(self.upload_box, 1)

        side = QVBoxLayout()
        self.options = OptionsSelector(self._controller.state.option)
        self.process_button = QPushButton(PROCESS_TEXT)
        self.process_button.setObjectName("processButton")
        side.addWidget(self.options)
        side.addWidget(self.process_button)
        side.addStretch()
        top.addLayout(side, 1)
        root.addLayout(top)

        self.error_banner = QLabel("")
        self.error_banner.setObjectName("errorBanner")
        self.error_banner.setWordWrap(True)
        self.error_banner.hide()
        root.addWidget(self.error_banner)

        line = QFrame()
        line.setFrameShape(QFrame.Shape.HLine)
        root.addWidget(line)

        panels = QHBoxLayout()
        self.original_panel = ImagePanel("Original Photo", "Upload a photo to start")
        self.result_panel = ImagePanel("Professional Photo", "Your enhanced photo will appear here")
        panels.addWidget(self.original_panel, 1)
        panels.addWidget(self.result_panel, 1)
        root.addLayout(panels, 1)

        self.download_button = QPushButton("Download")
        self.download_button.setObjectName("downloadButton")
        self.download_button.hide()
        root.addWidget(self.download_button, 0, Qt.AlignmentFlag.AlignRight)

        self.setCentralWidget(central)
        self.busy_overlay = BusyOverlay(central)

        self.upload_box.browseRequested.connect(self.browse_image)
        self.upload_box.fileDropped.connect(self.open_image)
        self.options.optionChanged.connect(self._controller.on_select_option)
        self.process_button.clicked.connect(self._on_process_clicked)
        self.download_button.clicked.connect(self.download_result)

    def _bind_state(self) -> None:
        state = self._controller.state
        state.previewRefChanged.connect(self._on_preview_changed)
        state.resultRefChanged.connect(self._on_result_changed)
        state.lastErrorChanged.connect(self._on_error_changed)
        state.isProcessingChanged.connect(self._on_processing_changed)
        state.canProcessChanged.connect(self.process_button.setEnabled)
        state.selectedOptionChanged.connect(self.options.set_selected)

    def _sync_from_state(self) -> None:
        snap = self._controller.state.snapshot()
        self._on_preview_changed(snap.preview_ref)
        self._on_result_changed(snap.result_ref)
        self._on_error_changed(snap.last_error or "")
        self._on_processing_changed(snap.is_processing)
        self.process_button.setEnabled(self._controller.can_process)

    # ---- rendering ----
    def _pixmap_for(self, ref: ImageRef | None) -> QPixmap | None:
        if ref is None:
            return None
        pix = self._pixmaps.get(ref.key)
        if pix is not None:
            return pix
        try:
            data = self._controller.registry.resolve(ref)
        except (KeyError, OSError, ValueError) as e:
            _logger.warning("cannot render %s ref #%d: %s", ref.kind, ref.key, e)
            return None
        pix = QPixmap()
        if not pix.loadFromData(data):
            _logger.warning("%s ref #%d is not a displayable image", ref.kind, ref.key)
            return None
        self._pixmaps[ref.key] = pix
        return pix

    def _on_ref_released(self, ref: ImageRef) -> None:
        self._pixmaps.pop(ref.key, None)

    def _on_preview_changed(self, ref: object) -> None:
        preview = ref if isinstance(ref, ImageRef) else None
        pix = self._pixmap_for(preview)
        caption = ""
        if preview is not None and preview.local_path:
            info = read_image_info(preview.local_path)
            caption = info.caption() if info else ""
        self.upload_box.set_preview(pix)
        self.original_panel.set_pixmap(pix, caption)

    def _on_result_changed(self, ref: object) -> None:
        result = ref if isinstance(ref, ImageRef) else None
        pix = self._pixmap_for(result)
        self.result_panel.set_pixmap(pix)
        self.download_button.setVisible(pix is not None)

    def _on_error_changed(self, message: str) -> None:
        self.error_banner.setText(f"Error\n{message}" if message else "")
        self.error_banner.setVisible(bool(message))

    def _on_processing_changed(self, running: bool) -> None:
        self.process_button.setText(PROCESSING_TEXT if running else PROCESS_TEXT)
        if running:
            self.busy_overlay.show_over_parent()
            if not self._cursor_overridden:
                QApplication.setOverrideCursor(Qt.CursorShape.WaitCursor)
                self._cursor_overridden = True
        else:
            self.busy_overlay.hide()
            self._restore_cursor()

    def _restore_cursor(self) -> None:
        if self._cursor_overridden:
            QApplication.restoreOverrideCursor()
            self._cursor_overridden = False

    # ---- user actions ----
    def _on_process_clicked(self) -> None:
        self._controller.trigger_process()

    def browse_image(self) -> None:
        start_dir = self._settings.last_open_dir or ""
        path, _ = QFileDialog.getOpenFileName(self, "Choose a photo", start_dir, OPEN_FILTER)
        if path:
            self.open_image(path)

    def open_image(self, path: str) -> None:
        if not os.path.isfile(path):
            _logger.warning("ignoring missing file: %s", path)
            return
        self._settings.set("last_open_dir", path)
        self._controller.on_upload(UploadedFile.from_path(path))

    def download_result(self) -> None:
        ref = self._controller.state.snapshot().result_ref
        if ref is None:
            return
        upload = self._controller.upload
        name = suggest_result_name(upload.name if upload else None)
        start = os.path.join(self._settings.last_save_dir or "", name)
        path, _ = QFileDialog.getSaveFileName(self, "Save enhanced photo", start, SAVE_FILTER)
        if not path:
            return
        try:
            saved = save_image_ref(self._controller.registry, ref, path)
        except (KeyError, OSError, ValueError) as e:
            _logger.error("save failed: %s", e)
            QMessageBox.warning(self, "Save failed", f"Could not save the image:\n{e}")
            return
        self._settings.set("last_save_dir", str(saved))

    def closeEvent(self, event: QCloseEvent) -> None:
        self._restore_cursor()
        self._controller.shutdown()
        super().closeEvent(event)
