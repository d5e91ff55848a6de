from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import Property, QObject, Signal

from photo_editor.image_refs import ImageRef
from photo_editor.options import DEFAULT_OPTION, BackgroundOption


@dataclass(frozen=True, slots=True)
class WorkflowSnapshot:
    has_source: bool
    preview_ref: ImageRef | None
    result_ref: ImageRef | None
    selected_option: BackgroundOption
    is_processing: bool
    last_error: str | None


class WorkflowState(QObject):
    """State bound by the editor UI.

    Read-only for views; only WorkflowController calls the `_set_*` helpers.
    Empty strings stand for "none" on the string properties.
    """

    hasSourceChanged = Signal(bool)
    previewRefChanged = Signal(object)
    resultRefChanged = Signal(object)
    selectedOptionChanged = Signal(str)
    isProcessingChanged = Signal(bool)
    lastErrorChanged = Signal(str)
    canProcessChanged = Signal(bool)

    def __init__(self, parent: QObject | None = None, option: BackgroundOption = DEFAULT_OPTION) -> None:
        super().__init__(parent)
        self._has_source = False
        self._preview_ref: ImageRef | None = None
        self._result_ref: ImageRef | None = None
        self._selected_option = BackgroundOption(option)
        self._is_processing = False
        self._last_error: str | None = None

    # ---- read-only properties (mutate via controller) ----
    def _get_has_source(self) -> bool:
        return bool(self._has_source)

    hasSource = Property(bool, _get_has_source, notify=hasSourceChanged)  # type: ignore[arg-type]

    def _get_preview_ref(self) -> ImageRef | None:
        return self._preview_ref

    previewRef = Property(object, _get_preview_ref, notify=previewRefChanged)  # type: ignore[arg-type]

    def _get_preview_url(self) -> str:
        return self._preview_ref.url if self._preview_ref else ""

    previewUrl = Property(str, _get_preview_url, notify=previewRefChanged)  # type: ignore[arg-type]

    def _get_result_ref(self) -> ImageRef | None:
        return self._result_ref

    resultRef = Property(object, _get_result_ref, notify=resultRefChanged)  # type: ignore[arg-type]

    def _get_result_url(self) -> str:
        return self._result_ref.url if self._result_ref else ""

    resultUrl = Property(str, _get_result_url, notify=resultRefChanged)  # type: ignore[arg-type]

    def _get_selected_option(self) -> str:
        return self._selected_option.value

    selectedOption = Property(str, _get_selected_option, notify=selectedOptionChanged)  # type: ignore[arg-type]

    def _get_is_processing(self) -> bool:
        return bool(self._is_processing)

    isProcessing = Property(bool, _get_is_processing, notify=isProcessingChanged)  # type: ignore[arg-type]

    def _get_last_error(self) -> str:
        return self._last_error or ""

    lastError = Property(str, _get_last_error, notify=lastErrorChanged)  # type: ignore[arg-type]

    def _get_can_process(self) -> bool:
        return self._has_source and not self._is_processing

    canProcess = Property(bool, _get_can_process, notify=canProcessChanged)  # type: ignore[arg-type]

    @property
    def option(self) -> BackgroundOption:
        return self._selected_option

    def snapshot(self) -> WorkflowSnapshot:
        return WorkflowSnapshot(
            has_source=self._has_source,
            preview_ref=self._preview_ref,
            result_ref=self._result_ref,
            selected_option=self._selected_option,
            is_processing=self._is_processing,
            last_error=self._last_error,
        )

    # ---- internal mutation helpers (called by controller) ----
    def _set_has_source(self, value: bool) -> None:
        v = bool(value)
        if v == self._has_source:
            return
        can_before = self._get_can_process()
        self._has_source = v
        self.hasSourceChanged.emit(v)
        self._emit_can_process(can_before)

    def _set_preview_ref(self, ref: ImageRef | None) -> None:
        if ref == self._preview_ref:
            return
        self._preview_ref = ref
        self.previewRefChanged.emit(ref)

    def _set_result_ref(self, ref: ImageRef | None) -> None:
        if ref == self._result_ref:
            return
        self._result_ref = ref
        self.resultRefChanged.emit(ref)

    def _set_selected_option(self, option: BackgroundOption | str) -> None:
        o = BackgroundOption(option)
        if o == self._selected_option:
            return
        self._selected_option = o
        self.selectedOptionChanged.emit(o.value)

    def _set_is_processing(self, value: bool) -> None:
        v = bool(value)
        if v == self._is_processing:
            return
        can_before = self._get_can_process()
        self._is_processing = v
        self.isProcessingChanged.emit(v)
        self._emit_can_process(can_before)

    def _set_last_error(self, message: str | None) -> None:
        m = message or None
        if m == self._last_error:
            return
        self._last_error = m
        self.lastErrorChanged.emit(m or "")

    def _emit_can_process(self, before: bool) -> None:
        after = self._get_can_process()
        if after != before:
            self.canProcessChanged.emit(after)
