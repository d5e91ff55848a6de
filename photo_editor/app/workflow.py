"""Upload → enhance workflow.

The controller owns a WorkflowState and is the only thing that mutates it.
Views call the three intents (`on_upload`, `on_select_option`,
`trigger_process`) and bind to the state's properties.

Processing runs on a worker pool. Every upload and every attempt bumps a
generation counter; a completion is applied only if it still carries the
current generation, so a late result from a superseded upload or attempt can
never overwrite newer state.
"""

from __future__ import annotations

import base64
import binascii
from concurrent.futures import Executor, ThreadPoolExecutor

from PySide6.QtCore import QObject, Signal, Slot

from photo_editor.app.state.workflow_state import WorkflowState
from photo_editor.encoder import UploadedFile, encode_file
from photo_editor.errors import RemoteError, ValidationError, WorkflowError
from photo_editor.image_refs import ImageRef, ImageRefRegistry
from photo_editor.logger import get_logger
from photo_editor.options import DEFAULT_OPTION, BackgroundOption, build_instruction
from photo_editor.remote import ImageTransformer

_logger = get_logger("workflow")

NO_SOURCE_MESSAGE = "Please upload an image first."
GENERIC_ERROR_MESSAGE = "An unexpected error occurred."
RESULT_MIME = "image/png"


def _validate_result(payload: str) -> str:
    if not isinstance(payload, str) or not payload.strip():
        raise RemoteError("The service returned an empty image.")
    # MIME-style base64 may be wrapped across lines.
    payload = "".join(payload.split())
    try:
        base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise RemoteError("The service returned an unreadable image.") from e
    return payload


class WorkflowController(QObject):
    # generation, result payload (base64) or None, error message or None
    attemptFinished = Signal(int, object, object)

    def __init__(
        self,
        transformer: ImageTransformer,
        state: WorkflowState | None = None,
        registry: ImageRefRegistry | None = None,
        executor: Executor | None = None,
        default_option: BackgroundOption | str = DEFAULT_OPTION,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._transformer = transformer
        self._state = state or WorkflowState(self, option=BackgroundOption(default_option))
        self._registry = registry or ImageRefRegistry()
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="photo-editor-remote")

        self._upload: UploadedFile | None = None
        self._generation = 0
        self._closed = False

        self.attemptFinished.connect(self._on_attempt_finished)

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def registry(self) -> ImageRefRegistry:
        return self._registry

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def upload(self) -> UploadedFile | None:
        return self._upload

    @property
    def can_process(self) -> bool:
        return self._upload is not None and not self._state._get_is_processing()

    # ---- intents ----
    def on_upload(self, upload: UploadedFile) -> None:
        """Replace the source image; any in-flight attempt becomes stale."""
        if self._closed:
            _logger.debug("upload ignored after shutdown: %s", upload.name)
            return
        self._generation += 1
        _logger.info("upload %s (%s) gen=%d", upload.name, upload.mime_type, self._generation)

        old_preview = self._state._get_preview_ref()
        self._upload = upload
        self._replace_result(None)
        self._state._set_preview_ref(self._registry.create_file_ref(upload.path, upload.mime_type))
        self._registry.release(old_preview)
        self._state._set_last_error(None)
        self._state._set_is_processing(False)
        self._state._set_has_source(True)

    def on_select_option(self, option: BackgroundOption | str) -> None:
        # The option only affects the next run; an existing result is kept.
        self._state._set_selected_option(option)

    def trigger_process(self) -> bool:
        """Start an attempt. Returns False when nothing was started."""
        if self._closed:
            _logger.debug("process requested after shutdown")
            return False
        try:
            upload = self._require_source()
        except ValidationError as e:
            _logger.debug("process requested without a source image")
            self._state._set_last_error(str(e))
            return False
        if self._state._get_is_processing():
            _logger.debug("process requested while gen=%d is still running", self._generation)
            return False

        self._generation += 1
        generation = self._generation
        instruction = build_instruction(self._state.option)

        self._state._set_is_processing(True)
        self._state._set_last_error(None)
        self._replace_result(None)

        _logger.info("attempt gen=%d option=%s file=%s", generation, self._state.option.value, upload.name)
        try:
            self._executor.submit(self._run_attempt, generation, upload, instruction)
        except RuntimeError as e:
            # Injected executor was shut down by its owner.
            _logger.exception("submit failed for gen=%d", generation)
            self._state._set_last_error(str(e) or GENERIC_ERROR_MESSAGE)
            self._state._set_is_processing(False)
            return False
        return True

    def _require_source(self) -> UploadedFile:
        if self._upload is None:
            raise ValidationError(NO_SOURCE_MESSAGE)
        return self._upload

    def shutdown(self) -> None:
        """Drop all handles and stop accepting completions."""
        if self._closed:
            return
        self._closed = True
        self._generation += 1
        self._state._set_is_processing(False)
        self._state._set_preview_ref(None)
        self._upload = None
        self._state._set_has_source(False)
        self._state._set_result_ref(None)
        self._registry.release_all()
        self._executor.shutdown(wait=False, cancel_futures=True)

    # ---- worker side ----
    def _run_attempt(self, generation: int, upload: UploadedFile, instruction: str) -> None:
        """Runs on the worker pool; must not touch state."""
        try:
            payload = encode_file(upload)
            result = self._transformer.process_image(payload.data, payload.mime_type, instruction)
            result = _validate_result(result)
        except WorkflowError as e:
            _logger.warning("attempt gen=%d failed: %s", generation, e)
            self.attemptFinished.emit(generation, None, str(e) or GENERIC_ERROR_MESSAGE)
            return
        except Exception as e:
            _logger.exception("attempt gen=%d raised", generation)
            self.attemptFinished.emit(generation, None, str(e) or GENERIC_ERROR_MESSAGE)
            return
        self.attemptFinished.emit(generation, result, None)

    # ---- main-thread completion ----
    @Slot(int, object, object)
    def _on_attempt_finished(self, generation: int, payload: object, error: object) -> None:
        self._finish(generation, payload, error)

    def _finish(self, generation: int, payload: object, error: object) -> None:
        if generation != self._generation or self._closed:
            _logger.debug("discarding stale completion gen=%d (current=%d)", generation, self._generation)
            return

        if error is not None or payload is None:
            message = str(error or GENERIC_ERROR_MESSAGE)
            self._state._set_last_error(message)
            self._replace_result(None)
            _logger.info("attempt gen=%d failed: %s", generation, message)
        else:
            self._state._set_last_error(None)
            self._replace_result(self._registry.create_data_ref(str(payload), RESULT_MIME))
            _logger.info("attempt gen=%d succeeded", generation)
        self._state._set_is_processing(False)

    def _replace_result(self, ref: ImageRef | None) -> None:
        old = self._state._get_result_ref()
        self._state._set_result_ref(ref)
        if old is not None and old != ref:
            self._registry.release(old)
