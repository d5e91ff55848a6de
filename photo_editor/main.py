import os
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from photo_editor.app.workflow import WorkflowController
from photo_editor.logger import get_logger
from photo_editor.options import DEFAULT_OPTION, BackgroundOption
from photo_editor.remote.gemini_client import GeminiImageClient, load_env_file
from photo_editor.settings_manager import SettingsManager
from photo_editor.styles import apply_theme
from photo_editor.ui_main_window import PhotoEditorWindow

# --- CLI logging options -----------------------------------------------------
# To prevent Qt from exiting due to unknown options, we preemptively parse
# our own options, reflect them in environment variables (PHOTO_EDITOR_LOG_LEVEL,
# PHOTO_EDITOR_LOG_CATS), and remove them from sys.argv.


def _apply_cli_logging_options(argv: list[str]) -> list[str]:
    import argparse

    parser = argparse.ArgumentParser(description="Photo Editor", add_help=False)
    parser.add_argument("--log-level", help="Set log level")
    parser.add_argument("--log-cats", help="Set log categories")
    args, remaining = parser.parse_known_args(argv[1:])
    if args.log_level:
        os.environ["PHOTO_EDITOR_LOG_LEVEL"] = args.log_level
    if args.log_cats:
        os.environ["PHOTO_EDITOR_LOG_CATS"] = args.log_cats
    return [argv[0], *remaining]


_BASE_DIR = Path(getattr(sys, "_MEIPASS", Path(__file__).resolve().parent))


def _default_option(settings: SettingsManager) -> BackgroundOption:
    try:
        return BackgroundOption(settings.get("default_background"))
    except ValueError:
        return DEFAULT_OPTION


def build_controller(settings: SettingsManager) -> WorkflowController:
    client = GeminiImageClient(
        api_key=settings.api_key,
        model=settings.gemini_model,
        timeout_ms=settings.request_timeout_ms,
    )
    return WorkflowController(client, default_option=_default_option(settings))


def run(argv: list[str] | None = None) -> int:
    """Application entrypoint (packaging-friendly)."""
    import argparse

    if argv is None:
        argv = sys.argv
    argv = _apply_cli_logging_options(list(argv))
    logger = get_logger("main")

    # Optional start image, opened as if it had been uploaded.
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("start_path", nargs="?", help="Image file to open")
    args, _ = parser.parse_known_args(argv[1:])
    start_path = Path(args.start_path) if args.start_path else None

    load_env_file()
    settings = SettingsManager((_BASE_DIR / "settings.json").as_posix())

    app = QApplication(argv)
    apply_theme(app, str(settings.get("theme")), int(settings.get("font_size")))

    controller = build_controller(settings)
    window = PhotoEditorWindow(controller, settings)

    if start_path and start_path.is_file():
        window.open_image(str(start_path))
    elif start_path:
        logger.warning("start path is not a file: %s", start_path)

    window.show()
    logger.debug("model=%s default_option=%s", settings.gemini_model, controller.state.option.value)
    return app.exec()


if __name__ == "__main__":
    sys.exit(run())
