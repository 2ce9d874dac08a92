# Main.py
import sys
from pathlib import Path
from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QApplication
from qfluentwidgets import setTheme, Theme
from app.utils.logger_utils import logger, reconfigure_logger

# Import core constants
from app.core.constants import (
    APP_NAME,
    APP_VERSION,
    CONFIG_FILE_NAME,
    CYCLE_KEY_CATEGORY,
    CYCLE_KEY_ID,
    DEFAULT_CYCLE_KEY,
    LOG_DIR_NAME,
    ORG_NAME,
)

# Import models
from app.models.keybinding_model import KeyBinding

# Import services
from app.services import (
    ConfigService,
    ContextStateStore,
    CycleController,
    GameService,
    HudToast,
    OptionApplier,
    OptionsFileService,
    TickService,
)

# Import view models
from app.viewmodels import MainWindowViewModel, PresetEditorViewModel

# Import the main view
from app.views.main_window import MainWindow


def main():
    """The main entry point for the application."""

    # --- 1. Qt Application Setup ---
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv)
    app.setOrganizationName(ORG_NAME)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)
    setTheme(Theme.DARK)

    # ---2. Composition Root: Create and Wire All Dependencies ---
    try:
        app_path = Path(".")
        config_path = app_path / CONFIG_FILE_NAME
        log_path = app_path / LOG_DIR_NAME

        log_path.mkdir(parents=True, exist_ok=True)
        reconfigure_logger(log_path)
        logger.info("Application starting...")

        # ---Instantiate Services ---
        config_service = ConfigService(config_path)
        game_service = GameService()
        options_file_service = OptionsFileService()
        context_store = ContextStateStore()
        toast = HudToast()
        applier = OptionApplier()

        key_binding = KeyBinding(
            binding_id=CYCLE_KEY_ID,
            default_key=DEFAULT_CYCLE_KEY,
            category=CYCLE_KEY_CATEGORY,
        )
        cycle_controller = CycleController(
            config_service=config_service,
            applier=applier,
            context_store=context_store,
            toast=toast,
            key_binding=key_binding,
        )
        tick_service = TickService()

        logger.info("Core services initialized.")
    except Exception as e:
        logger.critical(f"Failed to initialize core components: {e}", exc_info=True)
        return 1

    # ---Instantiate ViewModels ---
    main_window_vm = MainWindowViewModel(
        config_service=config_service,
        game_service=game_service,
        options_file_service=options_file_service,
        cycle_controller=cycle_controller,
        context_store=context_store,
    )
    editor_vm = PresetEditorViewModel(config_service=config_service)

    # ---3. Instantiate the main window ---
    try:
        window = MainWindow(main_view_model=main_window_vm, editor_view_model=editor_vm)
        window.show()
        logger.debug("Main Window shown.")
    except Exception as e:
        logger.critical(f"Failed to initialize or show Main Window: {e}", exc_info=True)
        return 1

    # ---4. Host loop: key polling at end of tick, overlay every frame ---
    tick_service.register_end_tick(main_window_vm.on_tick)
    tick_service.register_frame(window.hud_overlay.on_frame)
    tick_service.start()

    # Start Application Event Loop
    logger.info("Entering event loop...")
    try:
        exit_code = app.exec()
        logger.info(f"Application exiting with code {exit_code}")
    except Exception as e:
        logger.critical(
            f"Unhandled exception in application event loop: {e}", exc_info=True
        )
        sys.exit(1)
    finally:
        tick_service.stop()
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
