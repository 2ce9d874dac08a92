# app/viewmodels/main_window_vm.py

import dataclasses
from enum import Enum, auto
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal, QThreadPool

from app.models.config_model import UserConfig
from app.models.game_options_model import GameClient
from app.services.config_service import ConfigService, ConfigSaveError
from app.services.context_state_service import ContextStateStore
from app.services.cycle_service import CycleController, CycleOutcome
from app.services.game_service import GameService
from app.services.options_file_service import OptionsFileService
from app.utils.async_utils import Worker
from app.utils.system_utils import SystemUtils
from app.utils.logger_utils import logger


class ToastLevel(Enum):
    INFO = auto()
    SUCCESS = auto()
    WARNING = auto()
    ERROR = auto()


class MainWindowViewModel(QObject):
    """
    Orchestrates high-level application state: the loaded configuration, the
    game client (options + current play context) and the preset cycle.
    """

    # ---Signals for Global UI Feedback ---
    toast_requested = pyqtSignal(str, ToastLevel)  # message, level
    editor_requested = pyqtSignal()

    # ---Signals for Preset UI ---
    presets_updated = pyqtSignal(list)  # list[dict]
    active_preset_changed = pyqtSignal(str)  # preset name
    cycle_key_changed = pyqtSignal(str)
    pending_state_changed = pyqtSignal(bool)

    # ---Signals for Game UI ---
    game_dir_changed = pyqtSignal(str)
    worlds_updated = pyqtSignal(list)  # list[str]
    context_changed = pyqtSignal(str)  # world name, "" on the title screen

    def __init__(
        self,
        config_service: ConfigService,
        game_service: GameService,
        options_file_service: OptionsFileService,
        cycle_controller: CycleController,
        context_store: ContextStateStore,
    ):
        super().__init__()

        # ---Injected Services ---
        self.config_service = config_service
        self.game_service = game_service
        self.options_file_service = options_file_service
        self.cycle_controller = cycle_controller
        self.context_store = context_store

        # ---Internal State ---
        self.config: Optional[UserConfig] = None
        self.client = GameClient(options=None)
        self._had_pending = False

    # ---Initialization ---

    def start_initial_load(self):
        """Kicks off the configuration load in a background thread."""
        logger.info("Starting initial configuration load...")

        worker = Worker(self.config_service.load_or_create)
        worker.signals.result.connect(self._on_load_config_finished)
        worker.signals.error.connect(self._on_load_config_error)

        thread_pool = QThreadPool.globalInstance()
        if thread_pool:
            thread_pool.start(worker)
        else:
            logger.critical("Could not retrieve the global QThreadPool instance.")
            self._on_load_config_finished(self.config_service.load_or_create())

    def _on_load_config_finished(self, config: UserConfig):
        logger.info(f"Configuration ready with {len(config.presets)} presets.")
        self._apply_config(config)

        if config.game_dir:
            self._load_game_dir(Path(config.game_dir))

    def _on_load_config_error(self, error_info: tuple):
        exctype, value, tb = error_info
        logger.critical(f"Failed to load configuration: {value}\n{tb}")
        self.toast_requested.emit(
            "Error loading configuration. See logs for details.", ToastLevel.ERROR
        )

    def refresh_from_config(self):
        """Re-reads the (cached) configuration after the editor saved it."""
        self._apply_config(self.config_service.load_or_create())

    def _apply_config(self, config: UserConfig):
        self.config = config
        self.cycle_controller.key_binding.rebind(config.cycle_key)
        self.cycle_key_changed.emit(self.cycle_controller.key_binding.key)
        self._emit_presets()

    # ---Game Directory & Play Context ---

    def set_game_dir(self, path: Path):
        """Selects the game directory whose options the presets are applied to."""
        info = self.game_service.inspect_game_dir(path)
        if not info.is_valid:
            self.toast_requested.emit(
                f"No options file or worlds found in '{path}'.", ToastLevel.WARNING
            )
            return

        self._load_game_dir(info.game_dir)

        if self.config is not None:
            new_config = dataclasses.replace(self.config, game_dir=str(info.game_dir))
            try:
                self.config_service.save_config(new_config)
            except ConfigSaveError as e:
                logger.error(f"Failed to remember game directory: {e}")
                self.toast_requested.emit("Could not save the game directory.", ToastLevel.ERROR)
            self.config = new_config

    def _load_game_dir(self, game_dir: Path):
        info = self.game_service.inspect_game_dir(game_dir)
        self.client.options = self.options_file_service.load(info.options_path)
        self.client.world = None
        self.game_dir_changed.emit(str(info.game_dir))
        self.worlds_updated.emit(info.worlds)
        self.context_changed.emit("")

    def set_context(self, world: str | None):
        """Sets the world currently being played; None means the title screen."""
        self.client.world = world or None
        logger.info(f"Play context changed to: {self.client.world or 'title screen'}")
        self.context_changed.emit(self.client.world or "")

        if self.client.world:
            last_preset_id = self.context_store.get(self.client.world)
            last_preset = self.config.find_preset(last_preset_id) if self.config else None
            if last_preset:
                self.toast_requested.emit(
                    f"Last preset used in '{self.client.world}': {last_preset.name}", ToastLevel.INFO
                )

    # ---Preset Cycle ---

    def on_cycle_key_pressed(self):
        """Queues a key press; it is handled on the next tick."""
        self.cycle_controller.key_binding.press()

    def on_tick(self):
        """End-of-tick callback."""
        for outcome in self.cycle_controller.on_tick(self.client):
            self._after_activation(outcome)
        self._emit_pending_state()

    def cycle_now(self):
        outcome = self.cycle_controller.cycle(self.client)
        if outcome is None:
            self.toast_requested.emit("There are no presets to cycle through.", ToastLevel.WARNING)
            return
        self._after_activation(outcome)
        self._emit_pending_state()

    def apply_preset(self, preset_id: str):
        outcome = self.cycle_controller.apply_preset(self.client, preset_id)
        if outcome is not None:
            self._after_activation(outcome)
            self._emit_pending_state()

    def request_editor(self):
        self.editor_requested.emit()

    def open_game_dir(self):
        if self.config is None or not self.config.game_dir:
            self.toast_requested.emit("No game directory selected.", ToastLevel.WARNING)
            return
        SystemUtils.open_path_in_explorer(Path(self.config.game_dir))

    def _after_activation(self, outcome: CycleOutcome):
        self.config = self.config_service.load_or_create()
        self.active_preset_changed.emit(outcome.preset.name)
        self._emit_presets()

        if self.client.options is None:
            self.toast_requested.emit(
                "No game directory selected. The preset was not applied.", ToastLevel.WARNING
            )
        elif outcome.result.failed:
            logger.warning(f"Some options could not be applied: {', '.join(outcome.result.failed)}")

    def _emit_presets(self):
        if self.config is None:
            return
        view_data = [
            {"id": p.id, "name": p.name, "is_default": p.id == self.config.default_preset_id}
            for p in self.config.presets
        ]
        self.presets_updated.emit(view_data)

    def _emit_pending_state(self):
        has_pending = self.cycle_controller.has_pending
        if has_pending != self._had_pending:
            self._had_pending = has_pending
            self.pending_state_changed.emit(has_pending)
