# app/viewmodels/preset_editor_vm.py

import dataclasses
from PyQt6.QtCore import QObject, pyqtSignal

from app.core.constants import DEFAULT_CYCLE_KEY, UNLIMITED_FPS
from app.models.config_model import UserConfig
from app.models.preset_model import Preset, Profile
from app.services.config_service import ConfigService, ConfigSaveError
from app.utils.logger_utils import logger

RESET_CONTEXT = "reset_presets"
DELETE_CONTEXT = "delete_preset"


class PresetEditorViewModel(QObject):
    """
    Manages the state and logic for the transactional preset editor.
    Edits happen on a temporary copy and are only written on save.
    """

    # ---Signals for UI & Cross-ViewModel Communication ---

    presets_list_refreshed = pyqtSignal(list)  # list[dict]
    cycle_key_refreshed = pyqtSignal(str)
    config_updated = pyqtSignal()
    toast_requested = pyqtSignal(str, str)  # message, level
    confirmation_requested = pyqtSignal(dict)
    error_dialog_requested = pyqtSignal(str, str)  # title, message

    def __init__(self, config_service: ConfigService):
        super().__init__()
        # ---Injected Services ---
        self.config_service = config_service

        # ---Transactional State ---
        self.original_config: UserConfig | None = None
        self.temp_presets: list[Preset] = []
        self.temp_default_id: str | None = None
        self.temp_cycle_key: str = DEFAULT_CYCLE_KEY

    # ---Public Methods (API for the View) ---

    def load_current_config(self, config: UserConfig):
        """Loads the current config into a temporary state for editing."""
        logger.info("Loading current configuration into PresetEditorViewModel.")
        self.original_config = config
        self.temp_presets = list(config.presets)
        self.temp_default_id = config.default_preset_id
        self.temp_cycle_key = config.cycle_key

        self._refresh_view()
        self.cycle_key_refreshed.emit(self.temp_cycle_key)

    def has_unsaved_changes(self) -> bool:
        if self.original_config is None:
            return bool(self.temp_presets)
        return (
            self.temp_presets != list(self.original_config.presets)
            or self.temp_default_id != self.original_config.default_preset_id
            or self.temp_cycle_key != self.original_config.cycle_key
        )

    def save_all_changes(self) -> bool:
        """
        Validates temporary changes and saves them to disk via ConfigService.
        Returns True on success, False on failure.
        """
        logger.info("Attempting to save all preset changes.")

        # ---1. Final Validation ---
        names = [p.name.strip().lower() for p in self.temp_presets]
        if any(not n for n in names):
            self._validation_error("Cannot save: Every preset needs a name.")
            return False
        if len(names) != len(set(names)):
            self._validation_error(
                "Cannot save: Duplicate preset names found. Please ensure all preset names are unique."
            )
            return False

        default_id = self.temp_default_id
        if not any(p.id == default_id for p in self.temp_presets):
            default_id = self.temp_presets[0].id if self.temp_presets else None

        # ---2. Create New Config State ---
        if not self.original_config:
            new_config = UserConfig(
                presets=list(self.temp_presets),
                default_preset_id=default_id,
                cycle_key=self.temp_cycle_key,
            )
        else:
            new_config = dataclasses.replace(
                self.original_config,
                presets=list(self.temp_presets),
                default_preset_id=default_id,
                cycle_key=self.temp_cycle_key,
            )

        # ---3. Transactional Save ---
        try:
            self.config_service.save_config(new_config)
            self.original_config = new_config
            self.temp_default_id = default_id
            self.config_updated.emit()
            return True
        except ConfigSaveError as e:
            logger.critical(f"Failed to save configuration: {e}", exc_info=True)
            self.error_dialog_requested.emit(
                "Save Error", f"Failed to save configuration file.\n\nReason: {e}"
            )
            return False

    # ---Preset Management ---

    def add_preset(self, name: str, profile: Profile) -> Preset | None:
        """Appends a new preset at the end of the cycle order."""
        name = name.strip()
        if not self._name_is_available(name):
            return None

        preset = Preset(name=name, profile=profile)
        self.temp_presets.append(preset)
        if self.temp_default_id is None:
            self.temp_default_id = preset.id
        logger.info(f"Added preset '{name}' to temporary list.")
        self._refresh_view()
        return preset

    def update_preset(self, preset_id: str, new_name: str, new_profile: Profile):
        """Edits a preset in the temporary list."""
        preset_to_update = next((p for p in self.temp_presets if p.id == preset_id), None)
        if not preset_to_update:
            logger.warning(f"Could not find preset with ID {preset_id} to update.")
            return

        new_name = new_name.strip()
        if not self._name_is_available(new_name, ignore_id=preset_id):
            return

        index = self.temp_presets.index(preset_to_update)
        self.temp_presets[index] = Preset(id=preset_id, name=new_name, profile=new_profile)
        logger.info(f"Updated preset '{new_name}' in temporary list.")
        self._refresh_view()

    def request_remove_preset(self, preset_id: str):
        """Asks the view to confirm the deletion of a preset."""
        preset = next((p for p in self.temp_presets if p.id == preset_id), None)
        if not preset:
            self.toast_requested.emit("Could not find the selected preset to remove.", "error")
            return
        self.confirmation_requested.emit({
            "title": "Delete Preset",
            "text": f"Delete the preset '{preset.name}'?\n\nThis change will be permanent after you click 'Save'.",
            "context": {"action": DELETE_CONTEXT, "preset_id": preset_id},
        })

    def remove_temp_preset(self, preset_id: str):
        """Removes a preset from the temporary list."""
        preset_to_remove = next((p for p in self.temp_presets if p.id == preset_id), None)
        if not preset_to_remove:
            logger.warning(f"Attempted to remove a preset with ID '{preset_id}' that does not exist.")
            self.toast_requested.emit("Could not find the selected preset to remove.", "error")
            return

        index = self.temp_presets.index(preset_to_remove)
        self.temp_presets.remove(preset_to_remove)
        logger.info(f"Removed preset '{preset_to_remove.name}' from temporary list.")

        if self.temp_default_id == preset_id:
            # The next preset in cycle order takes over
            if self.temp_presets:
                self.temp_default_id = self.temp_presets[index % len(self.temp_presets)].id
            else:
                self.temp_default_id = None
        self._refresh_view()

    def move_preset(self, preset_id: str, offset: int):
        """Moves a preset up (-1) or down (+1) in the cycle order."""
        index = next((i for i, p in enumerate(self.temp_presets) if p.id == preset_id), None)
        if index is None:
            return
        new_index = index + offset
        if not 0 <= new_index < len(self.temp_presets):
            return
        preset = self.temp_presets.pop(index)
        self.temp_presets.insert(new_index, preset)
        self._refresh_view()

    def set_default(self, preset_id: str):
        if not any(p.id == preset_id for p in self.temp_presets):
            logger.warning(f"Cannot make unknown preset '{preset_id}' the default.")
            return
        self.temp_default_id = preset_id
        self._refresh_view()

    def set_temp_cycle_key(self, key: str):
        """Updates the temporary cycle key when the user rebinds it."""
        self.temp_cycle_key = key.strip() or DEFAULT_CYCLE_KEY
        logger.debug(f"Temporary cycle key set to: {self.temp_cycle_key}")
        self.cycle_key_refreshed.emit(self.temp_cycle_key)

    # ---Reset to Built-ins ---

    def request_reset(self):
        """Asks the view to confirm the destructive reset."""
        self.confirmation_requested.emit({
            "title": "Reset Presets",
            "text": "Replace all presets with the built-in Build, Explore and Combat presets?\n\n"
                    "Your current presets file is moved to the recycle bin.",
            "context": {"action": RESET_CONTEXT},
        })

    def on_confirmation_result(self, result: bool, context: dict):
        """Handles the result of a confirmation dialog."""
        action = context.get("action")
        if not result:
            self.toast_requested.emit("Cancelled.", "info")
            return

        if action == DELETE_CONTEXT:
            self.remove_temp_preset(context.get("preset_id"))
        elif action == RESET_CONTEXT:
            self._reset_to_defaults()
        else:
            logger.warning(f"Unknown confirmation action: {action}")

    def _reset_to_defaults(self):
        try:
            new_config = self.config_service.reset_to_defaults()
        except ConfigSaveError as e:
            logger.critical(f"Failed to reset presets: {e}", exc_info=True)
            self.error_dialog_requested.emit("Reset Error", f"Failed to reset presets.\n\nReason: {e}")
            return
        self.load_current_config(new_config)
        self.config_updated.emit()
        self.toast_requested.emit("Presets reset to built-ins.", "success")

    # ---Helpers ---

    def _name_is_available(self, name: str, ignore_id: str | None = None) -> bool:
        if not name:
            self.toast_requested.emit("Preset name cannot be empty.", "warning")
            return False
        existing = {p.name.lower() for p in self.temp_presets if p.id != ignore_id}
        if name.lower() in existing:
            self.toast_requested.emit(f"Preset '{name}' already exists.", "warning")
            return False
        return True

    def _validation_error(self, message: str):
        logger.error(message)
        self.error_dialog_requested.emit("Validation Error", message)

    def _refresh_view(self):
        view_data = [
            {
                "id": p.id,
                "name": p.name,
                "is_default": p.id == self.temp_default_id,
                "summary": _summarize(p.profile),
            }
            for p in self.temp_presets
        ]
        self.presets_list_refreshed.emit(view_data)


def _summarize(profile: Profile) -> str:
    fps = "Unlimited" if profile.max_fps >= UNLIMITED_FPS else str(profile.max_fps)
    return (
        f"{profile.render_distance} chunks · {profile.graphics.value} · "
        f"{profile.particles.value} particles · {fps} FPS"
    )
