# app/services/cycle_service.py
import dataclasses
from enum import Enum, auto

from app.core.constants import (
    DEFERRED_APPLIED_NOTICE,
    DEFERRED_NOTICE,
    PRESET_TOAST_PREFIX,
)
from app.models.keybinding_model import KeyBinding
from app.models.preset_model import Preset, Profile
from app.services.config_service import ConfigService, ConfigSaveError
from app.services.context_state_service import ContextStateStore
from app.services.hud_toast_service import HudToast
from app.services.option_applier import ApplyResult, OptionApplier
from app.utils.logger_utils import logger


class ControllerState(Enum):
    IDLE = auto()
    APPLYING = auto()


@dataclasses.dataclass(frozen=True)
class CycleOutcome:
    """A preset that was made active, and how its settings were applied."""

    preset: Preset
    result: ApplyResult


class CycleController:
    """
    Moves the active preset forward on each key press and applies it.

    All work happens synchronously on the caller's thread, so the controller
    returns to IDLE before `cycle()` returns.
    """

    def __init__(
        self,
        config_service: ConfigService,
        applier: OptionApplier,
        context_store: ContextStateStore,
        toast: HudToast,
        key_binding: KeyBinding,
    ):
        # --- Injected Services ---
        self.config_service = config_service
        self.applier = applier
        self.context_store = context_store
        self.toast = toast
        self.key_binding = key_binding

        # --- Internal State ---
        self.state = ControllerState.IDLE
        self._pending_profile: Profile | None = None

    @property
    def has_pending(self) -> bool:
        """True while some settings wait for the player to leave the world."""
        return self._pending_profile is not None

    def cycle(self, client) -> CycleOutcome | None:
        """
        Advances the default preset to the next one in cycle order, saves the
        configuration and applies the preset. Does nothing without presets.
        """
        if self.state is not ControllerState.IDLE:
            return None

        config = self.config_service.load_or_create()
        if not config.presets:
            logger.debug("Cycle requested with no presets configured. Ignoring.")
            return None

        # An unknown default counts as the first preset
        index = max(config.index_of(config.default_preset_id), 0)
        next_preset = config.presets[(index + 1) % len(config.presets)]
        logger.info(f"Cycling preset: '{config.default_preset_id}' -> '{next_preset.id}'")
        return self._activate(client, config, next_preset)

    def apply_preset(self, client, preset_id: str) -> CycleOutcome | None:
        """Makes the given preset the default and applies it, without cycling."""
        if self.state is not ControllerState.IDLE:
            return None

        config = self.config_service.load_or_create()
        preset = config.find_preset(preset_id)
        if preset is None:
            logger.warning(f"Cannot apply unknown preset '{preset_id}'.")
            return None
        return self._activate(client, config, preset)

    def on_tick(self, client) -> list[CycleOutcome]:
        """
        End-of-tick callback. Handles every key press since the last tick and
        applies queued settings once no world is loaded.
        """
        outcomes = []
        while self.key_binding.was_pressed():
            outcome = self.cycle(client)
            if outcome is not None:
                outcomes.append(outcome)

        if self._pending_profile is not None and client is not None and not client.in_world:
            result = self.applier.apply_deferred(client, self._pending_profile)
            self._pending_profile = None
            if result.changed:
                logger.info(f"Applied queued settings: {', '.join(result.applied)}")
                self.toast.show(DEFERRED_APPLIED_NOTICE)
        return outcomes

    def _activate(self, client, config, preset: Preset) -> CycleOutcome:
        self.state = ControllerState.APPLYING
        try:
            new_config = dataclasses.replace(config, default_preset_id=preset.id)
            try:
                self.config_service.save_config(new_config)
            except ConfigSaveError as e:
                # The in-memory default has still moved on
                logger.error(f"Could not persist the new default preset: {e}")

            result = self.applier.apply(client, preset.profile)

            world = getattr(client, "world", None)
            if world is not None:
                self.context_store.put(world, preset.id)

            message = f"{PRESET_TOAST_PREFIX}{preset.name}"
            if result.has_deferred:
                self._pending_profile = preset.profile
                message += f" ({DEFERRED_NOTICE})"
            else:
                # A newer preset supersedes anything still queued
                self._pending_profile = None
            self.toast.show(message)

            return CycleOutcome(preset=preset, result=result)
        finally:
            self.state = ControllerState.IDLE
