# app/services/__init__.py
from .config_service import ConfigService, ConfigSaveError
from .context_state_service import ContextStateStore
from .cycle_service import CycleController, CycleOutcome
from .game_service import GameService
from .hud_toast_service import HudToast
from .option_applier import ApplyResult, OptionApplier
from .options_file_service import OptionsFileService, OptionsWriteError
from .tick_service import TickService

__all__ = [
    "ConfigService",
    "ConfigSaveError",
    "ContextStateStore",
    "CycleController",
    "CycleOutcome",
    "GameService",
    "HudToast",
    "ApplyResult",
    "OptionApplier",
    "OptionsFileService",
    "OptionsWriteError",
    "TickService",
]
