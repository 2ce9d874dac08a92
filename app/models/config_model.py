# app/models/config_model.py
from __future__ import annotations
from dataclasses import dataclass, field

from app.core.constants import DEFAULT_CYCLE_KEY
from app.models.preset_model import Preset


@dataclass(frozen=True)
class UserConfig:
    """
    Holds the user's entire configuration state. Immutable.
    The order of `presets` is the cycle order.
    """

    presets: list[Preset] = field(default_factory=list)
    default_preset_id: str | None = None

    # --- Global Settings ---
    cycle_key: str = DEFAULT_CYCLE_KEY
    game_dir: str | None = None

    def find_preset(self, preset_id: str | None) -> Preset | None:
        """Returns the preset with the given id, or None."""
        if preset_id is None:
            return None
        return next((p for p in self.presets if p.id == preset_id), None)

    def index_of(self, preset_id: str | None) -> int:
        """Index of the preset in cycle order, -1 when absent."""
        for i, preset in enumerate(self.presets):
            if preset.id == preset_id:
                return i
        return -1

    @property
    def default_preset(self) -> Preset | None:
        return self.find_preset(self.default_preset_id)
