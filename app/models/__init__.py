# app/models/__init__.py
from .config_model import UserConfig
from .game_options_model import GameClient, GameOptions, SimpleOption
from .keybinding_model import KeyBinding
from .preset_model import Clouds, Graphics, Particles, Preset, Profile, builtin_presets

__all__ = [
    "UserConfig",
    "GameClient",
    "GameOptions",
    "SimpleOption",
    "KeyBinding",
    "Clouds",
    "Graphics",
    "Particles",
    "Preset",
    "Profile",
    "builtin_presets",
]
