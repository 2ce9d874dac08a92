# app/models/game_options_model.py
"""
The game's live options object, as loaded from its options file.

Each setting is a `SimpleOption` handle with `get_value()` / `set_value()`.
`GameOptions` exposes one getter per handle and a `write()` routine that
persists every handle back to the game's storage.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import math
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")


class GraphicsMode(Enum):
    FAST = 0
    FANCY = 1
    FABULOUS = 2


class ParticlesMode(Enum):
    ALL = 0
    DECREASED = 1
    MINIMAL = 2


class CloudRenderMode(Enum):
    OFF = "false"
    FAST = "fast"
    FANCY = "true"


class AmbientOcclusion(Enum):
    OFF = 0
    MIN = 1
    MAX = 2


class SimpleOption(Generic[T]):
    """A single typed game option. Rejects values of the wrong type or out of range."""

    def __init__(
        self,
        key: str,
        default: T,
        minimum: Any = None,
        maximum: Any = None,
    ):
        self.key = key
        self.default = default
        self.value_type = type(default)
        self.minimum = minimum
        self.maximum = maximum
        self._value: T = default

    def get_value(self) -> T:
        return self._value

    def set_value(self, value: T):
        self._value = self._validate(value)

    def _validate(self, value: Any) -> T:
        if self.value_type is bool:
            if not isinstance(value, bool):
                raise TypeError(f"Option '{self.key}' expects a boolean, got {value!r}")
        elif self.value_type is float:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise TypeError(f"Option '{self.key}' expects a number, got {value!r}")
            value = float(value)
            if not math.isfinite(value):
                raise ValueError(f"Option '{self.key}' expects a finite number, got {value!r}")
        elif self.value_type is int:
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"Option '{self.key}' expects an integer, got {value!r}")
        elif not isinstance(value, self.value_type):
            raise TypeError(
                f"Option '{self.key}' expects {self.value_type.__name__}, got {value!r}"
            )

        if self.minimum is not None and value < self.minimum:
            raise ValueError(f"Option '{self.key}' value {value} is below {self.minimum}")
        if self.maximum is not None and value > self.maximum:
            raise ValueError(f"Option '{self.key}' value {value} is above {self.maximum}")
        return value

    def __repr__(self):
        return f"SimpleOption({self.key}={self._value!r})"


class GameOptions:
    """The game's options. `write()` flushes every option through the bound writer."""

    def __init__(self, writer: Callable[[GameOptions], None] | None = None):
        self._writer = writer

        self._view_distance = SimpleOption("renderDistance", 12, 2, 32)
        self._simulation_distance = SimpleOption("simulationDistance", 12, 5, 32)
        self._graphics_mode = SimpleOption("graphicsMode", GraphicsMode.FANCY)
        self._particles = SimpleOption("particles", ParticlesMode.ALL)
        self._cloud_render_mode = SimpleOption("renderClouds", CloudRenderMode.FANCY)
        self._ao = SimpleOption("ao", AmbientOcclusion.MAX)
        self._enable_vsync = SimpleOption("enableVsync", True)
        self._entity_shadows = SimpleOption("entityShadows", True)
        self._entity_distance_scaling = SimpleOption("entityDistanceScaling", 1.0, 0.5, 5.0)
        self._mipmap_levels = SimpleOption("mipmapLevels", 4, 0, 4)
        self._biome_blend_radius = SimpleOption("biomeBlendRadius", 2, 0, 7)
        self._bob_view = SimpleOption("bobView", True)
        self._distortion_effect_scale = SimpleOption("screenEffectScale", 1.0, 0.0, 1.0)
        self._max_fps = SimpleOption("maxFps", 120, 5, 260)

        # Lines of the options file as last read or written. Keys this object
        # doesn't model are written back untouched, in their original order.
        self.source_lines: list[str] = []

    # --- Option Getters ---
    def get_view_distance(self) -> SimpleOption[int]:
        return self._view_distance

    def get_simulation_distance(self) -> SimpleOption[int]:
        return self._simulation_distance

    def get_graphics_mode(self) -> SimpleOption[GraphicsMode]:
        return self._graphics_mode

    def get_particles(self) -> SimpleOption[ParticlesMode]:
        return self._particles

    def get_cloud_render_mode(self) -> SimpleOption[CloudRenderMode]:
        return self._cloud_render_mode

    def get_ao(self) -> SimpleOption[AmbientOcclusion]:
        return self._ao

    def get_enable_vsync(self) -> SimpleOption[bool]:
        return self._enable_vsync

    def get_entity_shadows(self) -> SimpleOption[bool]:
        return self._entity_shadows

    def get_entity_distance_scaling(self) -> SimpleOption[float]:
        return self._entity_distance_scaling

    def get_mipmap_levels(self) -> SimpleOption[int]:
        return self._mipmap_levels

    def get_biome_blend_radius(self) -> SimpleOption[int]:
        return self._biome_blend_radius

    def get_bob_view(self) -> SimpleOption[bool]:
        return self._bob_view

    def get_distortion_effect_scale(self) -> SimpleOption[float]:
        return self._distortion_effect_scale

    def get_max_fps(self) -> SimpleOption[int]:
        return self._max_fps

    def all_options(self) -> list[SimpleOption]:
        """Every modelled option, in options-file order."""
        return [
            self._view_distance,
            self._simulation_distance,
            self._graphics_mode,
            self._particles,
            self._cloud_render_mode,
            self._ao,
            self._enable_vsync,
            self._entity_shadows,
            self._entity_distance_scaling,
            self._mipmap_levels,
            self._biome_blend_radius,
            self._bob_view,
            self._distortion_effect_scale,
            self._max_fps,
        ]

    def by_key(self, key: str) -> SimpleOption | None:
        return next((o for o in self.all_options() if o.key == key), None)

    def write(self):
        """Persists all options to the game's storage."""
        if self._writer is not None:
            self._writer(self)


@dataclass
class GameClient:
    """
    The running game as seen by this app: its live options and the world
    currently loaded (None on the title screen).
    """

    options: Any
    world: str | None = None

    @property
    def in_world(self) -> bool:
        return self.world is not None
