# app/models/preset_model.py
from __future__ import annotations
from dataclasses import dataclass, field, fields
from enum import Enum
import math
import uuid


class Graphics(Enum):
    """Graphics quality levels available in presets."""

    FAST = "Fast"
    FANCY = "Fancy"
    FABULOUS = "Fabulous"


class Particles(Enum):
    """Particle rendering levels available in presets."""

    MINIMAL = "Minimal"
    DECREASED = "Decreased"
    ALL = "All"


class Clouds(Enum):
    """Cloud rendering modes available in presets."""

    OFF = "Off"
    FAST = "Fast"
    FANCY = "Fancy"


@dataclass(frozen=True)
class Profile:
    """
    A complete set of performance settings owned by a preset. Immutable.

    Values are stored as the user entered them. Range clamping happens when
    the profile is applied to the game, so an old or hand-edited config can
    never push an invalid value into the game's options.
    """

    render_distance: int = 12  # chunks, 2-32
    simulation_distance: int = 12  # chunks, 5-32
    graphics: Graphics = Graphics.FAST
    particles: Particles = Particles.DECREASED
    clouds: Clouds = Clouds.FAST
    smooth_lighting: bool = True
    vsync: bool = True
    entity_shadows: bool = True
    entity_distance_scaling: float = 1.0  # 0.5-5.0
    mipmap_levels: int = 2  # 0-4
    biome_blend_radius: int = 2  # 0-7
    view_bobbing: bool = True
    distortion_effects_scale: float = 0.0  # 0.0-1.0
    max_fps: int = 120  # 5-260, 260 = unlimited

    def to_dict(self) -> dict:
        """Serializes the profile to plain JSON types. Enums are stored by member name."""
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            data[f.name] = value.name if isinstance(value, Enum) else value
        return data

    @classmethod
    def from_dict(cls, data: dict, fallback: Profile | None = None) -> Profile:
        """
        Builds a profile from a JSON dictionary. Missing or malformed fields
        take their value from `fallback` (the Explore profile by default).
        """
        base = fallback or EXPLORE
        kwargs = {}
        for f in fields(cls):
            default = getattr(base, f.name)
            raw = data.get(f.name, default)
            try:
                kwargs[f.name] = _coerce_field(default, raw)
            except (KeyError, TypeError, ValueError, OverflowError):
                kwargs[f.name] = default
        return cls(**kwargs)


def _coerce_field(default, raw):
    """Converts a raw JSON value into the type of `default`."""
    if isinstance(default, Enum):
        if isinstance(raw, type(default)):
            return raw
        return type(default)[str(raw).upper()]
    # bool must be checked before int since bool is an int subclass
    if isinstance(default, bool):
        if not isinstance(raw, bool):
            raise TypeError(f"Expected a boolean, got {raw!r}")
        return raw
    if isinstance(default, int):
        if isinstance(raw, bool):
            raise TypeError(f"Expected an integer, got {raw!r}")
        return int(raw)
    if isinstance(default, float):
        if isinstance(raw, bool):
            raise TypeError(f"Expected a number, got {raw!r}")
        value = float(raw)
        if not math.isfinite(value):
            raise ValueError(f"Expected a finite number, got {raw!r}")
        return value
    return raw


@dataclass(frozen=True)
class Preset:
    """A named, user-editable bundle of performance settings."""

    name: str
    profile: Profile = field(default_factory=Profile)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "profile": self.profile.to_dict()}


# --- Built-in Profiles ---

# Lower render distance and minimal effects while building
BUILD = Profile(
    render_distance=8,
    simulation_distance=8,
    graphics=Graphics.FAST,
    particles=Particles.MINIMAL,
    clouds=Clouds.OFF,
    smooth_lighting=False,
    vsync=False,
    entity_shadows=False,
    entity_distance_scaling=0.75,
    mipmap_levels=2,
    biome_blend_radius=0,
    view_bobbing=False,
    distortion_effects_scale=0.0,
    max_fps=80,
)

# Balanced settings for exploring
EXPLORE = Profile(
    render_distance=12,
    simulation_distance=12,
    graphics=Graphics.FAST,
    particles=Particles.DECREASED,
    clouds=Clouds.FAST,
    smooth_lighting=True,
    vsync=True,
    entity_shadows=True,
    entity_distance_scaling=1.0,
    mipmap_levels=2,
    biome_blend_radius=2,
    view_bobbing=True,
    distortion_effects_scale=0.0,
    max_fps=120,
)

# Maximum performance and unlimited FPS for PvP
COMBAT = Profile(
    render_distance=8,
    simulation_distance=8,
    graphics=Graphics.FAST,
    particles=Particles.MINIMAL,
    clouds=Clouds.OFF,
    smooth_lighting=False,
    vsync=False,
    entity_shadows=False,
    entity_distance_scaling=1.0,
    mipmap_levels=2,
    biome_blend_radius=0,
    view_bobbing=False,
    distortion_effects_scale=0.0,
    max_fps=260,
)


def builtin_presets() -> list[Preset]:
    """Returns fresh copies of the three built-in presets in cycle order."""
    return [
        Preset(id="build", name="Build", profile=BUILD),
        Preset(id="explore", name="Explore", profile=EXPLORE),
        Preset(id="combat", name="Combat", profile=COMBAT),
    ]
