# app/services/option_applier.py
"""
Applies preset profiles to the game's live options object.

Every setting is written through an option handle (an object with
`get_value()` and a single-argument `set_value()`). Handles are resolved in
two tiers:

1. the direct getter for this game version, e.g. `options.get_view_distance()`;
2. when that getter is missing or raises, a lookup by name hints over the
   options object's `get*` methods and attributes (case-insensitive substring
   match, underscores ignored).

Values are clamped to the game's ranges before writing, and writes are
skipped when the option already holds the target value. VSync and mipmap
changes are deferred while a world is loaded, and Fabulous graphics is
replaced by Fancy in-world.
"""
from __future__ import annotations

import importlib
import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from app.core.constants import (
    BIOME_BLEND_RADIUS_RANGE,
    DISTORTION_EFFECTS_SCALE_RANGE,
    ENTITY_DISTANCE_SCALING_RANGE,
    MAX_FPS_RANGE,
    MIPMAP_LEVELS_RANGE,
    RENDER_DISTANCE_RANGE,
    SIMULATION_DISTANCE_RANGE,
)
from app.models.preset_model import Graphics, Profile
from app.utils.logger_utils import logger

SETTER_NAMES = ("set_value", "setValue")
VALUE_GETTER_NAMES = ("get_value", "getValue")
HOST_ENUM_MODULE = "app.models.game_options_model"


@dataclass(frozen=True)
class OptionBinding:
    """How one profile field reaches the game's options."""

    field: str
    getters: tuple[str, ...]
    hints: tuple[str, ...]
    value_range: tuple[Any, Any] | None = None
    enum_candidates: tuple[str, ...] = ()
    # May reload GPU resources, so never changed while a world is loaded
    deferred_in_world: bool = False


OPTION_BINDINGS: tuple[OptionBinding, ...] = (
    OptionBinding("render_distance", ("get_view_distance",), ("viewdistance", "renderdistance"), RENDER_DISTANCE_RANGE),
    OptionBinding("simulation_distance", ("get_simulation_distance",), ("simulationdistance",), SIMULATION_DISTANCE_RANGE),
    OptionBinding(
        "mipmap_levels", ("get_mipmap_levels",), ("mipmaplevels", "mipmaplevel"), MIPMAP_LEVELS_RANGE,
        deferred_in_world=True,
    ),
    OptionBinding("biome_blend_radius", ("get_biome_blend_radius",), ("biomeblendradius", "biomeblend"), BIOME_BLEND_RADIUS_RANGE),
    OptionBinding("max_fps", ("get_max_fps",), ("maxfps", "fps"), MAX_FPS_RANGE),
    OptionBinding(
        "entity_distance_scaling", ("get_entity_distance_scaling",),
        ("entitydistancescaling", "entitydistance"), ENTITY_DISTANCE_SCALING_RANGE,
    ),
    OptionBinding(
        "distortion_effects_scale", ("get_distortion_effect_scale",),
        ("distortioneffectscale", "distortioneffectsscale", "screeneffectscale"), DISTORTION_EFFECTS_SCALE_RANGE,
    ),
    OptionBinding("entity_shadows", ("get_entity_shadows",), ("entityshadows",)),
    OptionBinding("view_bobbing", ("get_bob_view",), ("bobview", "viewbobbing")),
    OptionBinding(
        "vsync", ("get_enable_vsync", "get_vsync_enabled", "get_vsync"), ("vsync",),
        deferred_in_world=True,
    ),
    OptionBinding(
        "graphics", ("get_graphics_mode",), ("graphicsmode", "graphics"),
        enum_candidates=(f"{HOST_ENUM_MODULE}:GraphicsMode",),
    ),
    OptionBinding(
        "particles", ("get_particles",), ("particles", "particle"),
        enum_candidates=(f"{HOST_ENUM_MODULE}:ParticlesMode",),
    ),
    OptionBinding(
        "clouds", ("get_cloud_render_mode",), ("cloudrendermode", "renderclouds", "clouds"),
        enum_candidates=(f"{HOST_ENUM_MODULE}:CloudRenderMode",),
    ),
    OptionBinding(
        "smooth_lighting", ("get_ao", "get_ambient_occlusion"), ("ambientocclusion", "ao", "smoothlighting"),
        enum_candidates=(f"{HOST_ENUM_MODULE}:AmbientOcclusion",),
    ),
)

DEFERRABLE_FIELDS: tuple[str, ...] = tuple(b.field for b in OPTION_BINDINGS if b.deferred_in_world)


@dataclass
class ApplyResult:
    """What happened to each profile field during one application."""

    applied: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    deferred: list[str] = field(default_factory=list)
    # field -> member name written instead of the profile's value
    substituted: dict[str, str] = field(default_factory=dict)
    failed: list[str] = field(default_factory=list)
    persisted: bool = False

    @property
    def has_deferred(self) -> bool:
        return bool(self.deferred)

    @property
    def changed(self) -> bool:
        return bool(self.applied)


class OptionApplier:
    """Writes a `Profile` onto a game client's options. Never raises."""

    def apply(self, client, profile: Profile | None, only: tuple[str, ...] | None = None) -> ApplyResult:
        """
        Applies `profile` to `client.options`. When `only` is given, fields
        outside it are left alone.
        """
        result = ApplyResult()
        options = getattr(client, "options", None)
        if client is None or options is None or profile is None:
            return result

        in_world = client.in_world

        for binding in OPTION_BINDINGS:
            if only is not None and binding.field not in only:
                continue
            try:
                self._apply_field(options, binding, profile, in_world, result)
            except Exception as e:
                logger.debug(f"Skipping option '{binding.field}': {e}")
                result.failed.append(binding.field)

        if result.changed:
            result.persisted = self._persist(options)

        logger.info(
            f"Applied {len(result.applied)} options "
            f"({len(result.unchanged)} unchanged, {len(result.deferred)} deferred, {len(result.failed)} failed)."
        )
        return result

    def apply_deferred(self, client, profile: Profile | None) -> ApplyResult:
        """Applies only the settings that are deferred while a world is loaded."""
        if getattr(client, "world", None) is not None:
            return ApplyResult()
        return self.apply(client, profile, only=DEFERRABLE_FIELDS)

    # --- Per-field Application ---

    def _apply_field(self, options, binding: OptionBinding, profile: Profile, in_world: bool, result: ApplyResult):
        target = self._target_value(binding, profile)

        if binding.field == "graphics" and in_world and target == Graphics.FABULOUS.name:
            # Fabulous resets the render pipeline, unsafe mid-session
            target = Graphics.FANCY.name
            result.substituted[binding.field] = target

        handles = self._resolve_handles(options, binding)
        if not handles:
            logger.debug(f"No option handle found for '{binding.field}'.")
            result.failed.append(binding.field)
            return

        for handle in handles:
            try:
                value = self._coerce(handle, binding, target)
                if _current_value(handle) == value:
                    result.unchanged.append(binding.field)
                    return
                if binding.deferred_in_world and in_world:
                    result.deferred.append(binding.field)
                    return
                _invoke_setter(handle, value)
                result.applied.append(binding.field)
                return
            except Exception as e:
                logger.debug(f"Option handle for '{binding.field}' rejected the value: {e}")

        result.failed.append(binding.field)

    @staticmethod
    def _target_value(binding: OptionBinding, profile: Profile):
        """The profile's value for this field, clamped and mapped to plain types."""
        if binding.field == "smooth_lighting":
            return "MAX" if profile.smooth_lighting else "OFF"

        value = getattr(profile, binding.field)
        if isinstance(value, Enum):
            return value.name
        if binding.value_range is not None:
            low, high = binding.value_range
            value = max(low, min(high, value))
            if isinstance(low, float):
                return float(value)
            return int(value)
        return value

    # --- Handle Resolution ---

    def _resolve_handles(self, options, binding: OptionBinding) -> list:
        """The direct handle (if any) first, then the name-hint match as a fallback."""
        handles = []
        direct = self._resolve_direct(options, binding)
        if direct is not None:
            handles.append(direct)
        fallback = self._find_by_hints(options, binding.hints)
        if fallback is not None and all(fallback is not h for h in handles):
            if direct is None:
                logger.debug(f"Resolved '{binding.field}' by name hints.")
            handles.append(fallback)
        return handles

    @staticmethod
    def _resolve_direct(options, binding: OptionBinding):
        for getter_name in binding.getters:
            getter = getattr(options, getter_name, None)
            if not callable(getter):
                continue
            try:
                handle = getter()
            except Exception as e:
                logger.debug(f"Direct getter '{getter_name}' failed: {e}")
                continue
            if _find_setter(handle) is not None:
                return handle
        return None

    @staticmethod
    def _find_by_hints(options, hints: tuple[str, ...]):
        """
        Looks for an option handle whose getter or attribute name contains one
        of the hints. Getters (`get*`, no arguments) are tried before attributes.
        """
        names = sorted(n for n in dir(options) if not n.startswith("__"))
        lowered_hints = [h.lower() for h in hints]

        def matches(name: str) -> bool:
            normalized = name.lower().replace("_", "")
            return any(h in normalized for h in lowered_hints)

        # 1) getters like get_xxx / getXxx
        for name in names:
            if not name.lower().startswith("get") or not matches(name):
                continue
            try:
                member = getattr(options, name)
                if not callable(member) or not _accepts_args(member, 0):
                    continue
                handle = member()
            except Exception:
                continue
            if _find_setter(handle) is not None:
                return handle

        # 2) attributes named like the hints
        for name in names:
            if not matches(name):
                continue
            try:
                handle = getattr(options, name)
            except Exception:
                continue
            if _find_setter(handle) is not None:
                return handle
        return None

    # --- Value Coercion ---

    @staticmethod
    def _coerce(handle, binding: OptionBinding, target):
        """Converts the target into the type the handle currently holds."""
        current = _current_value(handle)

        if isinstance(target, str) and binding.enum_candidates:
            if isinstance(current, bool):
                # Newer game versions model ambient occlusion as on/off
                return target != "OFF"
            if isinstance(current, Enum):
                return type(current)[target]
            for location in binding.enum_candidates:
                enum_cls = _load_enum(location)
                if enum_cls is not None and target in enum_cls.__members__:
                    return enum_cls[target]
            return target

        if isinstance(target, bool):
            return target
        if isinstance(current, float) and isinstance(target, int):
            return float(target)
        return target

    @staticmethod
    def _persist(options) -> bool:
        writer = getattr(options, "write", None)
        if not callable(writer):
            logger.debug("Options object has no write() routine. Skipping persist.")
            return False
        try:
            writer()
            return True
        except Exception as e:
            logger.warning(f"Failed to persist game options: {e}")
            return False


def _find_setter(handle):
    if handle is None:
        return None
    for name in SETTER_NAMES:
        setter = getattr(handle, name, None)
        if callable(setter) and _accepts_args(setter, 1):
            return setter
    return None


def _invoke_setter(handle, value):
    setter = _find_setter(handle)
    if setter is None:
        raise AttributeError(f"{type(handle).__name__} has no single-argument setter")
    setter(value)


def _current_value(handle):
    for name in VALUE_GETTER_NAMES:
        getter = getattr(handle, name, None)
        if callable(getter):
            try:
                return getter()
            except Exception:
                return None
    return None


def _accepts_args(fn, count: int) -> bool:
    """True if `fn` can be called with exactly `count` positional arguments."""
    try:
        inspect.signature(fn).bind(*([None] * count))
        return True
    except TypeError:
        return False
    except ValueError:
        # Builtins without a signature; assume they fit
        return True


def _load_enum(location: str):
    module_name, _, class_name = location.partition(":")
    try:
        enum_cls = getattr(importlib.import_module(module_name), class_name)
    except (ImportError, AttributeError):
        return None
    return enum_cls if isinstance(enum_cls, type) and issubclass(enum_cls, Enum) else None
