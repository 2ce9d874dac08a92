# tests/test_option_applier.py
import dataclasses

import pytest

from app.models.game_options_model import (
    AmbientOcclusion,
    CloudRenderMode,
    GameClient,
    GraphicsMode,
    ParticlesMode,
)
from app.models.preset_model import COMBAT, EXPLORE, Graphics
from app.services.option_applier import DEFERRABLE_FIELDS, OptionApplier


@pytest.fixture
def applier():
    return OptionApplier()


def test_apply_out_of_world_writes_every_field(applier, client, options):
    result = applier.apply(client, COMBAT)

    assert options.get_view_distance().get_value() == 8
    assert options.get_simulation_distance().get_value() == 8
    assert options.get_max_fps().get_value() == 260
    assert options.get_mipmap_levels().get_value() == 2
    assert options.get_biome_blend_radius().get_value() == 0
    assert options.get_distortion_effect_scale().get_value() == 0.0
    assert options.get_enable_vsync().get_value() is False
    assert options.get_entity_shadows().get_value() is False
    assert options.get_bob_view().get_value() is False
    assert options.get_graphics_mode().get_value() is GraphicsMode.FAST
    assert options.get_particles().get_value() is ParticlesMode.MINIMAL
    assert options.get_cloud_render_mode().get_value() is CloudRenderMode.OFF
    assert options.get_ao().get_value() is AmbientOcclusion.OFF

    assert result.unchanged == ["entity_distance_scaling"]
    assert not result.deferred
    assert not result.failed
    assert result.persisted
    assert options.write_count == 1


def test_simulation_distance_is_clamped_to_minimum(applier, client, options):
    profile = dataclasses.replace(EXPLORE, simulation_distance=2, render_distance=99, max_fps=1)
    applier.apply(client, profile)

    assert options.get_simulation_distance().get_value() == 5
    assert options.get_view_distance().get_value() == 32
    assert options.get_max_fps().get_value() == 5


def test_reapplying_same_profile_changes_nothing(applier, client, options):
    applier.apply(client, COMBAT)
    second = applier.apply(client, COMBAT)

    assert not second.applied
    assert not second.persisted
    assert options.write_count == 1


def test_smooth_lighting_on_maps_to_max(applier, client, options):
    options.get_ao().set_value(AmbientOcclusion.MIN)
    applier.apply(client, EXPLORE)
    assert options.get_ao().get_value() is AmbientOcclusion.MAX


def test_fabulous_becomes_fancy_in_world(applier, client, options):
    options.get_graphics_mode().set_value(GraphicsMode.FAST)
    client.world = "World 1"

    result = applier.apply(client, dataclasses.replace(EXPLORE, graphics=Graphics.FABULOUS))

    assert options.get_graphics_mode().get_value() is GraphicsMode.FANCY
    assert result.substituted == {"graphics": "FANCY"}
    assert "graphics" in result.applied
    assert options.write_count == 1


def test_fabulous_applies_out_of_world(applier, client, options):
    result = applier.apply(client, dataclasses.replace(EXPLORE, graphics=Graphics.FABULOUS))
    assert options.get_graphics_mode().get_value() is GraphicsMode.FABULOUS
    assert not result.substituted


def test_vsync_and_mipmap_are_deferred_in_world(applier, client, options):
    client.world = "World 1"

    result = applier.apply(client, COMBAT)

    assert sorted(result.deferred) == sorted(DEFERRABLE_FIELDS)
    assert options.get_enable_vsync().get_value() is True
    assert options.get_mipmap_levels().get_value() == 4
    # Everything else still applies immediately
    assert options.get_view_distance().get_value() == 8
    assert options.write_count == 1


def test_matching_values_are_not_deferred(applier, client, options):
    options.get_mipmap_levels().set_value(2)
    client.world = "World 1"

    result = applier.apply(client, EXPLORE)

    assert "mipmap_levels" in result.unchanged
    assert "vsync" in result.unchanged
    assert not result.has_deferred


def test_apply_deferred_waits_for_title_screen(applier, client, options):
    client.world = "World 1"
    applier.apply(client, COMBAT)

    assert not applier.apply_deferred(client, COMBAT).applied
    assert options.get_enable_vsync().get_value() is True

    client.world = None
    result = applier.apply_deferred(client, COMBAT)

    assert sorted(result.applied) == sorted(DEFERRABLE_FIELDS)
    assert options.get_enable_vsync().get_value() is False
    assert options.get_mipmap_levels().get_value() == 2


@pytest.mark.parametrize("client_obj", [None, GameClient(options=None)])
def test_missing_client_or_options_is_a_no_op(applier, client_obj):
    result = applier.apply(client_obj, COMBAT)
    assert not result.applied
    assert not result.failed


def test_missing_profile_is_a_no_op(applier, client, options):
    assert not applier.apply(client, None).applied
    assert options.write_count == 0


# --- Fallback lookup ---


class CamelOption:
    """An option handle using camelCase accessors."""

    def __init__(self, value):
        self._value = value

    def getValue(self):
        return self._value

    def setValue(self, value):
        self._value = value


class LegacyOptions:
    """An options object from a game version with different names."""

    def __init__(self):
        self.writes = 0
        self.simulation_distance_option = CamelOption(12)
        self._fps = CamelOption(60)
        self._smooth = CamelOption(True)
        self._render = CamelOption(12)

    def getRenderDistanceOption(self):
        return self._render

    def getFramerateLimit(self):
        return self._fps

    def getAmbientOcclusion(self):
        return self._smooth

    def write(self):
        self.writes += 1


def test_fallback_finds_options_by_name_hints(applier):
    options = LegacyOptions()
    client = GameClient(options=options)

    result = applier.apply(client, COMBAT)

    assert options.getRenderDistanceOption().getValue() == 8
    assert options.simulation_distance_option.getValue() == 8
    # Boolean ambient occlusion
    assert options.getAmbientOcclusion().getValue() is False
    # Attribute match: `_fps`
    assert options._fps.getValue() == 260
    assert "mipmap_levels" in result.failed
    assert options.writes == 1


class BrokenGetterOptions:
    """Direct getter raises, the handle is still reachable as an attribute."""

    def __init__(self, inner):
        self._inner = inner
        self.view_distance = inner.get_view_distance()

    def get_view_distance(self):
        raise RuntimeError("renamed in this version")

    def write(self):
        self._inner.write()


def test_fallback_used_when_direct_getter_raises(applier, options):
    client = GameClient(options=BrokenGetterOptions(options))

    result = applier.apply(client, COMBAT, only=("render_distance",))

    assert result.applied == ["render_distance"]
    assert options.get_view_distance().get_value() == 8
    assert options.write_count == 1


class RejectingOption:
    def get_value(self):
        return 12

    def set_value(self, value):
        raise ValueError("read-only")


def test_setter_failures_are_swallowed(applier, client, options, monkeypatch):
    monkeypatch.setattr(options, "get_view_distance", lambda: RejectingOption())
    monkeypatch.setattr(options, "_view_distance", RejectingOption())

    result = applier.apply(client, COMBAT)

    assert "render_distance" in result.failed
    assert "simulation_distance" in result.applied
    assert options.write_count == 1


class TwoArgSetter:
    def get_value(self):
        return 12

    def set_value(self, value, notify):
        pass


def test_handles_without_single_argument_setter_are_skipped(applier, client, options, monkeypatch):
    monkeypatch.setattr(options, "get_view_distance", lambda: TwoArgSetter())
    result = applier.apply(client, COMBAT, only=("render_distance",))
    # Falls back to the `_view_distance` attribute
    assert result.applied == ["render_distance"]
    assert options._view_distance.get_value() == 8


def test_write_failure_is_reported_not_raised(applier, client, options, monkeypatch):
    def broken_write():
        raise OSError("disk full")

    monkeypatch.setattr(options, "write", broken_write)
    result = applier.apply(client, COMBAT)

    assert result.changed
    assert not result.persisted


def test_client_in_world_follows_loaded_world(client):
    assert not client.in_world
    client.world = "World 1"
    assert client.in_world
    client.world = None
    assert not client.in_world
