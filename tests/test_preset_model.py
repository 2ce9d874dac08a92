# tests/test_preset_model.py
import dataclasses

import pytest

from app.models.preset_model import (
    BUILD,
    COMBAT,
    EXPLORE,
    Clouds,
    Graphics,
    Particles,
    Preset,
    Profile,
    builtin_presets,
)


def test_builtin_presets_order_and_ids():
    presets = builtin_presets()
    assert [p.id for p in presets] == ["build", "explore", "combat"]
    assert [p.name for p in presets] == ["Build", "Explore", "Combat"]


def test_builtin_profiles_values():
    assert BUILD.render_distance == 8
    assert BUILD.max_fps == 80
    assert BUILD.particles is Particles.MINIMAL
    assert EXPLORE.render_distance == 12
    assert EXPLORE.clouds is Clouds.FAST
    assert COMBAT.max_fps == 260
    assert not COMBAT.vsync
    assert all(p.graphics is Graphics.FAST for p in (BUILD, EXPLORE, COMBAT))


def test_profile_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        EXPLORE.render_distance = 4


def test_profile_to_dict_stores_enum_names():
    data = COMBAT.to_dict()
    assert data["graphics"] == "FAST"
    assert data["clouds"] == "OFF"
    assert data["max_fps"] == 260
    assert Profile.from_dict(data) == COMBAT


def test_from_dict_missing_fields_use_explore():
    profile = Profile.from_dict({"render_distance": 20})
    assert profile.render_distance == 20
    assert profile.max_fps == EXPLORE.max_fps
    assert profile.particles is EXPLORE.particles


def test_from_dict_malformed_fields_fall_back():
    profile = Profile.from_dict(
        {"graphics": "ULTRA", "vsync": "yes", "max_fps": True, "entity_distance_scaling": 2}
    )
    assert profile.graphics is EXPLORE.graphics
    assert profile.vsync is EXPLORE.vsync
    assert profile.max_fps == EXPLORE.max_fps
    assert profile.entity_distance_scaling == 2.0


def test_from_dict_keeps_out_of_range_values():
    # Clamping happens when applying, not when loading
    profile = Profile.from_dict({"simulation_distance": 2, "max_fps": 1000})
    assert profile.simulation_distance == 2
    assert profile.max_fps == 1000


def test_from_dict_enum_names_are_case_insensitive():
    assert Profile.from_dict({"graphics": "fabulous"}).graphics is Graphics.FABULOUS


def test_preset_gets_unique_id():
    a, b = Preset(name="A"), Preset(name="B")
    assert a.id != b.id
    assert a.to_dict()["profile"] == Profile().to_dict()


@pytest.mark.parametrize("field_name, raw", [
    ("max_fps", float("inf")),
    ("render_distance", float("-inf")),
    ("mipmap_levels", float("nan")),
    ("entity_distance_scaling", float("inf")),
    ("distortion_effects_scale", float("nan")),
])
def test_from_dict_non_finite_numbers_fall_back(field_name, raw):
    profile = Profile.from_dict({**BUILD.to_dict(), field_name: raw})

    assert getattr(profile, field_name) == getattr(EXPLORE, field_name)
    assert profile.graphics is BUILD.graphics
