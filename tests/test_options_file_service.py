# tests/test_options_file_service.py
import pytest

from app.models.game_options_model import (
    AmbientOcclusion,
    CloudRenderMode,
    GameOptions,
    GraphicsMode,
)
from app.services.options_file_service import OptionsFileService, OptionsWriteError

SAMPLE = [
    "version:3465",
    "renderDistance:10",
    "graphicsMode:2",
    'renderClouds:"fast"',
    "ao:true",
    "key_key.attack:key.mouse.left",
    "maxFps:bogus",
    "entityDistanceScaling:1.5",
]


@pytest.fixture
def service():
    return OptionsFileService()


@pytest.fixture
def options_path(tmp_path):
    path = tmp_path / "options.txt"
    path.write_text("\n".join(SAMPLE) + "\n", encoding="utf-8")
    return path


def test_load_parses_known_keys(service, options_path):
    options = service.load(options_path)

    assert options.get_view_distance().get_value() == 10
    assert options.get_graphics_mode().get_value() is GraphicsMode.FABULOUS
    assert options.get_cloud_render_mode().get_value() is CloudRenderMode.FAST
    assert options.get_ao().get_value() is AmbientOcclusion.MAX
    assert options.get_entity_distance_scaling().get_value() == 1.5


def test_invalid_value_keeps_default(service, options_path):
    assert service.load(options_path).get_max_fps().get_value() == 120


@pytest.mark.parametrize("raw, expected", [
    ("false", AmbientOcclusion.OFF),
    ("0", AmbientOcclusion.OFF),
    ("1", AmbientOcclusion.MIN),
    ("2", AmbientOcclusion.MAX),
])
def test_ambient_occlusion_formats(service, tmp_path, raw, expected):
    path = tmp_path / "options.txt"
    path.write_text(f"ao:{raw}\n", encoding="utf-8")
    assert service.load(path).get_ao().get_value() is expected


def test_write_preserves_unknown_lines_and_order(service, options_path):
    options = service.load(options_path)
    options.get_view_distance().set_value(6)
    options.get_ao().set_value(AmbientOcclusion.OFF)
    options.get_cloud_render_mode().set_value(CloudRenderMode.OFF)

    options.write()

    lines = options_path.read_text(encoding="utf-8").splitlines()
    assert lines[:8] == [
        "version:3465",
        "renderDistance:6",
        "graphicsMode:2",
        'renderClouds:"false"',
        "ao:false",
        "key_key.attack:key.mouse.left",
        "maxFps:120",
        "entityDistanceScaling:1.5",
    ]
    # Keys missing from the file are appended
    assert "simulationDistance:12" in lines[8:]
    assert "enableVsync:true" in lines[8:]
    assert len(lines) == len(GameOptions().all_options()) + 2


def test_written_file_reloads_to_same_values(service, options_path):
    options = service.load(options_path)
    options.get_particles().set_value(options.get_particles().value_type["MINIMAL"])
    options.write()

    reloaded = service.load(options_path)
    assert [o.get_value() for o in reloaded.all_options()] == [o.get_value() for o in options.all_options()]


def test_missing_file_gives_defaults_and_is_created_on_write(service, tmp_path):
    path = tmp_path / "new" / "options.txt"
    options = service.load(path)
    assert options.get_view_distance().get_value() == 12

    options.write()

    assert path.is_file()
    assert "renderDistance:12" in path.read_text(encoding="utf-8").splitlines()


def test_write_failure_raises(service, tmp_path):
    path = tmp_path / "options.txt"
    options = service.load(path)
    path.mkdir()

    with pytest.raises(OptionsWriteError):
        options.write()


@pytest.mark.parametrize("line", ["renderDistance:inf", "renderDistance:-inf", "entityDistanceScaling:nan"])
def test_non_finite_value_keeps_default_and_line(service, tmp_path, line):
    path = tmp_path / "options.txt"
    path.write_text(f"{line}\nmaxFps:90\n", encoding="utf-8")
    defaults = GameOptions()

    options = service.load(path)

    assert options.get_max_fps().get_value() == 90
    assert options.get_view_distance().get_value() == defaults.get_view_distance().get_value()
    assert (
        options.get_entity_distance_scaling().get_value()
        == defaults.get_entity_distance_scaling().get_value()
    )
    assert line in options.source_lines
