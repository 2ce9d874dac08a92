# tests/test_cycle_service.py
import json

import pytest

from app.core.constants import DEFERRED_APPLIED_NOTICE, DEFERRED_NOTICE
from app.models.config_model import UserConfig
from app.models.keybinding_model import KeyBinding
from app.services.config_service import ConfigSaveError, ConfigService
from app.services.context_state_service import ContextStateStore
from app.services.cycle_service import ControllerState, CycleController
from app.services.hud_toast_service import HudToast
from app.services.option_applier import OptionApplier


class FixedClock:
    def __call__(self):
        return 0


class FailingConfigService(ConfigService):
    """Keeps the config in memory but can never write it."""

    def save_config(self, config: UserConfig):
        self._cached = config
        raise ConfigSaveError("disk full")


def make_controller(config_service):
    return CycleController(
        config_service=config_service,
        applier=OptionApplier(),
        context_store=ContextStateStore(),
        toast=HudToast(clock=FixedClock()),
        key_binding=KeyBinding(binding_id="key.presets.cycle", default_key="F9"),
    )


@pytest.fixture
def config_service(tmp_path, builtin_config):
    service = ConfigService(tmp_path / "presets.json")
    service.save_config(builtin_config)
    return service


@pytest.fixture
def controller(config_service):
    return make_controller(config_service)


def test_cycle_visits_every_preset_in_order(controller, config_service, client):
    visited = [controller.cycle(client).preset.id for _ in range(3)]

    assert visited == ["explore", "combat", "build"]
    saved = json.loads(config_service.config_path.read_text(encoding="utf-8"))
    assert saved["default_preset_id"] == "build"
    assert controller.state is ControllerState.IDLE


def test_cycle_with_no_presets_does_nothing(tmp_path, client, options):
    service = ConfigService(tmp_path / "presets.json")
    service.save_config(UserConfig(presets=[], default_preset_id=None))
    controller = make_controller(service)

    assert controller.cycle(client) is None
    assert controller.toast.current() is None
    assert options.write_count == 0


def test_unknown_default_counts_as_first(config_service, builtin_config, client):
    config_service.save_config(UserConfig(presets=builtin_config.presets, default_preset_id="gone"))
    controller = make_controller(config_service)

    assert controller.cycle(client).preset.id == "explore"


def test_cycle_applies_profile_and_shows_toast(controller, client, options):
    outcome = controller.cycle(client)

    assert outcome.preset.name == "Explore"
    assert options.get_view_distance().get_value() == 12
    assert options.get_mipmap_levels().get_value() == 2
    assert controller.toast.current() == "Preset: Explore"
    assert not controller.has_pending


def test_in_world_cycle_queues_deferred_settings(controller, client, options):
    client.world = "World 1"

    controller.cycle(client)

    assert controller.toast.current() == f"Preset: Explore ({DEFERRED_NOTICE})"
    assert controller.has_pending
    assert options.get_mipmap_levels().get_value() == 4
    assert controller.context_store.get("World 1") == "explore"

    # Still in the world: nothing happens
    controller.on_tick(client)
    assert options.get_mipmap_levels().get_value() == 4

    client.world = None
    controller.on_tick(client)

    assert options.get_mipmap_levels().get_value() == 2
    assert not controller.has_pending
    assert controller.toast.current() == DEFERRED_APPLIED_NOTICE


def test_later_preset_without_deferral_drops_queue(controller, client, options):
    client.world = "World 1"
    controller.cycle(client)  # Explore, mipmap queued
    options.get_mipmap_levels().set_value(2)
    options.get_enable_vsync().set_value(False)
    controller.cycle(client)  # Combat, nothing left to queue

    assert not controller.has_pending


def test_key_presses_are_handled_on_tick(controller, config_service, client):
    controller.key_binding.press()
    controller.key_binding.press()

    outcomes = controller.on_tick(client)

    assert [o.preset.id for o in outcomes] == ["explore", "combat"]
    assert config_service.load_or_create().default_preset_id == "combat"
    assert controller.on_tick(client) == []


def test_cycle_continues_when_save_fails(tmp_path, builtin_config, client, options):
    service = FailingConfigService(tmp_path / "presets.json")
    service._cached = builtin_config
    controller = make_controller(service)

    assert controller.cycle(client).preset.id == "explore"
    assert controller.cycle(client).preset.id == "combat"
    assert options.get_max_fps().get_value() == 260


def test_apply_preset_sets_default_without_cycling(controller, config_service, client):
    outcome = controller.apply_preset(client, "combat")

    assert outcome.preset.id == "combat"
    assert config_service.load_or_create().default_preset_id == "combat"
    assert controller.apply_preset(client, "missing") is None


def test_cycle_without_options_still_advances(controller, config_service):
    from app.models.game_options_model import GameClient

    outcome = controller.cycle(GameClient(options=None))

    assert outcome.preset.id == "explore"
    assert not outcome.result.applied
    assert config_service.load_or_create().default_preset_id == "explore"
