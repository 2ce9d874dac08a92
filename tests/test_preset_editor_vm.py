# tests/test_preset_editor_vm.py
import json

import pytest

from app.models.preset_model import COMBAT, EXPLORE
from app.services.config_service import ConfigService
from app.viewmodels.preset_editor_vm import DELETE_CONTEXT, PresetEditorViewModel


@pytest.fixture
def config_service(tmp_path):
    return ConfigService(tmp_path / "presets.json")


@pytest.fixture
def vm(qapp, config_service):
    view_model = PresetEditorViewModel(config_service)
    view_model.load_current_config(config_service.load_or_create())
    return view_model


def collect(signal):
    received = []
    signal.connect(lambda *args: received.append(args))
    return received


def test_load_emits_list_and_key(qapp, config_service):
    vm = PresetEditorViewModel(config_service)
    lists = collect(vm.presets_list_refreshed)
    keys = collect(vm.cycle_key_refreshed)

    vm.load_current_config(config_service.load_or_create())

    assert [row["name"] for row in lists[-1][0]] == ["Build", "Explore", "Combat"]
    assert lists[-1][0][0]["is_default"]
    assert "Unlimited FPS" in lists[-1][0][2]["summary"]
    assert keys == [("F9",)]
    assert not vm.has_unsaved_changes()


def test_add_preset_and_reject_duplicates(vm):
    toasts = collect(vm.toast_requested)

    added = vm.add_preset("  Shaders ", EXPLORE)
    assert added.name == "Shaders"
    assert vm.add_preset("shaders", COMBAT) is None
    assert vm.add_preset("   ", COMBAT) is None

    assert [p.name for p in vm.temp_presets][-1] == "Shaders"
    assert len(vm.temp_presets) == 4
    assert [level for _, level in toasts] == ["warning", "warning"]
    assert vm.has_unsaved_changes()


def test_update_preset_changes_name_and_profile(vm):
    vm.update_preset("build", "Creative", COMBAT)
    preset = vm.temp_presets[0]
    assert (preset.id, preset.name, preset.profile) == ("build", "Creative", COMBAT)

    # Renaming onto another preset's name is refused
    vm.update_preset("build", "explore", EXPLORE)
    assert vm.temp_presets[0].name == "Creative"


def test_removing_default_promotes_next(vm):
    vm.remove_temp_preset("build")
    assert vm.temp_default_id == "explore"

    vm.set_default("combat")
    vm.remove_temp_preset("combat")
    # Wraps around to the start of the cycle order
    assert vm.temp_default_id == "explore"


def test_delete_goes_through_confirmation(vm):
    requests = collect(vm.confirmation_requested)

    vm.request_remove_preset("explore")
    context = requests[0][0]["context"]
    assert context == {"action": DELETE_CONTEXT, "preset_id": "explore"}

    vm.on_confirmation_result(False, context)
    assert len(vm.temp_presets) == 3
    vm.on_confirmation_result(True, context)
    assert [p.id for p in vm.temp_presets] == ["build", "combat"]


def test_move_preset_changes_cycle_order(vm):
    vm.move_preset("combat", -1)
    assert [p.id for p in vm.temp_presets] == ["build", "combat", "explore"]
    vm.move_preset("build", -1)
    assert [p.id for p in vm.temp_presets] == ["build", "combat", "explore"]


def test_cycle_key_blank_restores_default(vm):
    vm.set_temp_cycle_key("G")
    assert vm.temp_cycle_key == "G"
    vm.set_temp_cycle_key("  ")
    assert vm.temp_cycle_key == "F9"


def test_save_writes_config(vm, config_service):
    updated = collect(vm.config_updated)
    vm.set_temp_cycle_key("G")
    vm.move_preset("combat", -2)
    vm.set_default("combat")

    assert vm.save_all_changes()

    saved = json.loads(config_service.config_path.read_text(encoding="utf-8"))
    assert [p["id"] for p in saved["presets"]] == ["combat", "build", "explore"]
    assert saved["default_preset_id"] == "combat"
    assert saved["cycle_key"] == "G"
    assert len(updated) == 1
    assert not vm.has_unsaved_changes()


def test_save_allows_empty_preset_list(vm, config_service):
    for preset_id in ("build", "explore", "combat"):
        vm.remove_temp_preset(preset_id)

    assert vm.save_all_changes()
    assert config_service.load_or_create().default_preset_id is None
