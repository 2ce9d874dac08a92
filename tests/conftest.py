# tests/conftest.py
import sys

import pytest
from PyQt6.QtCore import QCoreApplication

from app.models.config_model import UserConfig
from app.models.game_options_model import GameClient, GameOptions
from app.models.preset_model import builtin_presets
from app.utils.logger_utils import set_log_directory


@pytest.fixture(scope="session", autouse=True)
def _log_to_tmp(tmp_path_factory):
    set_log_directory(tmp_path_factory.mktemp("logs"))


@pytest.fixture(scope="session")
def qapp():
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication(sys.argv[:1])
    yield app


class RecordingOptions(GameOptions):
    """GameOptions that counts write() calls instead of touching disk."""

    def __init__(self):
        super().__init__()
        self.write_count = 0

    def write(self):
        self.write_count += 1


@pytest.fixture
def options():
    return RecordingOptions()


@pytest.fixture
def client(options):
    return GameClient(options=options)


@pytest.fixture
def builtin_config():
    presets = builtin_presets()
    return UserConfig(presets=presets, default_preset_id=presets[0].id)
