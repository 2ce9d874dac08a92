# app/viewmodels/__init__.py
from .main_window_vm import MainWindowViewModel
from .preset_editor_vm import PresetEditorViewModel

__all__ = ["MainWindowViewModel", "PresetEditorViewModel"]
