from pathlib import Path

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QKeySequence, QShortcut
from PyQt6.QtWidgets import (
    QSizePolicy,
    QWidget,
    QHBoxLayout,
    QVBoxLayout,
    QFrame,
    QFileDialog,
    QStyle,
)
from qfluentwidgets import (
    FluentWindow,
    InfoBarPosition,
    StrongBodyLabel,
    BodyLabel,
    CaptionLabel,
    LineEdit,
    ComboBox,
    ListWidget,
    PushButton,
    PrimaryPushButton,
    FluentIcon,
)

from app.core.signals import global_signals
from app.utils.logger_utils import logger
from app.utils.ui_utils import UiUtils
from app.viewmodels.main_window_vm import MainWindowViewModel, ToastLevel
from app.viewmodels.preset_editor_vm import PresetEditorViewModel
from app.views.components.hud_overlay import HudOverlay
from app.views.dialogs.preset_editor_dialog import PresetEditorDialog

TITLE_SCREEN_TEXT = "Title screen"

_LEVEL_NAMES = {
    ToastLevel.INFO: "info",
    ToastLevel.SUCCESS: "success",
    ToastLevel.WARNING: "warning",
    ToastLevel.ERROR: "error",
}


class MainWindow(FluentWindow):
    """The main application window. It receives fully constructed ViewModels."""

    def __init__(
        self,
        main_view_model: MainWindowViewModel,
        editor_view_model: PresetEditorViewModel,
        parent: QWidget | None = None,
    ):
        super().__init__(parent)
        self.main_window_vm = main_view_model
        self.editor_vm = editor_view_model
        self.cycle_shortcut: QShortcut | None = None

        # ---Initialize UI and connect signals ---
        self._init_ui()
        self._bind_view_models()

        self.main_window_vm.start_initial_load()

    def _init_ui(self) -> None:
        # ---------- 1. Window Basic Setup ----------
        self.setWindowTitle("Preset Cycler")
        self.resize(900, 600)
        self.setMinimumSize(720, 480)

        central_widget = QWidget()
        content_v_layout = QVBoxLayout(central_widget)
        content_v_layout.setContentsMargins(12, 6, 12, 12)
        content_v_layout.setSpacing(10)

        # ---------- 2. Header: game directory & play context ----------
        self.header_widget = QWidget()
        hl = QHBoxLayout(self.header_widget)
        hl.setContentsMargins(0, 6, 0, 6)
        hl.setSpacing(10)

        self.game_dir_edit = LineEdit()
        self.game_dir_edit.setReadOnly(True)
        self.game_dir_edit.setPlaceholderText("No game directory selected")
        self.game_dir_edit.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        self.browse_button = PushButton(FluentIcon.FOLDER, "Browse...")
        self.open_dir_button = PushButton(FluentIcon.FOLDER_ADD, "Open")

        self.context_combo = ComboBox()
        self.context_combo.setMinimumWidth(200)
        self.context_combo.addItem(TITLE_SCREEN_TEXT, userData=None)

        hl.addWidget(self.game_dir_edit, 1)
        hl.addWidget(self.browse_button)
        hl.addWidget(self.open_dir_button)
        hl.addWidget(BodyLabel("Playing:"))
        hl.addWidget(self.context_combo)

        # ---------- 3. Preset list ----------
        self.active_preset_label = StrongBodyLabel("Active preset: -")
        self.cycle_key_label = CaptionLabel("")
        self.pending_label = CaptionLabel("Some settings are queued until you leave the world.")
        self.pending_label.setVisible(False)

        self.presets_list = ListWidget(self)
        self.presets_list.setObjectName("PresetsList")

        # ---------- 4. Actions ----------
        actions = QHBoxLayout()
        actions.setSpacing(6)
        self.cycle_button = PrimaryPushButton(FluentIcon.SYNC, "Cycle Preset")
        self.apply_button = PushButton(FluentIcon.ACCEPT, "Apply Selected")
        self.editor_button = PushButton(FluentIcon.SETTING, "Edit Presets")
        actions.addWidget(self.cycle_button)
        actions.addWidget(self.apply_button)
        actions.addStretch(1)
        actions.addWidget(self.editor_button)

        content_v_layout.addWidget(self.header_widget)
        line = QFrame()
        line.setFrameShape(QFrame.Shape.HLine)
        line.setFrameShadow(QFrame.Shadow.Sunken)
        content_v_layout.addWidget(line)
        content_v_layout.addWidget(self.active_preset_label)
        content_v_layout.addWidget(self.cycle_key_label)
        content_v_layout.addWidget(self.presets_list, 1)
        content_v_layout.addWidget(self.pending_label)
        content_v_layout.addLayout(actions)

        central_widget.setObjectName("main_content_view")
        self.addSubInterface(central_widget, FluentIcon.HOME, "Presets")

        # ---------- 5. HUD overlay over the content ----------
        self.hud_overlay = HudOverlay(self.main_window_vm.cycle_controller.toast, central_widget)

    def _bind_view_models(self):
        """Connects signals and slots between this main view and its viewmodels."""
        # ---VM -> View ---
        self.main_window_vm.toast_requested.connect(self._on_toast_requested)
        self.main_window_vm.presets_updated.connect(self._on_presets_updated)
        self.main_window_vm.active_preset_changed.connect(self._on_active_preset_changed)
        self.main_window_vm.cycle_key_changed.connect(self._on_cycle_key_changed)
        self.main_window_vm.pending_state_changed.connect(self.pending_label.setVisible)
        self.main_window_vm.game_dir_changed.connect(self.game_dir_edit.setText)
        self.main_window_vm.worlds_updated.connect(self._on_worlds_updated)
        self.main_window_vm.context_changed.connect(self._on_vm_context_changed)
        self.main_window_vm.editor_requested.connect(self._on_editor_requested)
        self.editor_vm.config_updated.connect(self.main_window_vm.refresh_from_config)
        global_signals.toast_requested.connect(self._on_global_toast_requested)

        # ---View -> VM ---
        self.browse_button.clicked.connect(self._on_browse_game_dir)
        self.open_dir_button.clicked.connect(self.main_window_vm.open_game_dir)
        self.context_combo.currentIndexChanged.connect(self._on_context_changed)
        self.cycle_button.clicked.connect(self.main_window_vm.cycle_now)
        self.apply_button.clicked.connect(self._on_apply_selected)
        self.presets_list.itemDoubleClicked.connect(self._on_apply_selected)
        self.editor_button.clicked.connect(self.main_window_vm.request_editor)

    # ---SLOTS (Responding to ViewModel Signals) ---

    def _on_toast_requested(self, message: str, level: ToastLevel = ToastLevel.INFO):
        UiUtils.show_toast(
            parent=self,
            message=message,
            level=_LEVEL_NAMES.get(level, "info"),
            position=InfoBarPosition.BOTTOM_RIGHT,
        )

    def _on_global_toast_requested(self, message: str, level: str):
        UiUtils.show_toast(self, message, level, position=InfoBarPosition.BOTTOM_RIGHT)

    def _on_presets_updated(self, presets_data: list[dict]):
        logger.debug(f"Refreshing preset list with {len(presets_data)} items.")
        self.presets_list.clear()
        for preset_dict in presets_data:
            text = preset_dict["name"]
            if preset_dict["is_default"]:
                text = f"{text}  (current)"
            self.presets_list.addItem(text)
            item = self.presets_list.item(self.presets_list.count() - 1)
            item.setData(Qt.ItemDataRole.UserRole, preset_dict["id"])
            if preset_dict["is_default"]:
                self.presets_list.setCurrentItem(item)
                self.active_preset_label.setText(f"Active preset: {preset_dict['name']}")

    def _on_active_preset_changed(self, name: str):
        self.active_preset_label.setText(f"Active preset: {name}")

    def _on_cycle_key_changed(self, key: str):
        self.cycle_key_label.setText(f"Press {key} to cycle presets.")

        if self.cycle_shortcut is not None:
            self.cycle_shortcut.setEnabled(False)
            self.cycle_shortcut.deleteLater()
        self.cycle_shortcut = QShortcut(QKeySequence(key), self)
        self.cycle_shortcut.setContext(Qt.ShortcutContext.ApplicationShortcut)
        self.cycle_shortcut.activated.connect(self.main_window_vm.on_cycle_key_pressed)

    def _on_worlds_updated(self, worlds: list[str]):
        self.context_combo.blockSignals(True)
        self.context_combo.clear()
        self.context_combo.addItem(TITLE_SCREEN_TEXT, userData=None)
        for world in worlds:
            self.context_combo.addItem(world, userData=world)
        self.context_combo.setCurrentIndex(0)
        self.context_combo.blockSignals(False)

    def _on_vm_context_changed(self, world: str):
        index = self.context_combo.findData(world) if world else 0
        if index >= 0 and index != self.context_combo.currentIndex():
            self.context_combo.blockSignals(True)
            self.context_combo.setCurrentIndex(index)
            self.context_combo.blockSignals(False)

    def _on_editor_requested(self):
        config = self.main_window_vm.config
        if config is None:
            UiUtils.show_toast(self, "The configuration is still loading.", "warning")
            return

        self.editor_vm.load_current_config(config)
        dialog = PresetEditorDialog(self.editor_vm, self)
        dialog.setGeometry(
            QStyle.alignedRect(
                Qt.LayoutDirection.LeftToRight,
                Qt.AlignmentFlag.AlignCenter,
                dialog.sizeHint(),
                self.geometry(),
            )
        )
        dialog.exec()

    # ---UI EVENT HANDLERS (Calling ViewModel methods) ---

    def _on_browse_game_dir(self):
        selected_path = QFileDialog.getExistingDirectory(self, "Select Game Directory")
        if selected_path:
            self.main_window_vm.set_game_dir(Path(selected_path))

    def _on_context_changed(self, index: int):
        if index < 0:
            return
        self.main_window_vm.set_context(self.context_combo.itemData(index))

    def _on_apply_selected(self):
        item = self.presets_list.currentItem()
        if item is None:
            UiUtils.show_toast(self, "Please select a preset to apply.", "warning")
            return
        self.main_window_vm.apply_preset(item.data(Qt.ItemDataRole.UserRole))

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.hud_overlay.on_frame()

    def closeEvent(self, event):
        logger.info("Main window closing.")
        super().closeEvent(event)
