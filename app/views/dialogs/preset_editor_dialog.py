# app/views/dialogs/preset_editor_dialog.py

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QDialog,
    QStackedWidget,
    QTableWidgetItem,
    QStyle,
)
from qfluentwidgets import (
    Pivot,
    TableWidget,
    PrimaryPushButton,
    PushButton,
    FluentIcon,
    SubtitleLabel,
    Dialog,
    CaptionLabel,
)

from app.core.constants import DEFAULT_CYCLE_KEY
from app.models.preset_model import EXPLORE
from app.utils.ui_utils import UiUtils
from app.utils.logger_utils import logger
from app.viewmodels.preset_editor_vm import PresetEditorViewModel
from app.views.components.common.keybinding_widget import KeyBindingWidget
from app.views.dialogs.edit_preset_dialog import EditPresetDialog


class PresetEditorDialog(QDialog):
    """
    The dialog for managing presets and the cycle key. It operates
    transactionally, only committing changes when the user explicitly saves.
    """

    def __init__(self, viewmodel: PresetEditorViewModel, parent: QWidget | None = None):
        super().__init__(parent)
        self.view_model = viewmodel
        self.pages = {}
        self._init_ui()
        self._connect_signals()

    def _init_ui(self):
        """Initializes the UI components of the dialog."""
        self.setWindowTitle("Presets")
        self.setMinimumSize(720, 480)

        dialog_layout = QVBoxLayout(self)
        dialog_layout.setContentsMargins(15, 15, 15, 15)
        dialog_layout.setSpacing(10)

        # ---Pivot for Tab Navigation ---
        self.pivot = Pivot(self)
        self.stack = QStackedWidget(self)

        self._create_presets_tab()
        self._create_controls_tab()

        self.pivot.setCurrentItem("presets_tab")

        dialog_layout.addWidget(self.pivot)
        dialog_layout.addWidget(self.stack, 1)

        # ---Bottom Buttons (Save/Cancel) ---
        button_layout = QHBoxLayout()
        self.reset_button = PushButton(FluentIcon.SYNC, "Reset to Built-ins")
        button_layout.addWidget(self.reset_button)
        button_layout.addStretch(1)

        self.cancel_button = PushButton("Cancel")
        self.save_button = PrimaryPushButton("Save")
        button_layout.addWidget(self.cancel_button)
        button_layout.addWidget(self.save_button)

        dialog_layout.addLayout(button_layout)

    def _create_presets_tab(self):
        """Creates the UI for the 'Presets' management tab."""
        presets_widget = QWidget()
        layout = QVBoxLayout(presets_widget)
        layout.setContentsMargins(0, 10, 0, 0)
        layout.setSpacing(10)
        layout.addWidget(SubtitleLabel("Cycle Order"))

        toolbar_layout = QHBoxLayout()
        self.add_preset_button = PushButton(FluentIcon.ADD, "Add")
        self.edit_preset_button = PushButton(FluentIcon.EDIT, "Edit")
        self.remove_preset_button = PushButton(FluentIcon.DELETE, "Delete")
        self.default_preset_button = PushButton(FluentIcon.PIN, "Set Default")
        self.move_up_button = PushButton(FluentIcon.UP, "Move Up")
        self.move_down_button = PushButton(FluentIcon.DOWN, "Move Down")
        for button in (
            self.add_preset_button,
            self.edit_preset_button,
            self.remove_preset_button,
            self.default_preset_button,
            self.move_up_button,
            self.move_down_button,
        ):
            toolbar_layout.addWidget(button)
        toolbar_layout.addStretch(1)

        self.presets_table = TableWidget(self)
        self.presets_table.setColumnCount(3)
        self.presets_table.setHorizontalHeaderLabels(["Name", "Settings", "Default"])
        self.presets_table.setEditTriggers(self.presets_table.EditTrigger.NoEditTriggers)
        self.presets_table.setSelectionBehavior(self.presets_table.SelectionBehavior.SelectRows)
        self.presets_table.setSelectionMode(self.presets_table.SelectionMode.SingleSelection)

        # ---Apply fluent styles ---
        self.presets_table.setBorderVisible(True)
        self.presets_table.setBorderRadius(8)

        vertical_header = self.presets_table.verticalHeader()
        if vertical_header is not None:
            vertical_header.setVisible(False)
        self.presets_table.setWordWrap(False)
        self.presets_table.setAlternatingRowColors(True)
        header = self.presets_table.horizontalHeader()
        if header is not None:
            header.setSectionResizeMode(1, header.ResizeMode.Stretch)
            header.setSectionResizeMode(2, header.ResizeMode.ResizeToContents)

        layout.addLayout(toolbar_layout)
        layout.addWidget(self.presets_table, 1)

        self.pages["presets_tab"] = presets_widget
        self.stack.addWidget(presets_widget)
        self.pivot.addItem(
            routeKey="presets_tab",
            text="Presets",
            onClick=lambda: self._switch_to_tab("presets_tab"),
            icon=FluentIcon.SAVE,
        )

    def _create_controls_tab(self):
        """Creates the UI for the 'Controls' tab."""
        controls_widget = QWidget()
        layout = QVBoxLayout(controls_widget)
        layout.setContentsMargins(10, 20, 10, 10)
        layout.setSpacing(15)

        self.cycle_key_widget = KeyBindingWidget(
            "Cycle preset", self.view_model.temp_cycle_key, DEFAULT_CYCLE_KEY, controls_widget
        )
        layout.addWidget(self.cycle_key_widget)
        layout.addWidget(
            CaptionLabel("Click the key, then press the new one. Escape cancels.", controls_widget)
        )
        layout.addStretch(1)

        self.pages["controls_tab"] = controls_widget
        self.stack.addWidget(controls_widget)
        self.pivot.addItem(
            routeKey="controls_tab",
            text="Controls",
            onClick=lambda: self._switch_to_tab("controls_tab"),
            icon=FluentIcon.GAME,
        )

    def _connect_signals(self):
        """Connects UI element signals and ViewModel signals to their handlers."""
        # ---ViewModel -> View ---
        self.view_model.presets_list_refreshed.connect(self._refresh_preset_list)
        self.view_model.cycle_key_refreshed.connect(self.cycle_key_widget.set_key)
        self.view_model.toast_requested.connect(self._on_toast_requested)
        self.view_model.confirmation_requested.connect(self._on_confirmation_requested)
        self.view_model.error_dialog_requested.connect(self._on_error_dialog_requested)

        # ---View -> ViewModel ---
        self.add_preset_button.clicked.connect(self._on_add_preset)
        self.edit_preset_button.clicked.connect(self._on_edit_preset)
        self.presets_table.itemDoubleClicked.connect(self._on_edit_preset)
        self.remove_preset_button.clicked.connect(self._on_remove_preset)
        self.default_preset_button.clicked.connect(self._on_set_default)
        self.move_up_button.clicked.connect(lambda: self._on_move_preset(-1))
        self.move_down_button.clicked.connect(lambda: self._on_move_preset(1))
        self.cycle_key_widget.key_changed.connect(self.view_model.set_temp_cycle_key)
        self.reset_button.clicked.connect(self.view_model.request_reset)

        self.save_button.clicked.connect(self._on_save)
        self.cancel_button.clicked.connect(self.reject)

    # ---SLOTS (Responding to ViewModel Signals) ---

    def _on_confirmation_requested(self, params: dict):
        title = params.get("title", "Confirmation")
        text = params.get("text", "")
        context = params.get("context", {})

        confirmed = UiUtils.show_confirm_dialog(self, title, text, "Yes", "No")
        self.view_model.on_confirmation_result(confirmed, context)

    def _on_toast_requested(self, message: str, level: str):
        UiUtils.show_toast(parent=self, message=message, level=level)

    def _on_error_dialog_requested(self, title: str, message: str):
        """Shows a modal error dialog."""
        dialog = Dialog(title, message, self)
        dialog.exec()

    def _refresh_preset_list(self, presets_data: list[dict]):
        """Populates the preset table from the ViewModel's pre-formatted data."""
        logger.debug(f"Refreshing preset list with {len(presets_data)} items.")
        selected_id = self._selected_preset_id()

        self.presets_table.setRowCount(0)
        self.presets_table.setRowCount(len(presets_data))

        for row, preset_dict in enumerate(presets_data):
            name_item = QTableWidgetItem(preset_dict["name"])
            summary_item = QTableWidgetItem(preset_dict["summary"])
            default_item = QTableWidgetItem("Yes" if preset_dict["is_default"] else "")

            name_item.setData(Qt.ItemDataRole.UserRole, preset_dict["id"])
            self.presets_table.setItem(row, 0, name_item)
            self.presets_table.setItem(row, 1, summary_item)
            self.presets_table.setItem(row, 2, default_item)

            if preset_dict["id"] == selected_id:
                self.presets_table.selectRow(row)

        self.presets_table.resizeColumnToContents(0)

    # ---UI EVENT HANDLERS (Calling ViewModel methods) ---

    def _on_add_preset(self):
        dialog = EditPresetDialog(
            name="",
            profile=EXPLORE,
            existing_names=[p.name for p in self.view_model.temp_presets],
            parent=self,
            is_new=True,
        )
        self._center(dialog)
        if dialog.exec():
            self.view_model.add_preset(dialog.get_name(), dialog.get_profile())

    def _on_edit_preset(self):
        preset_id = self._selected_preset_id()
        if preset_id is None:
            UiUtils.show_toast(self, "Please select a preset to edit.", "warning")
            return

        preset = next((p for p in self.view_model.temp_presets if p.id == preset_id), None)
        if not preset:
            return

        dialog = EditPresetDialog(
            name=preset.name,
            profile=preset.profile,
            existing_names=[p.name for p in self.view_model.temp_presets],
            parent=self,
        )
        self._center(dialog)
        if dialog.exec():
            self.view_model.update_preset(preset_id, dialog.get_name(), dialog.get_profile())

    def _on_remove_preset(self):
        preset_id = self._selected_preset_id()
        if preset_id is None:
            UiUtils.show_toast(self, "Please select a preset to remove.", "warning")
            return
        self.view_model.request_remove_preset(preset_id)

    def _on_set_default(self):
        preset_id = self._selected_preset_id()
        if preset_id is None:
            UiUtils.show_toast(self, "Please select a preset first.", "warning")
            return
        self.view_model.set_default(preset_id)

    def _on_move_preset(self, offset: int):
        preset_id = self._selected_preset_id()
        if preset_id is not None:
            self.view_model.move_preset(preset_id, offset)

    def _on_save(self):
        """Tells the ViewModel to commit all changes and closes the dialog on success."""
        if self.view_model.save_all_changes():
            self.accept()

    def reject(self):
        if self.view_model.has_unsaved_changes() and not UiUtils.show_confirm_dialog(
            self, "Discard Changes", "Close the editor and discard your changes?", "Discard", "Keep Editing"
        ):
            return
        super().reject()

    # ---Helpers ---

    def _selected_preset_id(self) -> str | None:
        selected_items = self.presets_table.selectedItems()
        if not selected_items:
            return None
        item = self.presets_table.item(selected_items[0].row(), 0)
        return item.data(Qt.ItemDataRole.UserRole) if item else None

    def _center(self, dialog: QDialog):
        dialog.setGeometry(
            QStyle.alignedRect(
                Qt.LayoutDirection.LeftToRight,
                Qt.AlignmentFlag.AlignCenter,
                dialog.sizeHint(),
                self.geometry(),
            )
        )

    def _switch_to_tab(self, routeKey: str):
        target_widget = self.pages.get(routeKey)
        if target_widget:
            self.stack.setCurrentWidget(target_widget)
            self.pivot.setCurrentItem(routeKey)
