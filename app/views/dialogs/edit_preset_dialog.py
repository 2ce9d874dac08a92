# app/views/dialogs/edit_preset_dialog.py

from typing import List
from PyQt6.QtWidgets import QWidget, QVBoxLayout, QFormLayout, QDialog, QHBoxLayout
from qfluentwidgets import (
    BodyLabel,
    CheckBox,
    ComboBox,
    DoubleSpinBox,
    LineEdit,
    PrimaryPushButton,
    PushButton,
    SpinBox,
)

from app.core.constants import (
    BIOME_BLEND_RADIUS_RANGE,
    DISTORTION_EFFECTS_SCALE_RANGE,
    ENTITY_DISTANCE_SCALING_RANGE,
    MAX_FPS_RANGE,
    MIPMAP_LEVELS_RANGE,
    RENDER_DISTANCE_RANGE,
    SIMULATION_DISTANCE_RANGE,
    UNLIMITED_FPS,
)
from app.models.preset_model import Clouds, Graphics, Particles, Profile


class EditPresetDialog(QDialog):
    """
    A dialog to create or edit a preset: its name and every profile setting.
    The name is validated in real time against the other presets.
    """

    def __init__(
        self,
        name: str,
        profile: Profile,
        existing_names: List[str],
        parent: QWidget | None = None,
        is_new: bool = False,
    ):
        super().__init__(parent)
        self.original_name_lower = name.lower()
        self.other_existing_names = [
            n.lower() for n in existing_names if n.lower() != self.original_name_lower
        ]

        # ---1. Make the main layout ---
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(15, 15, 15, 15)
        main_layout.setSpacing(10)

        # ---2. Make all widgets ---
        self.name_edit = LineEdit(self)
        self.name_edit.setText(name)
        self.name_edit.setPlaceholderText("Preset name")

        self.validation_label = BodyLabel("", self)
        self.validation_label.setStyleSheet("color: #f97171;")
        self.validation_label.setVisible(False)

        self.render_distance_spin = self._int_spin(RENDER_DISTANCE_RANGE, profile.render_distance)
        self.simulation_distance_spin = self._int_spin(SIMULATION_DISTANCE_RANGE, profile.simulation_distance)
        self.graphics_combo = self._enum_combo(Graphics, profile.graphics)
        self.particles_combo = self._enum_combo(Particles, profile.particles)
        self.clouds_combo = self._enum_combo(Clouds, profile.clouds)
        self.smooth_lighting_check = self._check("Smooth lighting", profile.smooth_lighting)
        self.vsync_check = self._check("VSync", profile.vsync)
        self.entity_shadows_check = self._check("Entity shadows", profile.entity_shadows)
        self.view_bobbing_check = self._check("View bobbing", profile.view_bobbing)
        self.entity_distance_spin = self._float_spin(ENTITY_DISTANCE_SCALING_RANGE, profile.entity_distance_scaling)
        self.mipmap_spin = self._int_spin(MIPMAP_LEVELS_RANGE, profile.mipmap_levels)
        self.biome_blend_spin = self._int_spin(BIOME_BLEND_RADIUS_RANGE, profile.biome_blend_radius)
        self.distortion_spin = self._float_spin(DISTORTION_EFFECTS_SCALE_RANGE, profile.distortion_effects_scale)
        self.max_fps_spin = self._int_spin(MAX_FPS_RANGE, profile.max_fps)
        self.max_fps_label = BodyLabel("", self)
        self._update_fps_label(self.max_fps_spin.value())

        # ---3. Create a secondary layout ---
        self.form_layout = QFormLayout()
        self.form_layout.addRow("Name:", self.name_edit)
        self.form_layout.addRow("", self.validation_label)
        self.form_layout.addRow("Render distance:", self.render_distance_spin)
        self.form_layout.addRow("Simulation distance:", self.simulation_distance_spin)
        self.form_layout.addRow("Graphics:", self.graphics_combo)
        self.form_layout.addRow("Particles:", self.particles_combo)
        self.form_layout.addRow("Clouds:", self.clouds_combo)
        self.form_layout.addRow("Entity distance:", self.entity_distance_spin)
        self.form_layout.addRow("Mipmap levels:", self.mipmap_spin)
        self.form_layout.addRow("Biome blend:", self.biome_blend_spin)
        self.form_layout.addRow("Distortion effects:", self.distortion_spin)

        fps_layout = QHBoxLayout()
        fps_layout.addWidget(self.max_fps_spin)
        fps_layout.addWidget(self.max_fps_label)
        self.form_layout.addRow("Max FPS:", fps_layout)

        toggles_layout = QHBoxLayout()
        for check in (
            self.smooth_lighting_check,
            self.vsync_check,
            self.entity_shadows_check,
            self.view_bobbing_check,
        ):
            toggles_layout.addWidget(check)
        toggles_layout.addStretch(1)

        button_layout = QHBoxLayout()
        button_layout.addStretch(1)
        self.ok_button = PrimaryPushButton("Create" if is_new else "Save")
        self.cancel_button = PushButton("Cancel")
        button_layout.addWidget(self.cancel_button)
        button_layout.addWidget(self.ok_button)

        # ---4. Add elements to the main layout ---
        main_layout.addLayout(self.form_layout)
        main_layout.addLayout(toggles_layout)
        main_layout.addLayout(button_layout)

        self.setWindowTitle("New Preset" if is_new else "Edit Preset")
        self.setFixedWidth(460)

        # ---5. Connections ---
        self.name_edit.textChanged.connect(self._validate_input)
        self.max_fps_spin.valueChanged.connect(self._update_fps_label)
        self.ok_button.clicked.connect(self.accept)
        self.cancel_button.clicked.connect(self.reject)
        self.ok_button.setDefault(True)

        self._validate_input()

    # --- Widget Factories ---

    def _int_spin(self, value_range: tuple[int, int], value: int) -> SpinBox:
        spin = SpinBox(self)
        spin.setRange(*value_range)
        # Out-of-range stored values are shown clamped
        spin.setValue(max(value_range[0], min(value_range[1], value)))
        return spin

    def _float_spin(self, value_range: tuple[float, float], value: float) -> DoubleSpinBox:
        spin = DoubleSpinBox(self)
        spin.setRange(*value_range)
        spin.setDecimals(2)
        spin.setSingleStep(0.05)
        spin.setValue(max(value_range[0], min(value_range[1], value)))
        return spin

    def _enum_combo(self, enum_cls, current) -> ComboBox:
        combo = ComboBox(self)
        for member in enum_cls:
            combo.addItem(member.value, userData=member)
        combo.setCurrentText(current.value)
        return combo

    def _check(self, text: str, checked: bool) -> CheckBox:
        check = CheckBox(text, self)
        check.setChecked(checked)
        return check

    # --- Validation ---

    def _validate_input(self):
        new_name = self.name_edit.text().strip()
        error_message = ""

        if not new_name:
            error_message = "Name cannot be empty."
        elif new_name.lower() in self.other_existing_names:
            error_message = f"A preset named '{new_name}' already exists."

        self.validation_label.setText(error_message)
        self.validation_label.setVisible(bool(error_message))
        self.ok_button.setEnabled(not error_message)

    def _update_fps_label(self, value: int):
        self.max_fps_label.setText("Unlimited" if value >= UNLIMITED_FPS else "")

    # --- Result ---

    def get_name(self) -> str:
        return self.name_edit.text().strip()

    def get_profile(self) -> Profile:
        """Returns the profile built from the form."""
        return Profile(
            render_distance=self.render_distance_spin.value(),
            simulation_distance=self.simulation_distance_spin.value(),
            graphics=self.graphics_combo.currentData(),
            particles=self.particles_combo.currentData(),
            clouds=self.clouds_combo.currentData(),
            smooth_lighting=self.smooth_lighting_check.isChecked(),
            vsync=self.vsync_check.isChecked(),
            entity_shadows=self.entity_shadows_check.isChecked(),
            entity_distance_scaling=round(self.entity_distance_spin.value(), 2),
            mipmap_levels=self.mipmap_spin.value(),
            biome_blend_radius=self.biome_blend_spin.value(),
            view_bobbing=self.view_bobbing_check.isChecked(),
            distortion_effects_scale=round(self.distortion_spin.value(), 2),
            max_fps=self.max_fps_spin.value(),
        )
