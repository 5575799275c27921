import string
from collections import defaultdict

from PyQt5.QtCore import QSize, Qt
from PyQt5.QtWidgets import (
    QDialog, QFormLayout, QDialogButtonBox, QComboBox,
    QLabel, QLineEdit, QSpinBox, QCheckBox, QVBoxLayout, QGroupBox
)

from qmkviewer.settings import INPUT_SOURCES

CHOICES = {
    "input_source": INPUT_SOURCES,
}


def create_editor(key, value):
    if key in CHOICES:
        combo = QComboBox()
        combo.addItems(CHOICES[key])
        combo.setCurrentText(str(value))
        return combo
    if isinstance(value, bool):
        checkbox = QCheckBox()
        checkbox.setChecked(value)
        return checkbox
    elif isinstance(value, int):
        spinbox = QSpinBox()
        spinbox.setMaximum(1_000_000)
        spinbox.setValue(value)
        return spinbox
    else:
        line_edit = QLineEdit()
        line_edit.setText(str(value))
        return line_edit


def editor_value(widget):
    if isinstance(widget, QComboBox):
        return widget.currentText()
    if isinstance(widget, QCheckBox):
        return widget.isChecked()
    if isinstance(widget, QSpinBox):
        return widget.value()
    return widget.text()


class SettingsDialog(QDialog):
    """ Editors for all settings, grouped by the name prefix before the first '_' """
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("QmkViewer Settings")
        self.edit_widgets = {}

    def sizeHint(self):
        return QSize(480, 420)

    def setup(self, settings_dict):
        main_layout = QVBoxLayout(self)

        title_label = QLabel("Input settings take effect after a restart.")
        title_label.setAlignment(Qt.AlignCenter)
        main_layout.addWidget(title_label)

        grouped_settings = defaultdict(dict)
        for full_key, value in settings_dict.items():
            group = full_key.split("_", 1)[0] if "_" in full_key else "General"
            grouped_settings[group][full_key] = value

        for group_name, group_items in grouped_settings.items():
            group_box = QGroupBox(string.capwords(group_name))
            group_layout = QFormLayout()
            group_layout.setFieldGrowthPolicy(QFormLayout.AllNonFixedFieldsGrow)
            group_box.setLayout(group_layout)

            for full_key, value in group_items.items():
                caption = string.capwords(full_key, sep="_").replace("_", " ")
                label = QLabel(caption.split(" ", 1)[-1])
                widget = create_editor(full_key, value)
                group_layout.addRow(label, widget)
                self.edit_widgets[full_key] = widget

            main_layout.addWidget(group_box)

        main_layout.addStretch()

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        main_layout.addWidget(buttons, alignment=Qt.AlignCenter)

    def get_updated_settings(self):
        return {key: editor_value(widget) for key, widget in self.edit_widgets.items()}
