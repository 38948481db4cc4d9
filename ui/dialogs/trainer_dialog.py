from typing import Optional

from PySide6 import QtWidgets

from core.exceptions import GymError
from models.trainer import Speciality, Trainer
from services.trainer_service import TrainerStore, add_trainer, edit_trainer
from ui.dialogs.photo_picker import PhotoPicker
from ui.style import DIALOG_STYLE


class TrainerDialog(QtWidgets.QDialog):
    """Add or edit a trainer."""
    def __init__(self, store: TrainerStore, trainer: Optional[Trainer] = None,
                 parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self.store = store
        self.trainer = trainer
        self.saved: Optional[Trainer] = None

        self.setWindowTitle("Edit Trainer" if trainer else "Add Trainer")
        self.setModal(True)
        self.setMinimumWidth(460)

        self.init_ui()
        self.setStyleSheet(DIALOG_STYLE)
        self.update_save_enabled()

    def init_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)

        self.photo = PhotoPicker(self.trainer.photo_path if self.trainer else None)
        layout.addWidget(self.photo)

        form = QtWidgets.QFormLayout()
        self.nm = QtWidgets.QLineEdit()
        self.ph = QtWidgets.QLineEdit()
        self.spec = QtWidgets.QComboBox()
        for s in Speciality:
            self.spec.addItem(s.value)

        form.addRow("Name*", self.nm)
        form.addRow("Phone*", self.ph)
        form.addRow("Speciality", self.spec)
        layout.addLayout(form)

        if self.trainer:
            self.nm.setText(self.trainer.name)
            self.ph.setText(self.trainer.phone)
            self.spec.setCurrentText(self.trainer.speciality.value)

        self.nm.textChanged.connect(self.update_save_enabled)
        self.ph.textChanged.connect(self.update_save_enabled)

        self.btn_save = QtWidgets.QPushButton("💾 Save")
        self.btn_save.setFixedHeight(42)
        self.btn_save.clicked.connect(self.on_save)
        layout.addWidget(self.btn_save)

    def update_save_enabled(self) -> None:
        self.btn_save.setEnabled(bool(self.nm.text().strip() and self.ph.text().strip()))

    def on_save(self) -> None:
        spec = Speciality(self.spec.currentText())
        try:
            if self.trainer:
                self.saved = edit_trainer(self.store, self.trainer, self.nm.text(), self.ph.text(),
                                          spec, self.photo.new_photo_source)
            else:
                self.saved = add_trainer(self.store, self.nm.text(), self.ph.text(),
                                         spec, self.photo.new_photo_source)
        except GymError as e:
            QtWidgets.QMessageBox.critical(self, "Error", e.message)
            return
        self.accept()
