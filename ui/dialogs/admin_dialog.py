from typing import Optional

from PySide6 import QtWidgets, QtCore

import config
from core.exceptions import GymError
from models.admin import Admin
from services.admin_service import AdminStore, add_admin, edit_admin
from ui.dialogs.photo_picker import PhotoPicker
from ui.style import DIALOG_STYLE


class AdminDialog(QtWidgets.QDialog):
    """
    Registers the gym owner, or edits the existing profile.
    Registration also asks for a password; editing does not.
    There is no delete: the owner profile stays once created.
    """
    def __init__(self, store: AdminStore, admin: Optional[Admin] = None,
                 parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self.store = store
        self.admin = admin
        self.saved: Optional[Admin] = None

        self.setWindowTitle(f"{'Edit' if admin else 'Register'} Gym Owner - {config.APP_NAME}")
        self.setModal(True)
        self.setMinimumWidth(480)

        self.init_ui()
        self.setStyleSheet(DIALOG_STYLE)
        self.update_save_enabled()

    def init_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)

        title = QtWidgets.QLabel("🏋️ Gym Owner")
        title.setAlignment(QtCore.Qt.AlignCenter)
        title.setStyleSheet("font-size: 18px; font-weight: bold; color: #ffd400; margin: 10px;")
        layout.addWidget(title)

        self.photo = PhotoPicker(self.admin.photo_path if self.admin else None)
        layout.addWidget(self.photo)

        form = QtWidgets.QFormLayout()
        self.nm = QtWidgets.QLineEdit()
        self.gym = QtWidgets.QLineEdit()
        self.addr = QtWidgets.QLineEdit()
        form.addRow("Name*", self.nm)
        form.addRow("Gym Name*", self.gym)
        form.addRow("Gym Address*", self.addr)

        self.passwd = QtWidgets.QLineEdit()
        self.passwd.setEchoMode(QtWidgets.QLineEdit.Password)
        if self.admin:
            self.nm.setText(self.admin.name)
            self.gym.setText(self.admin.gym_name)
            self.addr.setText(self.admin.gym_address)
        else:
            form.addRow("Password*", self.passwd)
        layout.addLayout(form)

        for field in (self.nm, self.gym, self.addr, self.passwd):
            field.textChanged.connect(self.update_save_enabled)

        self.btn_save = QtWidgets.QPushButton("💾 Save")
        self.btn_save.setFixedHeight(42)
        self.btn_save.clicked.connect(self.on_save)
        layout.addWidget(self.btn_save)

    def update_save_enabled(self) -> None:
        required = [self.nm, self.gym, self.addr]
        if not self.admin:
            required.append(self.passwd)
        self.btn_save.setEnabled(all(f.text().strip() for f in required))

    def on_save(self) -> None:
        try:
            if self.admin:
                self.saved = edit_admin(self.store, self.admin, self.nm.text(), self.gym.text(),
                                        self.addr.text(), self.photo.new_photo_source)
            else:
                self.saved = add_admin(self.store, self.nm.text(), self.gym.text(), self.addr.text(),
                                       self.passwd.text(), self.photo.new_photo_source)
        except GymError as e:
            QtWidgets.QMessageBox.critical(self, "Error", e.message)
            return
        self.accept()
