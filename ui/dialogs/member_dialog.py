from typing import Optional

from PySide6 import QtWidgets

from core.exceptions import GymError
from models.member import Member, MembershipType
from services.member_service import MemberStore, add_member, edit_member
from ui.dialogs.photo_picker import PhotoPicker
from ui.style import DIALOG_STYLE


class MemberDialog(QtWidgets.QDialog):
    """
    Add or edit a member.
    Pass `member` to edit an existing record; the payment flag is not shown here.
    """
    def __init__(self, store: MemberStore, member: Optional[Member] = None,
                 parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self.store = store
        self.member = member
        self.saved: Optional[Member] = None

        self.setWindowTitle("Edit Member" if member else "Add Member")
        self.setModal(True)
        self.setMinimumWidth(460)

        self.init_ui()
        self.setStyleSheet(DIALOG_STYLE)
        self.update_save_enabled()

    def init_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)

        self.photo = PhotoPicker(self.member.photo_path if self.member else None)
        layout.addWidget(self.photo)

        form = QtWidgets.QFormLayout()
        self.nm = QtWidgets.QLineEdit()
        self.age = QtWidgets.QLineEdit()
        self.ph = QtWidgets.QLineEdit()
        self.tier = QtWidgets.QComboBox()
        for t in MembershipType:
            self.tier.addItem(t.value)

        form.addRow("Name*", self.nm)
        form.addRow("Age", self.age)
        form.addRow("Phone*", self.ph)
        form.addRow("Membership", self.tier)
        layout.addLayout(form)

        if self.member:
            self.nm.setText(self.member.name)
            self.age.setText(self.member.age)
            self.ph.setText(self.member.phone)
            self.tier.setCurrentText(self.member.membership_type.value)

        self.nm.textChanged.connect(self.update_save_enabled)
        self.ph.textChanged.connect(self.update_save_enabled)

        self.btn_save = QtWidgets.QPushButton("💾 Save")
        self.btn_save.setFixedHeight(42)
        self.btn_save.clicked.connect(self.on_save)
        layout.addWidget(self.btn_save)

    def update_save_enabled(self) -> None:
        self.btn_save.setEnabled(bool(self.nm.text().strip() and self.ph.text().strip()))

    def on_save(self) -> None:
        tier = MembershipType(self.tier.currentText())
        try:
            if self.member:
                self.saved = edit_member(self.store, self.member, self.nm.text(), self.age.text(),
                                         self.ph.text(), tier, self.photo.new_photo_source)
            else:
                self.saved = add_member(self.store, self.nm.text(), self.age.text(),
                                        self.ph.text(), tier, self.photo.new_photo_source)
        except GymError as e:
            QtWidgets.QMessageBox.critical(self, "Error", e.message)
            return
        self.accept()
