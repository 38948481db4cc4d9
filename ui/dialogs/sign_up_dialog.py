from typing import Optional

from PySide6 import QtWidgets, QtCore

import config
from core.exceptions import GymError
from services.auth_service import AuthUser, sign_up
from ui.style import DIALOG_STYLE


class SignUpDialog(QtWidgets.QDialog):
    """Creates a new email/password account and signs it in."""
    def __init__(self, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self.setWindowTitle(f"Sign Up - {config.APP_NAME}")
        self.setModal(True)
        self.setFixedSize(450, 360)

        self.user: Optional[AuthUser] = None

        self.init_ui()
        self.setStyleSheet(DIALOG_STYLE)

    def init_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(30, 30, 30, 30)
        layout.setSpacing(15)

        title = QtWidgets.QLabel("📝 Sign Up")
        title.setAlignment(QtCore.Qt.AlignCenter)
        title.setStyleSheet("font-size: 22px; font-weight: bold; color: #ffd400;")
        layout.addWidget(title)

        self.email = QtWidgets.QLineEdit()
        self.email.setPlaceholderText("Email")
        self.email.setMinimumHeight(40)

        self.passwd = QtWidgets.QLineEdit()
        self.passwd.setPlaceholderText(f"Password (min {config.PASSWORD_MIN_LENGTH} characters)")
        self.passwd.setEchoMode(QtWidgets.QLineEdit.Password)
        self.passwd.setMinimumHeight(40)

        layout.addWidget(self.email)
        layout.addWidget(self.passwd)

        btn = QtWidgets.QPushButton("✓ Sign Up")
        btn.setFixedHeight(45)
        btn.setCursor(QtCore.Qt.PointingHandCursor)
        btn.clicked.connect(self.do_sign_up)
        layout.addWidget(btn)
        layout.addStretch()

    def do_sign_up(self) -> None:
        try:
            self.user = sign_up(self.email.text(), self.passwd.text())
        except GymError as e:
            QtWidgets.QMessageBox.critical(self, "Error", e.message)
            return
        self.accept()
