import sys
from typing import Optional

from PySide6 import QtWidgets, QtCore

import config
from core.exceptions import GymError
from services.auth_service import AuthUser, sign_in
from ui.dialogs.sign_up_dialog import SignUpDialog
from ui.style import DIALOG_STYLE


class SignInDialog(QtWidgets.QDialog):
    """
    Email and password sign in.
    Links to the sign up dialog; a successful sign up also counts as signed in.
    """
    def __init__(self):
        super().__init__()
        self.setWindowTitle(f"Sign In - {config.APP_NAME}")
        self.setModal(True)
        self.setFixedSize(480, 420)

        self.user: Optional[AuthUser] = None

        self.init_ui()
        self.setStyleSheet(DIALOG_STYLE)

    def init_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(30, 30, 30, 30)
        layout.setSpacing(15)

        title = QtWidgets.QLabel(f"💪 {config.APP_NAME}")
        title.setAlignment(QtCore.Qt.AlignCenter)
        title.setStyleSheet("font-size: 30px; font-weight: bold; color: #ffd400;")
        layout.addWidget(title)

        subtitle = QtWidgets.QLabel("Sign In")
        subtitle.setAlignment(QtCore.Qt.AlignCenter)
        subtitle.setStyleSheet("font-size: 18px; margin-bottom: 10px;")
        layout.addWidget(subtitle)

        self.email = QtWidgets.QLineEdit()
        self.email.setPlaceholderText("Email")
        self.email.setMinimumHeight(42)

        self.passwd = QtWidgets.QLineEdit()
        self.passwd.setPlaceholderText("Password")
        self.passwd.setEchoMode(QtWidgets.QLineEdit.Password)
        self.passwd.setMinimumHeight(42)
        self.passwd.returnPressed.connect(self.do_sign_in)

        layout.addWidget(self.email)
        layout.addWidget(self.passwd)

        self.btn_sign_in = QtWidgets.QPushButton("Sign In")
        self.btn_sign_in.setFixedHeight(46)
        self.btn_sign_in.setCursor(QtCore.Qt.PointingHandCursor)
        self.btn_sign_in.clicked.connect(self.do_sign_in)
        layout.addWidget(self.btn_sign_in)

        self.btn_sign_up = QtWidgets.QPushButton("No account? Sign up here")
        self.btn_sign_up.setCursor(QtCore.Qt.PointingHandCursor)
        self.btn_sign_up.setStyleSheet(
            "background: transparent; color: #888; border: none; font-size: 13px; text-decoration: underline;")
        self.btn_sign_up.clicked.connect(self.open_sign_up)
        layout.addWidget(self.btn_sign_up)

        layout.addStretch()

        btn_exit = QtWidgets.QPushButton("🚪 Exit")
        btn_exit.setFixedWidth(120)
        btn_exit.clicked.connect(lambda: sys.exit(0))
        layout.addWidget(btn_exit, alignment=QtCore.Qt.AlignCenter)

    def do_sign_in(self) -> None:
        try:
            self.user = sign_in(self.email.text(), self.passwd.text())
        except GymError as e:
            QtWidgets.QMessageBox.critical(self, "Sign In Failed", e.message)
            return
        self.accept()

    def open_sign_up(self) -> None:
        dlg = SignUpDialog(self)
        if dlg.exec() == QtWidgets.QDialog.Accepted and dlg.user:
            self.user = dlg.user
            self.accept()
