# Black and yellow look shared by every dialog
DIALOG_STYLE = """
    QDialog { background: #0c0c0c; color: #ffffff; font-family: 'Segoe UI'; }
    QLabel { color: #ffffff; font-size: 14px; }
    QLineEdit, QComboBox {
        background: #1b1b1b; color: #ffffff; border: 1px solid #333;
        border-radius: 6px; padding: 8px; font-size: 13px;
    }
    QLineEdit:focus, QComboBox:focus { border: 1px solid #ffd400; }
    QPushButton {
        background: #c9a400; color: #111; border-radius: 8px;
        padding: 8px 16px; font-weight: bold; font-size: 14px; border: none;
    }
    QPushButton:hover { background: #ffd400; }
    QPushButton:disabled { background: #552222; color: #aa6666; }
    QComboBox::drop-down { border: none; }
"""
