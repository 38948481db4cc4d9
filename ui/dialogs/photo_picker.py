from typing import Optional

from PySide6 import QtWidgets, QtCore, QtGui

from services.file_manager import photo_full_path
from ui.dialogs.camera_dialog import CameraDialog


def circle_pixmap(path: Optional[str], size: int) -> Optional[QtGui.QPixmap]:
    """Loads an image and crops it to a circle, like the profile avatars."""
    if not path:
        return None

    src = QtGui.QPixmap(str(path))
    if src.isNull():
        return None

    src = src.scaled(size, size, QtCore.Qt.KeepAspectRatioByExpanding, QtCore.Qt.SmoothTransformation)
    out = QtGui.QPixmap(size, size)
    out.fill(QtCore.Qt.transparent)

    painter = QtGui.QPainter(out)
    painter.setRenderHint(QtGui.QPainter.Antialiasing)
    clip = QtGui.QPainterPath()
    clip.addEllipse(0, 0, size, size)
    painter.setClipPath(clip)
    painter.drawPixmap(0, 0, src)
    painter.end()
    return out


class PhotoPicker(QtWidgets.QWidget):
    """
    Avatar preview with Upload / Take Photo / Clear buttons.
    `new_photo_source` holds a freshly chosen file until the form is saved.
    """
    def __init__(self, stored_photo: Optional[str] = None, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self.new_photo_source: Optional[str] = None
        self._stored = photo_full_path(stored_photo)

        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.preview = QtWidgets.QLabel("📷 No Photo")
        self.preview.setFixedSize(120, 120)
        self.preview.setAlignment(QtCore.Qt.AlignCenter)
        self.preview.setStyleSheet("border: 2px solid #444; border-radius: 60px; background: #222;")
        layout.addWidget(self.preview)

        btns = QtWidgets.QVBoxLayout()
        b_upl = QtWidgets.QPushButton("📁 Upload")
        b_upl.clicked.connect(self.upload)
        b_cam = QtWidgets.QPushButton("📷 Take Photo")
        b_cam.clicked.connect(self.take_photo)
        b_clr = QtWidgets.QPushButton("🗑️ Clear")
        b_clr.clicked.connect(self.clear)
        for b in (b_upl, b_cam, b_clr):
            b.setCursor(QtCore.Qt.PointingHandCursor)
            btns.addWidget(b)
        layout.addLayout(btns)
        layout.addStretch()

        self.show_photo(str(self._stored) if self._stored else None)

    def show_photo(self, path: Optional[str]) -> None:
        pm = circle_pixmap(path, 120)
        if pm:
            self.preview.setPixmap(pm)
        else:
            self.preview.clear()
            self.preview.setText("📷 No Photo")

    def upload(self) -> None:
        fn, _ = QtWidgets.QFileDialog.getOpenFileName(
            self, "Select Photo", "", "Images (*.png *.jpg *.jpeg *.bmp)"
        )
        if fn:
            self.new_photo_source = fn
            self.show_photo(fn)

    def take_photo(self) -> None:
        dlg = CameraDialog(self)
        if dlg.exec() == QtWidgets.QDialog.Accepted and dlg.captured_path:
            self.new_photo_source = dlg.captured_path
            self.show_photo(dlg.captured_path)

    def clear(self) -> None:
        # Only discards an unsaved choice; the stored photo stays until replaced
        self.new_photo_source = None
        self.show_photo(str(self._stored) if self._stored else None)
