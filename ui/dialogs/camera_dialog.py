import logging
import tempfile
from pathlib import Path
from typing import Optional

import cv2
from PySide6 import QtWidgets, QtCore, QtGui

import config
from ui.style import DIALOG_STYLE

logger = logging.getLogger(__name__)

FRAME_INTERVAL_MS = 30
CAPTURE_FILE = "irondesk_capture.jpg"


def square_crop(frame):
    """Centre square of a BGR frame. Profile photos are shown as circles."""
    h, w = frame.shape[:2]
    side = min(h, w)
    top, left = (h - side) // 2, (w - side) // 2
    return frame[top:top + side, left:left + side]


def frame_to_pixmap(frame) -> QtGui.QPixmap:
    rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
    h, w, ch = rgb.shape
    image = QtGui.QImage(rgb.data, w, h, ch * w, QtGui.QImage.Format_RGB888)
    # copy() detaches the image from the numpy buffer
    return QtGui.QPixmap.fromImage(image.copy())


class CameraDialog(QtWidgets.QDialog):
    """
    Live webcam preview for a profile photo.
    The preview and the capture are both cropped square; the capture is a JPEG
    in the temp folder that PhotoPicker hands to save_image like an upload.
    """
    def __init__(self, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self.setWindowTitle("📷 Take Photo")
        self.setStyleSheet(DIALOG_STYLE)

        self.captured_path: Optional[str] = None
        self.frame = None
        self.cap: Optional[cv2.VideoCapture] = None
        self.timer = QtCore.QTimer(self)
        self.timer.timeout.connect(self.grab_frame)

        layout = QtWidgets.QVBoxLayout(self)
        self.preview = QtWidgets.QLabel("Starting Camera...")
        self.preview.setAlignment(QtCore.Qt.AlignCenter)
        self.preview.setFixedSize(420, 420)
        self.preview.setStyleSheet("background: black;")
        layout.addWidget(self.preview)

        row = QtWidgets.QHBoxLayout()
        b_cancel = QtWidgets.QPushButton("Cancel")
        b_cancel.clicked.connect(self.reject)
        self.b_capture = QtWidgets.QPushButton("📸 Capture")
        self.b_capture.setEnabled(False)
        self.b_capture.clicked.connect(self.capture)
        row.addWidget(b_cancel)
        row.addWidget(self.b_capture, 1)
        layout.addLayout(row)

        self.open_camera()

    def open_camera(self) -> None:
        self.cap = cv2.VideoCapture(0)
        if not self.cap.isOpened():
            logger.warning("No webcam available")
            QtWidgets.QMessageBox.warning(self, "Camera", "Could not access webcam.\nPlease check connection.")
            # reject() must wait until exec() has started the dialog's loop
            QtCore.QTimer.singleShot(0, self.reject)
            return
        self.timer.start(FRAME_INTERVAL_MS)

    def grab_frame(self) -> None:
        ok, frame = self.cap.read() if self.cap else (False, None)
        if not ok:
            return
        self.frame = square_crop(frame)
        self.b_capture.setEnabled(True)
        self.preview.setPixmap(frame_to_pixmap(self.frame).scaled(
            self.preview.size(), QtCore.Qt.KeepAspectRatio, QtCore.Qt.SmoothTransformation))

    def capture(self) -> None:
        path = Path(tempfile.gettempdir()) / CAPTURE_FILE
        params = [int(cv2.IMWRITE_JPEG_QUALITY), config.PHOTO_JPEG_QUALITY]
        if not cv2.imwrite(str(path), self.frame, params):
            logger.error("Could not write camera capture to %s", path)
            QtWidgets.QMessageBox.warning(self, "Camera", "Could not save the photo.")
            return

        self.captured_path = str(path)
        self.accept()

    def done(self, result: int) -> None:
        # accept(), reject() and the close button all end up here
        self.timer.stop()
        if self.cap:
            self.cap.release()
            self.cap = None
        super().done(result)
