import logging
import sys
from pathlib import Path
from typing import List, Optional

from PySide6 import QtWidgets

import config
from core.database import init_db
from core.exceptions import GymError
from services.admin_service import AdminStore
from services.auth_service import get_authenticated_user
from services.file_manager import init_paths, load_saved_path, remember_path
from services.member_service import MemberStore
from services.payment_service import PaymentCycleTracker, SettingsMarker, SystemClock
from services.trainer_service import TrainerStore
from ui.dashboards.admin_dashboard import AdminDashboard
from ui.dialogs.sign_in_dialog import SignInDialog

logger = logging.getLogger(__name__)


class GymApp(QtWidgets.QApplication):
    """
    The main Application class that manages the application lifecycle.
    1. Sets up data paths and database.
    2. Skips sign in when a session is remembered.
    3. Launches the Dashboard, and goes back to sign in on logout.
    """
    def __init__(self, args: List[str]):
        super().__init__(args)
        self.main_window: Optional[QtWidgets.QMainWindow] = None

    def start(self) -> None:
        """Initializes the environment and shows the first screen."""
        self.setup_paths()

        try:
            init_db()
            user = get_authenticated_user()
        except GymError as e:
            QtWidgets.QMessageBox.critical(None, "Error", e.message)
            sys.exit(1)

        if user:
            logger.info("Resuming session for %s", user.email)
            self.show_dashboard()
        else:
            self.show_sign_in()

    def setup_paths(self) -> None:
        """
        Loads the data folder from the hidden config file.
        On first run, asks the user to pick one and remembers it.
        """
        data_path = load_saved_path()
        if data_path:
            init_paths(data_path)
            return

        QtWidgets.QMessageBox.information(
            None, f"{config.APP_NAME} - First Time Setup",
            f"Welcome to {config.APP_NAME}.\nPlease select a folder where all gym data will be stored.")

        selected_dir = QtWidgets.QFileDialog.getExistingDirectory(
            None, "Select Data Storage Folder", str(Path.home())
        )
        if not selected_dir:
            QtWidgets.QMessageBox.critical(None, "Error", "Data storage path is required to continue.")
            sys.exit(0)

        data_path = Path(selected_dir)
        try:
            remember_path(data_path)
            init_paths(data_path)
        except OSError as e:
            QtWidgets.QMessageBox.critical(None, "Error", f"Failed to save configuration: {e}")
            sys.exit(0)

    def show_sign_in(self) -> None:
        dlg = SignInDialog()
        if dlg.exec() != QtWidgets.QDialog.Accepted:
            sys.exit(0)

        logger.info("Signed in as %s", dlg.user.email)
        self.show_dashboard()

    def show_dashboard(self) -> None:
        member_store = MemberStore()
        tracker = PaymentCycleTracker(member_store, SettingsMarker(), SystemClock())

        self.main_window = AdminDashboard(AdminStore(), member_store, TrainerStore(), tracker)
        self.main_window.logout_signal.connect(self.on_logout)
        self.main_window.show()

    def on_logout(self) -> None:
        """Re-opens the sign in screen, then closes the old dashboard."""
        old = self.main_window
        self.main_window = None

        # Hidden, not closed: closing the last window would quit the app
        if old:
            old.hide()

        self.show_sign_in()

        if old:
            old.close()
