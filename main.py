import logging
import sys

import config
from ui.main_window import GymApp

"""
Entry point for the IronDesk Gym Manager.
Run this file to start the application.
"""


def main() -> None:
    logging.basicConfig(level=logging.INFO, format=config.LOG_FORMAT)

    # Create the Application instance
    app = GymApp(sys.argv)

    # Custom start method (handles setup, DB init, and sign in)
    app.start()

    # Start the event loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
