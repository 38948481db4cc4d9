from pathlib import Path

# Global Config
BASE_FOLDER = None
DB_FILE = None
PHOTOS_FOLDER = None

# Hidden file in the user's home directory that remembers the data folder
CONFIG_FILE = Path.home() / ".irondesk_config"

APP_NAME = "IRONDESK GYM"

# Minimum password length accepted on sign up
PASSWORD_MIN_LENGTH = 6

# JPEG quality for camera captures (0-100)
PHOTO_JPEG_QUALITY = 80

# Rotating quote panel on the Gym Owner page
QUOTE_INTERVAL_MS = 4000

GYM_QUOTES = [
    "No pain, no gain.",
    "Train insane or remain the same.",
    "Sweat is just fat crying.",
    "Push yourself because no one else will do it for you.",
    "The body achieves what the mind believes.",
    "Don't limit your challenges, challenge your limits.",
    "Strong is the new sexy.",
    "Make yourself stronger than your excuses.",
]

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
