import logging
import shutil
import uuid
from pathlib import Path
from typing import Optional

import config
from core.exceptions import StoreError

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".bmp"}


def ensure_folder(p: Path) -> None:
    """Creates the folder if it does not exist."""
    p.mkdir(parents=True, exist_ok=True)


def init_paths(base_path: Path) -> None:
    """
    Initialize all global paths based on the selected base path.
    Sets up the Database file and the Photos folder.
    """
    config.BASE_FOLDER = Path(base_path) / "Gym Data"
    ensure_folder(config.BASE_FOLDER)

    config.DB_FILE = config.BASE_FOLDER / "irondesk.db"

    config.PHOTOS_FOLDER = config.BASE_FOLDER / "Photos"
    ensure_folder(config.PHOTOS_FOLDER)


def load_saved_path() -> Optional[Path]:
    """
    Reads the data folder remembered in the hidden config file.
    Returns None if there is no usable saved choice.
    """
    config_file = config.CONFIG_FILE
    if not config_file.exists():
        return None

    try:
        content = config_file.read_text(encoding="utf-8").strip()
    except OSError as e:
        # A corrupt or unreadable config just means we ask the user again
        logger.warning("Could not read %s: %s", config_file, e)
        return None

    if content:
        data_path = Path(content)
        if data_path.exists():
            return data_path
    return None


def remember_path(data_path: Path) -> None:
    """Saves the chosen data folder so the next start skips the setup prompt."""
    config.CONFIG_FILE.write_text(str(data_path), encoding="utf-8")


# --- PHOTO STORAGE ---

def save_image(source_path: str) -> str:
    """
    Copies an image into the photos folder under a fresh unique name.

    Args:
        source_path (str): Any image file on disk (upload or camera capture).

    Returns:
        str: The stored file name, relative to the photos folder.

    Raises:
        StoreError: If the file is missing or cannot be copied.
    """
    src = Path(source_path)
    if not src.is_file():
        raise StoreError(f"Photo not found: {source_path}")

    suffix = src.suffix.lower() if src.suffix.lower() in IMAGE_EXTENSIONS else ".jpg"
    filename = uuid.uuid4().hex + suffix

    ensure_folder(config.PHOTOS_FOLDER)
    try:
        shutil.copy2(src, config.PHOTOS_FOLDER / filename)
    except OSError as e:
        logger.error("Failed to save photo %s: %s", source_path, e)
        raise StoreError(f"Could not save photo: {e}") from e

    return filename


def photo_full_path(filename: Optional[str]) -> Optional[Path]:
    """Resolves a stored photo name to its file. None if unset or deleted."""
    if not filename or not config.PHOTOS_FOLDER:
        return None

    p = config.PHOTOS_FOLDER / filename
    return p if p.is_file() else None


def delete_image(filename: Optional[str]) -> None:
    """Removes a stored photo. A photo that is already gone is not an error."""
    p = photo_full_path(filename)
    if p is None:
        return

    try:
        p.unlink()
    except OSError as e:
        logger.warning("Could not delete photo %s: %s", p, e)
