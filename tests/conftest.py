# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Shared fixtures for all tests:
# - A throwaway data folder with an initialized SQLite database
# - In-memory member store / marker doubles (see tests/doubles.py)
# =============================================================================

import pytest

import config
from core.database import init_db
from services.file_manager import init_paths
from tests.doubles import FakeMarker, FakeMemberStore


# =============================================================================
# Data folder fixtures
# =============================================================================

@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Points every config path at a fresh temporary folder."""
    monkeypatch.setattr(config, "CONFIG_FILE", tmp_path / ".irondesk_config")
    monkeypatch.setattr(config, "BASE_FOLDER", None)
    monkeypatch.setattr(config, "DB_FILE", None)
    monkeypatch.setattr(config, "PHOTOS_FOLDER", None)
    init_paths(tmp_path)
    return tmp_path


@pytest.fixture
def db(data_dir):
    """An initialized, empty database."""
    init_db()
    return config.DB_FILE


@pytest.fixture
def sample_image(tmp_path):
    """A small file standing in for an uploaded photo."""
    p = tmp_path / "upload" / "face.PNG"
    p.parent.mkdir()
    p.write_bytes(b"\x89PNG\r\n\x1a\nfake-image-bytes")
    return p


# =============================================================================
# Doubles
# =============================================================================

@pytest.fixture
def fake_store():
    return FakeMemberStore()


@pytest.fixture
def fake_marker():
    return FakeMarker()
