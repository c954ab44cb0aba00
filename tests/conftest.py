"""Shared fixtures for the request builder tests."""
import pytest

from files_client.config.settings import get_settings

TEST_PNG_CONTENT = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    """Run every test against the default settings, ignoring the host environment."""
    for key in ("API_VERSION", "SERVICES_PATH", "CHATTER_ENTITY_ENCODING", "LOG_LEVEL"):
        monkeypatch.delenv(f"FILES_CLIENT_{key}", raising=False)
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def png_file(tmp_path):
    path = tmp_path / "a.png"
    path.write_bytes(TEST_PNG_CONTENT)
    return path
