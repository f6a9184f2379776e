"""Pytest configuration and fixtures for avatar API tests.

Provides common fixtures for testing.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from avatarapi.canonical.teacher_key import KeyStrategy
from avatarapi.config import AppConfig, ServerConfig, StoreConfig, reset_config
from avatarapi.models import ConfigurationRecord, Item
from avatarapi.store.repository import ConfigStore
from avatarapi.web.app import create_app


@pytest.fixture
def teacher_secret() -> str:
    """Test teacher API key."""
    return "sk-teacher-alpha"


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Data directory that does not exist yet."""
    return tmp_path / "data"


@pytest.fixture
def store_path(data_dir: Path) -> Path:
    return data_dir / "teachers.json"


@pytest.fixture
def store(store_path: Path) -> ConfigStore:
    """Unloaded store over a temp file."""
    return ConfigStore(store_path)


@pytest.fixture
def sample_items() -> list[Item]:
    """A small custom catalog."""
    return [
        Item(id="crown", name="Gold Crown", price=300, image_url="/static/items/crown.png", slot="A"),
        Item(id="cape", name="Red Cape", price=120.5, image_url="/static/items/cape.png", slot="C"),
    ]


@pytest.fixture
def sample_record(sample_items: list[Item]) -> ConfigurationRecord:
    return ConfigurationRecord(items=sample_items, slot_rules={"1": ["X", "Y"]})


@pytest.fixture
def sample_items_payload() -> list[dict]:
    """Same catalog as sample_items, as the front-end sends it."""
    return [
        {"id": "crown", "name": "Gold Crown", "price": 300, "imageUrl": "/static/items/crown.png", "slot": "A"},
        {"id": "cape", "name": "Red Cape", "price": 120.5, "imageUrl": "/static/items/cape.png", "slot": "C"},
    ]


def make_config(data_dir: Path, **store_overrides) -> AppConfig:
    return AppConfig(
        log_level="DEBUG",
        server=ServerConfig(static_dir=str(data_dir / "no-static"), enable_metrics=False),
        store=StoreConfig(data_dir=data_dir, **store_overrides),
    )


@pytest.fixture
def app_config(data_dir: Path) -> AppConfig:
    """Digest-mode config pointing at the temp data directory."""
    return make_config(data_dir)


@pytest.fixture
def passthrough_config(data_dir: Path) -> AppConfig:
    return make_config(data_dir, key_strategy=KeyStrategy.PASSTHROUGH, record_updated_at=False)


@pytest.fixture
def app(app_config: AppConfig, store: ConfigStore):
    """Full application wired to the temp store."""
    return create_app(app_config, store)


@pytest.fixture
def client(app):
    """Test client with lifespan (startup validation) executed."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch):
    """Set up test environment variables."""
    for name in (
        "HOST",
        "PORT",
        "DATA_DIR",
        "TEACHER_KEY_STRATEGY",
        "RECORD_UPDATED_AT",
        "STATIC_DIR",
        "CORS_ORIGINS",
        "ENABLE_METRICS",
        "JSON_LOGS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    reset_config()
    yield
    reset_config()
