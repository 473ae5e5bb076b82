"""Shared fixtures for itemmatch tests."""

import pytest

from itemmatch.domain.models import Item
from itemmatch.logging.context import clear_log_context


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove environment overrides that would leak into config loading."""
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("ENVIRONMENT", raising=False)


@pytest.fixture
def fire_sword():
    """A fully populated item with structured nested data."""
    return Item(
        identifier="DIAMOND_SWORD",
        display_text={"text": "Fire ", "color": "red", "extra": [{"text": "Sword"}]},
        numeric_tag=[7.9],
        raw_data={
            "tag": {
                "level": 5,
                "type": "fire",
                "enchantments": [{"id": "sharpness", "lvl": 3}],
            },
        },
    )


@pytest.fixture
def owned_head():
    """An item whose owner only appears inside the opaque fallback blob."""
    return Item(
        identifier="PLAYER_HEAD",
        raw_data={
            "meta": {
                "display": "Head",
                "Internal": "H4sI...SkullOwner{ownerUUID=abc123,name=Steve}...",
            },
        },
    )


@pytest.fixture
def bare_item():
    """An item with only an identifier."""
    return Item(identifier="STONE")
