"""
Shared fixtures: every test gets its own app over a fresh in-memory database.
"""

from typing import Dict, List

import pytest
from fastapi.testclient import TestClient

from vocab_api.config import Settings
from vocab_api.core.store import WordStore
from vocab_api.main import create_app
from vocab_api.models import Word


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        password="open-sesame",
        token="tok-123",
        gemini_api_key=None,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)


def seed_words(app, entries: List[Dict]) -> List[int]:
    """Insert words directly through the store and return their ids."""
    db = app.state.session_factory()
    try:
        added = WordStore(db).insert_many(entries)
        return [w.id for w in added]
    finally:
        db.close()


def load_word(app, word_id: int) -> Word:
    db = app.state.session_factory()
    try:
        w = db.get(Word, word_id)
        db.expunge(w)
        return w
    finally:
        db.close()


def count_words(app) -> int:
    db = app.state.session_factory()
    try:
        return WordStore(db).count()
    finally:
        db.close()
