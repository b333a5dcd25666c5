"""
Tests for case-insensitive deduplicating ingestion (POST /api/v1/postWords).
"""

import pytest

from conftest import count_words, seed_words
from vocab_api.core.errors import AllDuplicates, DuplicateConflict, InvalidInput
from vocab_api.core.ingestion import ingest_words
from vocab_api.core.store import WordStore


class TestPostWords:
    def test_existing_name_in_other_case_is_skipped(self, app, client):
        seed_words(app, [{"word": "Ephemeral"}])

        resp = client.post(
            "/api/v1/postWords",
            json={"words": [{"word": "EPHEMERAL"}, {"word": "Laconic", "pronunciation": "luh-KON-ik"}]},
        )

        assert resp.status_code == 201
        body = resp.json()
        assert body["message"] == "1 words added successfully."
        assert len(body["addedWords"]) == 1
        assert body["addedWords"][0]["word"] == "Laconic"
        assert body["addedWords"][0]["pronunciation"] == "luh-KON-ik"
        assert "ephemeral" in body["skippedWords"]
        assert count_words(app) == 2

    def test_added_word_carries_defaults_and_timestamps(self, client):
        resp = client.post(
            "/api/v1/postWords",
            json={
                "words": [
                    {
                        "word": "gregarious",
                        "meaning": [{"meaning": "fond of company", "example": "a gregarious host"}],
                        "synonyms": ["sociable", "sociable"],
                    }
                ]
            },
        )

        assert resp.status_code == 201
        added = resp.json()["addedWords"][0]
        assert isinstance(added["id"], int)
        assert added["meaning"] == [{"meaning": "fond of company", "example": "a gregarious host"}]
        assert added["synonyms"] == ["sociable", "sociable"]
        assert added["antonyms"] == []
        assert added["no_of_times_opened"] == 0
        assert added["no_of_times_revised"] == 0
        assert added["createdAt"] is not None
        assert added["updatedAt"] is not None

    def test_all_duplicates_fails_and_store_is_unchanged(self, app, client):
        seed_words(app, [{"word": "Candor"}, {"word": "zeal"}])

        resp = client.post(
            "/api/v1/postWords",
            json={"words": [{"word": "candor"}, {"word": "ZEAL"}]},
        )

        assert resp.status_code == 400
        body = resp.json()
        assert body["success"] is False
        assert "already exist" in body["message"]
        assert sorted(body["skippedWords"]) == ["candor", "zeal"]
        assert count_words(app) == 2

    @pytest.mark.parametrize("payload", [{"words": []}, {"words": "apple"}, {"words": {"word": "a"}}, {}])
    def test_rejects_empty_or_non_list_batch(self, app, client, payload):
        resp = client.post("/api/v1/postWords", json=payload)

        assert resp.status_code == 400
        assert resp.json()["message"] == "Please provide an array of words."
        assert count_words(app) == 0

    @pytest.mark.parametrize("entry", [{"pronunciation": "x"}, {"word": ""}, {"word": 42}, "plain"])
    def test_rejects_entry_without_word(self, app, client, entry):
        resp = client.post("/api/v1/postWords", json={"words": [{"word": "fine"}, entry]})

        assert resp.status_code == 400
        assert count_words(app) == 0


def test_repeated_name_inside_one_batch_is_inserted_once(app):
    db = app.state.session_factory()
    try:
        added, skipped = ingest_words(
            WordStore(db),
            [{"word": "Quixotic"}, {"word": "quixotic"}, {"word": "wane"}],
        )
    finally:
        db.close()

    assert [w.word for w in added] == ["Quixotic", "wane"]
    assert skipped == ["quixotic"]
    assert count_words(app) == 2


def test_invalid_input_raised_for_empty_batch(app):
    db = app.state.session_factory()
    try:
        with pytest.raises(InvalidInput):
            ingest_words(WordStore(db), [])
    finally:
        db.close()


def test_all_duplicates_exception_lists_skipped_names(app):
    seed_words(app, [{"word": "Aplomb"}])
    db = app.state.session_factory()
    try:
        with pytest.raises(AllDuplicates) as exc_info:
            ingest_words(WordStore(db), [{"word": "aplomb"}])
    finally:
        db.close()

    assert exc_info.value.detail["skippedWords"] == ["aplomb"]


def test_non_object_body_is_invalid_input(app, client):
    resp = client.post("/api/v1/postWords", json=[{"word": "a"}])

    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["message"] == "Invalid request body"
    assert body["error"]
    assert count_words(app) == 0


class _BlindStore(WordStore):
    """Misses existing rows, as if another request inserted them after our lookup."""

    def find_existing(self, keys):
        return []


def test_race_with_concurrent_insert_hits_unique_index(app):
    seed_words(app, [{"word": "Ennui"}])
    db = app.state.session_factory()
    try:
        with pytest.raises(DuplicateConflict):
            ingest_words(_BlindStore(db), [{"word": "new-one"}, {"word": "ENNUI"}])
    finally:
        db.close()

    # nothing from the failed batch was kept
    assert count_words(app) == 1
