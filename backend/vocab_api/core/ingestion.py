from __future__ import annotations

from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ValidationError, field_validator
from sqlalchemy.exc import IntegrityError

from ..models import Word, fold_word
from .errors import AllDuplicates, DuplicateConflict, InvalidInput
from .store import WordStore


class MeaningEntry(BaseModel):
    meaning: str | None = None
    example: str | None = None


class WordEntry(BaseModel):
    """One candidate word in a postWords batch; unknown keys are dropped."""

    word: str
    pronunciation: str | None = None
    meaning: List[MeaningEntry] = []
    synonyms: List[str] = []
    antonyms: List[str] = []
    origin: str | None = None
    relate_with: str | None = None
    mnemonic: str | None = None
    breakdown: str | None = None

    @field_validator("word")
    @classmethod
    def validate_word(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("word must not be empty")
        return v


def _validate_batch(words: Any) -> List[WordEntry]:
    if not isinstance(words, list) or len(words) == 0:
        raise InvalidInput("Please provide an array of words.")

    entries: List[WordEntry] = []
    for index, raw in enumerate(words):
        if not isinstance(raw, dict):
            raise InvalidInput(f"Entry {index} is not a word object.")
        try:
            entries.append(WordEntry.model_validate(raw))
        except ValidationError as exc:
            raise InvalidInput(
                f"Entry {index} is invalid.",
                error=exc.errors(include_url=False, include_context=False),
            )
    return entries


def ingest_words(store: WordStore, words: Any) -> Tuple[List[Word], List[str]]:
    """
    Insert the candidates whose name is not in the store yet.

    Names are compared case-folded, with one batched lookup for the whole batch
    and one batched insert for the survivors. A name repeated inside the batch
    is kept once. Returns (added words, skipped names).
    """
    entries = _validate_batch(words)

    existing = store.find_existing(fold_word(e.word) for e in entries)
    existing_keys = {w.word_key for w in existing}

    unique: List[Dict[str, Any]] = []
    skipped: List[str] = []
    seen = set(existing_keys)
    for entry in entries:
        key = fold_word(entry.word)
        if key in seen:
            skipped.append(key)
            continue
        seen.add(key)
        unique.append(entry.model_dump())

    if not unique:
        raise AllDuplicates(skippedWords=skipped)

    try:
        added = store.insert_many(unique)
    except IntegrityError as exc:
        # someone inserted one of these names between our lookup and insert
        raise DuplicateConflict(error=str(exc.orig))

    print(f"[words] added {len(added)} word(s), skipped {len(skipped)}")
    return added, skipped
