from __future__ import annotations

from typing import Any, Dict

from .errors import InvalidIdFormat, MissingId, NotFound
from .store import MAX_SQL_INTEGER, WordStore


def parse_word_id(raw: Any) -> int:
    """Accept positive integers and digit strings; anything else is malformed."""
    if raw is None or (isinstance(raw, str) and raw.strip() == ""):
        raise MissingId()
    if isinstance(raw, bool):
        raise InvalidIdFormat()
    if isinstance(raw, int):
        word_id = raw
    elif isinstance(raw, str) and raw.strip().isascii() and raw.strip().isdigit():
        word_id = int(raw.strip())
    else:
        raise InvalidIdFormat()
    if not 1 <= word_id <= MAX_SQL_INTEGER:
        raise InvalidIdFormat()
    return word_id


def adjust_counter(store: WordStore, raw_id: Any, counter: str, delta: int) -> Dict[str, Any]:
    """
    Apply +1/-1 to one counter of a word and return the values after the update.
    Decrement has no lower bound: a counter at 0 goes to -1.
    """
    word_id = parse_word_id(raw_id)
    row = store.adjust_counter(word_id, counter, delta)
    if row is None:
        raise NotFound()

    print(f"[words] {counter} {delta:+d} on word {row.id} -> "
          f"opened={row.no_of_times_opened} revised={row.no_of_times_revised}")

    data = {"wordId": row.id, "word": row.word}
    if counter == "revised":
        data["no_of_times_revised"] = row.no_of_times_revised
    data["no_of_times_opened"] = row.no_of_times_opened
    return data
