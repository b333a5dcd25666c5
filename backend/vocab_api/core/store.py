from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

from fastapi import Depends
from sqlalchemy import func, select, update
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session

from ..models import Word, fold_word
from .database import get_db

# Fields an enrichment record may overwrite on an existing word
ENRICHABLE_FIELDS = (
    "pronunciation",
    "meaning",
    "synonyms",
    "antonyms",
    "origin",
    "relate_with",
    "mnemonic",
    "breakdown",
)

# Largest value a 64-bit signed INTEGER column or LIMIT/OFFSET accepts
MAX_SQL_INTEGER = 2**63 - 1

COUNTER_COLUMNS = {
    "opened": Word.no_of_times_opened,
    "revised": Word.no_of_times_revised,
}


def _escape_like(fragment: str) -> str:
    return fragment.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class WordStore:
    """Record store adapter over a single SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    # ---------- reads ----------

    def get(self, word_id: int) -> Optional[Word]:
        return self.db.get(Word, word_id)

    def find_existing(self, keys: Iterable[str]) -> List[Word]:
        """Words whose case-folded name is in `keys`, in one query."""
        keys = list(set(keys))
        if not keys:
            return []
        return list(self.db.scalars(select(Word).where(Word.word_key.in_(keys))))

    def count(self) -> int:
        return self.db.scalar(select(func.count()).select_from(Word)) or 0

    def scan(self, order_by: Sequence[Any], offset: int, limit: int) -> List[Word]:
        stmt = select(Word).order_by(*order_by).offset(offset).limit(limit)
        return list(self.db.scalars(stmt))

    def search(self, fragment: Optional[str] = None) -> List[Word]:
        stmt = select(Word).order_by(Word.id)
        if fragment:
            pattern = f"%{_escape_like(fold_word(fragment))}%"
            stmt = stmt.where(Word.word_key.like(pattern, escape="\\"))
        return list(self.db.scalars(stmt))

    def words_needing_enrichment(self, after_id: int, limit: int) -> List[Word]:
        stmt = (
            select(Word)
            .where(Word.id > after_id, Word.mnemonic.is_(None))
            .order_by(Word.id)
            .limit(limit)
        )
        return list(self.db.scalars(stmt))

    # ---------- writes ----------

    def insert_many(self, entries: Sequence[Dict[str, Any]]) -> List[Word]:
        """Insert all entries in one transaction; nothing is kept if any row fails."""
        words = [Word(**entry) for entry in entries]
        try:
            self.db.add_all(words)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        for w in words:
            self.db.refresh(w)
        return words

    def adjust_counter(self, word_id: int, counter: str, delta: int) -> Optional[Row]:
        """
        Atomically add `delta` to a counter column and return the row after the
        update (id, word, both counters), or None when no word has that id.
        """
        column = COUNTER_COLUMNS[counter]
        stmt = (
            update(Word)
            .where(Word.id == word_id)
            .values({column.key: column + delta})
            .returning(
                Word.id,
                Word.word,
                Word.no_of_times_opened,
                Word.no_of_times_revised,
            )
            .execution_options(synchronize_session=False)
        )
        try:
            row = self.db.execute(stmt).first()
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return row

    def update_by_name(self, word: str, fields: Dict[str, Any]) -> bool:
        """Overwrite `fields` on the word matching `word` case-insensitively."""
        values = {k: v for k, v in fields.items() if k in ENRICHABLE_FIELDS and v is not None}
        if not values:
            return False
        stmt = (
            update(Word)
            .where(Word.word_key == fold_word(word))
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return result.rowcount > 0


# FastAPI dependency
def get_store(db: Session = Depends(get_db)) -> WordStore:
    return WordStore(db)
