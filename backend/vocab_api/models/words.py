from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import validates

from ..core.database import Base


def fold_word(word: str) -> str:
    """Case-folded form used for case-insensitive comparison of word names."""
    return word.lower()


class Word(Base):
    __tablename__ = "words"

    id = Column(Integer, primary_key=True, index=True)
    word = Column(String, nullable=False)
    # Lowercased copy of `word`; the unique index is what makes dedup hold under races
    word_key = Column(String, nullable=False, unique=True, index=True)

    pronunciation = Column(String, nullable=True)
    meaning = Column(JSON, nullable=False, default=list)  # [{"meaning": ..., "example": ...}]
    synonyms = Column(JSON, nullable=False, default=list)
    antonyms = Column(JSON, nullable=False, default=list)

    origin = Column(Text, nullable=True)
    relate_with = Column(Text, nullable=True)
    mnemonic = Column(Text, nullable=True)
    breakdown = Column(Text, nullable=True)

    no_of_times_opened = Column(Integer, nullable=False, default=0)
    no_of_times_revised = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @validates("word")
    def _sync_word_key(self, key, value):
        self.word_key = fold_word(value)
        return value

    def __repr__(self) -> str:
        return f"<Word id={self.id} word={self.word!r}>"
