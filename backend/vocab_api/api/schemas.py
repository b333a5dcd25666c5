from datetime import datetime
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, Field


class MeaningOut(BaseModel):
    meaning: Optional[str] = None
    example: Optional[str] = None


class WordOut(BaseModel):
    id: int
    word: str
    pronunciation: Optional[str] = None
    meaning: List[MeaningOut] = []
    synonyms: List[str] = []
    antonyms: List[str] = []
    origin: Optional[str] = None
    relate_with: Optional[str] = None
    mnemonic: Optional[str] = None
    breakdown: Optional[str] = None
    no_of_times_opened: int = 0
    no_of_times_revised: int = 0
    createdAt: Optional[datetime] = Field(default=None, validation_alias=AliasChoices("createdAt", "created_at"))
    updatedAt: Optional[datetime] = Field(default=None, validation_alias=AliasChoices("updatedAt", "updated_at"))

    class Config:
        from_attributes = True


# ---------- Requests ----------

class PostWordsRequest(BaseModel):
    # validated by the ingestion layer so bad batches get a 400, not a 422
    words: Any = None


class CounterRequest(BaseModel):
    id: Any = None


class VerifyPasswordRequest(BaseModel):
    password: Optional[str] = None


# ---------- Responses ----------

class PostWordsResponse(BaseModel):
    message: str
    addedWords: List[WordOut]
    skippedWords: List[str]


class WordsPage(BaseModel):
    totalCount: int
    totalPages: int
    currentPage: int
    words: List[WordOut]


class FilteredWords(BaseModel):
    count: int
    words: List[WordOut]


class SortedWordsPage(WordsPage):
    limit: int
    type: str
    sortDescription: str


class SortedWordsResponse(BaseModel):
    success: bool = True
    data: SortedWordsPage


class SortingType(BaseModel):
    type: str
    description: str


class SortingTypesResponse(BaseModel):
    success: bool = True
    data: List[SortingType]


class CounterData(BaseModel):
    wordId: int
    word: str
    no_of_times_opened: int
    no_of_times_revised: Optional[int] = None


class CounterResponse(BaseModel):
    success: bool = True
    message: str
    data: CounterData


class VerifyPasswordResponse(BaseModel):
    message: str
    token: Optional[str] = None
