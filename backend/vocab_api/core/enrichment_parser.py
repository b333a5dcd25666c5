from __future__ import annotations

import json
import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import MalformedResponse
from .ingestion import MeaningEntry

_FENCED_BLOCK = re.compile(r"```[\w-]*[ \t]*\n?(.*?)\n?[ \t]*```", re.S)


class EnrichmentRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    word: str
    pronunciation: Optional[str] = None
    meaning: Optional[List[MeaningEntry]] = None
    synonyms: Optional[List[str]] = None
    antonyms: Optional[List[str]] = None
    origin: Optional[str] = None
    relate_with: Optional[str] = None
    mnemonic: Optional[str] = None
    breakdown: Optional[str] = None


def strip_code_fences(text: str) -> str:
    """
    Return the payload of the first ``` / ```json fenced block, wherever it sits
    in the text. Without a complete fence, fall back to the span from the first
    "[" to the last "]" so prose around a bare array is dropped too.
    """
    s = (text or "").strip()
    match = _FENCED_BLOCK.search(s)
    if match:
        return match.group(1).strip()

    start, end = s.find("["), s.rfind("]")
    if start != -1 and end > start:
        return s[start:end + 1]
    return s


def parse_enrichment_payload(text: str) -> List[EnrichmentRecord]:
    """Strict parse: the cleaned text must be a JSON array of word objects."""
    cleaned = strip_code_fences(text)
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise MalformedResponse(error=str(exc))

    if not isinstance(parsed, list):
        raise MalformedResponse(error=f"top-level value is {type(parsed).__name__}, not a list")

    records: List[EnrichmentRecord] = []
    for index, item in enumerate(parsed):
        try:
            records.append(EnrichmentRecord.model_validate(item))
        except ValidationError as exc:
            raise MalformedResponse(error=f"item {index}: {exc.error_count()} validation error(s)")
    return records


def parse_enrichment_response(text: str) -> List[EnrichmentRecord]:
    """Like parse_enrichment_payload, but a malformed answer yields no records."""
    try:
        return parse_enrichment_payload(text)
    except MalformedResponse as exc:
        print(f"[enrichment] discarding AI response: {exc.message} ({exc.detail.get('error')})")
        return []
