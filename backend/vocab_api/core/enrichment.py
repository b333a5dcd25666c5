"""
Offline job that asks the AI provider for mnemonics and writes them back.

Run with `python -m vocab_api.core.enrichment` or the `vocab-enrich` script.
Batches are processed one after another with a fixed pause in between to
stay under provider rate limits; a failed batch is logged and skipped.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from textwrap import dedent
from typing import Awaitable, Callable, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from ..config import Settings, get_settings
from ..models import Word
from .database import Base, create_db_engine, make_session_factory
from .enrichment_parser import parse_enrichment_response
from .errors import ProviderError
from .llm_provider import LLMProvider, build_provider
from .store import WordStore

Sleep = Callable[[float], Awaitable[None]]


@dataclass
class EnrichmentReport:
    batches: int = 0
    updated: int = 0
    failed_batches: List[int] = field(default_factory=list)


def build_enrichment_prompt(words: Sequence[str]) -> str:
    listing = "\n".join(f"- {w}" for w in words)
    return dedent(
        """
        You are helping an English learner memorise vocabulary.
        For each word below, write:
          - "mnemonic": a short, vivid memory hook
          - "breakdown": the word split into meaningful parts (roots, prefixes, sounds)
          - "relate_with": an everyday situation or familiar word to associate it with

        Return ONLY a JSON array, one object per word, with the keys
        "word", "mnemonic", "breakdown" and "relate_with".
        Copy each "word" exactly as given. No prose, no markdown.

        Words:
        """
    ).strip() + "\n" + listing


async def enrich_batch(store: WordStore, provider: LLMProvider, words: Sequence[Word]) -> int:
    """Enrich one batch; returns how many stored words were updated."""
    prompt = build_enrichment_prompt([w.word for w in words])
    text = await provider.complete(prompt)
    records = parse_enrichment_response(text)

    updated = 0
    for record in records:
        fields = record.model_dump(exclude={"word"}, exclude_none=True)
        if store.update_by_name(record.word, fields):
            updated += 1
        else:
            print(f"[enrichment] no stored word matches '{record.word}'")
    return updated


async def run_enrichment(
    store: WordStore,
    provider: LLMProvider,
    batch_size: int = 10,
    delay_seconds: float = 180.0,
    max_batches: Optional[int] = None,
    sleep: Sleep = asyncio.sleep,
) -> EnrichmentReport:
    """Walk all words without a mnemonic in id order, one batch at a time."""
    report = EnrichmentReport()
    last_id = 0

    while max_batches is None or report.batches < max_batches:
        batch = store.words_needing_enrichment(after_id=last_id, limit=batch_size)
        if not batch:
            break

        if report.batches:
            await sleep(delay_seconds)

        report.batches += 1
        last_id = batch[-1].id
        try:
            updated = await enrich_batch(store, provider, batch)
        except (ProviderError, SQLAlchemyError) as exc:
            print(f"[enrichment] batch {report.batches} failed ({type(exc).__name__}): {exc}")
            report.failed_batches.append(report.batches)
            continue

        report.updated += updated
        print(f"[enrichment] batch {report.batches}: {updated}/{len(batch)} word(s) updated")

    print(
        f"[enrichment] done: {report.batches} batch(es), {report.updated} updated, "
        f"{len(report.failed_batches)} failed"
    )
    return report


async def main(settings: Optional[Settings] = None) -> EnrichmentReport:
    settings = settings or get_settings()
    engine = create_db_engine(settings.database_url)
    Base.metadata.create_all(bind=engine)
    session_factory = make_session_factory(engine)

    db = session_factory()
    try:
        return await run_enrichment(
            WordStore(db),
            build_provider(settings),
            batch_size=settings.enrichment_batch_size,
            delay_seconds=settings.enrichment_delay_sec,
        )
    finally:
        db.close()
        engine.dispose()


def cli() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    cli()
