from typing import Optional

from fastapi import APIRouter, Depends, status

from ..core.ingestion import ingest_words
from ..core.sorting import DEFAULT_LISTING, parse_pagination, resolve_sort, sorting_types
from ..core.store import WordStore, get_store
from .schemas import (
    FilteredWords,
    PostWordsRequest,
    PostWordsResponse,
    SortedWordsPage,
    SortedWordsResponse,
    SortingTypesResponse,
    WordOut,
    WordsPage,
)

router = APIRouter(prefix="/api/v1", tags=["words"])


@router.post(
    "/postWords",
    response_model=PostWordsResponse,
    status_code=status.HTTP_201_CREATED,
)
def post_words(payload: PostWordsRequest, store: WordStore = Depends(get_store)):
    added, skipped = ingest_words(store, payload.words)
    return PostWordsResponse(
        message=f"{len(added)} words added successfully.",
        addedWords=[WordOut.model_validate(w) for w in added],
        skippedWords=skipped,
    )


@router.get("/getWords", response_model=WordsPage)
def get_words(
    limit: Optional[str] = None,
    page: Optional[str] = None,
    store: WordStore = Depends(get_store),
):
    pagination = parse_pagination(limit, page)
    total = store.count()
    words = store.scan(DEFAULT_LISTING.order_by(), pagination.offset, pagination.limit)
    return WordsPage(
        totalCount=total,
        totalPages=pagination.total_pages(total),
        currentPage=pagination.page,
        words=[WordOut.model_validate(w) for w in words],
    )


@router.get("/words/filter", response_model=FilteredWords)
def filter_words(word: Optional[str] = None, store: WordStore = Depends(get_store)):
    words = store.search(word)
    return FilteredWords(
        count=len(words),
        words=[WordOut.model_validate(w) for w in words],
    )


@router.get("/getWordsByType", response_model=SortedWordsResponse)
def get_words_by_type(
    limit: Optional[str] = None,
    page: Optional[str] = None,
    type: Optional[str] = None,
    store: WordStore = Depends(get_store),
):
    # Validate everything before the first query
    sort = resolve_sort(type)
    pagination = parse_pagination(limit, page)

    total = store.count()
    words = store.scan(sort.order_by(), pagination.offset, pagination.limit)
    return SortedWordsResponse(
        data=SortedWordsPage(
            totalCount=total,
            totalPages=pagination.total_pages(total),
            currentPage=pagination.page,
            limit=pagination.limit,
            type=sort.token,
            sortDescription=sort.description,
            words=[WordOut.model_validate(w) for w in words],
        )
    )


@router.get("/getWordSortingTypes", response_model=SortingTypesResponse)
def get_word_sorting_types():
    return SortingTypesResponse(data=sorting_types())
