from fastapi import APIRouter, Depends

from ..core.counters import adjust_counter
from ..core.store import WordStore, get_store
from .schemas import CounterData, CounterRequest, CounterResponse

router = APIRouter(prefix="/api/v1", tags=["counters"])


def _respond(message: str, data: dict) -> CounterResponse:
    return CounterResponse(message=message, data=CounterData(**data))


@router.post("/increase_open_count", response_model=CounterResponse, response_model_exclude_none=True)
def increase_open_count(payload: CounterRequest, store: WordStore = Depends(get_store)):
    data = adjust_counter(store, payload.id, "opened", +1)
    return _respond("Open count increased successfully", data)


@router.post("/decrease_open_count", response_model=CounterResponse, response_model_exclude_none=True)
def decrease_open_count(payload: CounterRequest, store: WordStore = Depends(get_store)):
    data = adjust_counter(store, payload.id, "opened", -1)
    return _respond("Open count decreased successfully", data)


@router.post("/increase_revision_count", response_model=CounterResponse, response_model_exclude_none=True)
def increase_revision_count(payload: CounterRequest, store: WordStore = Depends(get_store)):
    data = adjust_counter(store, payload.id, "revised", +1)
    return _respond("Revision count increased successfully", data)


@router.post("/decrease_revision_count", response_model=CounterResponse, response_model_exclude_none=True)
def decrease_revision_count(payload: CounterRequest, store: WordStore = Depends(get_store)):
    data = adjust_counter(store, payload.id, "revised", -1)
    return _respond("Revision count decreased successfully", data)
