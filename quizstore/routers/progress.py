from fastapi import APIRouter, Depends

from quizstore.core.deps import get_principal, get_progress_store
from quizstore.core.principal import Principal
from quizstore.schemas.quiz import ProgressIn, ProgressOut
from quizstore.services.progress import ProgressStore, compute_percentage

router = APIRouter(prefix="/v1/progress", tags=["progress"])


@router.get("")
def list_progress(
    principal: Principal = Depends(get_principal),
    store: ProgressStore = Depends(get_progress_store),
):
    return {"items": [ProgressOut.model_validate(p) for p in store.list(principal)]}


@router.get("/{section_id}", response_model=ProgressOut)
def get_progress(
    section_id: str,
    principal: Principal = Depends(get_principal),
    store: ProgressStore = Depends(get_progress_store),
):
    return store.get(principal, section_id)


@router.post("/{section_id}", response_model=ProgressOut)
def record_attempt(
    section_id: str,
    payload: ProgressIn,
    principal: Principal = Depends(get_principal),
    store: ProgressStore = Depends(get_progress_store),
):
    percentage = payload.percentage
    if percentage is None:
        percentage = compute_percentage(payload.score, payload.total_questions)

    return store.record_attempt(
        principal,
        section_id,
        score=payload.score,
        total_questions=payload.total_questions,
        percentage=percentage,
    )
