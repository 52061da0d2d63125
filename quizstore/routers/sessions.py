from fastapi import APIRouter, Depends
from starlette.status import HTTP_204_NO_CONTENT

from quizstore.core.deps import get_principal, get_session_store
from quizstore.core.principal import Principal
from quizstore.schemas.quiz import (
    ProgressOut,
    SessionAnswerIn,
    SessionOut,
    SessionStartIn,
    SessionTimeIn,
)
from quizstore.services.sessions import SessionStore

router = APIRouter(prefix="/v1/sessions", tags=["sessions"])


@router.get("")
def list_sessions(
    principal: Principal = Depends(get_principal),
    store: SessionStore = Depends(get_session_store),
):
    return {"items": [SessionOut.model_validate(s) for s in store.list(principal)]}


@router.put("/{section_id}", response_model=SessionOut)
def start_session(
    section_id: str,
    payload: SessionStartIn,
    principal: Principal = Depends(get_principal),
    store: SessionStore = Depends(get_session_store),
):
    return store.start(
        principal,
        section_id,
        payload.question_ids,
        is_study_mode=payload.is_study_mode,
        time_remaining=payload.time_remaining,
    )


@router.get("/{section_id}", response_model=SessionOut)
def resume_session(
    section_id: str,
    principal: Principal = Depends(get_principal),
    store: SessionStore = Depends(get_session_store),
):
    return store.resume(principal, section_id)


@router.post("/{section_id}/answer", response_model=SessionOut)
def answer(
    section_id: str,
    payload: SessionAnswerIn,
    principal: Principal = Depends(get_principal),
    store: SessionStore = Depends(get_session_store),
):
    return store.record_answer(
        principal,
        section_id,
        payload.question_id,
        payload.is_correct,
        time_remaining=payload.time_remaining,
    )


@router.patch("/{section_id}/time", response_model=SessionOut)
def save_time(
    section_id: str,
    payload: SessionTimeIn,
    principal: Principal = Depends(get_principal),
    store: SessionStore = Depends(get_session_store),
):
    return store.save_time(principal, section_id, payload.time_remaining)


@router.post("/{section_id}/finish", response_model=ProgressOut)
def finish(
    section_id: str,
    principal: Principal = Depends(get_principal),
    store: SessionStore = Depends(get_session_store),
):
    return store.finish(principal, section_id)


@router.delete("/{section_id}", status_code=HTTP_204_NO_CONTENT)
def abandon(
    section_id: str,
    principal: Principal = Depends(get_principal),
    store: SessionStore = Depends(get_session_store),
):
    store.abandon(principal, section_id)
