from fastapi import APIRouter, Depends

from quizstore.core.deps import get_bookmark_store, get_principal, get_wrong_answer_store
from quizstore.core.principal import Principal
from quizstore.schemas.quiz import BookmarksOut, WrongAnswerOut
from quizstore.services.annotations import BookmarkStore, WrongAnswerStore

router = APIRouter(prefix="/v1", tags=["annotations"])


# =========================================================
# Favoris
# =========================================================
@router.get("/bookmarks", response_model=BookmarksOut)
def list_bookmarks(
    principal: Principal = Depends(get_principal),
    store: BookmarkStore = Depends(get_bookmark_store),
):
    return BookmarksOut(question_ids=store.list(principal))


@router.put("/bookmarks/{question_id}")
def add_bookmark(
    question_id: int,
    principal: Principal = Depends(get_principal),
    store: BookmarkStore = Depends(get_bookmark_store),
):
    store.add(principal, question_id)
    return {"ok": True, "question_id": question_id, "bookmarked": True}


@router.delete("/bookmarks/{question_id}")
def remove_bookmark(
    question_id: int,
    principal: Principal = Depends(get_principal),
    store: BookmarkStore = Depends(get_bookmark_store),
):
    removed = store.remove(principal, question_id)
    return {"ok": True, "question_id": question_id, "removed": removed}


# =========================================================
# Mauvaises réponses
# =========================================================
@router.get("/wrong-answers")
def list_wrong_answers(
    limit: int | None = None,
    principal: Principal = Depends(get_principal),
    store: WrongAnswerStore = Depends(get_wrong_answer_store),
):
    if limit is not None:
        limit = max(1, min(500, limit))
    return {"items": [WrongAnswerOut.model_validate(w) for w in store.list(principal, limit=limit)]}


@router.post("/wrong-answers/{question_id}", response_model=WrongAnswerOut)
def record_wrong(
    question_id: int,
    principal: Principal = Depends(get_principal),
    store: WrongAnswerStore = Depends(get_wrong_answer_store),
):
    return store.record_wrong(principal, question_id)
