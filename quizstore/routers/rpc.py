from fastapi import APIRouter, Depends, Response
from starlette.status import HTTP_204_NO_CONTENT

from quizstore.core.deps import get_license_registry, get_progress_store
from quizstore.schemas.admin import UpsertUserProgressIn, ValidateLicenseKeyIn
from quizstore.services.licenses import LicenseRegistry
from quizstore.services.progress import ProgressStore

# Équivalents des fonctions SQL appelées en RPC par le client
router = APIRouter(prefix="/rpc", tags=["rpc"])


@router.post("/validate_license_key", response_model=bool)
def validate_license_key(
    payload: ValidateLicenseKeyIn,
    registry: LicenseRegistry = Depends(get_license_registry),
):
    return registry.validate(payload.key)


@router.post("/upsert_user_progress", status_code=HTTP_204_NO_CONTENT)
def upsert_user_progress(
    payload: UpsertUserProgressIn,
    registry: LicenseRegistry = Depends(get_license_registry),
    store: ProgressStore = Depends(get_progress_store),
):
    principal = registry.authorize(payload.p_license_key)
    store.record_attempt(
        principal,
        payload.p_section_id,
        score=payload.p_score,
        total_questions=payload.p_total_questions,
        percentage=payload.p_percentage,
    )
    return Response(status_code=HTTP_204_NO_CONTENT)
