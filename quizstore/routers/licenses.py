from fastapi import APIRouter, Depends

from quizstore.core.deps import get_license_registry
from quizstore.schemas.quiz import LicenseValidateIn, LicenseValidateOut
from quizstore.services.licenses import LicenseRegistry

router = APIRouter(prefix="/v1/license", tags=["license"])


@router.post("/validate", response_model=LicenseValidateOut)
def validate_license(
    payload: LicenseValidateIn,
    registry: LicenseRegistry = Depends(get_license_registry),
):
    # pas de détail (inconnue / expirée / désactivée): juste valid true|false
    return LicenseValidateOut(valid=registry.validate(payload.key.strip()))
