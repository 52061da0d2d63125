from fastapi import Depends, HTTPException, Security
from fastapi.security.api_key import APIKeyHeader
from starlette.status import HTTP_401_UNAUTHORIZED

from quizstore.core.deps import get_settings_store
from quizstore.services.settings_store import SettingsStore

admin_password_header = APIKeyHeader(name="x-admin-password", auto_error=False)


def require_admin(
    password: str = Security(admin_password_header),
    settings_store: SettingsStore = Depends(get_settings_store),
) -> None:
    """
    Vérifie le mot de passe admin (table admin_settings) envoyé dans l'en-tête.
    """
    if settings_store.check_admin_password(password):
        return
    raise HTTPException(
        status_code=HTTP_401_UNAUTHORIZED,
        detail="Mot de passe admin invalide",
    )
