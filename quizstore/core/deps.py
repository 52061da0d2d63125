from fastapi import Depends, Request
from sqlalchemy.orm import Session

from quizstore.core.config import get_settings
from quizstore.core.principal import Principal
from quizstore.db.database import get_db
from quizstore.services.annotations import BookmarkStore, WrongAnswerStore
from quizstore.services.licenses import LicenseRegistry
from quizstore.services.progress import ProgressStore
from quizstore.services.sessions import SessionStore
from quizstore.services.settings_store import SettingsStore


def get_settings_dep():
    return get_settings()


def get_license_registry(db: Session = Depends(get_db)) -> LicenseRegistry:
    return LicenseRegistry(db, default_max_devices=get_settings().DEFAULT_MAX_DEVICES)


def get_principal(
    request: Request,
    registry: LicenseRegistry = Depends(get_license_registry),
) -> Principal:
    """
    Lit la clé de licence dans l'en-tête (x-license-key par défaut)
    et la valide une fois par requête.
    """
    key = request.headers.get(get_settings().LICENSE_HEADER)
    return registry.authorize(key)


def get_progress_store(db: Session = Depends(get_db)) -> ProgressStore:
    return ProgressStore(db)


def get_session_store(db: Session = Depends(get_db)) -> SessionStore:
    return SessionStore(db)


def get_bookmark_store(db: Session = Depends(get_db)) -> BookmarkStore:
    return BookmarkStore(db)


def get_wrong_answer_store(db: Session = Depends(get_db)) -> WrongAnswerStore:
    return WrongAnswerStore(db)


def get_settings_store(db: Session = Depends(get_db)) -> SettingsStore:
    return SettingsStore(db)
