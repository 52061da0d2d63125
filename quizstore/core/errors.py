import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_401_UNAUTHORIZED,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_422_UNPROCESSABLE_ENTITY,
)

logger = logging.getLogger(__name__)


class QuizStoreError(Exception):
    """
    Base des erreurs typées remontées par les services.
    Chaque sous-classe porte son code HTTP (utilisé par les handlers FastAPI).
    """

    status_code: int = 400
    default_message: str = "Erreur"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(QuizStoreError):
    # volontairement uniforme: inconnue / expirée / désactivée
    status_code = HTTP_401_UNAUTHORIZED
    default_message = "Licence invalide."


class NotFound(QuizStoreError):
    status_code = HTTP_404_NOT_FOUND
    default_message = "Introuvable."


class Conflict(QuizStoreError):
    status_code = HTTP_409_CONFLICT
    default_message = "Conflit."


class ValidationError(QuizStoreError):
    status_code = HTTP_422_UNPROCESSABLE_ENTITY
    default_message = "Entrée invalide."


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(QuizStoreError)
    async def quizstore_error_handler(request: Request, exc: QuizStoreError):
        logger.info("%s %s -> %s (%s)", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})
