import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from quizstore.core.config import get_settings
from quizstore.core.errors import register_exception_handlers
from quizstore.core.logging import setup_logging
from quizstore.db import database
from quizstore.routers import admin_console, annotations, licenses, progress, rpc, sessions, system
from quizstore.services.seed import seed_defaults

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="API de progression et de sessions de quiz, par clé de licence",
    )

    # Base + seed (idempotent)
    database.init_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)
    if settings.SEED_DEFAULTS:
        db = database.SessionLocal()
        try:
            seed_defaults(db, settings)
        finally:
            db.close()

    # Middleware CORS
    origins = [o.strip() for o in (settings.CORS_ORIGINS or "").split(",") if o.strip()]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],  # fallback si mal configuré
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Routers
    app.include_router(system.router)
    app.include_router(licenses.router)
    app.include_router(progress.router)
    app.include_router(sessions.router)
    app.include_router(annotations.router)
    app.include_router(rpc.router)
    app.include_router(admin_console.router)

    # Redirect root → docs
    @app.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse(url="/docs")

    logger.info("%s %s started (env=%s)", settings.APP_NAME, settings.APP_VERSION, settings.APP_ENV)
    return app
