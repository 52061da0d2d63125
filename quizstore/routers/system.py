from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from quizstore.core.config import get_settings
from quizstore.db.database import get_db

router = APIRouter(tags=["system"])

@router.get("/health")
def health(db: Session = Depends(get_db)):
    s = get_settings()
    db.execute(text("SELECT 1"))
    return {"status": "ok", "version": s.APP_VERSION, "database": "ok"}

@router.get("/version")
def version():
    s = get_settings()
    return {"name": s.APP_NAME, "version": s.APP_VERSION, "env": s.APP_ENV}
