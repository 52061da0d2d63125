import logging
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


engine: Engine | None = None
SessionLocal = sessionmaker(autocommit=False, autoflush=False, future=True)


def _enable_sqlite_fk(dbapi_conn, _record):
    # SQLite ignore les FK (et donc ON DELETE CASCADE) sans ce pragma
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA foreign_keys = ON")
    cur.close()


def build_engine(url: str, echo: bool = False) -> Engine:
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    eng = create_engine(url, echo=echo, future=True, pool_pre_ping=True, connect_args=connect_args)
    if eng.dialect.name == "sqlite":
        event.listen(eng, "connect", _enable_sqlite_fk)
    return eng


def init_engine(url: str, echo: bool = False) -> Engine:
    """
    (Re)branche l'engine global + SessionLocal, puis crée les tables.
    Appelé par create_app() ; les tests l'appellent avec une base temporaire.
    """
    global engine
    if engine is not None:
        engine.dispose()

    engine = build_engine(url, echo=echo)
    SessionLocal.configure(bind=engine)

    from quizstore.db import models  # noqa: F401  (charge les modèles)
    Base.metadata.create_all(bind=engine)

    logger.info("Database ready (%s)", engine.dialect.name)
    return engine


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
