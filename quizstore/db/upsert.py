from __future__ import annotations

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session


def insert_for(db: Session, model):
    """
    INSERT spécifique au dialecte, pour avoir on_conflict_do_update / do_nothing
    (upsert atomique en une seule requête, pas de read-then-write).
    """
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(model)
    if dialect == "sqlite":
        return sqlite.insert(model)
    raise RuntimeError(f"Upsert non supporté pour le dialecte {dialect!r}")
