from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from quizstore.core.errors import Unauthorized
from quizstore.core.principal import Principal
from quizstore.db.models import Bookmark, WrongAnswer
from quizstore.db.upsert import insert_for

logger = logging.getLogger(__name__)


def _run(db: Session, stmt):
    try:
        res = db.execute(stmt)
        db.commit()
        return res
    except IntegrityError:
        # FK licence
        db.rollback()
        raise Unauthorized()


# =========================================================
# Favoris
# =========================================================
class BookmarkStore:
    """Simple appartenance (licence, question), idempotente."""

    def __init__(self, db: Session):
        self.db = db

    def add(self, principal: Principal, question_id: int) -> None:
        stmt = (
            insert_for(self.db, Bookmark)
            .values(license_key=principal.license_key, question_id=question_id)
            .on_conflict_do_nothing(index_elements=["license_key", "question_id"])
        )
        _run(self.db, stmt)

    def remove(self, principal: Principal, question_id: int) -> bool:
        res = _run(
            self.db,
            delete(Bookmark)
            .where(Bookmark.license_key == principal.license_key, Bookmark.question_id == question_id)
            .execution_options(synchronize_session=False),
        )
        return res.rowcount > 0

    def contains(self, principal: Principal, question_id: int) -> bool:
        found = self.db.execute(
            select(Bookmark.id).where(
                Bookmark.license_key == principal.license_key,
                Bookmark.question_id == question_id,
            )
        ).first()
        return found is not None

    def list(self, principal: Principal) -> List[int]:
        rows = self.db.execute(
            select(Bookmark.question_id)
            .where(Bookmark.license_key == principal.license_key)
            .order_by(Bookmark.created_at.asc(), Bookmark.question_id.asc())
        ).scalars().all()
        return [int(q) for q in rows]


# =========================================================
# Mauvaises réponses (révision des erreurs)
# =========================================================
class WrongAnswerStore:
    """Compteur par (licence, question): +1 à chaque erreur, jamais décrémenté."""

    def __init__(self, db: Session):
        self.db = db

    def record_wrong(self, principal: Principal, question_id: int) -> WrongAnswer:
        stmt = insert_for(self.db, WrongAnswer).values(
            license_key=principal.license_key,
            question_id=question_id,
            wrong_count=1,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["license_key", "question_id"],
            set_={
                "wrong_count": WrongAnswer.wrong_count + 1,
                "last_wrong_at": func.now(),
            },
        )
        _run(self.db, stmt)

        rec = self.db.execute(
            select(WrongAnswer)
            .where(
                WrongAnswer.license_key == principal.license_key,
                WrongAnswer.question_id == question_id,
            )
            .execution_options(populate_existing=True)
        ).scalar_one()
        logger.debug("Wrong answer %s q=%s count=%s", principal, question_id, rec.wrong_count)
        return rec

    def list(self, principal: Principal, limit: Optional[int] = None) -> List[WrongAnswer]:
        stmt = (
            select(WrongAnswer)
            .where(WrongAnswer.license_key == principal.license_key)
            .order_by(
                WrongAnswer.wrong_count.desc(),
                WrongAnswer.last_wrong_at.desc(),
                WrongAnswer.question_id.asc(),
            )
        )
        if limit is not None:
            stmt = stmt.limit(max(1, int(limit)))
        return list(self.db.execute(stmt).scalars().all())
