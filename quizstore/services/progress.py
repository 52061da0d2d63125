from __future__ import annotations

import logging
from typing import List

from sqlalchemy import case, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from quizstore.core.errors import NotFound, Unauthorized, ValidationError
from quizstore.core.principal import Principal
from quizstore.db.models import UserProgress
from quizstore.db.upsert import insert_for

logger = logging.getLogger(__name__)


def compute_percentage(score: int, total: int) -> int:
    if total <= 0:
        return 0
    return int(round(100 * score / total))


class ProgressStore:
    """
    Agrégat score / tentatives par (licence, section).
    Une seule ligne par section, fusionnée à chaque tentative.
    """

    def __init__(self, db: Session):
        self.db = db

    def record_attempt(
        self,
        principal: Principal,
        section_id: str,
        score: int,
        total_questions: int,
        percentage: int,
    ) -> UserProgress:
        """
        Upsert atomique (INSERT ... ON CONFLICT DO UPDATE):
        - score / total / percentage = dernière tentative
        - attempts + 1
        - best_score = max(stocké, nouveau)
        """
        self._check(section_id, score, total_questions, percentage)

        stmt = insert_for(self.db, UserProgress).values(
            license_key=principal.license_key,
            section_id=section_id,
            score=score,
            total_questions=total_questions,
            percentage=percentage,
            attempts=1,
            best_score=score,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["license_key", "section_id"],
            set_={
                "score": stmt.excluded.score,
                "total_questions": stmt.excluded.total_questions,
                "percentage": stmt.excluded.percentage,
                "attempts": UserProgress.attempts + 1,
                "best_score": case(
                    (stmt.excluded.score > UserProgress.best_score, stmt.excluded.score),
                    else_=UserProgress.best_score,
                ),
                "last_attempt_at": func.now(),
            },
        )

        try:
            self.db.execute(stmt)
            self.db.commit()
        except IntegrityError:
            # FK: la licence n'existe plus
            self.db.rollback()
            raise Unauthorized()

        rec = self.get(principal, section_id)
        logger.info(
            "Progress %s/%s: score=%s best=%s attempts=%s",
            principal, section_id, rec.score, rec.best_score, rec.attempts,
        )
        return rec

    def get(self, principal: Principal, section_id: str) -> UserProgress:
        rec = self.db.execute(
            select(UserProgress)
            .where(
                UserProgress.license_key == principal.license_key,
                UserProgress.section_id == section_id,
            )
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()
        if not rec:
            raise NotFound("Aucune progression pour cette section.")
        return rec

    def list(self, principal: Principal) -> List[UserProgress]:
        return list(
            self.db.execute(
                select(UserProgress)
                .where(UserProgress.license_key == principal.license_key)
                .order_by(UserProgress.section_id.asc())
            ).scalars().all()
        )

    @staticmethod
    def _check(section_id: str, score: int, total_questions: int, percentage: int) -> None:
        if not section_id or not str(section_id).strip():
            raise ValidationError("section_id manquant.")
        if score < 0 or total_questions < 0:
            raise ValidationError("Score et nombre de questions doivent être positifs.")
        if score > total_questions:
            raise ValidationError("Le score dépasse le nombre de questions.")
        if not 0 <= percentage <= 100:
            raise ValidationError("Pourcentage hors de 0..100.")
