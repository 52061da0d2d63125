from __future__ import annotations

import logging
import uuid
from typing import List, Optional, Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from quizstore.core.errors import Conflict, NotFound, Unauthorized, ValidationError
from quizstore.core.principal import Principal
from quizstore.db.models import QuizSession, UserProgress
from quizstore.db.upsert import insert_for
from quizstore.services.progress import ProgressStore, compute_percentage

logger = logging.getLogger(__name__)


class SessionStore:
    """
    État de quiz reprenable, au plus 1 session par (licence, section).

    absent -> en cours (index < len(question_ids)) -> terminé (index == len)
    finish() enregistre la tentative puis supprime la ligne.
    Aucune expiration: le temps restant est seulement stocké.
    """

    def __init__(self, db: Session, progress: Optional[ProgressStore] = None):
        self.db = db
        self.progress = progress or ProgressStore(db)

    # ---------- transitions ----------

    def start(
        self,
        principal: Principal,
        section_id: str,
        question_ids: Sequence[int],
        is_study_mode: bool = False,
        time_remaining: Optional[int] = None,
    ) -> QuizSession:
        """
        Crée (ou remplace) la session: index=0, score=0, aucune réponse.
        Une tentative précédente pour la même section est écrasée.
        """
        if not section_id or not str(section_id).strip():
            raise ValidationError("section_id manquant.")
        qids = self._check_question_ids(question_ids)
        self._check_time(time_remaining)

        stmt = insert_for(self.db, QuizSession).values(
            id=str(uuid.uuid4()),
            license_key=principal.license_key,
            section_id=section_id,
            current_question_index=0,
            score=0,
            question_ids=qids,
            answered_questions=[],
            time_remaining=time_remaining,
            is_study_mode=bool(is_study_mode),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["license_key", "section_id"],
            set_={
                # nouvel id: invalide tout compare-and-set en vol sur l'ancienne tentative
                "id": stmt.excluded.id,
                "current_question_index": 0,
                "score": 0,
                "question_ids": stmt.excluded.question_ids,
                "answered_questions": stmt.excluded.answered_questions,
                "time_remaining": stmt.excluded.time_remaining,
                "is_study_mode": stmt.excluded.is_study_mode,
                "created_at": func.now(),
                "updated_at": func.now(),
            },
        )
        self._execute(stmt)

        sess = self.resume(principal, section_id)
        logger.info("Session started %s/%s (%d questions)", principal, section_id, len(qids))
        return sess

    def record_answer(
        self,
        principal: Principal,
        section_id: str,
        question_id: int,
        is_correct: bool,
        time_remaining: Optional[int] = None,
    ) -> QuizSession:
        sess = self.resume(principal, section_id)
        self._check_time(time_remaining)

        answered = list(sess.answered_questions or [])
        if question_id not in (sess.question_ids or []):
            raise ValidationError("Question absente de cette session.")
        if question_id in answered:
            logger.warning("Replay rejected %s/%s q=%s", principal, section_id, question_id)
            raise Conflict("Question déjà répondue.")
        if sess.is_complete:
            raise Conflict("La session est déjà terminée.")

        values = {
            "current_question_index": sess.current_question_index + 1,
            "score": QuizSession.score + (1 if is_correct else 0),
            "answered_questions": answered + [question_id],
            "updated_at": func.now(),
        }
        if time_remaining is not None:
            values["time_remaining"] = time_remaining

        # compare-and-set sur (id, index): deux appareils ne peuvent pas
        # valider la même position deux fois
        res = self.db.execute(
            update(QuizSession)
            .where(
                QuizSession.id == sess.id,
                QuizSession.current_question_index == sess.current_question_index,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        if res.rowcount == 0:
            logger.warning("Concurrent answer lost %s/%s q=%s", principal, section_id, question_id)
            raise Conflict("Session modifiée entre-temps, recharger.")

        return self.resume(principal, section_id)

    def save_time(self, principal: Principal, section_id: str, time_remaining: Optional[int]) -> QuizSession:
        self._check_time(time_remaining)
        res = self.db.execute(
            update(QuizSession)
            .where(
                QuizSession.license_key == principal.license_key,
                QuizSession.section_id == section_id,
            )
            .values(time_remaining=time_remaining, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        if res.rowcount == 0:
            raise NotFound("Aucune session en cours.")
        return self.resume(principal, section_id)

    def finish(self, principal: Principal, section_id: str) -> UserProgress:
        """
        Enregistre la tentative (ProgressStore) puis supprime la session.
        """
        sess = self.resume(principal, section_id)
        total = len(sess.question_ids or [])
        score = int(sess.score)

        rec = self.progress.record_attempt(
            principal,
            section_id,
            score=score,
            total_questions=total,
            percentage=compute_percentage(score, total),
        )
        self._delete(principal, section_id, session_id=sess.id)

        logger.info("Session finished %s/%s: %s/%s", principal, section_id, score, total)
        return rec

    def abandon(self, principal: Principal, section_id: str) -> None:
        if not self._delete(principal, section_id):
            raise NotFound("Aucune session en cours.")
        logger.info("Session abandoned %s/%s", principal, section_id)

    # ---------- lecture ----------

    def resume(self, principal: Principal, section_id: str) -> QuizSession:
        sess = self.db.execute(
            select(QuizSession)
            .where(
                QuizSession.license_key == principal.license_key,
                QuizSession.section_id == section_id,
            )
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()
        if not sess:
            raise NotFound("Aucune session en cours.")
        return sess

    def list(self, principal: Principal) -> List[QuizSession]:
        return list(
            self.db.execute(
                select(QuizSession)
                .where(QuizSession.license_key == principal.license_key)
                .order_by(QuizSession.updated_at.desc(), QuizSession.section_id.asc())
                .execution_options(populate_existing=True)
            ).scalars().all()
        )

    # ---------- internals ----------

    def _delete(self, principal: Principal, section_id: str, session_id: Optional[str] = None) -> bool:
        stmt = delete(QuizSession).where(
            QuizSession.license_key == principal.license_key,
            QuizSession.section_id == section_id,
        )
        if session_id is not None:
            # ne pas effacer une tentative redémarrée entre-temps
            stmt = stmt.where(QuizSession.id == session_id)
        res = self.db.execute(stmt.execution_options(synchronize_session=False))
        self.db.commit()
        return res.rowcount > 0

    def _execute(self, stmt) -> None:
        try:
            self.db.execute(stmt)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise Unauthorized()

    @staticmethod
    def _check_question_ids(question_ids: Sequence[int]) -> List[int]:
        qids = list(question_ids or [])
        if not qids:
            raise ValidationError("La session doit contenir au moins une question.")
        if any(isinstance(q, bool) or not isinstance(q, int) for q in qids):
            raise ValidationError("Identifiants de questions entiers attendus.")
        if len(set(qids)) != len(qids):
            raise ValidationError("Identifiants de questions en double.")
        return qids

    @staticmethod
    def _check_time(time_remaining: Optional[int]) -> None:
        if time_remaining is not None and time_remaining < 0:
            raise ValidationError("time_remaining doit être >= 0.")
