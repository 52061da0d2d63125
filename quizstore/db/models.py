from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    String,
    DateTime,
    Integer,
    Boolean,
    ForeignKey,
    Text,
    JSON,
    UniqueConstraint,
    func,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from quizstore.db.database import Base

# JSONB côté Postgres (schéma d'origine), JSON texte ailleurs (SQLite)
JsonList = JSON().with_variant(JSONB(), "postgresql")


def _uuid() -> str:
    return str(uuid.uuid4())


def _license_fk():
    return ForeignKey("license_keys.license_key", ondelete="CASCADE")


# ============================================================
# LICENCES
# ============================================================

class LicenseKey(Base):
    __tablename__ = "license_keys"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    license_key: Mapped[str] = mapped_column(Text, unique=True, index=True, nullable=False)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, server_default=text("true"), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # stocké mais jamais appliqué ici
    max_devices: Mapped[int] = mapped_column(Integer, default=3, server_default=text("3"))
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str] = mapped_column(Text, default="admin", server_default=text("'admin'"))


# ============================================================
# PROGRESSION (1 ligne par licence + section)
# ============================================================

class UserProgress(Base):
    __tablename__ = "user_progress"
    __table_args__ = (UniqueConstraint("license_key", "section_id"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    license_key: Mapped[str] = mapped_column(Text, _license_fk(), index=True, nullable=False)
    section_id: Mapped[str] = mapped_column(Text, nullable=False)

    score: Mapped[int] = mapped_column(Integer, default=0, server_default=text("0"))
    total_questions: Mapped[int] = mapped_column(Integer, default=0, server_default=text("0"))
    percentage: Mapped[int] = mapped_column(Integer, default=0, server_default=text("0"))
    attempts: Mapped[int] = mapped_column(Integer, default=1, server_default=text("1"))
    best_score: Mapped[int] = mapped_column(Integer, default=0, server_default=text("0"))

    last_attempt_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


# ============================================================
# SESSIONS DE QUIZ (reprise)
# ============================================================

class QuizSession(Base):
    __tablename__ = "quiz_sessions"
    __table_args__ = (UniqueConstraint("license_key", "section_id"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    license_key: Mapped[str] = mapped_column(Text, _license_fk(), index=True, nullable=False)
    section_id: Mapped[str] = mapped_column(Text, nullable=False)

    current_question_index: Mapped[int] = mapped_column(Integer, default=0, server_default=text("0"))
    score: Mapped[int] = mapped_column(Integer, default=0, server_default=text("0"))

    question_ids: Mapped[list] = mapped_column(JsonList, nullable=False)  # ordre figé au start
    answered_questions: Mapped[list] = mapped_column(JsonList, default=list, server_default=text("'[]'"))

    time_remaining: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_study_mode: Mapped[bool] = mapped_column(Boolean, default=False, server_default=text("false"))

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    @property
    def is_complete(self) -> bool:
        return self.current_question_index >= len(self.question_ids or [])


# ============================================================
# ANNOTATIONS
# ============================================================

class Bookmark(Base):
    __tablename__ = "bookmarks"
    __table_args__ = (UniqueConstraint("license_key", "question_id"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    license_key: Mapped[str] = mapped_column(Text, _license_fk(), index=True, nullable=False)
    question_id: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class WrongAnswer(Base):
    __tablename__ = "wrong_answers"
    __table_args__ = (UniqueConstraint("license_key", "question_id"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    license_key: Mapped[str] = mapped_column(Text, _license_fk(), index=True, nullable=False)
    question_id: Mapped[int] = mapped_column(Integer, nullable=False)

    wrong_count: Mapped[int] = mapped_column(Integer, default=1, server_default=text("1"))
    last_wrong_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


# ============================================================
# ADMIN
# ============================================================

class AdminSetting(Base):
    __tablename__ = "admin_settings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    setting_key: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    setting_value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
