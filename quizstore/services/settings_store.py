from __future__ import annotations

import hmac
import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from quizstore.core.errors import NotFound
from quizstore.db.models import AdminSetting
from quizstore.db.upsert import insert_for

logger = logging.getLogger(__name__)

ADMIN_PASSWORD_KEY = "admin_password"


class SettingsStore:
    """
    Configuration globale clé -> valeur (table admin_settings).
    Injectée en dépendance, pas d'état global.
    """

    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> str:
        value = self.db.execute(
            select(AdminSetting.setting_value).where(AdminSetting.setting_key == key)
        ).scalar_one_or_none()
        if value is None:
            raise NotFound("Paramètre introuvable.")
        return value

    def set(self, key: str, value: str) -> None:
        stmt = insert_for(self.db, AdminSetting).values(setting_key=key, setting_value=value)
        stmt = stmt.on_conflict_do_update(
            index_elements=["setting_key"],
            set_={"setting_value": stmt.excluded.setting_value, "updated_at": func.now()},
        )
        self.db.execute(stmt)
        self.db.commit()
        # jamais la valeur (peut être un secret)
        logger.info("Setting updated: %s", key)

    def check_admin_password(self, candidate: str | None) -> bool:
        if not candidate:
            return False
        try:
            expected = self.get(ADMIN_PASSWORD_KEY)
        except NotFound:
            return False
        return hmac.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))
