from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import delete, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from quizstore.core.errors import Conflict, NotFound, Unauthorized, ValidationError
from quizstore.core.logging import mask_key
from quizstore.core.principal import Principal
from quizstore.db.models import LicenseKey

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite perd le tzinfo: on stocke toujours en UTC (naïf = déjà UTC)
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class LicenseRegistry:
    """
    Source de vérité des clés de licence.
    validate/authorize sont sur le chemin chaud (1 requête indexée, lecture seule).
    """

    def __init__(self, db: Session, default_max_devices: int = 3):
        self.db = db
        self.default_max_devices = default_max_devices

    # ---------- chemin chaud ----------

    def validate(self, key: str | None) -> bool:
        if not key or not key.strip():
            return False
        now = utcnow()
        found = self.db.execute(
            select(LicenseKey.id).where(
                LicenseKey.license_key == key,
                LicenseKey.is_active.is_(True),
                or_(LicenseKey.expires_at.is_(None), LicenseKey.expires_at > now),
            )
        ).first()
        return found is not None

    def authorize(self, key: str | None) -> Principal:
        # même réponse pour inconnue / expirée / désactivée (pas d'énumération)
        if not self.validate(key):
            logger.warning("License rejected: %s", mask_key(key))
            raise Unauthorized()
        return Principal(license_key=key)

    # ---------- flux admin ----------

    def lookup(self, key: str) -> LicenseKey:
        lic = self.db.execute(
            select(LicenseKey).where(LicenseKey.license_key == key)
        ).scalar_one_or_none()
        if not lic:
            raise NotFound("Licence introuvable.")
        return lic

    def list(self) -> List[LicenseKey]:
        return list(
            self.db.execute(
                select(LicenseKey).order_by(LicenseKey.created_at.asc(), LicenseKey.license_key.asc())
            ).scalars().all()
        )

    def create(
        self,
        key: str,
        *,
        expires_at: Optional[datetime] = None,
        max_devices: Optional[int] = None,
        notes: Optional[str] = None,
        created_by: str = "admin",
    ) -> LicenseKey:
        key = (key or "").strip()
        if not key:
            raise ValidationError("Clé de licence vide.")
        if max_devices is not None and max_devices < 1:
            raise ValidationError("max_devices doit être >= 1.")

        lic = LicenseKey(
            license_key=key,
            is_active=True,
            expires_at=to_utc(expires_at),
            max_devices=max_devices if max_devices is not None else self.default_max_devices,
            notes=notes,
            created_by=created_by or "admin",
        )
        self.db.add(lic)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise Conflict("Clé de licence déjà existante.")
        self.db.refresh(lic)

        logger.info("License created: %s", mask_key(key))
        return lic

    def set_active(self, key: str, active: bool) -> LicenseKey:
        res = self.db.execute(
            update(LicenseKey).where(LicenseKey.license_key == key).values(is_active=active)
        )
        self.db.commit()
        if res.rowcount == 0:
            raise NotFound("Licence introuvable.")

        logger.info("License %s: %s", "activated" if active else "deactivated", mask_key(key))
        return self.lookup(key)

    def deactivate(self, key: str) -> LicenseKey:
        return self.set_active(key, False)

    def activate(self, key: str) -> LicenseKey:
        return self.set_active(key, True)

    def delete(self, key: str) -> None:
        """
        Suppression dure: cascade sur progression, sessions, favoris, erreurs.
        """
        res = self.db.execute(delete(LicenseKey).where(LicenseKey.license_key == key))
        self.db.commit()
        if res.rowcount == 0:
            raise NotFound("Licence introuvable.")
        logger.info("License deleted (cascade): %s", mask_key(key))
