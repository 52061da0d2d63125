import logging

from sqlalchemy.orm import Session

from quizstore.core.config import Settings
from quizstore.db.models import AdminSetting, LicenseKey
from quizstore.db.upsert import insert_for
from quizstore.services.settings_store import ADMIN_PASSWORD_KEY

logger = logging.getLogger(__name__)

DEMO_LICENSES = [
    ("SNQUIZ-2024-DEMO", "Demo key for testing"),
    ("SNQUIZ-FREE-TRIAL", "Free trial key"),
]


def seed_defaults(db: Session, settings: Settings) -> None:
    """
    Insère (sans écraser) le mot de passe admin par défaut et les licences de démo.
    Rejouable à chaque démarrage.
    """
    db.execute(
        insert_for(db, AdminSetting)
        .values(setting_key=ADMIN_PASSWORD_KEY, setting_value=settings.DEFAULT_ADMIN_PASSWORD)
        .on_conflict_do_nothing(index_elements=["setting_key"])
    )

    for key, notes in DEMO_LICENSES:
        db.execute(
            insert_for(db, LicenseKey)
            .values(license_key=key, notes=notes, max_devices=settings.DEFAULT_MAX_DEVICES)
            .on_conflict_do_nothing(index_elements=["license_key"])
        )

    db.commit()
    logger.info("Defaults seeded (%d demo licenses)", len(DEMO_LICENSES))
