import pytest

from quizstore.core.config import Settings
from quizstore.core.errors import NotFound
from quizstore.db.models import LicenseKey
from quizstore.services.licenses import LicenseRegistry
from quizstore.services.seed import seed_defaults
from quizstore.services.settings_store import SettingsStore


def test_get_missing(db):
    with pytest.raises(NotFound):
        SettingsStore(db).get("nope")


def test_set_upserts_in_place(db):
    store = SettingsStore(db)
    store.set("theme", "dark")
    store.set("theme", "light")
    assert store.get("theme") == "light"


def test_admin_password_check(db):
    store = SettingsStore(db)
    assert store.check_admin_password("admin123") is False  # rien en base

    store.set("admin_password", "s3cret")
    assert store.check_admin_password("s3cret") is True
    assert store.check_admin_password("S3CRET") is False
    assert store.check_admin_password(None) is False


def test_seed_is_idempotent_and_keeps_changes(db):
    settings = Settings(DEFAULT_ADMIN_PASSWORD="admin123")
    seed_defaults(db, settings)

    store = SettingsStore(db)
    store.set("admin_password", "changed")
    seed_defaults(db, settings)

    assert store.get("admin_password") == "changed"
    assert db.query(LicenseKey).count() == 2

    registry = LicenseRegistry(db)
    assert registry.validate("SNQUIZ-2024-DEMO")
    assert registry.validate("SNQUIZ-FREE-TRIAL")
    assert registry.lookup("SNQUIZ-2024-DEMO").notes == "Demo key for testing"
