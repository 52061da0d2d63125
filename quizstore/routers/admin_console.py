from __future__ import annotations

from fastapi import APIRouter, Depends
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from quizstore.core.deps import get_license_registry, get_settings_store
from quizstore.core.security import require_admin
from quizstore.schemas.admin import LicenseCreateIn, LicenseOut, SettingIn, SettingOut
from quizstore.services.licenses import LicenseRegistry
from quizstore.services.settings_store import SettingsStore

router = APIRouter(prefix="/admin", tags=["admin-console"], dependencies=[Depends(require_admin)])


# =========================================================
# LICENCES
# =========================================================
@router.get("/licenses")
def admin_licenses(registry: LicenseRegistry = Depends(get_license_registry)):
    return {"items": [LicenseOut.model_validate(lic) for lic in registry.list()]}


@router.post("/licenses", response_model=LicenseOut, status_code=HTTP_201_CREATED)
def admin_create_license(
    payload: LicenseCreateIn,
    registry: LicenseRegistry = Depends(get_license_registry),
):
    return registry.create(
        payload.license_key,
        expires_at=payload.expires_at,
        max_devices=payload.max_devices,
        notes=payload.notes,
        created_by=payload.created_by,
    )


@router.get("/licenses/{license_key}", response_model=LicenseOut)
def admin_lookup_license(
    license_key: str,
    registry: LicenseRegistry = Depends(get_license_registry),
):
    return registry.lookup(license_key)


@router.post("/licenses/{license_key}/deactivate", response_model=LicenseOut)
def admin_deactivate_license(
    license_key: str,
    registry: LicenseRegistry = Depends(get_license_registry),
):
    return registry.deactivate(license_key)


@router.post("/licenses/{license_key}/activate", response_model=LicenseOut)
def admin_activate_license(
    license_key: str,
    registry: LicenseRegistry = Depends(get_license_registry),
):
    return registry.activate(license_key)


@router.delete("/licenses/{license_key}", status_code=HTTP_204_NO_CONTENT)
def admin_delete_license(
    license_key: str,
    registry: LicenseRegistry = Depends(get_license_registry),
):
    # suppression dure: cascade sur toutes les données de la licence
    registry.delete(license_key)


# =========================================================
# PARAMÈTRES
# =========================================================
@router.get("/settings/{setting_key}", response_model=SettingOut)
def admin_get_setting(
    setting_key: str,
    store: SettingsStore = Depends(get_settings_store),
):
    return SettingOut(key=setting_key, value=store.get(setting_key))


@router.put("/settings/{setting_key}", response_model=SettingOut)
def admin_set_setting(
    setting_key: str,
    payload: SettingIn,
    store: SettingsStore = Depends(get_settings_store),
):
    store.set(setting_key, payload.value)
    return SettingOut(key=setting_key, value=payload.value)
