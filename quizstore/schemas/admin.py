from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LicenseCreateIn(BaseModel):
    license_key: str = Field(min_length=1, max_length=255)
    expires_at: Optional[datetime] = None
    max_devices: Optional[int] = Field(default=None, ge=1)
    notes: Optional[str] = Field(default=None, max_length=2000)
    created_by: str = Field(default="admin", max_length=120)


class LicenseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    license_key: str
    is_active: bool
    created_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    max_devices: int
    notes: Optional[str] = None
    created_by: str


class SettingIn(BaseModel):
    value: str = Field(min_length=1, max_length=4000)


class SettingOut(BaseModel):
    key: str
    value: str


# ============================================================
# RPC (noms de paramètres des fonctions SQL d'origine)
# ============================================================
class ValidateLicenseKeyIn(BaseModel):
    key: str = ""


class UpsertUserProgressIn(BaseModel):
    p_license_key: str
    p_section_id: str = Field(min_length=1)
    p_score: int = Field(ge=0)
    p_total_questions: int = Field(ge=0)
    p_percentage: int = Field(ge=0, le=100)
