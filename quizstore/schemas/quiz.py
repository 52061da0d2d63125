from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

# -------------------
# Licence
# -------------------
class LicenseValidateIn(BaseModel):
    key: str = Field(default="", max_length=255)

class LicenseValidateOut(BaseModel):
    valid: bool

# -------------------
# Progression
# -------------------
class ProgressIn(BaseModel):
    score: int = Field(ge=0)
    total_questions: int = Field(ge=0)
    percentage: Optional[int] = Field(default=None, ge=0, le=100)  # calculé si absent

class ProgressOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    section_id: str
    score: int
    total_questions: int
    percentage: int
    attempts: int
    best_score: int
    last_attempt_at: Optional[datetime] = None

# -------------------
# Sessions
# -------------------
class SessionStartIn(BaseModel):
    question_ids: List[int] = Field(min_length=1)
    is_study_mode: bool = False
    time_remaining: Optional[int] = Field(default=None, ge=0)  # secondes, None = sans chrono

class SessionAnswerIn(BaseModel):
    question_id: int
    is_correct: bool
    time_remaining: Optional[int] = Field(default=None, ge=0)

class SessionTimeIn(BaseModel):
    time_remaining: Optional[int] = Field(default=None, ge=0)

class SessionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    section_id: str
    question_ids: List[int]
    current_question_index: int
    score: int
    answered_questions: List[int]
    time_remaining: Optional[int] = None
    is_study_mode: bool
    is_complete: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

# -------------------
# Annotations
# -------------------
class BookmarksOut(BaseModel):
    question_ids: List[int]

class WrongAnswerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    question_id: int
    wrong_count: int
    last_wrong_at: Optional[datetime] = None
