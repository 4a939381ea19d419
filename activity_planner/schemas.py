from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional
from datetime import datetime
from enum import Enum

from activity_planner.time_windows import is_valid_time


class Priority(str, Enum):
    URGENT = "urgent"
    IMPORTANT = "important"
    SOMEDAY = "someday"


class EnergyLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RecurrenceType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Weekday(str, Enum):
    SUN = "Sun"
    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"


class TimeOfDay(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"


def _strip_or_none(value: Optional[str]) -> Optional[str]:
    """Trim strings; empty or whitespace-only becomes None"""
    if value is None:
        return None
    value = value.strip()
    return value or None


def _check_time(value: Optional[str]) -> Optional[str]:
    value = _strip_or_none(value)
    if value is not None and not is_valid_time(value):
        raise ValueError("time must use the HH:MM 24-hour format")
    return value


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

class CategoryCreate(BaseModel):
    """Schema for creating a category"""
    name: str
    color: str
    icon: Optional[str] = None

    @field_validator("name", "color")
    @classmethod
    def required_text(cls, value: str) -> str:
        value = _strip_or_none(value)
        if value is None:
            raise ValueError("must not be empty")
        return value

    @field_validator("icon")
    @classmethod
    def optional_text(cls, value: Optional[str]) -> Optional[str]:
        return _strip_or_none(value)


class CategoryUpdate(BaseModel):
    """Schema for partial category updates"""
    name: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None

    @field_validator("name", "color", "icon")
    @classmethod
    def optional_text(cls, value: Optional[str]) -> Optional[str]:
        return _strip_or_none(value)


class CategoryRead(BaseModel):
    id: int
    name: str
    color: str
    icon: Optional[str] = None

    class Config:
        from_attributes = True


# ---------------------------------------------------------------------------
# Contexts
# ---------------------------------------------------------------------------

class ContextCreate(BaseModel):
    """Schema for creating a context (a named recurring time window)"""
    name: str
    label: str
    days: Optional[List[Weekday]] = None
    time_start: Optional[str] = None
    time_end: Optional[str] = None

    @field_validator("name", "label")
    @classmethod
    def required_text(cls, value: str) -> str:
        value = _strip_or_none(value)
        if value is None:
            raise ValueError("must not be empty")
        return value

    @field_validator("time_start", "time_end")
    @classmethod
    def valid_time(cls, value: Optional[str]) -> Optional[str]:
        return _check_time(value)

    @model_validator(mode="after")
    def both_bounds_or_none(self):
        if (self.time_start is None) != (self.time_end is None):
            raise ValueError("time_start and time_end must be given together")
        return self


class ContextUpdate(BaseModel):
    """Schema for partial context updates; only fields sent are written"""
    name: Optional[str] = None
    label: Optional[str] = None
    days: Optional[List[Weekday]] = None
    time_start: Optional[str] = None
    time_end: Optional[str] = None

    @field_validator("name", "label")
    @classmethod
    def optional_text(cls, value: Optional[str]) -> Optional[str]:
        return _strip_or_none(value)

    @field_validator("time_start", "time_end")
    @classmethod
    def valid_time(cls, value: Optional[str]) -> Optional[str]:
        return _check_time(value)


class ContextRead(BaseModel):
    id: int
    name: str
    label: str
    days: Optional[List[str]] = None
    time_start: Optional[str] = None
    time_end: Optional[str] = None

    class Config:
        from_attributes = True


# ---------------------------------------------------------------------------
# Time slots
# ---------------------------------------------------------------------------

class TimeSlotCreate(BaseModel):
    """Schema for an activity-specific window"""
    day_of_week: Optional[Weekday] = None
    time_start: str
    time_end: str

    @field_validator("time_start", "time_end")
    @classmethod
    def valid_time(cls, value: str) -> str:
        value = _check_time(value)
        if value is None:
            raise ValueError("time is required for time slots")
        return value


class TimeSlotRead(BaseModel):
    id: Optional[int] = None
    day_of_week: Optional[str] = None
    time_start: str
    time_end: str

    class Config:
        from_attributes = True


# ---------------------------------------------------------------------------
# Activities
# ---------------------------------------------------------------------------

class ActivityCreate(BaseModel):
    """Schema for creating an activity"""
    title: str
    description: Optional[str] = None
    category_id: Optional[int] = None
    duration_minutes: Optional[int] = Field(default=None, ge=1)
    energy_level: Optional[EnergyLevel] = None
    location: Optional[str] = None
    priority: Priority = Priority.SOMEDAY
    is_recurring: bool = False
    recurrence_type: Optional[RecurrenceType] = None
    contexts: List[int] = []
    time_slots: List[TimeSlotCreate] = []

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        value = _strip_or_none(value)
        if value is None:
            raise ValueError("title is required")
        return value

    @field_validator("description", "location")
    @classmethod
    def optional_text(cls, value: Optional[str]) -> Optional[str]:
        return _strip_or_none(value)

    @model_validator(mode="after")
    def recurrence_consistent(self):
        if self.is_recurring and self.recurrence_type is None:
            raise ValueError("recurring activities need a recurrence_type")
        if not self.is_recurring:
            self.recurrence_type = None
        return self


class ActivityUpdate(BaseModel):
    """
    Schema for partial activity updates.
    
    Only fields present in the payload are written. A blank title normalizes
    to None and leaves the stored title untouched. `contexts` and `time_slots`
    replace the whole set when present.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    category_id: Optional[int] = None
    duration_minutes: Optional[int] = Field(default=None, ge=1)
    energy_level: Optional[EnergyLevel] = None
    location: Optional[str] = None
    priority: Optional[Priority] = None
    is_recurring: Optional[bool] = None
    recurrence_type: Optional[RecurrenceType] = None
    is_completed: Optional[bool] = None
    contexts: Optional[List[int]] = None
    time_slots: Optional[List[TimeSlotCreate]] = None

    @field_validator("title", "description", "location")
    @classmethod
    def optional_text(cls, value: Optional[str]) -> Optional[str]:
        return _strip_or_none(value)


class ActivityDetail(BaseModel):
    """Activity with contexts, time slots and completion aggregates populated"""
    id: int
    title: str
    description: Optional[str] = None
    category_id: Optional[int] = None
    category: Optional[CategoryRead] = None
    duration_minutes: Optional[int] = None
    energy_level: Optional[EnergyLevel] = None
    location: Optional[str] = None
    priority: Priority = Priority.SOMEDAY
    is_recurring: bool = False
    recurrence_type: Optional[RecurrenceType] = None
    is_completed: bool = False
    created_at: Optional[datetime] = None
    contexts: List[ContextRead] = []
    time_slots: List[TimeSlotRead] = []
    completions_count: int = 0
    last_completed: Optional[datetime] = None

    class Config:
        from_attributes = True


# ---------------------------------------------------------------------------
# Completions and suggestions
# ---------------------------------------------------------------------------

class CompletionCreate(BaseModel):
    notes: Optional[str] = None


class CompletionRead(BaseModel):
    id: int
    activity_id: int
    completed_at: datetime
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class SuggestionRead(BaseModel):
    """One ranked suggestion as returned over HTTP"""
    activity: ActivityDetail
    score: int
    reason: Optional[str] = None
    reasons: Optional[List[str]] = None
