"""
Pydantic Schemas - Data Validation Models

Defines all Pydantic schemas used by the report pipeline:
- Raw records fetched from the external providers (habits, tasks)
- Aggregate reports persisted by the stores and served by the API

Field names follow the JSON wire format (camelCase), so
``report.model_dump()`` is exactly the public response body.

Usage:
    from utils.schemas import Habit, HabitsReport

    habit = Habit(**raw_data)
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ---------------------------------------------------------------------------
# Raw records
# ---------------------------------------------------------------------------


class ProviderRecord(BaseModel):
    """Base for provider records.

    Keys match the wire names case-insensitively (``userid`` and ``USERID``
    both fill ``userID``); an exact key wins over a differently cased one.
    JSON null leaves a field at its empty value.
    """

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def match_wire_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        wire_keys = {}
        for name, field in cls.model_fields.items():
            wire_key = field.alias or name
            wire_keys[wire_key.lower()] = wire_key

        matched: dict[Any, Any] = {}
        for key, value in data.items():
            wire_key = wire_keys.get(key.lower(), key) if isinstance(key, str) else key
            if wire_key != key and wire_key in data:
                continue
            matched[wire_key] = value
        return matched


class Habit(ProviderRecord):
    """One habit as returned by the habits provider.

    Missing keys fall back to empty values. Only ``color``, ``score``,
    ``userID`` and ``title`` feed the report.
    """

    difficulty: str = Field(default="", description="Difficulty label")
    color: str = Field(default="", description="Category tag, e.g. 'red darken-1'")
    score: int = Field(default=0, description="Habit score")
    habitID: str = Field(default="", alias="_id", description="Habit identifier")
    userID: str = Field(default="", description="Owner user id")
    type: str = Field(default="", description="Habit type")
    title: str = Field(default="", description="Habit title")

    @field_validator("difficulty", "color", "habitID", "userID", "type", "title", mode="before")
    @classmethod
    def null_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("score", mode="before")
    @classmethod
    def null_to_zero(cls, v: Any) -> Any:
        return 0 if v is None else v


class Task(ProviderRecord):
    """One task as returned by the tasks provider.

    Timestamps are unix seconds. ``completedDate`` is None while the task
    is still open.
    """

    completedDate: Optional[int] = Field(default=None, description="Completion time")
    description: str = Field(default="", description="Task description")
    dueDate: int = Field(default=0, description="Due time")
    reminder: int = Field(default=0, alias="remind", description="Reminder time")
    title: str = Field(default="", description="Task title")
    userID: str = Field(default="", alias="userId", description="Owner user id")

    @field_validator("description", "title", "userID", mode="before")
    @classmethod
    def null_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("dueDate", "reminder", mode="before")
    @classmethod
    def null_to_zero(cls, v: Any) -> Any:
        return 0 if v is None else v

    @property
    def is_completed(self) -> bool:
        return self.completedDate is not None


# ---------------------------------------------------------------------------
# Habits report
# ---------------------------------------------------------------------------


class HabitDescription(BaseModel):
    user: str = Field(default="", description="User id owning the habit")
    title: str = Field(default="", description="Habit title")


class HabitRange(BaseModel):
    """Habit counts per color category."""

    red: int = Field(default=0, ge=0)
    orange: int = Field(default=0, ge=0)
    yellow: int = Field(default=0, ge=0)
    green: int = Field(default=0, ge=0)
    blue: int = Field(default=0, ge=0)

    def total(self) -> int:
        return self.red + self.orange + self.yellow + self.green + self.blue


class HabitsReport(BaseModel):
    reportID: int = Field(default=0, ge=0, description="Store-assigned id, 0 until persisted")
    rangeCount: HabitRange = Field(default_factory=HabitRange)
    worst: HabitDescription = Field(default_factory=HabitDescription)
    best: HabitDescription = Field(default_factory=HabitDescription)


# ---------------------------------------------------------------------------
# Tasks report
# ---------------------------------------------------------------------------


class CompletedDescription(BaseModel):
    """Completed tasks; total is always onTime + late."""

    total: int = Field(default=0, ge=0)
    onTime: int = Field(default=0, ge=0)
    late: int = Field(default=0, ge=0)


class AvailableDescription(BaseModel):
    total: int = Field(default=0, ge=0)
    dueToday: int = Field(default=0, ge=0)


class TasksReport(BaseModel):
    reportID: int = Field(default=0, ge=0, description="Store-assigned id, 0 until persisted")
    completed: CompletedDescription = Field(default_factory=CompletedDescription)
    delayed: int = Field(default=0, ge=0)
    available: AvailableDescription = Field(default_factory=AvailableDescription)
