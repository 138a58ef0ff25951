"""Models for replies returned by the workout backend."""

import logging
import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


def _as_number(value: Any) -> Optional[float]:
    """Finite number from a JSON value, or None if it is not one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class Target(BaseModel):
    """Weight/reps pair suggested by the backend.

    Targets are only displayed, so values that are not numbers become None
    instead of failing the reply.
    """

    model_config = ConfigDict(extra="ignore")

    target_weight: Optional[float] = None
    target_reps: Optional[int] = None

    @field_validator("target_weight", mode="before")
    @classmethod
    def _lenient_weight(cls, value: Any) -> Optional[float]:
        return _as_number(value)

    @field_validator("target_reps", mode="before")
    @classmethod
    def _lenient_reps(cls, value: Any) -> Optional[int]:
        number = _as_number(value)
        if number is None or not number.is_integer():
            return None
        return int(number)


class ChecklistItem(Target):
    """One planned exercise returned on session start."""

    exercise: str


class SessionStartReply(BaseModel):
    """Reply to ``session_start``."""

    model_config = ConfigDict(extra="ignore")

    session_id: str = Field(min_length=1)
    checklist: list[ChecklistItem] = Field(default_factory=list)

    @field_validator("session_id", mode="before")
    @classmethod
    def _coerce_session_id(cls, value: Any) -> Any:
        # Apps Script may hand back numeric ids
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("checklist", mode="before")
    @classmethod
    def _valid_rows(cls, value: Any) -> list[ChecklistItem]:
        # A broken row is skipped; the session itself is already open
        if not isinstance(value, list):
            if value is not None:
                logger.warning("Ignoring non-list checklist: %r", value)
            return []
        rows: list[ChecklistItem] = []
        for raw in value:
            try:
                rows.append(ChecklistItem.model_validate(raw))
            except ValidationError:
                logger.warning("Skipping malformed checklist row: %r", raw)
        return rows


class LogSetReply(BaseModel):
    """Reply to ``log_set``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    next_target: Optional[Target] = Field(default=None, alias="nextTarget")


class SessionEndReply(BaseModel):
    """Reply to ``session_end``."""

    model_config = ConfigDict(extra="ignore")

    summary_text: str = ""

    @field_validator("summary_text", mode="before")
    @classmethod
    def _null_summary(cls, value: Any) -> Any:
        return "" if value is None else value


class ExerciseListReply(BaseModel):
    """Reply to ``list_exercises``."""

    model_config = ConfigDict(extra="ignore")

    exercises: list[str]

    def clean_names(self) -> list[str]:
        """Stripped, non-blank, de-duplicated names in backend order."""
        seen: set[str] = set()
        names: list[str] = []
        for raw in self.exercises:
            name = raw.strip()
            if name and name not in seen:
                seen.add(name)
                names.append(name)
        return names
