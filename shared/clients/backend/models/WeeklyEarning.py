"""Weekly earnings report row as returned by the backend."""

from pydantic import BaseModel, ConfigDict, field_validator


class WeeklyEarning(BaseModel):
    """
    Represents one weekly earnings report of a single user.

    The backend omits or nulls several fields; they are normalised to the
    values the dashboard displays (0 for amounts, "N/A" for labels).
    """
    model_config = ConfigDict(extra="allow")

    id: str
    user_id: str | None = None
    mobile_number: str | None = None
    work_area: str = "N/A"
    primary_company: str = "N/A"
    work_hours: float = 0
    earnings: float = 0
    expenses: float = 0
    week_start_date: str | None = None
    week_end_date: str | None = None
    created_at: str | None = None
    screen_shot: str | None = None

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def _ids_as_string(cls, value):
        return str(value) if value is not None else value

    @field_validator("work_hours", "earnings", "expenses", mode="before")
    @classmethod
    def _zero_when_missing(cls, value):
        return value or 0

    @field_validator("work_area", "primary_company", mode="before")
    @classmethod
    def _na_when_missing(cls, value):
        return value or "N/A"

    @field_validator("screen_shot", mode="before")
    @classmethod
    def _none_when_missing(cls, value):
        return value or None
