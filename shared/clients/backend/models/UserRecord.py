"""User (onboarding flow) record as returned by the backend."""

from pydantic import BaseModel, ConfigDict, field_validator


class UserRecord(BaseModel):
    """
    Represents a single user record from the backend "flows" collection.
    Unknown fields are kept so the proxy can pass them through untouched.
    """
    model_config = ConfigDict(extra="allow")

    id: str
    first_name: str | None = None
    last_name: str | None = None
    mobile_number: str | None = None
    work_type: str | None = None
    work_area: str | None = None
    primary_company: str | None = None
    store_location: str | None = None
    created_at: str | None = None
    start_date: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value):
        return str(value) if value is not None else value

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)
