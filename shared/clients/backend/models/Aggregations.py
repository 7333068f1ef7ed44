"""Pre-aggregated summary records served by the analytics endpoints."""

from pydantic import BaseModel, ConfigDict


class GeneralAggregations(BaseModel):
    """
    Platform-wide totals shown on the analytics overview.
    """
    model_config = ConfigDict(extra="allow")

    total_users: int = 0
    total_earnings: float = 0
    average_weekly_earnings: float = 0
    active_work_areas: int = 0


class WorkAreaEarnings(BaseModel):
    """
    Earnings breakdown of a single work area.
    """
    model_config = ConfigDict(extra="allow")

    work_area: str
    total_earnings: float = 0
    total_work_hours: float = 0
    average_earnings_per_hour: float = 0
    total_workers: int = 0
