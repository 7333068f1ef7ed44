"""The tables shown by the dashboard."""

from shared.clients.backend.models.UserRecord import UserRecord
from shared.clients.backend.models.WeeklyEarning import WeeklyEarning
from shared.tables.TableSpec import (
    FILTER_KIND_DATE,
    FILTER_KIND_MOBILE,
    ColumnSpec,
    FilterSpec,
    TableSpec,
)

USERS_TABLE = TableSpec(
    name="users",
    title="User Records",
    list_endpoint="/flows",
    delete_endpoint="/flows/{id}",
    row_model=UserRecord,
    export_prefix="user_records",
    filters=[
        FilterSpec(key="mobile_number", label="Mobile number", kind=FILTER_KIND_MOBILE),
        FilterSpec(key="work_area", label="Work area"),
        FilterSpec(key="store_location", label="Store location"),
        FilterSpec(key="start_date", label="Start date", kind=FILTER_KIND_DATE),
    ],
    columns=[
        ColumnSpec(key="name", header="Name", getter=lambda user: user.full_name),
        ColumnSpec(key="mobile_number", header="Mobile Number"),
        ColumnSpec(key="work_type", header="Work Type"),
        ColumnSpec(key="work_area", header="Work Area"),
        ColumnSpec(key="primary_company", header="Company"),
        ColumnSpec(key="start_date", header="Start Date"),
    ],
)

EARNINGS_TABLE = TableSpec(
    name="earnings",
    title="Weekly Earnings",
    list_endpoint="/weekly-earnings/reports",
    row_model=WeeklyEarning,
    export_prefix="weekly_earnings",
    filters=[
        FilterSpec(key="mobile_number", label="Mobile number", kind=FILTER_KIND_MOBILE),
        FilterSpec(key="work_area", label="Work area"),
        FilterSpec(key="primary_company", label="Company"),
        FilterSpec(key="start_date", label="Start date", kind=FILTER_KIND_DATE),
        FilterSpec(key="end_date", label="End date", kind=FILTER_KIND_DATE),
    ],
    columns=[
        ColumnSpec(key="mobile_number", header="Mobile Number"),
        ColumnSpec(key="work_area", header="Work Area"),
        ColumnSpec(key="primary_company", header="Company"),
        ColumnSpec(key="work_hours", header="Work Hours"),
        ColumnSpec(key="earnings", header="Earnings"),
        ColumnSpec(key="expenses", header="Expenses"),
        ColumnSpec(key="week_start_date", header="Week Start"),
        ColumnSpec(key="week_end_date", header="Week End"),
    ],
)

TABLES: dict[str, TableSpec] = {table.name: table for table in (USERS_TABLE, EARNINGS_TABLE)}


def get_table(name: str) -> TableSpec:
    """Look up a table by name.

    Raises:
        ValueError: If no table with this name exists.
    """
    try:
        return TABLES[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown table '{name}'. Available: {', '.join(sorted(TABLES))}")
