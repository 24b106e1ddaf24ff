"""Argument models for the park tools.

Each model validates ``tools/call`` arguments and renders the JSON Schema
advertised as ``inputSchema`` in ``tools/list``.
"""

from datetime import date
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from nps_mcp.constants import DEFAULT_LIMIT, MAX_LIMIT, STATE_CODES


class ToolArguments(BaseModel):
    """Base for tool argument models: camelCase on the wire, unknown keys ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    def to_query(self) -> dict:
        """NPS query parameters for this call, ``None`` values dropped."""
        return {}


class PagedArguments(ToolArguments):
    limit: int = Field(
        default=DEFAULT_LIMIT,
        ge=1,
        le=MAX_LIMIT,
        strict=True,
        description=f"Maximum number of results to return (default: {DEFAULT_LIMIT}, max: {MAX_LIMIT})",
    )
    start: int = Field(default=0, ge=0, strict=True, description="Result offset for pagination (default: 0)")
    q: Optional[str] = Field(default=None, description="Search term")

    def to_query(self) -> dict:
        return {"limit": self.limit, "start": self.start, "q": self.q}


class ParkFilteredArguments(PagedArguments):
    park_code: Optional[str] = Field(
        default=None,
        alias="parkCode",
        min_length=1,
        description="Park code or comma-separated park codes (e.g., 'yose' or 'yose,grca')",
    )

    def to_query(self) -> dict:
        query = super().to_query()
        query["parkCode"] = self.park_code
        return query


class FindParksArgs(PagedArguments):
    state_code: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("stateCode", "state"),
        description="Two-letter state code or comma-separated codes (e.g., 'CA' or 'CA,OR,WA')",
    )
    q: Optional[str] = Field(default=None, description="Search term for park name or description")
    activities: Optional[str] = Field(
        default=None,
        description="Comma-separated activities to filter by (e.g., 'hiking,camping')",
    )

    @field_validator("state_code")
    @classmethod
    def _check_state_codes(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        codes = [part.strip().upper() for part in value.split(",") if part.strip()]
        if not codes:
            raise ValueError("state code must not be empty")
        invalid = [code for code in codes if code not in STATE_CODES]
        if invalid:
            raise ValueError(f"invalid state code(s): {', '.join(invalid)}")
        return ",".join(codes)

    @property
    def activity_names(self) -> list[str]:
        if not self.activities:
            return []
        return [name.strip().lower() for name in self.activities.split(",") if name.strip()]

    def to_query(self) -> dict:
        query = super().to_query()
        query["stateCode"] = self.state_code
        return query


class GetParkDetailsArgs(ToolArguments):
    park_code: str = Field(
        alias="parkCode",
        min_length=1,
        description="The park code of the national park (e.g., 'yose' for Yosemite, 'grca' for Grand Canyon)",
    )

    def to_query(self) -> dict:
        return {"parkCode": self.park_code}


class GetAlertsArgs(ParkFilteredArguments):
    q: Optional[str] = Field(default=None, description="Search term to filter alerts by title or description")


class GetVisitorCentersArgs(ParkFilteredArguments):
    q: Optional[str] = Field(default=None, description="Search term to filter visitor centers by name or description")


class GetCampgroundsArgs(ParkFilteredArguments):
    q: Optional[str] = Field(default=None, description="Search term to filter campgrounds by name or description")


class GetEventsArgs(ParkFilteredArguments):
    date_start: Optional[date] = Field(default=None, alias="dateStart", description="Start date (YYYY-MM-DD)")
    date_end: Optional[date] = Field(default=None, alias="dateEnd", description="End date (YYYY-MM-DD)")
    q: Optional[str] = Field(default=None, description="Search term to filter events by title or description")

    @model_validator(mode="after")
    def _check_date_range(self) -> "GetEventsArgs":
        if self.date_start and self.date_end and self.date_end < self.date_start:
            raise ValueError("dateEnd must not be earlier than dateStart")
        return self

    def to_query(self) -> dict:
        query = super().to_query()
        query["dateStart"] = self.date_start.isoformat() if self.date_start else None
        query["dateEnd"] = self.date_end.isoformat() if self.date_end else None
        return query
