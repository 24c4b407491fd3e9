"""Soloway API request and response models.

Response models keep fields they do not name (extra="allow"), so payload
details the client does not model are still reachable via model_extra.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def format_date(value: date | datetime) -> str:
    """Format a date (or datetime) as YYYY-MM-DD for request bodies."""
    if isinstance(value, datetime):
        value = value.date()
    # isoformat zero-pads years below 1000, strftime does not on glibc
    return value.isoformat()


class SolowayModel(BaseModel):
    """Base for decoded API payloads."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


# =========================================================================
# Account
# =========================================================================


class UserInfo(SolowayModel):
    """Login response body."""

    username: str = ""
    error: str = ""


class ClientInfo(SolowayModel):
    """Advertiser client the account belongs to."""

    guid: str = Field(..., description="Client GUID used to scope placement queries")
    username: str | None = None


class AccountInfo(SolowayModel):
    """Authenticated user's profile (GET /api/whoami)."""

    username: str
    client: ClientInfo


# =========================================================================
# Placements
# =========================================================================


class Placement(SolowayModel):
    """Advertising placement."""

    guid: str
    doc: dict[str, Any] = Field(default_factory=dict, description="Placement document as sent by the platform")

    @property
    def name(self) -> str | None:
        """Placement name from its document, if present."""
        return self.doc.get("name")


class PlacementsInfo(SolowayModel):
    """Placements of a client."""

    placements: list[Placement] = Field(default_factory=list, alias="list")


class PlacementDayStat(SolowayModel):
    """Statistics of a placement for one day."""

    date: str
    exposures: int | None = None
    clicks: int | None = None
    cost: float | None = None


class PlacementsStatByDay(SolowayModel):
    """Per-day statistics of a single placement over a date range."""

    days: list[PlacementDayStat] = Field(default_factory=list, alias="list")


# =========================================================================
# Request bodies
# =========================================================================


class LoginRequest(BaseModel):
    username: str
    password: str


class PlacementsStatRequest(BaseModel):
    """Body of POST /api/placements_stat."""

    placement_ids: list[str]
    start_date: str
    stop_date: str
    with_archived: int = Field(0, ge=0, le=1)

    @classmethod
    def build(
        cls,
        placement_ids: list[str],
        start_date: date | datetime,
        stop_date: date | datetime,
        with_archived: bool,
    ) -> "PlacementsStatRequest":
        return cls(
            placement_ids=list(placement_ids),
            start_date=format_date(start_date),
            stop_date=format_date(stop_date),
            with_archived=1 if with_archived else 0,
        )


class PlacementStatByDayRequest(BaseModel):
    """Body of POST /api/placements/{guid}/stat."""

    start_date: str
    stop_date: str

    @classmethod
    def build(cls, start_date: date | datetime, stop_date: date | datetime) -> "PlacementStatByDayRequest":
        return cls(start_date=format_date(start_date), stop_date=format_date(stop_date))
