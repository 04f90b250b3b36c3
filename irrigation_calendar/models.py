"""Typed records for accounts, upstream payloads and fetch outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


@dataclass(frozen=True)
class ResolvedAccount:
    """An account id confirmed present in the registry, with its display name."""

    id: str
    name: str


class ScheduleDetail(BaseModel):
    model_config = ConfigDict(extra="ignore")

    address: str = ""


class ScheduleSnapshot(BaseModel):
    """The subset of a quickview payload the renderers consume."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    order_status: str = Field(alias="orderStatus")
    irrigation_notice: Optional[str] = Field(default=None, alias="irrigationNotice")
    detail: ScheduleDetail = Field(alias="displayFirstAccountScheduleDetail")
    on_date_time: str = Field(alias="onDateTime")
    off_date_time: str = Field(alias="offDateTime")

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @property
    def address(self) -> str:
        return self.detail.address

    @property
    def notice(self) -> str:
        return self.irrigation_notice or ""

    def starts_at(self, tz_offset: str) -> datetime:
        return parse_upstream_timestamp(self.on_date_time, tz_offset)

    def ends_at(self, tz_offset: str) -> datetime:
        return parse_upstream_timestamp(self.off_date_time, tz_offset)


def parse_upstream_timestamp(value: str, tz_offset: str) -> datetime:
    """Append the configured offset to an upstream local timestamp and parse it.

    The offset is concatenated as-is; no timezone arithmetic happens here.
    """
    parsed = datetime.fromisoformat(value + tz_offset)
    if parsed.tzinfo is None:
        raise ValueError(f"Timestamp {value!r} has no offset after appending {tz_offset!r}")
    return parsed


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one quickview fetch: a snapshot on success, a message on failure."""

    success: bool
    account: ResolvedAccount
    snapshot: Optional[ScheduleSnapshot] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, account: ResolvedAccount, snapshot: ScheduleSnapshot) -> "FetchResult":
        return cls(success=True, account=account, snapshot=snapshot)

    @classmethod
    def failed(cls, account: ResolvedAccount, error: str) -> "FetchResult":
        return cls(success=False, account=account, error=error)
