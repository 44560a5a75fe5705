"""
Core Data Models for Video Editor Books

These models define the schemas for every record the store persists
and for the figures derived from them.

DESIGN DECISION: Persisted field names are camelCase (clientId,
numberOfVideos, ...) so the document stays readable by anything that
consumed the browser-storage version. Python code uses snake_case;
both spellings are accepted on input.

Numeric rules (positive counts, positive amounts) are NOT enforced
here. They belong to form validation (see videobooks.validation);
the store accepts whatever it is given.
"""

import secrets
import time
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel


_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def naive_local(value: datetime) -> datetime:
    """Timezone-aware datetimes become naive local time; naive ones pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def generate_id() -> str:
    """
    Create an identifier for a new record.

    Milliseconds since the epoch in base 36, followed by 64 random bits.
    Two ids minted in the same millisecond differ by their suffix.
    Do not sort by id; use createdAt / date instead.
    """
    millis = time.time_ns() // 1_000_000
    return _to_base36(millis) + _to_base36(secrets.randbits(64)).rjust(13, "0")


class Collection(str, Enum):
    """The three named collections in the data document."""
    CLIENTS = "clients"
    PROJECTS = "projects"
    PAYMENTS = "payments"

    @property
    def model(self) -> type["Record"]:
        """Record model stored in this collection."""
        return _COLLECTION_MODELS[self]


class Record(BaseModel):
    """Base for every persisted record."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    id: str = Field(
        default_factory=generate_id,
        min_length=1,
        description="Unique record ID"
    )

    def to_document(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys and ISO-8601 dates."""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# PERSISTED RECORDS
# =============================================================================

class Client(Record):
    """
    A customer of the video-editing business.

    Deleting a client removes all of its projects and payments.
    """

    name: str = Field(
        ...,
        description="Client name"
    )
    created_at: datetime = Field(
        default_factory=datetime.now,
        description="When the client was added (local time)"
    )

    @field_validator('created_at')
    @classmethod
    def created_at_local(cls, v: datetime) -> datetime:
        return naive_local(v)


class Project(Record):
    """
    A billable unit of work: number of videos times rate per video.

    CRITICAL: total is computed once, when the project is created,
    and stored. A project loaded from storage keeps its stored total
    even if the other fields were edited by hand.
    """

    client_id: str = Field(
        ...,
        description="ID of the owning client"
    )
    number_of_videos: int = Field(
        ...,
        description="Number of videos delivered"
    )
    charge_per_video: Decimal = Field(
        ...,
        description="Rate per video"
    )
    total: Decimal = Field(
        ...,
        description="number_of_videos x charge_per_video, frozen at creation"
    )
    created_at: datetime = Field(
        default_factory=datetime.now,
        description="When the project was recorded (local time)"
    )

    @field_validator('created_at')
    @classmethod
    def created_at_local(cls, v: datetime) -> datetime:
        return naive_local(v)

    @model_validator(mode='before')
    @classmethod
    def compute_total(cls, data: Any) -> Any:
        """Fill in total for a new project."""
        if not isinstance(data, dict):
            return data
        if data.get("total") is not None:
            return data

        count = data.get("number_of_videos", data.get("numberOfVideos"))
        rate = data.get("charge_per_video", data.get("chargePerVideo"))
        if count is None or rate is None:
            return data

        try:
            total = Decimal(int(count)) * Decimal(str(rate))
        except (ArithmeticError, TypeError, ValueError):
            # Leave it to field validation to report the bad input
            return data
        return {**data, "total": total}


class Payment(Record):
    """
    A money receipt against a client's balance.

    notes is None when the user gave none. An empty string is a
    different value and is kept as such.
    """

    client_id: str = Field(
        ...,
        description="ID of the paying client"
    )
    amount: Decimal = Field(
        ...,
        description="Amount received"
    )
    date: datetime = Field(
        ...,
        description="Date the payment was received (user chosen, local time)"
    )
    notes: Optional[str] = Field(
        default=None,
        description="Free-form notes"
    )

    @field_validator('date', mode='before')
    @classmethod
    def date_to_datetime(cls, v: Any) -> Any:
        """A bare calendar date means midnight of that day."""
        if isinstance(v, date) and not isinstance(v, datetime):
            return datetime.combine(v, datetime.min.time())
        return v

    @field_validator('date')
    @classmethod
    def date_local(cls, v: datetime) -> datetime:
        """Stored dates are naive local time, whatever zone they arrived in."""
        return naive_local(v)


_COLLECTION_MODELS: dict[Collection, type[Record]] = {
    Collection.CLIENTS: Client,
    Collection.PROJECTS: Project,
    Collection.PAYMENTS: Payment,
}


# =============================================================================
# DERIVED MODELS (never persisted)
# =============================================================================

class ClientSummary(BaseModel):
    """
    Totals for one client.

    outstanding_balance is total_earned - total_paid and goes negative
    when the client has overpaid. It is never clamped.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    client: Client
    total_projects: int = Field(ge=0)
    total_earned: Decimal
    total_paid: Decimal
    outstanding_balance: Decimal


class ClientLedger(BaseModel):
    """A client's summary together with its projects and payments."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    summary: ClientSummary
    projects: list[Project] = Field(default_factory=list)
    payments: list[Payment] = Field(default_factory=list)

    @property
    def client(self) -> Client:
        return self.summary.client
