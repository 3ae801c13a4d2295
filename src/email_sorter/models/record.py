"""
Email record model - the raw input to classification.

A record carries only what a triage view shows for a message: who sent it, the
subject line and the first lines of the body.
"""

import uuid
from datetime import datetime, timezone
from email.utils import parseaddr
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _new_record_id() -> str:
    return uuid.uuid4().hex


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EmailRecord(BaseModel):
    """
    Raw message record submitted for classification.

    Immutable once constructed. Text fields may be empty or absent; rules never
    match an absent field, so such a record simply scores zero there.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(
        default_factory=_new_record_id,
        description="Unique record ID (caller supplied or generated UUID4 hex)"
    )
    sender: Optional[str] = Field(
        default="",
        description="Sender, expected to contain an email address"
    )
    subject: Optional[str] = Field(default="", description="Subject line")
    preview: Optional[str] = Field(default="", description="First lines of the body")
    received_at: datetime = Field(
        default_factory=_utc_now,
        alias="receivedAt",
        description="Reception timestamp"
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_numeric_id(cls, v):
        """Numeric ids from JSON imports are kept as their decimal text."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @property
    def sender_address(self) -> str:
        """Address part of the sender (``"Ann <ann@x.io>"`` -> ``"ann@x.io"``), lower-cased."""
        if not self.sender:
            return ""
        _name, address = parseaddr(self.sender)
        return (address or self.sender).strip().lower()

    @property
    def sender_domain(self) -> str:
        """Domain of the sender address, or an empty string when there is none."""
        address = self.sender_address
        if "@" not in address:
            return ""
        return address.rsplit("@", 1)[1].strip(" >.")
