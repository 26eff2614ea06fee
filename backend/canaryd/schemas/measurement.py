"""Measurement schemas - wire and storage format."""
from typing import Optional
from pydantic import BaseModel, Field

# Timestamps and codes are signed 64-bit on the wire
INT64_MIN = -2**63
INT64_MAX = 2**63 - 1


class Check(BaseModel):
    """The monitored target a measurement belongs to."""
    id: str = ""
    url: str = ""


class Measurement(BaseModel):
    """One probe result for a check.

    ``t`` (epoch seconds) is the score used for ordering and retention.
    Missing core fields decode to zero values. Optional fields are only set
    on (partial) success and are left out of the serialized form when absent.
    """
    check: Check = Field(default_factory=Check)
    id: str = ""
    location: str = ""
    t: int = Field(default=0, ge=INT64_MIN, le=INT64_MAX)
    exit_status: int = 0
    http_status: Optional[int] = None
    local_ip: Optional[str] = None
    primary_ip: Optional[str] = None
    namelookup_time: Optional[float] = None
    connect_time: Optional[float] = None
    starttransfer_time: Optional[float] = None
    total_time: Optional[float] = None

    def to_wire(self) -> dict:
        """JSON-compatible dict without absent optional fields."""
        return self.model_dump(exclude_none=True)

    def to_member(self) -> str:
        """Compact JSON text stored as the sorted-set member."""
        return self.model_dump_json(exclude_none=True)

    @classmethod
    def from_member(cls, member: str) -> "Measurement":
        """Parse a stored member. Raises pydantic.ValidationError if malformed."""
        return cls.model_validate_json(member)
