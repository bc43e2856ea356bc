"""Pydantic models for challenger configuration and DNS API resources."""

from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

# =============================================================================
# Enums
# =============================================================================


class RecordType(StrEnum):
    """DNS record types used by challenges."""

    TXT = "TXT"


class RecordSetStatus(StrEnum):
    """HuaweiCloud record set statuses."""

    ACTIVE = "ACTIVE"
    PENDING_CREATE = "PENDING_CREATE"
    PENDING_UPDATE = "PENDING_UPDATE"
    PENDING_DELETE = "PENDING_DELETE"
    ERROR = "ERROR"
    FREEZE = "FREEZE"
    DISABLE = "DISABLE"


# =============================================================================
# Configuration
# =============================================================================


class ChallengerConfig(BaseModel):
    """Configuration of a DNS-01 challenger.

    Field names follow the JSON shape accepted from callers
    (``accessKeyId``, ``secretAccessKey``, ``region``,
    ``dnsPropagationTimeout``, ``dnsTTL``); snake_case names are accepted too.
    A timeout or TTL of 0 means "keep the provider default".
    """

    access_key_id: str = Field(default="", alias="accessKeyId")
    secret_access_key: str = Field(default="", alias="secretAccessKey", repr=False)
    region: str = ""
    dns_propagation_timeout: int = Field(default=0, alias="dnsPropagationTimeout", ge=0)
    dns_ttl: int = Field(default=0, alias="dnsTTL", ge=0)

    model_config = {"populate_by_name": True, "frozen": True}


# =============================================================================
# DNS resources
# =============================================================================


class ChallengeInfo(BaseModel):
    """Record name and value a DNS-01 challenge expects."""

    fqdn: str
    value: str

    model_config = {"frozen": True}


class Zone(BaseModel):
    """HuaweiCloud DNS zone."""

    id: str
    name: str
    zone_type: str | None = None


class RecordSet(BaseModel):
    """HuaweiCloud DNS record set."""

    id: str
    name: str
    type: str
    ttl: int | None = None
    records: list[str] = Field(default_factory=list)
    status: str | None = None
    zone_id: str | None = None

    @field_validator("records", mode="before")
    @classmethod
    def _records_default(cls, value: list[str] | None) -> list[str]:
        # The SDK leaves unset lists as None.
        return value or []
