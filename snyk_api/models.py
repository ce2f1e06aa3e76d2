"""Constants and shared resource records for snyk-api."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from snyk_api.errors import DecodeError

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

BASE_URL = "https://api.snyk.io/"
REST_PREFIX = "/rest"
DEFAULT_API_VERSION = "2023-09-14~beta"
PAGE_LIMIT = 100

REST_CONTENT_TYPE = "application/vnd.api+json"
V1_CONTENT_TYPE = "application/json"

# Retry configuration
DEFAULT_MAX_RETRIES = 6
RETRYABLE_STATUS_CODES = {429, 500}
RETRY_AFTER_PADDING = 5  # seconds, the group members endpoint accumulates limit windows
GATEWAY_RETRY_STATUS = 502
GATEWAY_RETRY_WAIT = 30  # seconds

# Per-endpoint API versions
TARGETS_API_VERSION = "2024-01-23~beta"
CONTAINER_IMAGES_API_VERSION = "2024-01-23~beta"
ISSUES_API_VERSION = "2024-05-23~beta"
ISSUE_DETAILS_API_VERSION = "2024-01-24~experimental"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class IgnoreReasonType(Enum):
    NOT_VULNERABLE = "not-vulnerable"
    WONT_FIX = "wont-fix"
    TEMPORARY_IGNORE = "temporary-ignore"


class GroupRole(Enum):
    ADMIN = "admin"
    COLLABORATOR = "collaborator"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an API timestamp, returning None when it is absent."""
    if value in (None, ""):
        return None
    if not isinstance(value, str):
        raise DecodeError(f"Expected a timestamp string, got {type(value).__name__}")
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise DecodeError(f"Invalid timestamp '{value}'") from e


def as_dict(value: Any, what: str) -> dict:
    """Return ``value`` as a mapping; ``None`` becomes an empty one."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DecodeError(f"Expected an object for {what}, got {type(value).__name__}")
    return value


def as_list(value: Any, what: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(f"Expected an array for {what}, got {type(value).__name__}")
    return value


# ---------------------------------------------------------------------------
# Data Classes
# ---------------------------------------------------------------------------


@dataclass
class Links:
    """Pagination and relationship links of a REST envelope."""

    related: str = ""
    prev: str = ""
    next: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Links:
        data = as_dict(data, "links")
        return cls(
            related=data.get("related") or "",
            prev=data.get("prev") or "",
            next=data.get("next") or "",
        )


@dataclass
class Data:
    """Identifier of a related resource."""

    id: str = ""
    type: str = ""
    source: str = ""
    updated_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Data:
        data = as_dict(data, "resource identifier")
        return cls(
            id=data.get("id") or "",
            type=data.get("type") or "",
            source=data.get("source") or "",
            updated_at=parse_timestamp(data.get("updated_at")),
        )


@dataclass
class Relationship:
    data: Data = field(default_factory=Data)
    links: Links = field(default_factory=Links)

    @classmethod
    def from_dict(cls, data: Any) -> Relationship:
        data = as_dict(data, "relationship")
        related = data.get("data")
        # to-many relationships are not used by any entity
        if isinstance(related, list):
            related = related[0] if related else None
        return cls(data=Data.from_dict(related), links=Links.from_dict(data.get("links")))


@dataclass
class DependencyTotal:
    total: int = 0
    updated_at: datetime | None = None


@dataclass
class IssueCounts:
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    updated_at: datetime | None = None


@dataclass
class Meta:
    """Resource meta block, populated for projects when requested."""

    cli_monitored_at: datetime | None = None
    latest_dependency_total: DependencyTotal = field(default_factory=DependencyTotal)
    latest_issue_counts: IssueCounts = field(default_factory=IssueCounts)

    @classmethod
    def from_dict(cls, data: Any) -> Meta:
        data = as_dict(data, "meta")
        deps = as_dict(data.get("latest_dependency_total"), "meta.latest_dependency_total")
        counts = as_dict(data.get("latest_issue_counts"), "meta.latest_issue_counts")
        return cls(
            cli_monitored_at=parse_timestamp(data.get("cli_monitored_at")),
            latest_dependency_total=DependencyTotal(
                total=deps.get("total") or 0,
                updated_at=parse_timestamp(deps.get("updated_at")),
            ),
            latest_issue_counts=IssueCounts(
                critical=counts.get("critical") or 0,
                high=counts.get("high") or 0,
                medium=counts.get("medium") or 0,
                low=counts.get("low") or 0,
                updated_at=parse_timestamp(counts.get("updated_at")),
            ),
        )


@dataclass
class Tag:
    key: str
    value: str


@dataclass
class Resolution:
    details: str = ""
    resolved_at: datetime | None = None
    type: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Resolution:
        data = as_dict(data, "resolution")
        return cls(
            details=data.get("details") or "",
            resolved_at=parse_timestamp(data.get("resolved_at")),
            type=data.get("type") or "",
        )


@dataclass
class PrimaryRegion:
    start_line: int = 0
    end_line: int = 0
    start_column: int = 0
    end_column: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> PrimaryRegion:
        data = as_dict(data, "primaryRegion")
        return cls(
            start_line=data.get("startLine") or 0,
            end_line=data.get("endLine") or 0,
            start_column=data.get("startColumn") or 0,
            end_column=data.get("endColumn") or 0,
        )


@dataclass
class ListedEntity:
    """One row of CLI output."""

    kind: str
    id: str
    name: str
    detail: str = ""

    def to_dict(self) -> dict:
        d = {"kind": self.kind, "id": self.id, "name": self.name}
        if self.detail:
            d["detail"] = self.detail
        return d
