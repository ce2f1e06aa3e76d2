"""Issue ignores and the v1 ignore payload shapes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from snyk_api.errors import DecodeError, ValidationError
from snyk_api.models import IgnoreReasonType, as_dict, as_list, parse_timestamp


@dataclass
class IgnoredBy:
    id: str = ""
    name: str = ""
    email: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> IgnoredBy:
        data = as_dict(data, "ignoredBy")
        return cls(id=data.get("id") or "", name=data.get("name") or "", email=data.get("email") or "")


@dataclass
class Ignore:
    """An ignore rule on an issue. ``path`` lists the ignored dependency paths."""

    reason: str = ""
    created: datetime | None = None
    expires: datetime | None = None
    ignored_by: IgnoredBy = field(default_factory=IgnoredBy)
    reason_type: str = ""
    disregard_if_fixable: bool = False
    path: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> Ignore:
        if not isinstance(data, dict):
            raise DecodeError(f"Expected an ignore object, got {type(data).__name__}")
        reason = data.get("reason") or ""
        reason_type = data.get("reasonType") or ""
        if not isinstance(reason, str) or not isinstance(reason_type, str):
            raise DecodeError("Ignore 'reason' and 'reasonType' must be strings")
        modules = [as_dict(p, "ignore path") for p in as_list(data.get("path"), "ignore path")]
        return cls(
            reason=reason,
            created=parse_timestamp(data.get("created")),
            expires=parse_timestamp(data.get("expires")),
            ignored_by=IgnoredBy.from_dict(data.get("ignoredBy")),
            reason_type=reason_type,
            disregard_if_fixable=bool(data.get("disregardIfFixable", False)),
            path=[p.get("module") or "" for p in modules],
        )


def _decode_by_path(payload: Any) -> dict[str, list[Ignore]]:
    # {issue_id: [{path: ignore}, ...]}
    ignored: dict[str, list[Ignore]] = {}
    for issue_id, entries in as_dict(payload, "ignores").items():
        for entry in as_list(entries, f"ignores of {issue_id}"):
            if not isinstance(entry, dict):
                raise DecodeError(f"Expected a path-keyed ignore for {issue_id}")
            for path, data in entry.items():
                if not isinstance(data, dict):
                    raise DecodeError(f"Expected an ignore object under path '{path}'")
                ignore = Ignore.from_dict(data)
                ignore.path.append(path)
                ignored.setdefault(issue_id, []).append(ignore)
    return ignored


def _decode_flat(payload: Any) -> dict[str, list[Ignore]]:
    # {issue_id: [ignore, ...]}
    return {
        issue_id: [Ignore.from_dict(i) for i in as_list(entries, f"ignores of {issue_id}")]
        for issue_id, entries in as_dict(payload, "ignores").items()
    }


def decode_ignored_issues(payload: Any) -> dict[str, list[Ignore]]:
    """
    Decode a project's ignores into a mapping of issue ID to ignores.

    Some projects return ignores keyed by the ignored path, others return a
    flat list per issue; both come out in the flat form.
    """
    try:
        return _decode_by_path(payload)
    except DecodeError as by_path_error:
        try:
            return _decode_flat(payload)
        except DecodeError as flat_error:
            raise DecodeError(
                f"Failed to parse ignore response body (path-keyed: {by_path_error}; flat: {flat_error})"
            ) from flat_error


@dataclass
class IgnoreOptions:
    """How an issue should be ignored."""

    # Path to ignore; the server defaults to "*" (all paths)
    ignore_path: str = ""
    reason: str = ""
    # One of "not-vulnerable", "wont-fix", "temporary-ignore"
    reason_type: str = ""
    # Only ignore the issue while no upgrade or patch is available
    disregard_if_fixable: bool = False
    # When the ignore stops applying
    expires: str | datetime = ""

    def validate(self) -> None:
        try:
            IgnoreReasonType(self.reason_type)
        except ValueError:
            choices = ", ".join(f'"{r.value}"' for r in IgnoreReasonType)
            raise ValidationError(f"reason_type must be one of {choices}") from None

    def to_dict(self) -> dict:
        d: dict[str, Any] = {"disregardIfFixable": self.disregard_if_fixable}
        if self.ignore_path:
            d["ignorePath"] = self.ignore_path
        if self.reason:
            d["reason"] = self.reason
        if self.reason_type:
            d["reasonType"] = self.reason_type
        if self.expires:
            d["expires"] = self.expires.isoformat() if isinstance(self.expires, datetime) else self.expires
        return d
