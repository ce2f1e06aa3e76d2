"""Extended details of a code issue."""

from __future__ import annotations

from dataclasses import dataclass, field

from snyk_api.models import PrimaryRegion
from snyk_api.resource import Resource


@dataclass
class IssueDetails:
    id: str
    type: str = ""
    issue_type: str = ""
    title: str = ""
    severity: str = ""
    cwe: list[str] = field(default_factory=list)
    ignored: bool = False
    fingerprint: str = ""
    fingerprint_version: str = ""
    primary_region: PrimaryRegion = field(default_factory=PrimaryRegion)
    priority_score: int = 0
    priority_score_factors: list[str] = field(default_factory=list)
    primary_file_path: str = ""

    @classmethod
    def from_resource(cls, resource: Resource) -> IssueDetails:
        return cls(
            id=resource.id,
            type=resource.type,
            issue_type=resource.attr("issueType"),
            title=resource.attr("title"),
            severity=resource.attr("severity"),
            cwe=list(resource.attr("cwe", [])),
            ignored=resource.attr("ignored", False),
            fingerprint=resource.attr("fingerprint"),
            fingerprint_version=resource.attr("fingerprintVersion"),
            primary_region=PrimaryRegion.from_dict(resource.attr("primaryRegion", None)),
            priority_score=resource.attr("priorityScore", 0),
            priority_score_factors=list(resource.attr("priorityScoreFactors", [])),
            primary_file_path=resource.attr("primaryFilePath"),
        )
