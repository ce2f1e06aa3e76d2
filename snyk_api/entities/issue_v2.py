"""Issues from the REST issues API."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from snyk_api.entities.ignore import Ignore, IgnoreOptions
from snyk_api.entities.issue import Issue
from snyk_api.entities.issue_details import IssueDetails
from snyk_api.errors import UnsupportedOperation
from snyk_api.models import ISSUE_DETAILS_API_VERSION, Data, Resolution, as_list, parse_timestamp
from snyk_api.resource import Resource, get_single_resource

if TYPE_CHECKING:
    from snyk_api.client import Client


@dataclass
class IssueV2:
    """An issue as reported by the REST API, scoped to an org and a project."""

    id: str
    key: str = ""
    title: str = ""
    status: str = ""
    effective_severity_level: str = ""
    ignored: bool = False
    type: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    classes: list[Data] = field(default_factory=list)
    problems: list[Data] = field(default_factory=list)
    resolution: Resolution = field(default_factory=Resolution)
    org_id: str = ""
    project_id: str = ""
    client: Client | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_resource(cls, resource: Resource, client: Client) -> IssueV2:
        return cls(
            id=resource.id,
            key=resource.attr("key"),
            title=resource.attr("title"),
            status=resource.attr("status"),
            effective_severity_level=resource.attr("effective_severity_level"),
            ignored=resource.attr("ignored", False),
            type=resource.attr("type"),
            created_at=parse_timestamp(resource.attr("created_at", None)),
            updated_at=parse_timestamp(resource.attr("updated_at", None)),
            classes=[Data.from_dict(c) for c in as_list(resource.attr("classes", None), "classes")],
            problems=[Data.from_dict(p) for p in as_list(resource.attr("problems", None), "problems")],
            resolution=Resolution.from_dict(resource.attr("resolution", None)),
            org_id=resource.related_id("organization"),
            project_id=resource.related_id("scan_item"),
            client=client,
        )

    def to_issue(self) -> Issue:
        """
        Downgrade to a v1 ``Issue`` so the v1 ignore operations can be used.

        Lossy: only the ID (the v2 key), type, ignored flag and ancestor IDs
        carry over.
        """
        return Issue(
            id=self.key,
            issue_type=self.type,
            is_ignored=self.ignored,
            org_id=self.org_id,
            project_id=self.project_id,
            client=self.client,
        )

    def get_ignore(self) -> Ignore:
        return self.to_issue().get_ignore()

    def add_ignore(self, options: IgnoreOptions) -> None:
        self.to_issue().add_ignore(options)

    def replace_ignore(self, options: IgnoreOptions) -> None:
        self.to_issue().replace_ignore(options)

    def delete_ignore(self) -> None:
        self.to_issue().delete_ignore()

    def get_details(self) -> IssueDetails:
        """Additional information about the issue. Only code issues are supported."""
        if self.type != "code":
            raise UnsupportedOperation(f"Issue details are not available for issues of type '{self.type}'")

        resource = get_single_resource(
            self.client,
            f"/rest/orgs/{self.org_id}/issues/detail/code/{self.key}",
            {"version": ISSUE_DETAILS_API_VERSION, "project_id": self.project_id},
        )
        return IssueDetails.from_resource(resource)

