"""Issue listing for orgs and projects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from snyk_api.entities.ignore import Ignore, decode_ignored_issues
from snyk_api.entities.issue import Issue
from snyk_api.entities.issue_v2 import IssueV2
from snyk_api.models import ISSUES_API_VERSION, as_dict, as_list
from snyk_api.resource import decode_json, get_multi_resource

if TYPE_CHECKING:
    from snyk_api.client import Client


def get_all_v2_issues(client: Client, org_id: str, project_id: str | None = None) -> list[IssueV2]:
    params = {"version": ISSUES_API_VERSION}
    if project_id is not None:
        params["scan_item.type"] = "project"
        params["scan_item.id"] = project_id

    resources = get_multi_resource(client, f"/rest/orgs/{org_id}/issues", params)
    return [IssueV2.from_resource(r, client) for r in resources]


@dataclass(frozen=True)
class OrgIssuesService:
    client: Client = field(repr=False)
    org_id: str

    def get_all_v2(self) -> list[IssueV2]:
        return get_all_v2_issues(self.client, self.org_id)


@dataclass(frozen=True)
class ProjectIssuesService:
    client: Client = field(repr=False)
    org_id: str
    project_id: str
    project_origin: str = ""

    def get_all(self) -> list[Issue]:
        """Aggregated issues of the project from the v1 API."""
        resp = self.client.post(
            f"/v1/org/{self.org_id}/project/{self.project_id}/aggregated-issues",
            params={"includeIntroducedThrough": "true", "includeDescription": "true"},
        )
        data = as_dict(decode_json(resp), "aggregated issues")
        return [
            Issue.from_dict(i, self.client, self.org_id, self.project_id, self.project_origin)
            for i in as_list(data.get("issues"), "issues")
        ]

    def get_all_v2(self) -> list[IssueV2]:
        return get_all_v2_issues(self.client, self.org_id, self.project_id)

    def get_ignored(self) -> dict[str, list[Ignore]]:
        """All ignores of the project, keyed by issue ID."""
        resp = self.client.get(f"/v1/org/{self.org_id}/project/{self.project_id}/ignores")
        return decode_ignored_issues(decode_json(resp))
