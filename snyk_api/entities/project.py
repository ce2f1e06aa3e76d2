"""Projects within an org."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from snyk_api.entities.issues_service import ProjectIssuesService
from snyk_api.models import Meta, Relationship, Tag, as_dict, as_list, parse_timestamp
from snyk_api.resource import Resource, get_multi_resource, get_single_resource

if TYPE_CHECKING:
    from snyk_api.client import Client

CONTAINER_PROJECT_TYPES = {"deb", "linux", "dockerfile", "rpm", "apk"}
IAC_PROJECT_TYPES = {
    "k8sconfig",
    "helmconfig",
    "terraformconfig",
    "armconfig",
    "cloudformationconfig",
    "cloudconfig",
}
CODE_PROJECT_TYPES = {"sast"}


@dataclass
class Project:
    """A project on an org."""

    id: str
    name: str = ""
    type: str = ""
    target_file: str = ""
    target_reference: str = ""
    origin: str = ""
    created: datetime | None = None
    status: str = ""
    business_criticality: list[str] = field(default_factory=list)
    environment: list[str] = field(default_factory=list)
    lifecycle: list[str] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    read_only: bool = False
    meta: Meta = field(default_factory=Meta)
    relationships: dict[str, Relationship] = field(default_factory=dict)
    org_id: str = ""
    client: Client | None = field(default=None, repr=False, compare=False)
    issues: ProjectIssuesService = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        self.issues = ProjectIssuesService(self.client, self.org_id, self.id, self.origin)

    @classmethod
    def from_resource(cls, resource: Resource, client: Client, org_id: str) -> Project:
        tags = [as_dict(t, "tag") for t in as_list(resource.attr("tags", None), "tags")]
        return cls(
            id=resource.id,
            name=resource.attr("name"),
            type=resource.attr("type"),
            target_file=resource.attr("target_file"),
            target_reference=resource.attr("target_reference"),
            origin=resource.attr("origin"),
            created=parse_timestamp(resource.attr("created", None)),
            status=resource.attr("status"),
            business_criticality=list(resource.attr("business_criticality", [])),
            environment=list(resource.attr("environment", [])),
            lifecycle=list(resource.attr("lifecycle", [])),
            tags=[Tag(key=t.get("key") or "", value=t.get("value") or "") for t in tags],
            read_only=resource.attr("read_only", False),
            meta=resource.meta,
            relationships=resource.relationships,
            org_id=org_id,
            client=client,
        )

    @property
    def scan_type(self) -> str:
        """
        Scan family of the project.

        ``container`` for OS package and Dockerfile projects, ``iac`` for
        configuration projects, ``sast`` for code projects, ``opensource``
        for everything else.
        """
        if self.type in CONTAINER_PROJECT_TYPES:
            return "container"
        if self.type in IAC_PROJECT_TYPES:
            return "iac"
        if self.type in CODE_PROJECT_TYPES:
            return "sast"
        return "opensource"

    def delete(self) -> None:
        self.client.delete(f"/v1/org/{self.org_id}/project/{self.id}")

    def deactivate(self) -> None:
        self.client.post(f"/v1/org/{self.org_id}/project/{self.id}/deactivate")

    def move(self, target_org_id: str) -> None:
        """Move the project from its org to ``target_org_id``."""
        self.client.put(f"/v1/org/{self.org_id}/project/{self.id}/move", body={"targetOrgId": target_org_id})


@dataclass(frozen=True)
class ProjectsService:
    client: Client = field(repr=False)
    org_id: str

    def get_all(self) -> list[Project]:
        params = {
            "meta.latest_dependency_total": "true",
            "meta.latest_issue_counts": "true",
        }
        resources = get_multi_resource(self.client, f"/rest/orgs/{self.org_id}/projects", params)
        return [Project.from_resource(r, self.client, self.org_id) for r in resources]

    def get(self, project_id: str) -> Project:
        resource = get_single_resource(self.client, f"/rest/orgs/{self.org_id}/projects/{project_id}")
        return Project.from_resource(resource, self.client, self.org_id)
