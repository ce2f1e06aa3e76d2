"""Organizations and the org-level v1 operations."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from snyk_api.entities.container_image import ContainerImagesService
from snyk_api.entities.issues_service import OrgIssuesService
from snyk_api.entities.project import ProjectsService
from snyk_api.entities.target import TargetsService
from snyk_api.errors import NotFoundError, SnykError
from snyk_api.models import as_dict
from snyk_api.resource import Resource, decode_json, get_multi_resource, get_single_resource

if TYPE_CHECKING:
    from snyk_api.client import Client
    from snyk_api.entities.user import User

UUID_PATTERN = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$")


def is_uuid(value: str) -> bool:
    return bool(UUID_PATTERN.match(value))


@dataclass
class OrgSettings:
    """Configurable settings of an org."""

    # Whether requesting access to the organization is enabled.
    request_access_enabled: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> OrgSettings:
        data = as_dict(data, "org settings")
        request_access = as_dict(data.get("requestAccess"), "requestAccess")
        return cls(request_access_enabled=bool(request_access.get("enabled", False)))

    def to_dict(self) -> dict:
        return {"requestAccess": {"enabled": self.request_access_enabled}}


@dataclass
class ImportTarget:
    """A repository to import into an org through one of its integrations."""

    # Account owner of the repository for GitHub, project ID for Azure Repos
    owner: str = ""
    name: str = ""
    branch: str = ""
    files: list[str] = field(default_factory=list)
    # Comma-separated folder names to skip; empty means the server default
    exclusion_globs: str = ""

    def to_dict(self) -> dict:
        target = {k: v for k, v in (("owner", self.owner), ("name", self.name), ("branch", self.branch)) if v}
        d: dict[str, Any] = {"target": target}
        if self.files:
            d["files"] = [{"path": path} for path in self.files]
        if self.exclusion_globs:
            d["exclusionGlobs"] = self.exclusion_globs
        return d


@dataclass
class Org:
    """A Snyk organization."""

    id: str
    name: str = ""
    slug: str = ""
    client: Client | None = field(default=None, repr=False, compare=False)
    projects: ProjectsService = field(init=False, repr=False, compare=False)
    targets: TargetsService = field(init=False, repr=False, compare=False)
    container_images: ContainerImagesService = field(init=False, repr=False, compare=False)
    issues: OrgIssuesService = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        self.projects = ProjectsService(self.client, self.id)
        self.targets = TargetsService(self.client, self.id)
        self.container_images = ContainerImagesService(self.client, self.id)
        self.issues = OrgIssuesService(self.client, self.id)

    @classmethod
    def from_resource(cls, resource: Resource, client: Client) -> Org:
        return cls(
            id=resource.id,
            name=resource.attr("name"),
            slug=resource.attr("slug"),
            client=client,
        )

    def update_user_role(self, user: User, role_id: str) -> None:
        """Set ``user``'s role in this org to ``role_id``."""
        try:
            self.client.put(f"/v1/org/{self.id}/members/update/{user.id}", body={"rolePublicId": role_id})
        except SnykError as e:
            raise e.with_context("Failed to update user role") from e

    def get_settings(self) -> OrgSettings:
        try:
            return OrgSettings.from_dict(decode_json(self.client.get(f"/v1/org/{self.id}/settings")))
        except SnykError as e:
            raise e.with_context("Failed to get org settings") from e

    def update_settings(self, settings: OrgSettings) -> None:
        try:
            self.client.put(f"/v1/org/{self.id}/settings", body=settings.to_dict())
        except SnykError as e:
            raise e.with_context("Failed to update org settings") from e

    def get_integrations(self) -> dict[str, str]:
        """Configured integrations of the org, keyed by integration name."""
        try:
            data = as_dict(decode_json(self.client.get(f"/v1/org/{self.id}/integrations")), "integrations")
        except SnykError as e:
            raise e.with_context("Failed to get org integrations") from e
        return {str(name): str(integration_id) for name, integration_id in data.items()}

    def clone_integration(self, integration_id: str, destination_org_id: str) -> str:
        """Clone an integration into ``destination_org_id``, returning the new integration's ID."""
        try:
            resp = self.client.post(
                f"/v1/org/{self.id}/integrations/{integration_id}/clone",
                body={"destinationOrgPublicId": destination_org_id},
            )
            data = as_dict(decode_json(resp), "clone integration response")
        except SnykError as e:
            raise e.with_context("Failed to clone integration") from e
        return data.get("newIntegrationId") or ""

    def import_project(self, integration_id: str, import_target: ImportTarget) -> None:
        try:
            self.client.post(
                f"/v1/org/{self.id}/integrations/{integration_id}/import", body=import_target.to_dict()
            )
        except SnykError as e:
            raise e.with_context("Failed to import target") from e


@dataclass(frozen=True)
class OrgsService:
    """Org endpoints."""

    client: Client = field(repr=False)

    def get_all(self) -> list[Org]:
        return [Org.from_resource(r, self.client) for r in get_multi_resource(self.client, "/rest/orgs")]

    def get(self, identifier: str) -> Org:
        """
        Get an org by ID or slug.

        UUID-shaped identifiers are fetched directly; anything else is looked
        up as a slug.
        """
        if is_uuid(identifier):
            resource = get_single_resource(self.client, f"/rest/orgs/{identifier}")
            return Org.from_resource(resource, self.client)

        resources = get_multi_resource(self.client, "/rest/orgs", {"slug": identifier})
        if not resources:
            raise NotFoundError(f"No org found for slug '{identifier}'", identifier)
        return Org.from_resource(resources[0], self.client)

    def create(self, group_id: str, name: str, source_org_id: str | None = None) -> Org:
        """Create an org in ``group_id``, optionally copying settings from ``source_org_id``."""
        body = {"name": name, "groupId": group_id}
        if source_org_id:
            body["sourceOrgId"] = source_org_id

        try:
            data = as_dict(decode_json(self.client.post("/v1/org", body=body)), "created org")
        except SnykError as e:
            raise e.with_context("Failed to create org") from e
        return Org(
            id=data.get("id") or "",
            name=data.get("name") or "",
            slug=data.get("slug") or "",
            client=self.client,
        )
