"""Scan targets within an org."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from snyk_api.models import TARGETS_API_VERSION
from snyk_api.resource import Resource, get_multi_resource, get_single_resource

if TYPE_CHECKING:
    from snyk_api.client import Client


@dataclass
class Target:
    id: str
    display_name: str = ""
    origin: str = ""
    remote_url: str = ""
    is_private: bool = False
    org_id: str = ""
    client: Client | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_resource(cls, resource: Resource, client: Client, org_id: str) -> Target:
        return cls(
            id=resource.id,
            display_name=resource.attr("displayName"),
            origin=resource.attr("origin"),
            remote_url=resource.attr("remoteUrl"),
            is_private=resource.attr("isPrivate", False),
            org_id=org_id,
            client=client,
        )

    def delete(self) -> None:
        self.client.delete(f"/rest/orgs/{self.org_id}/targets/{self.id}", params={"version": TARGETS_API_VERSION})


@dataclass(frozen=True)
class TargetsService:
    client: Client = field(repr=False)
    org_id: str

    def _list(self, params: dict) -> list[Target]:
        resources = get_multi_resource(self.client, f"/rest/orgs/{self.org_id}/targets", params)
        return [Target.from_resource(r, self.client, self.org_id) for r in resources]

    def get_all(self) -> list[Target]:
        return self._list({"version": TARGETS_API_VERSION, "excludeEmpty": "false"})

    def get(self, target_id: str) -> Target:
        resource = get_single_resource(self.client, f"/rest/orgs/{self.org_id}/targets/{target_id}")
        return Target.from_resource(resource, self.client, self.org_id)

    def get_by_remote_url(self, remote_url: str) -> list[Target]:
        return self._list({"remoteUrl": remote_url})
