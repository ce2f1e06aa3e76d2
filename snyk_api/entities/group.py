"""Groups and group-level membership."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from snyk_api.errors import SnykError, ValidationError
from snyk_api.models import GroupRole
from snyk_api.resource import Resource, get_multi_resource, get_single_resource

if TYPE_CHECKING:
    from snyk_api.client import Client
    from snyk_api.entities.org import Org
    from snyk_api.entities.user import User


@dataclass
class Group:
    id: str
    name: str = ""
    client: Client | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_resource(cls, resource: Resource, client: Client) -> Group:
        return cls(id=resource.id, name=resource.attr("name"), client=client)

    def add_user_to_org(self, org: Org, user: User, role: str) -> None:
        """Add ``user`` to ``org`` with ``role``, which must be "admin" or "collaborator"."""
        try:
            GroupRole(role)
        except ValueError:
            choices = ", ".join(f'"{r.value}"' for r in GroupRole)
            raise ValidationError(f"role must be one of {choices}") from None

        try:
            self.client.post(f"/v1/group/{self.id}/org/{org.id}/members", body={"userId": user.id, "role": role})
        except SnykError as e:
            raise e.with_context("Failed to add user to org") from e


@dataclass(frozen=True)
class GroupsService:
    client: Client = field(repr=False)

    def get_all(self) -> list[Group]:
        return [Group.from_resource(r, self.client) for r in get_multi_resource(self.client, "/rest/groups")]

    def get(self, group_id: str) -> Group:
        return Group.from_resource(get_single_resource(self.client, f"/rest/groups/{group_id}"), self.client)
