"""Group members from the v1 API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from snyk_api.models import as_dict, as_list
from snyk_api.resource import decode_json

if TYPE_CHECKING:
    from snyk_api.client import Client


@dataclass
class OrgMembership:
    name: str = ""
    role: str = ""


@dataclass
class User:
    id: str
    name: str = ""
    username: str = ""
    email: str = ""
    orgs: list[OrgMembership] = field(default_factory=list)
    group_role: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> User:
        data = as_dict(data, "user")
        orgs = [as_dict(o, "user org") for o in as_list(data.get("orgs"), "user orgs")]
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            username=data.get("username") or "",
            email=data.get("email") or "",
            orgs=[OrgMembership(name=o.get("name") or "", role=o.get("role") or "") for o in orgs],
            group_role=data.get("groupRole") or "",
        )


@dataclass(frozen=True)
class UsersService:
    client: Client = field(repr=False)

    def get_all(self, group_id: str) -> list[User]:
        """Members of the given group."""
        data = decode_json(self.client.get(f"/v1/group/{group_id}/members"))
        return [User.from_dict(u) for u in as_list(data, "group members")]
