"""Container images scanned within an org."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from snyk_api.models import CONTAINER_IMAGES_API_VERSION
from snyk_api.resource import Resource, get_multi_resource

if TYPE_CHECKING:
    from snyk_api.client import Client


@dataclass
class ContainerImage:
    id: str
    layers: list[str] = field(default_factory=list)
    names: list[str] = field(default_factory=list)
    platform: str = ""

    @classmethod
    def from_resource(cls, resource: Resource) -> ContainerImage:
        return cls(
            id=resource.id,
            layers=list(resource.attr("layers", [])),
            names=list(resource.attr("names", [])),
            platform=resource.attr("platform"),
        )


@dataclass(frozen=True)
class ContainerImagesService:
    client: Client = field(repr=False)
    org_id: str

    def get_all(self) -> list[ContainerImage]:
        resources = get_multi_resource(
            self.client,
            f"/rest/orgs/{self.org_id}/container_images",
            {"version": CONTAINER_IMAGES_API_VERSION},
        )
        return [ContainerImage.from_resource(r) for r in resources]
