"""Generic JSON:API resource records and the paginated fetch helpers."""

from __future__ import annotations

import logging
import urllib.parse
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping

import requests

from snyk_api.errors import DecodeError
from snyk_api.models import PAGE_LIMIT, REST_PREFIX, Links, Meta, Relationship, as_dict

if TYPE_CHECKING:
    from snyk_api.client import Client

logger = logging.getLogger("snyk-api")


@dataclass
class Resource:
    """
    One element of a REST envelope before it is projected into an entity.

    ``attributes`` keeps the raw attribute object; every entity reads the keys
    it knows and treats the rest as absent.
    """

    type: str
    id: str
    attributes: dict[str, Any] = field(default_factory=dict)
    meta: Meta = field(default_factory=Meta)
    relationships: dict[str, Relationship] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Resource:
        data = as_dict(data, "resource")
        relationships = as_dict(data.get("relationships"), "relationships")
        return cls(
            type=data.get("type") or "",
            id=data.get("id") or "",
            attributes=as_dict(data.get("attributes"), "attributes"),
            meta=Meta.from_dict(data.get("meta")),
            relationships={name: Relationship.from_dict(rel) for name, rel in relationships.items()},
        )

    def attr(self, key: str, default: Any = "") -> Any:
        """Attribute value, or ``default`` when it is missing or null."""
        value = self.attributes.get(key)
        return default if value is None else value

    def related_id(self, name: str) -> str:
        rel = self.relationships.get(name)
        return rel.data.id if rel else ""


@dataclass
class Envelope:
    data: list[Resource]
    links: Links


def decode_json(resp: requests.Response) -> Any:
    """Decode a response body as JSON."""
    try:
        return resp.json()
    except ValueError as e:
        raise DecodeError(f"Response from {resp.url} is not valid JSON: {e}") from e


def decode_single(payload: Any) -> Resource:
    payload = as_dict(payload, "response body")
    if not isinstance(payload.get("data"), dict):
        raise DecodeError("Expected 'data' to be a single resource object")
    return Resource.from_dict(payload["data"])


def decode_page(payload: Any) -> Envelope:
    payload = as_dict(payload, "response body")
    data = payload.get("data")
    if data is None:
        data = []
    if not isinstance(data, list):
        raise DecodeError("Expected 'data' to be an array of resources")
    return Envelope(data=[Resource.from_dict(r) for r in data], links=Links.from_dict(payload.get("links")))


def _with_version(client: Client, params: Mapping[str, Any] | None, **defaults: Any) -> dict[str, Any]:
    merged: dict[str, Any] = {"version": client.api_version, **defaults}
    merged.update(params or {})
    return merged


def next_page_request(next_link: str, api_version: str) -> tuple[str, dict[str, Any] | None]:
    """
    Turn a ``links.next`` value into the path and params of the next request.

    The API is inconsistent here: the link may or may not start with
    ``/rest`` and may or may not carry the ``version`` parameter.
    """
    parts = urllib.parse.urlsplit(next_link)
    path = "/" + parts.path.lstrip("/")
    if not path.startswith(f"{REST_PREFIX}/"):
        path = f"{REST_PREFIX}{path}"

    query = urllib.parse.parse_qs(parts.query, keep_blank_values=True)
    if not query.get("version", [""])[0]:
        query["version"] = [api_version]
        return path, query

    return f"{path}?{parts.query}", None


def get_single_resource(client: Client, path: str, params: Mapping[str, Any] | None = None) -> Resource:
    """Fetch one resource from a REST endpoint."""
    resp = client.get(path, params=_with_version(client, params))
    return decode_single(decode_json(resp))


def get_multi_resource(client: Client, path: str, params: Mapping[str, Any] | None = None) -> list[Resource]:
    """Fetch every page of a REST collection endpoint."""
    request_params: dict[str, Any] | None = _with_version(client, params, limit=str(PAGE_LIMIT))
    api_version = request_params["version"]
    url_path = path
    resources: list[Resource] = []

    while True:
        resp = client.get(url_path, params=request_params)
        page = decode_page(decode_json(resp))
        resources.extend(page.data)

        if not page.links.next or not page.data:
            break

        url_path, request_params = next_page_request(page.links.next, api_version)
        logger.debug(f"Following next page: {url_path}")

    return resources
