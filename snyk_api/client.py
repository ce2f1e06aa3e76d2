"""Snyk API client with URL composition and retry support."""

from __future__ import annotations

import json
import logging
import time
import urllib.parse
from typing import Any, Mapping

import requests

from snyk_api.entities.group import GroupsService
from snyk_api.entities.org import OrgsService
from snyk_api.entities.user import UsersService
from snyk_api.errors import APIError, MalformedInput, SerializationError, TransportError
from snyk_api.models import (
    BASE_URL,
    DEFAULT_API_VERSION,
    DEFAULT_MAX_RETRIES,
    GATEWAY_RETRY_STATUS,
    GATEWAY_RETRY_WAIT,
    REST_CONTENT_TYPE,
    RETRY_AFTER_PADDING,
    RETRYABLE_STATUS_CODES,
    V1_CONTENT_TYPE,
)


def join_url(base: str, suffix: str) -> str:
    """
    Join ``suffix`` onto ``base``, keeping the query string of ``suffix``.

    Path segments are joined with a single slash; any query on ``base`` is
    replaced rather than merged.
    """
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in suffix):
        raise MalformedInput(f"Invalid control character in URL path: {suffix!r}")
    try:
        suffix_parts = urllib.parse.urlsplit(suffix)
        base_parts = urllib.parse.urlsplit(base)
    except ValueError as e:
        raise MalformedInput(f"Cannot parse URL path '{suffix}': {e}") from e

    segments = [p.strip("/") for p in (base_parts.path, suffix_parts.path)]
    path = "/" + "/".join(s for s in segments if s)
    if suffix_parts.path.endswith("/") and path != "/":
        path += "/"

    return urllib.parse.urlunsplit((base_parts.scheme, base_parts.netloc, path, suffix_parts.query, ""))


def is_rest_path(path: str) -> bool:
    return path.lstrip("/").startswith("rest/")


class Client:
    """Thin wrapper around the Snyk REST and v1 APIs with rate-limit and retry handling."""

    def __init__(
        self,
        token: str,
        base_url: str = BASE_URL,
        api_version: str = DEFAULT_API_VERSION,
        max_retries: int = DEFAULT_MAX_RETRIES,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url
        self.api_version = api_version
        self.max_retries = max_retries
        self.session = session or requests.Session()
        self._token = token
        self.logger = logging.getLogger("snyk-api")

        self.orgs = OrgsService(self)
        self.users = UsersService(self)
        self.groups = GroupsService(self)

    def request(
        self,
        method: str,
        path: str,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
    ) -> requests.Response:
        """
        Send a request to the API and return the successful response.

        ``path`` excludes the origin and may carry its own query string, which
        ``params`` replaces when given.
        """
        url = join_url(self.base_url, path)
        if params:
            parts = urllib.parse.urlsplit(url)
            query = urllib.parse.urlencode(params, doseq=True)
            url = urllib.parse.urlunsplit((parts.scheme, parts.netloc, parts.path, query, ""))

        data = None
        if body is not None:
            try:
                data = json.dumps(body)
            except (TypeError, ValueError) as e:
                raise SerializationError(f"Failed to serialize request body; {e}") from e

        headers = {
            "Authorization": self._token,
            "accept": "*/*",
            "Content-Type": REST_CONTENT_TYPE if is_rest_path(path) else V1_CONTENT_TYPE,
        }

        resp = self._send_with_retry(method, url, headers, data)

        if resp.status_code >= 400:
            self.logger.error(f"API error {resp.status_code}: {resp.text[:500]}")
            raise APIError(resp.status_code, resp.text, response=resp)
        return resp

    def _send(self, method: str, url: str, headers: dict, data: str | None, attempt: int) -> requests.Response:
        self.logger.debug(f"{method.upper()} {url} {data or ''} (attempt {attempt})")
        try:
            return self.session.request(method, url, headers=headers, data=data)
        except requests.RequestException as e:
            raise TransportError(f"{method.upper()} {url} failed: {e}") from e

    def _send_with_retry(self, method: str, url: str, headers: dict, data: str | None) -> requests.Response:
        """
        Send the request, retrying on rate limits and transient server errors.

        Returns the last response even if its status is still retryable once
        the retry budget is spent.
        """
        attempt = 1
        resp = self._send(method, url, headers, data, attempt)

        if resp.status_code in RETRYABLE_STATUS_CODES:
            for i in range(self.max_retries):
                wait_time = self._calculate_backoff(resp, i)
                self.logger.warning(f"Got {resp.status_code}. Retrying in {wait_time} seconds.")
                time.sleep(wait_time)
                resp.close()
                attempt += 1
                resp = self._send(method, url, headers, data, attempt)
                if resp.status_code not in RETRYABLE_STATUS_CODES:
                    break

        if resp.status_code == GATEWAY_RETRY_STATUS:
            self.logger.warning(f"Got {resp.status_code}. Retrying in {GATEWAY_RETRY_WAIT} seconds.")
            time.sleep(GATEWAY_RETRY_WAIT)
            resp.close()
            attempt += 1
            resp = self._send(method, url, headers, data, attempt)

        return resp

    def _calculate_backoff(self, resp: requests.Response, attempt: int) -> int:
        """Calculate backoff time, padding an integer Retry-After header."""
        retry_after = resp.headers.get("Retry-After")
        if retry_after:
            try:
                return int(retry_after) + RETRY_AFTER_PADDING
            except ValueError:
                pass  # Fall through to exponential backoff
        return 2**attempt

    def get(self, path: str, params: Mapping[str, Any] | None = None) -> requests.Response:
        return self.request("GET", path, params=params)

    def post(self, path: str, params: Mapping[str, Any] | None = None, body: Any = None) -> requests.Response:
        return self.request("POST", path, params=params, body=body)

    def put(self, path: str, body: Any = None) -> requests.Response:
        return self.request("PUT", path, body=body)

    def patch(self, path: str, params: Mapping[str, Any] | None = None, body: Any = None) -> requests.Response:
        return self.request("PATCH", path, params=params, body=body)

    def delete(self, path: str, params: Mapping[str, Any] | None = None) -> requests.Response:
        return self.request("DELETE", path, params=params)
