"""
snyk-api: A typed client for the Snyk REST and v1 APIs.

Wraps both API families behind one object graph: orgs own projects, targets,
container images and issues; groups own members. Rate limits and transient
server errors are retried inside the client.

Environment (CLI only):
    SNYK_TOKEN       - Snyk API token (required)
    SNYK_API_URL     - API origin (default: https://api.snyk.io/)
    SNYK_API_VERSION - Default REST API version
"""

from snyk_api.client import Client, join_url
from snyk_api.errors import (
    APIError,
    DecodeError,
    MalformedInput,
    NotFoundError,
    SerializationError,
    SnykError,
    TransportError,
    UnsupportedOperation,
    ValidationError,
)
from snyk_api.models import DEFAULT_API_VERSION, DEFAULT_MAX_RETRIES, RETRYABLE_STATUS_CODES

__version__ = "0.1.0"
__all__ = [
    "Client",
    "join_url",
    "APIError",
    "DecodeError",
    "MalformedInput",
    "NotFoundError",
    "SerializationError",
    "SnykError",
    "TransportError",
    "UnsupportedOperation",
    "ValidationError",
    "DEFAULT_API_VERSION",
    "DEFAULT_MAX_RETRIES",
    "RETRYABLE_STATUS_CODES",
    "__version__",
]
