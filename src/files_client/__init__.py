"""
Request builders for the Connect Files REST API.

Produces inert request descriptors (method, path, query, body, headers) that an
external REST client executes. No network I/O happens in this package.
"""
from files_client.errors import (
    EncodingError,
    FileRequestError,
    InvalidArgumentError,
    ValidationError,
)
from files_client.schemas import (
    FormPart,
    RenditionType,
    RequestBody,
    RestMethod,
    RestRequest,
    ShareType,
)
from files_client import file_requests

__all__ = [
    "EncodingError",
    "FileRequestError",
    "InvalidArgumentError",
    "ValidationError",
    "FormPart",
    "RenditionType",
    "RequestBody",
    "RestMethod",
    "RestRequest",
    "ShareType",
    "file_requests",
]
