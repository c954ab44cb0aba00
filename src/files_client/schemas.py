####################################
# --- Request descriptor schemas --- #
####################################

import json
import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import urlencode

import requests
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

logger = logging.getLogger(__name__)

MEDIA_TYPE_JSON = "application/json; charset=utf-8"


class RestMethod(str, Enum):
    """HTTP methods a descriptor can carry."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    PATCH = "PATCH"


class RenditionType(str, Enum):
    """Formats a file preview can be rendered in."""
    PDF = "PDF"
    FLASH = "FLASH"
    THUMB120BY90 = "THUMB120BY90"
    THUMB240BY180 = "THUMB240BY180"
    THUMB720BY480 = "THUMB720BY480"


class ShareType(str, Enum):
    """Access level granted by a file share (ContentDocumentLink)."""
    VIEWER = "V"
    COLLABORATOR = "C"
    INFERRED = "I"


class FormPart(BaseModel):
    """One part of a multipart/form-data body."""
    name: str = Field(description="Form field name.")
    filename: Optional[str] = Field(None, description="File name, for file parts only.")
    content_type: Optional[str] = Field(None, description="Content type of the part, if set.")

    model_config = ConfigDict(frozen=True)


class RequestBody(BaseModel):
    """Encoded request payload."""
    content: bytes
    content_type: str
    parts: Optional[Tuple[FormPart, ...]] = Field(
        None,
        description="Ordered form parts when the body is multipart.",
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "RequestBody":
        """Serialize a mapping as a JSON body, keeping its key order."""
        return cls(
            content=json.dumps(payload, separators=(",", ":")).encode("utf-8"),
            content_type=MEDIA_TYPE_JSON,
        )


class RestRequest(BaseModel):
    """A fully specified outbound request, ready for an external REST client.

    Descriptors are immutable and carry no connection state. ``path`` is
    relative to the instance URL and never contains the query string.
    """
    method: RestMethod
    path: str
    query_params: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    body: Optional[RequestBody] = None
    headers: Mapping[str, str] = Field(default_factory=dict, validate_default=True)

    model_config = ConfigDict(frozen=True)

    @field_validator("query_params", "headers")
    @classmethod
    def freeze_mapping(cls, v):
        """Store mappings as read-only views over a private copy."""
        return MappingProxyType(dict(v))

    @field_serializer("query_params", "headers")
    def dump_mapping(self, v):
        return dict(v)

    @property
    def url(self) -> str:
        """Path followed by the encoded query string, if any."""
        if not self.query_params:
            return self.path
        return f"{self.path}?{urlencode(self.query_params)}"

    def json_body(self) -> Optional[Dict[str, Any]]:
        """Decode a JSON body, or return None for empty and non-JSON bodies."""
        if self.body is None or not self.body.content_type.startswith("application/json"):
            return None
        return json.loads(self.body.content.decode("utf-8"))

    def to_prepared(self, instance_url: str) -> requests.PreparedRequest:
        """Prepare this descriptor against an instance URL without sending it.

        Args:
            instance_url: Scheme and host of the API instance, e.g.
                ``https://example.my.salesforce.com``

        Returns:
            requests.PreparedRequest: The request an HTTP session can send.
        """
        headers = dict(self.headers)
        data = None
        if self.body is not None:
            headers["Content-Type"] = self.body.content_type
            data = self.body.content

        prepared = requests.Request(
            method=self.method.value,
            url=f"{instance_url.rstrip('/')}{self.path}",
            params=dict(self.query_params),
            headers=headers,
            data=data,
        ).prepare()
        logger.debug(f"Prepared {prepared.method} {prepared.url}")
        return prepared
