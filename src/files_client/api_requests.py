"""Shared helpers for the Connect API request builders."""
import logging
from typing import Dict, Iterable, Optional

from files_client.api_versions import get_base_path
from files_client.config.settings import get_settings
from files_client.errors import ValidationError
from files_client.schemas import RequestBody, RestMethod, RestRequest
from files_client.uri_builder import ConnectUriBuilder

logger = logging.getLogger(__name__)

CHATTER_ENTITY_ENCODING_HEADER = "X-Chatter-Entity-Encoding"


def http_headers() -> Dict[str, str]:
    """Headers sent with every Connect request."""
    encoding = get_settings().chatter_entity_encoding
    return {CHATTER_ENTITY_ENCODING_HEADER: str(encoding).lower()}


def base(path: str) -> ConnectUriBuilder:
    """Start a builder at ``{versioned root}/{path}``."""
    return ConnectUriBuilder(get_base_path()).append_path(path)


def make(
    uri: ConnectUriBuilder,
    method: RestMethod = RestMethod.GET,
    body: Optional[RequestBody] = None,
) -> RestRequest:
    """Turn a finished builder into a request descriptor."""
    path, query_params = uri.build()
    return RestRequest(
        method=method,
        path=path,
        query_params=query_params,
        body=body,
        headers=http_headers(),
    )


def validate_sfdc_id(sfdc_id: Optional[str]) -> None:
    """Raise ValidationError unless ``sfdc_id`` is a non-empty string."""
    if sfdc_id is None or not isinstance(sfdc_id, str) or len(sfdc_id) == 0:
        raise ValidationError(f"invalid sfdcId: {sfdc_id!r}")


def validate_sfdc_ids(sfdc_ids: Iterable[Optional[str]]) -> None:
    """Validate every id; an empty collection is rejected as well."""
    if sfdc_ids is None:
        raise ValidationError("sfdcIds can't be None")
    if isinstance(sfdc_ids, str):
        raise ValidationError("sfdcIds must be a collection of ids, not a single string")
    count = 0
    for sfdc_id in sfdc_ids:
        validate_sfdc_id(sfdc_id)
        count += 1
    if count == 0:
        raise ValidationError("at least one sfdcId is required")
