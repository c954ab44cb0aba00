"""
Request builders for the Connect API files functionality.

Every function validates its arguments, composes a path, query string and
optional body, and returns a new RestRequest. Nothing here performs network
I/O; the returned descriptors are executed by an external REST client.
"""
import logging
import os
from typing import BinaryIO, Dict, List, Optional, Sequence, Union

from urllib3 import encode_multipart_formdata
from urllib3.fields import RequestField

from files_client.api_requests import (
    base,
    http_headers,
    make,
    validate_sfdc_id,
    validate_sfdc_ids,
)
from files_client.api_versions import get_base_sobject_path
from files_client.errors import EncodingError, InvalidArgumentError
from files_client.media_type import MediaType
from files_client.schemas import (
    FormPart,
    RenditionType,
    RequestBody,
    RestMethod,
    RestRequest,
    ShareType,
)
from files_client.uri_builder import ConnectUriBuilder
from files_client.utils.decorators import log_request_build

logger = logging.getLogger(__name__)

FILES_PATH = "connect/files"
USER_FILES_PATH = "connect/files/users"
CONTENT_DOCUMENT_LINK = "ContentDocumentLink"

TITLE_FIELD = "title"
DESCRIPTION_FIELD = "desc"
FILE_DATA_FIELD = "fileData"

FileSource = Union[str, "os.PathLike[str]", bytes, BinaryIO]


def get_content_document_link_path() -> str:
    """Path of the ContentDocumentLink (file share) sObject collection."""
    return get_base_sobject_path() + CONTENT_DOCUMENT_LINK


@log_request_build
def owned_files_list(user_id: Optional[str] = None, page_num: Optional[int] = None) -> RestRequest:
    """
    Build a request that fetches a page of the files owned by a user.

    Args:
        user_id: If None the context user is used, otherwise the Id of a user.
        page_num: If None fetches the first page, otherwise the specified page.

    Returns:
        RestRequest: A new request that can be used to fetch this data
    """
    return make(base(USER_FILES_PATH).append_user_id(user_id).append_page_num(page_num))


@log_request_build
def files_in_users_groups(user_id: Optional[str] = None, page_num: Optional[int] = None) -> RestRequest:
    """
    Build a request that fetches a page of the files from groups the user is
    a member of.

    Args:
        user_id: If None the context user is used, otherwise the Id of a user.
        page_num: If None fetches the first page, otherwise the specified page.

    Returns:
        RestRequest: A new request that can be used to fetch this data
    """
    return make(
        base(USER_FILES_PATH)
        .append_user_id(user_id)
        .append_path("filter/groups")
        .append_page_num(page_num)
    )


@log_request_build
def files_shared_with_user(user_id: Optional[str] = None, page_num: Optional[int] = None) -> RestRequest:
    """
    Build a request that fetches a page of the files shared with the user.

    Args:
        user_id: If None the context user is used, otherwise the Id of a user.
        page_num: If None fetches the first page, otherwise the specified page.

    Returns:
        RestRequest: A new request that can be used to fetch this data
    """
    return make(
        base(USER_FILES_PATH)
        .append_user_id(user_id)
        .append_path("filter/sharedwithme")
        .append_page_num(page_num)
    )


@log_request_build
def file_details(sfdc_id: str, version: Optional[str] = None) -> RestRequest:
    """
    Build a request that fetches the details of a particular version of a file.

    Args:
        sfdc_id: The Id of the file
        version: If None fetches the most recent version, otherwise this
            specific version.

    Returns:
        RestRequest: A new request that can be used to fetch this data

    Raises:
        ValidationError: If sfdc_id is None or empty
    """
    validate_sfdc_id(sfdc_id)
    return make(base(FILES_PATH).append_id(sfdc_id).append_version_num(version))


@log_request_build
def batch_file_details(sfdc_ids: Sequence[str]) -> RestRequest:
    """
    Build a request that fetches the latest details of one or more files in a
    single request.

    Args:
        sfdc_ids: The file Ids to fetch

    Returns:
        RestRequest: A new request that can be used to fetch this data

    Raises:
        ValidationError: If the list is empty or any Id is None or empty
    """
    ids = sfdc_ids if sfdc_ids is None or isinstance(sfdc_ids, str) else list(sfdc_ids)
    validate_sfdc_ids(ids)
    return make(base(FILES_PATH).append_path("batch").append_ids(ids))


@log_request_build
def file_rendition(
    sfdc_id: str,
    version: Optional[str],
    rendition_type: Union[RenditionType, str],
    page_num: Optional[int] = None,
) -> RestRequest:
    """
    Build a request that fetches a preview/rendition of a page of the file.

    Args:
        sfdc_id: The Id of the file
        version: If None fetches the most recent version, otherwise this
            specific version.
        rendition_type: Format of the rendition
        page_num: Which page to fetch, pages start at 0.

    Returns:
        RestRequest: A new request that can be used to fetch this data

    Raises:
        ValidationError: If sfdc_id is None or empty
        InvalidArgumentError: If rendition_type is None or unknown
    """
    validate_sfdc_id(sfdc_id)
    rendition = _coerce_rendition_type(rendition_type)
    return make(
        base(FILES_PATH)
        .append_id(sfdc_id)
        .append_path("rendition")
        .append_query_param("type", rendition.value)
        .append_version_num(version)
        .append_page_num(page_num)
    )


@log_request_build
def file_contents(sfdc_id: str, version: Optional[str] = None) -> RestRequest:
    """
    Build a request that fetches the binary contents of a file.

    Args:
        sfdc_id: The Id of the file
        version: The version of the file, None for the latest

    Returns:
        RestRequest: A new request that can be used to fetch this data
    """
    validate_sfdc_id(sfdc_id)
    return make(
        base(FILES_PATH).append_id(sfdc_id).append_path("content").append_version_num(version)
    )


@log_request_build
def file_shares(sfdc_id: str, page_num: Optional[int] = None) -> RestRequest:
    """
    Build a request that fetches a page of the entities a file is shared to.

    Args:
        sfdc_id: The Id of the file
        page_num: If None fetches the first page, otherwise the specified page.

    Returns:
        RestRequest: A new request that can be used to fetch this data
    """
    validate_sfdc_id(sfdc_id)
    return make(
        base(FILES_PATH).append_id(sfdc_id).append_path("file-shares").append_page_num(page_num)
    )


@log_request_build
def add_file_share(
    file_id: str,
    entity_id: str,
    share_type: Union[ShareType, str, None],
) -> RestRequest:
    """
    Build a request that shares a file with an entity.

    Args:
        file_id: The Id of the file being shared
        entity_id: The Id of the entity to share the file to (a user or a group)
        share_type: The type of share (V - View, C - Collaboration)

    Returns:
        RestRequest: A new request that can be used to create this share
    """
    validate_sfdc_ids((file_id, entity_id))
    return RestRequest(
        method=RestMethod.POST,
        path=get_content_document_link_path(),
        body=_make_file_share(file_id, entity_id, share_type),
    )


@log_request_build
def delete_file_share(share_id: str) -> RestRequest:
    """
    Build a request that deletes a file share.

    Args:
        share_id: The Id of the file share record (aka ContentDocumentLink)

    Returns:
        RestRequest: A new request that can be used to delete this share
    """
    validate_sfdc_id(share_id)
    path, _ = ConnectUriBuilder(get_content_document_link_path()).append_id(share_id).build()
    return RestRequest(method=RestMethod.DELETE, path=path)


@log_request_build
def upload_file(
    the_file: FileSource,
    name: str,
    title: Optional[str] = None,
    description: Optional[str] = None,
    mime_type: Optional[str] = None,
) -> RestRequest:
    """
    Build a request that uploads a new file, creating it at version 1.

    The file is read when the request is built, so the descriptor holds the
    complete multipart body.

    Args:
        the_file: Path of the local file, its bytes, or a binary file object
        name: The name of the file
        title: The title of the file
        description: A description of the file
        mime_type: The mime type of the file, if known

    Returns:
        RestRequest: A new request that can perform this upload

    Raises:
        InvalidArgumentError: If name is None or empty
        EncodingError: If mime_type is not a valid media type, the file cannot
            be read, or the body cannot be encoded
    """
    media_type = MediaType.parse(mime_type)
    if not name:
        raise InvalidArgumentError("file name can't be empty")

    fields: List[RequestField] = []
    parts: List[FormPart] = []
    if title is not None:
        fields.append(_form_field(TITLE_FIELD, title))
        parts.append(FormPart(name=TITLE_FIELD))
    if description is not None:
        fields.append(_form_field(DESCRIPTION_FIELD, description))
        parts.append(FormPart(name=DESCRIPTION_FIELD))

    file_field = RequestField(name=FILE_DATA_FIELD, data=_read_file(the_file), filename=name)
    file_field.make_multipart(content_type=str(media_type))
    fields.append(file_field)
    parts.append(FormPart(name=FILE_DATA_FIELD, filename=name, content_type=str(media_type)))

    try:
        content, content_type = encode_multipart_formdata(fields)
    except (TypeError, UnicodeError) as e:
        raise EncodingError(f"Failed to encode upload body: {str(e)}") from e

    path, query_params = base(USER_FILES_PATH).append_path("me").build()
    return RestRequest(
        method=RestMethod.POST,
        path=path,
        query_params=query_params,
        body=RequestBody(content=content, content_type=content_type, parts=parts),
        headers=http_headers(),
    )


def _form_field(name: str, value: str) -> RequestField:
    field = RequestField(name=name, data=value)
    field.make_multipart()
    return field


def _coerce_rendition_type(rendition_type: Union[RenditionType, str, None]) -> RenditionType:
    if rendition_type is None:
        raise InvalidArgumentError("rendition type can't be None")
    try:
        return RenditionType(rendition_type)
    except ValueError:
        pass
    if isinstance(rendition_type, str) and rendition_type.upper() in RenditionType.__members__:
        return RenditionType[rendition_type.upper()]
    valid = [r.value for r in RenditionType]
    raise InvalidArgumentError(f"Unknown rendition type: {rendition_type!r}. Must be one of {valid}")


def _make_file_share(
    file_id: str,
    entity_id: str,
    share_type: Union[ShareType, str, None],
) -> RequestBody:
    if isinstance(share_type, ShareType):
        share_type = share_type.value
    share: Dict[str, Optional[str]] = {
        "ContentDocumentId": file_id,
        "LinkedEntityId": entity_id,
        "ShareType": share_type,
    }
    return RequestBody.from_json(share)


def _read_file(the_file: FileSource) -> bytes:
    if isinstance(the_file, (bytes, bytearray)):
        return bytes(the_file)
    try:
        if isinstance(the_file, (str, os.PathLike)):
            with open(the_file, "rb") as f:
                return f.read()
        data = the_file.read()
    except OSError as e:
        raise EncodingError(f"Failed to read upload file: {str(e)}") from e
    except AttributeError as e:
        raise EncodingError(f"Unsupported upload source: {type(the_file).__name__}") from e
    if isinstance(data, str):
        raise EncodingError("Upload file object must be opened in binary mode")
    return data
