import io
import json

import pytest

from files_client import file_requests
from files_client.errors import EncodingError, InvalidArgumentError, ValidationError
from files_client.schemas import RenditionType, RestMethod, ShareType

BASE = "/services/data/v62.0"
FILES = f"{BASE}/connect/files"
LINK_PATH = f"{BASE}/sobjects/ContentDocumentLink"
FILE_ID = "069xx0000001AAA"
ENTITY_ID = "005xx0000001BBB"
CONNECT_HEADERS = {"X-Chatter-Entity-Encoding": "false"}


def test__owned_files_list__context_user():
    request = file_requests.owned_files_list()
    assert request.method == RestMethod.GET
    assert request.path == f"{FILES}/users"
    assert request.query_params == {}
    assert request.body is None
    assert request.headers == CONNECT_HEADERS


def test__owned_files_list__user_and_page():
    request = file_requests.owned_files_list(ENTITY_ID, 2)
    assert request.url == f"{FILES}/users/{ENTITY_ID}?page=2"


def test__files_in_users_groups():
    request = file_requests.files_in_users_groups("me", 0)
    assert request.path == f"{FILES}/users/me/filter/groups"
    assert request.query_params == {"page": "0"}


def test__files_shared_with_user():
    request = file_requests.files_shared_with_user(None, None)
    assert request.url == f"{FILES}/users/filter/sharedwithme"


def test__file_details__latest_version():
    request = file_requests.file_details(FILE_ID, None)
    assert request.method == RestMethod.GET
    assert request.path.endswith(f"connect/files/{FILE_ID}")
    assert "versionNumber" not in request.query_params


def test__file_details__specific_version():
    request = file_requests.file_details(FILE_ID, "3")
    assert request.url == f"{FILES}/{FILE_ID}?versionNumber=3"


@pytest.mark.parametrize("bad_id", [None, ""])
def test__file_details__rejects_missing_id(bad_id):
    with pytest.raises(ValidationError):
        file_requests.file_details(bad_id, None)


def test__batch_file_details():
    request = file_requests.batch_file_details(["069A", "069B", "069C"])
    assert request.path == f"{FILES}/batch/069A,069B,069C"


def test__batch_file_details__accepts_any_iterable():
    request = file_requests.batch_file_details(i for i in ("069A", "069B"))
    assert request.path == f"{FILES}/batch/069A,069B"


@pytest.mark.parametrize("ids", [["069A", ""], ["069A", None], [], None])
def test__batch_file_details__rejects_bad_ids(ids):
    with pytest.raises(ValidationError):
        file_requests.batch_file_details(ids)


def test__file_rendition__query_order():
    request = file_requests.file_rendition(FILE_ID, "2", RenditionType.THUMB120BY90, 0)
    assert request.path == f"{FILES}/{FILE_ID}/rendition"
    assert list(request.query_params.items()) == [
        ("type", "THUMB120BY90"),
        ("versionNumber", "2"),
        ("page", "0"),
    ]


def test__file_rendition__accepts_names():
    request = file_requests.file_rendition(FILE_ID, None, "pdf")
    assert request.query_params == {"type": "PDF"}


def test__file_rendition__requires_type():
    with pytest.raises(InvalidArgumentError):
        file_requests.file_rendition(FILE_ID, None, None, 0)


def test__file_rendition__unknown_type():
    with pytest.raises(InvalidArgumentError):
        file_requests.file_rendition(FILE_ID, None, "GIF", 0)


def test__file_rendition__validates_id_first():
    with pytest.raises(ValidationError):
        file_requests.file_rendition("", None, None, 0)


def test__file_contents():
    request = file_requests.file_contents(FILE_ID, "1")
    assert request.url == f"{FILES}/{FILE_ID}/content?versionNumber=1"


def test__file_shares():
    request = file_requests.file_shares(FILE_ID, 4)
    assert request.url == f"{FILES}/{FILE_ID}/file-shares?page=4"
    with pytest.raises(ValidationError):
        file_requests.file_shares(None)


def test__content_document_link_path():
    assert file_requests.get_content_document_link_path() == LINK_PATH


def test__add_file_share__body_key_order():
    request = file_requests.add_file_share("f1", "e1", "V")
    assert request.method == RestMethod.POST
    assert request.path == LINK_PATH
    assert request.body.content_type.startswith("application/json")
    body = json.loads(request.body.content)
    assert list(body.items()) == [
        ("ContentDocumentId", "f1"),
        ("LinkedEntityId", "e1"),
        ("ShareType", "V"),
    ]
    assert request.body.content == b'{"ContentDocumentId":"f1","LinkedEntityId":"e1","ShareType":"V"}'


def test__add_file_share__enum_share_type():
    request = file_requests.add_file_share(FILE_ID, ENTITY_ID, ShareType.COLLABORATOR)
    assert request.json_body()["ShareType"] == "C"


@pytest.mark.parametrize("file_id,entity_id", [("", ENTITY_ID), (FILE_ID, None)])
def test__add_file_share__rejects_missing_ids(file_id, entity_id):
    with pytest.raises(ValidationError):
        file_requests.add_file_share(file_id, entity_id, "V")


def test__delete_file_share():
    request = file_requests.delete_file_share("s1")
    assert request.method == RestMethod.DELETE
    assert request.path == file_requests.get_content_document_link_path() + "/s1"
    assert request.body is None
    with pytest.raises(ValidationError):
        file_requests.delete_file_share("")


def test__upload_file__description_only(png_file):
    request = file_requests.upload_file(png_file, "a.png", None, "desc", "image/png")
    assert request.method == RestMethod.POST
    assert request.path == f"{FILES}/users/me"
    assert request.body.content_type.startswith("multipart/form-data; boundary=")

    parts = request.body.parts
    assert [part.name for part in parts] == ["desc", "fileData"]
    assert parts[1].filename == "a.png"
    assert parts[1].content_type == "image/png"

    content = request.body.content
    assert content.count(b"Content-Disposition") == 2
    desc_at = content.index(b'name="desc"')
    file_at = content.index(b'name="fileData"; filename="a.png"')
    assert desc_at < file_at
    assert b"Content-Type: image/png" in content
    assert png_file.read_bytes() in content


def test__upload_file__file_part_only(png_file):
    request = file_requests.upload_file(png_file, "a.png", None, None, "image/png")
    assert [part.name for part in request.body.parts] == ["fileData"]
    assert request.body.content.count(b"Content-Disposition") == 1


def test__upload_file__all_parts_in_order():
    request = file_requests.upload_file(b"hello", "notes.txt", "Notes", "Weekly notes", "text/plain")
    assert [part.name for part in request.body.parts] == ["title", "desc", "fileData"]
    content = request.body.content
    assert content.index(b'name="title"') < content.index(b'name="desc"') < content.index(b'name="fileData"')
    assert b"Weekly notes" in content


def test__upload_file__file_object():
    request = file_requests.upload_file(io.BytesIO(b"%PDF-1.4"), "doc.pdf", mime_type="application/pdf")
    assert b"%PDF-1.4" in request.body.content


def test__upload_file__unknown_mime_type_defaults_to_octet_stream():
    request = file_requests.upload_file(b"data", "blob.bin")
    assert request.body.parts[-1].content_type == "application/octet-stream"


def test__upload_file__invalid_mime_type():
    with pytest.raises(EncodingError):
        file_requests.upload_file(b"data", "a.png", None, None, "not a mime type")


def test__upload_file__missing_file(tmp_path):
    with pytest.raises(EncodingError):
        file_requests.upload_file(tmp_path / "missing.png", "missing.png", mime_type="image/png")


def test__upload_file__text_mode_file_object():
    with pytest.raises(EncodingError):
        file_requests.upload_file(io.StringIO("text"), "a.txt", mime_type="text/plain")


def test__upload_file__requires_name():
    with pytest.raises(InvalidArgumentError):
        file_requests.upload_file(b"data", "", mime_type="text/plain")


def test__builders_are_idempotent():
    builders = [
        lambda: file_requests.owned_files_list(ENTITY_ID, 1),
        lambda: file_requests.file_details(FILE_ID, "2"),
        lambda: file_requests.batch_file_details([FILE_ID, "069B"]),
        lambda: file_requests.file_rendition(FILE_ID, "2", RenditionType.PDF, 3),
        lambda: file_requests.file_shares(FILE_ID, 1),
        lambda: file_requests.add_file_share(FILE_ID, ENTITY_ID, "V"),
        lambda: file_requests.delete_file_share("0DLxx"),
    ]
    for build in builders:
        assert build() == build()


def test__chatter_entity_encoding_header_follows_settings(monkeypatch):
    from files_client.config.settings import get_settings

    monkeypatch.setenv("FILES_CLIENT_CHATTER_ENTITY_ENCODING", "true")
    get_settings.cache_clear()
    request = file_requests.file_details(FILE_ID)
    assert request.headers == {"X-Chatter-Entity-Encoding": "true"}


def test__build_failures_are_logged(caplog):
    with caplog.at_level("WARNING", logger="files_client.utils.decorators"):
        with pytest.raises(ValidationError):
            file_requests.file_details("")
    assert "file_details rejected its arguments" in caplog.text


def test__upload_file__rejects_header_injection_in_mime_type():
    with pytest.raises(EncodingError):
        file_requests.upload_file(b"x", "a.txt", mime_type='text/plain; x="a\r\nX-Evil: 1"')


def test__upload_file__quoted_mime_parameters_stay_quoted():
    request = file_requests.upload_file(b"x", "a.txt", mime_type='text/plain; name="a b;c"')
    assert request.body.parts[-1].content_type == 'text/plain; name="a b;c"'
    assert b'Content-Type: text/plain; name="a b;c"' in request.body.content


def test__ids_are_encoded_the_same_on_every_endpoint():
    assert file_requests.delete_file_share("0DL?x").path == f"{LINK_PATH}/0DL%3Fx"
    assert file_requests.file_details("0DL?x").path == f"{FILES}/0DL%3Fx"
    assert file_requests.file_shares("a/../b").path == f"{FILES}/a%2F..%2Fb/file-shares"
    assert file_requests.owned_files_list("005/x").path == f"{FILES}/users/005%2Fx"


def test__batch_file_details__encodes_each_id():
    request = file_requests.batch_file_details(["069A", "a/b"])
    assert request.path == f"{FILES}/batch/069A,a%2Fb"


def test__share_builders_send_no_connect_headers():
    assert file_requests.add_file_share(FILE_ID, ENTITY_ID, "V").headers == {}
    assert file_requests.delete_file_share("0DLxx").headers == {}


@pytest.mark.parametrize("page_num", [-1, True])
def test__list_builders_reject_invalid_pages(page_num):
    with pytest.raises(InvalidArgumentError):
        file_requests.owned_files_list(None, page_num)
    with pytest.raises(InvalidArgumentError):
        file_requests.file_shares(FILE_ID, page_num)


def test__file_details__rejects_negative_version():
    with pytest.raises(InvalidArgumentError):
        file_requests.file_details(FILE_ID, "-1")
