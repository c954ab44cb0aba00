import pytest

from files_client.errors import EncodingError
from files_client.media_type import MediaType


def test_parse_simple():
    media_type = MediaType.parse("image/png")
    assert media_type.type == "image"
    assert media_type.subtype == "png"
    assert media_type.parameters == {}
    assert str(media_type) == "image/png"


def test_parse_with_parameters():
    media_type = MediaType.parse('Text/Plain; charset=UTF-8; format="flowed"')
    assert media_type.essence == "text/plain"
    assert media_type.charset == "UTF-8"
    assert media_type.parameters["format"] == "flowed"


def test_none_is_octet_stream():
    assert MediaType.parse(None).essence == "application/octet-stream"


@pytest.mark.parametrize("value", ["", "png", "image/", "/png", "image/png; charset", "image png"])
def test_invalid_media_types(value):
    with pytest.raises(EncodingError):
        MediaType.parse(value)


@pytest.mark.parametrize("value", [
    'text/plain; x="a\r\nX-Evil: 1"',
    "text/plain\r\nX-Evil: 1",
    "text/plain; charset=utf-8\x00",
    "image/png\x7f",
])
def test_control_characters_are_rejected(value):
    with pytest.raises(EncodingError):
        MediaType.parse(value)


def test_non_token_values_are_quoted_again():
    media_type = MediaType.parse('text/plain; name="a b;c"; charset=utf-8')
    assert media_type.parameters["name"] == "a b;c"
    assert str(media_type) == 'text/plain; name="a b;c"; charset=utf-8'


def test_quotes_and_backslashes_are_escaped():
    media_type = MediaType(type="text", subtype="plain", parameters={"name": 'say "hi" \\ bye'})
    assert str(media_type) == 'text/plain; name="say \\"hi\\" \\\\ bye"'
