import pytest

from apiruntime.headers import MediaTypeError, ParseError, content_type, parse_media_type


def _reason(value):
    with pytest.raises(MediaTypeError) as info:
        parse_media_type(value)
    return info.value


@pytest.mark.parametrize(
    "header, media_type, charset",
    [
        ("application/json", "application/json", ""),
        ("text/html; charset=utf-8", "text/html", "utf-8"),
        ("text/html;charset=utf-8", "text/html", "utf-8"),
        ("", "application/octet-stream", ""),
        ("text/html;           charset=utf-8", "text/html", "utf-8"),
    ],
)
def test_parse_content_type(header, media_type, charset):
    headers = {"Content-Type": header} if header else {}
    assert content_type(headers) == (media_type, charset)


@pytest.mark.parametrize("header", ["application(", "application/json;char*"])
def test_parse_content_type_errors(header):
    expected = ParseError("Content-Type", "header", header, _reason(header))
    with pytest.raises(ParseError) as info:
        content_type({"Content-Type": header})
    assert str(info.value) == str(expected)
    assert info.value.code == 400


def test_content_type_header_lookup_is_case_insensitive():
    assert content_type({"content-type": ["text/plain; charset=ascii"]}) == (
        "text/plain",
        "ascii",
    )


def test_parse_error_message():
    err = ParseError("Content-Type", "header", "application(", "bad")
    assert str(err) == 'parsing Content-Type header from "application(" failed, because bad'


def test_parse_media_type_lowercases_and_reads_quoted_values():
    media_type, params = parse_media_type('Text/HTML; Charset="utf-8"; trailing=x;')
    assert media_type == "text/html"
    assert params == {"charset": "utf-8", "trailing": "x"}


def test_parse_media_type_rejects_duplicates():
    with pytest.raises(MediaTypeError):
        parse_media_type("text/plain; a=1; a=2")


def test_parse_media_type_errors():
    with pytest.raises(MediaTypeError):
        parse_media_type("")
    with pytest.raises(MediaTypeError):
        parse_media_type("text/")
    with pytest.raises(MediaTypeError):
        parse_media_type("text/plain extra")