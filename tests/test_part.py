from types import SimpleNamespace

import pytest

from mailparse.headers import (
    ContentType,
    Header,
    HeaderName,
    HeaderValue,
    HeaderValueKind,
    RfcHeader,
)
from mailparse.part import Encoding, MessagePart, PartBody, PartKind


def _header(name, kind, value):
    return Header(HeaderName(name), HeaderValue(kind, value))


def _ct_header(ctype):
    return _header(RfcHeader.CONTENT_TYPE, HeaderValueKind.CONTENT_TYPE, ctype)


def _cd_header(ctype):
    return _header(RfcHeader.CONTENT_DISPOSITION, HeaderValueKind.CONTENT_TYPE, ctype)


def test_encoding_from_int():
    assert Encoding.from_int(0) is Encoding.NONE
    assert Encoding.from_int(1) is Encoding.QUOTED_PRINTABLE
    assert Encoding.from_int(2) is Encoding.BASE64
    assert Encoding.from_int(7) is Encoding.NONE


def test_default_body_is_empty_multipart():
    part = MessagePart()
    assert part.is_multipart()
    assert part.sub_parts() == []
    assert len(part) == 0
    assert part.is_empty()
    assert part.contents() == b""
    assert part.text_contents() is None
    assert str(part) == "[no contents]"


def test_text_part_lengths_are_utf8_bytes():
    text = "pédagogues"
    part = MessagePart(body=PartBody(PartKind.TEXT, text))
    assert len(part) == len(text.encode("utf-8"))
    assert part.contents() == text.encode("utf-8")
    assert part.text_contents() == text
    assert str(part) == text
    assert part.is_text()
    assert not part.is_text_html()
    assert not part.is_binary()


def test_html_part():
    html = "<p>hi</p>"
    part = MessagePart(body=PartBody(PartKind.HTML, html))
    assert part.is_text()
    assert part.is_text_html()
    assert part.text_contents() == html


@pytest.mark.parametrize("kind", [PartKind.BINARY, PartKind.INLINE_BINARY])
def test_binary_parts(kind):
    good = MessagePart(body=PartBody(kind, "abc".encode()))
    assert good.is_binary()
    assert good.text_contents() == "abc"
    assert good.contents() == b"abc"
    bad = MessagePart(body=PartBody(kind, b"\xff\xfe"))
    assert bad.text_contents() is None
    assert str(bad) == "[no contents]"
    assert len(bad) == 2


def test_nested_message_part():
    nested = SimpleNamespace(raw_message=b"Subject: hi\n\nbody")
    part = MessagePart(body=PartBody(PartKind.MESSAGE, nested))
    assert part.is_message()
    assert part.message() is nested
    assert part.contents() == nested.raw_message
    assert len(part) == len(nested.raw_message)
    assert part.text_contents() == "Subject: hi\n\nbody"
    assert part.sub_parts() is None


def test_message_is_none_for_other_kinds():
    part = MessagePart(body=PartBody(PartKind.TEXT, "x"))
    assert part.message() is None
    assert part.sub_parts() is None


def test_raw_len_saturates():
    assert MessagePart(offset_header=10, offset_end=25).raw_len() == 15
    assert MessagePart(offset_header=30, offset_end=25).raw_len() == 0


def test_attachment_name_prefers_disposition_filename():
    part = MessagePart(
        headers=[
            _ct_header(ContentType("image", "gif", [("name", "ct.gif")])),
            _cd_header(ContentType("attachment", None, [("filename", "cd.gif")])),
        ]
    )
    assert part.attachment_name() == "cd.gif"
    assert part.content_disposition().is_attachment()


def test_attachment_name_falls_back_to_content_type():
    part = MessagePart(
        headers=[
            _ct_header(ContentType("image", "gif", [("name", "Book about ☕ tables.gif")])),
            _cd_header(ContentType("attachment")),
        ]
    )
    assert part.attachment_name() == "Book about ☕ tables.gif"


def test_attachment_name_absent():
    assert MessagePart().attachment_name() is None


def test_is_content_type_ignores_case():
    part = MessagePart(headers=[_ct_header(ContentType("Text", "HTML"))])
    assert part.is_content_type("text", "html")
    assert not part.is_content_type("text", "plain")
    no_subtype = MessagePart(headers=[_ct_header(ContentType("text"))])
    assert not no_subtype.is_content_type("text", "plain")


def test_last_header_wins():
    part = MessagePart(
        headers=[
            _header(RfcHeader.CONTENT_ID, HeaderValueKind.TEXT, "first"),
            _header(RfcHeader.CONTENT_ID, HeaderValueKind.TEXT, "second"),
        ]
    )
    assert part.content_id() == "second"


def test_text_mime_headers():
    part = MessagePart(
        headers=[
            _header(RfcHeader.CONTENT_DESCRIPTION, HeaderValueKind.TEXT, "desc"),
            _header(RfcHeader.CONTENT_TRANSFER_ENCODING, HeaderValueKind.TEXT, "base64"),
            _header(RfcHeader.CONTENT_LOCATION, HeaderValueKind.TEXT_LIST, ["a", "b"]),
            _header("X-Other", HeaderValueKind.TEXT, "ignored"),
        ]
    )
    assert part.content_description() == "desc"
    assert part.content_transfer_encoding() == "base64"
    assert part.content_location() == "b"
    assert part.content_type() is None


def test_content_language():
    assert MessagePart().content_language().is_empty()
    langs = HeaderValue(HeaderValueKind.TEXT_LIST, ["en", "fr"])
    part = MessagePart(headers=[Header(HeaderName(RfcHeader.CONTENT_LANGUAGE), langs)])
    assert part.content_language().as_text_list() == ["en", "fr"]


def test_content_type_of_wrong_kind_is_none():
    part = MessagePart(
        headers=[_header(RfcHeader.CONTENT_TYPE, HeaderValueKind.TEXT, "text/plain")]
    )
    assert part.content_type() is None
    assert not part.is_content_type("text", "plain")


def test_part_body_len_matches_contents():
    body = PartBody(PartKind.TEXT, "☺ smile")
    assert len(body) == len(body.raw_bytes())
    assert body.raw_bytes().decode("utf-8") == "☺ smile"