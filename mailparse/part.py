"""MIME message parts and access to their MIME header fields."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Sequence

from .headers import (
    ContentType,
    Header,
    HeaderValue,
    RfcHeader,
    _eq_ignore_ascii_case,
    find_rfc,
)


class Encoding(enum.IntEnum):
    """Content transfer encoding of a part."""

    NONE = 0
    QUOTED_PRINTABLE = 1
    BASE64 = 2

    @staticmethod
    def from_int(value: int) -> "Encoding":
        """Map a number to an encoding; unknown numbers give NONE."""
        try:
            return Encoding(value)
        except ValueError:
            return Encoding.NONE


class PartKind(enum.Enum):
    """What a part's body holds."""

    TEXT = "text"
    HTML = "html"
    BINARY = "binary"
    INLINE_BINARY = "inline_binary"
    MESSAGE = "message"
    MULTIPART = "multipart"


_TEXT_KINDS = frozenset({PartKind.TEXT, PartKind.HTML})
_BINARY_KINDS = frozenset({PartKind.BINARY, PartKind.INLINE_BINARY})


@dataclass
class PartBody:
    """The decoded body of a part, tagged with its kind.

    TEXT and HTML hold a str, BINARY and INLINE_BINARY hold bytes,
    MESSAGE holds a nested message and MULTIPART a list of part ids.
    """

    kind: PartKind = PartKind.MULTIPART
    value: object = field(default_factory=list)

    def raw_bytes(self) -> bytes:
        """Return the body as bytes; empty for multipart bodies."""
        if self.kind in _TEXT_KINDS:
            return self.value.encode("utf-8")  # type: ignore[union-attr]
        if self.kind in _BINARY_KINDS:
            return bytes(self.value)  # type: ignore[arg-type]
        if self.kind is PartKind.MESSAGE:
            return bytes(getattr(self.value, "raw_message", b"") or b"")
        return b""

    def __len__(self) -> int:
        """Length of the body in bytes."""
        return len(self.raw_bytes())


class MimeHeaders:
    """Access to the MIME header fields of anything that carries headers."""

    def _mime_header_list(self) -> Sequence[Header]:
        return self.headers  # type: ignore[attr-defined]

    def _rfc_value(self, name: RfcHeader) -> Optional[HeaderValue]:
        return find_rfc(self._mime_header_list(), name)

    def _rfc_text(self, name: RfcHeader) -> Optional[str]:
        value = self._rfc_value(name)
        return value.as_text() if value is not None else None

    def _rfc_content_type(self, name: RfcHeader) -> Optional[ContentType]:
        value = self._rfc_value(name)
        return value.as_content_type() if value is not None else None

    def content_description(self) -> Optional[str]:
        return self._rfc_text(RfcHeader.CONTENT_DESCRIPTION)

    def content_disposition(self) -> Optional[ContentType]:
        return self._rfc_content_type(RfcHeader.CONTENT_DISPOSITION)

    def content_id(self) -> Optional[str]:
        return self._rfc_text(RfcHeader.CONTENT_ID)

    def content_transfer_encoding(self) -> Optional[str]:
        return self._rfc_text(RfcHeader.CONTENT_TRANSFER_ENCODING)

    def content_type(self) -> Optional[ContentType]:
        return self._rfc_content_type(RfcHeader.CONTENT_TYPE)

    def content_language(self) -> HeaderValue:
        value = self._rfc_value(RfcHeader.CONTENT_LANGUAGE)
        return value if value is not None else HeaderValue.empty()

    def content_location(self) -> Optional[str]:
        return self._rfc_text(RfcHeader.CONTENT_LOCATION)

    def attachment_name(self) -> Optional[str]:
        """Return the disposition filename, else the content type name."""
        disposition = self.content_disposition()
        if disposition is not None:
            filename = disposition.attribute("filename")
            if filename is not None:
                return filename
        ctype = self.content_type()
        return ctype.attribute("name") if ctype is not None else None

    def is_content_type(self, type_: str, subtype: str) -> bool:
        """Return True when the content type matches, ignoring ASCII case."""
        ctype = self.content_type()
        if ctype is None or ctype.c_subtype is None:
            return False
        return _eq_ignore_ascii_case(ctype.c_type, type_) and _eq_ignore_ascii_case(
            ctype.c_subtype, subtype
        )


@dataclass
class MessagePart(MimeHeaders):
    """A MIME part: its headers, decoded body and raw offsets."""

    headers: list[Header] = field(default_factory=list)
    is_encoding_problem: bool = False
    body: PartBody = field(default_factory=PartBody)
    encoding: Encoding = Encoding.NONE
    offset_header: int = 0
    offset_body: int = 0
    offset_end: int = 0

    def contents(self) -> bytes:
        """Return the body as bytes."""
        return self.body.raw_bytes()

    def text_contents(self) -> Optional[str]:
        """Return the body as text, or None if it is not valid UTF-8."""
        kind = self.body.kind
        if kind in _TEXT_KINDS:
            return self.body.value  # type: ignore[return-value]
        if kind is PartKind.MULTIPART:
            return None
        try:
            return self.body.raw_bytes().decode("utf-8")
        except UnicodeDecodeError:
            return None

    def message(self) -> Optional[object]:
        """Return the nested message, if this part holds one."""
        return self.body.value if self.body.kind is PartKind.MESSAGE else None

    def sub_parts(self) -> Optional[list[int]]:
        """Return the ids of the sub-parts of a multipart part."""
        if self.body.kind is PartKind.MULTIPART:
            return self.body.value  # type: ignore[return-value]
        return None

    def __len__(self) -> int:
        return len(self.body)

    def __str__(self) -> str:
        text = self.text_contents()
        return text if text is not None else "[no contents]"

    def is_text(self) -> bool:
        return self.body.kind in _TEXT_KINDS

    def is_text_html(self) -> bool:
        return self.body.kind is PartKind.HTML

    def is_binary(self) -> bool:
        return self.body.kind in _BINARY_KINDS

    def is_multipart(self) -> bool:
        return self.body.kind is PartKind.MULTIPART

    def is_message(self) -> bool:
        return self.body.kind is PartKind.MESSAGE

    def is_empty(self) -> bool:
        return len(self) == 0

    def raw_len(self) -> int:
        """Length of the raw part, headers included."""
        return max(0, self.offset_end - self.offset_header)