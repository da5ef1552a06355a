"""A parsed message: its parts, body part lists and header accessors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence

from .headers import (
    DateTime,
    Header,
    HeaderValue,
    HeaderValueKind,
    RfcHeader,
    find_header,
    find_rfc,
)
from .part import MessagePart, MimeHeaders


def _get(items: Sequence, pos: int):
    """Return ``items[pos]`` for a non-negative in-range position, else None."""
    if 0 <= pos < len(items):
        return items[pos]
    return None


@dataclass
class Message(MimeHeaders):
    """A parsed message.

    ``parts[0]`` is the root part. ``text_body``, ``html_body`` and
    ``attachments`` hold ids into ``parts``.
    """

    html_body: list[int] = field(default_factory=list)
    text_body: list[int] = field(default_factory=list)
    attachments: list[int] = field(default_factory=list)
    parts: list[MessagePart] = field(default_factory=list)
    raw_message: bytes = b""

    def _mime_header_list(self) -> Sequence[Header]:
        return self.parts[0].headers

    def _rfc_or_empty(self, name: RfcHeader) -> HeaderValue:
        value = find_rfc(self.parts[0].headers, name)
        return value if value is not None else HeaderValue.empty()

    def _raw_text(self, start: int, end: int) -> Optional[str]:
        if not 0 <= start <= end <= len(self.raw_message):
            return None
        try:
            return bytes(self.raw_message[start:end]).decode("utf-8")
        except UnicodeDecodeError:
            return None

    def root_part(self) -> MessagePart:
        """Return the root part."""
        return self.parts[0]

    def header(self, name: str) -> Optional[HeaderValue]:
        """Return the value of the last header called ``name``, ignoring ASCII case."""
        found = find_header(self.parts[0].headers, name)
        return found.value if found is not None else None

    def remove_header(self, name: str) -> Optional[HeaderValue]:
        """Remove the first header named exactly ``name`` and return its value.

        The last header takes the place of the removed one.
        """
        return self._swap_remove(lambda h: h.name.as_str() == name)

    def remove_header_rfc(self, header: RfcHeader) -> Optional[HeaderValue]:
        """Remove the first header that is ``header`` and return its value."""
        return self._swap_remove(lambda h: h.name.rfc is header)

    def _swap_remove(self, matches) -> Optional[HeaderValue]:
        headers = self.parts[0].headers
        for pos, item in enumerate(headers):
            if matches(item):
                last = headers.pop()
                if pos < len(headers):
                    headers[pos] = last
                return item.value
        return None

    def header_raw(self, name: str) -> Optional[str]:
        """Return the raw text of the last header called ``name``."""
        found = find_header(self.parts[0].headers, name)
        if found is None:
            return None
        return self._raw_text(found.offset_start, found.offset_end)

    def headers(self) -> list[Header]:
        """Return the headers of the root part."""
        return self.parts[0].headers

    def header_values(self, name: RfcHeader) -> Iterator[HeaderValue]:
        """Yield the values of every header that is ``name``, in order."""
        for item in self.parts[0].headers:
            if item.name.rfc is name:
                yield item.value

    def headers_raw(self) -> Iterator[tuple[str, str]]:
        """Yield (name, raw value) pairs; values that are not UTF-8 are skipped."""
        for item in self.parts[0].headers:
            raw = self._raw_text(item.offset_start, item.offset_end)
            if raw is not None:
                yield item.name.as_str(), raw

    def message_raw(self) -> bytes:
        """Return the raw bytes of this message."""
        root = self.parts[0]
        if 0 <= root.offset_header <= root.offset_end <= len(self.raw_message):
            return bytes(self.raw_message[root.offset_header : root.offset_end])
        return b""

    def bcc(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.BCC)

    def cc(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.CC)

    def comments(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.COMMENTS)

    def date(self) -> Optional[DateTime]:
        value = find_rfc(self.parts[0].headers, RfcHeader.DATE)
        return value.as_datetime() if value is not None else None

    def from_(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.FROM)

    def in_reply_to(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.IN_REPLY_TO)

    def keywords(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.KEYWORDS)

    def list_archive(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.LIST_ARCHIVE)

    def list_help(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.LIST_HELP)

    def list_id(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.LIST_ID)

    def list_owner(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.LIST_OWNER)

    def list_post(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.LIST_POST)

    def list_subscribe(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.LIST_SUBSCRIBE)

    def list_unsubscribe(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.LIST_UNSUBSCRIBE)

    def message_id(self) -> Optional[str]:
        value = find_rfc(self.parts[0].headers, RfcHeader.MESSAGE_ID)
        return value.as_text() if value is not None else None

    def mime_version(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.MIME_VERSION)

    def received(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.RECEIVED)

    def references(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.REFERENCES)

    def reply_to(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.REPLY_TO)

    def resent_bcc(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.RESENT_BCC)

    def resent_cc(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.RESENT_TO)

    def resent_date(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.RESENT_DATE)

    def resent_from(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.RESENT_FROM)

    def resent_message_id(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.RESENT_MESSAGE_ID)

    def resent_sender(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.RESENT_SENDER)

    def resent_to(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.RESENT_TO)

    def return_path(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.RETURN_PATH)

    def return_address(self) -> Optional[str]:
        """Return the address from Return-Path, falling back to From."""
        headers = self.parts[0].headers
        path = find_rfc(headers, RfcHeader.RETURN_PATH)
        if path is not None:
            if path.kind is HeaderValueKind.TEXT:
                return path.value  # type: ignore[return-value]
            if path.kind is HeaderValueKind.TEXT_LIST:
                items = path.value or []
                return items[-1] if items else None  # type: ignore[index]
        sender = find_rfc(headers, RfcHeader.FROM)
        if sender is not None:
            if sender.kind is HeaderValueKind.ADDRESS:
                return sender.value.address  # type: ignore[union-attr]
            if sender.kind is HeaderValueKind.ADDRESS_LIST:
                items = sender.value or []
                return items[-1].address if items else None  # type: ignore[index]
        return None

    def sender(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.SENDER)

    def subject(self) -> Optional[str]:
        value = find_rfc(self.parts[0].headers, RfcHeader.SUBJECT)
        return value.as_text() if value is not None else None

    def to(self) -> HeaderValue:
        return self._rfc_or_empty(RfcHeader.TO)

    def part(self, pos: int) -> Optional[MessagePart]:
        """Return a part by position."""
        return _get(self.parts, pos)

    def _part_by_list(self, ids: Sequence[int], pos: int) -> Optional[MessagePart]:
        part_id = _get(ids, pos)
        return None if part_id is None else _get(self.parts, part_id)

    def html_part(self, pos: int) -> Optional[MessagePart]:
        """Return an HTML body part by position."""
        return self._part_by_list(self.html_body, pos)

    def text_part(self, pos: int) -> Optional[MessagePart]:
        """Return a text body part by position."""
        return self._part_by_list(self.text_body, pos)

    def attachment(self, pos: int) -> Optional[MessagePart]:
        """Return an attachment by position."""
        return self._part_by_list(self.attachments, pos)

    def text_body_count(self) -> int:
        return len(self.text_body)

    def html_body_count(self) -> int:
        return len(self.html_body)

    def attachment_count(self) -> int:
        return len(self.attachments)

    def _iter_list(self, ids: Sequence[int]) -> Iterator[MessagePart]:
        for part_id in ids:
            item = _get(self.parts, part_id)
            if item is None:
                return
            yield item

    def text_bodies(self) -> Iterator[MessagePart]:
        """Yield the text body parts, stopping at the first missing one."""
        return self._iter_list(self.text_body)

    def html_bodies(self) -> Iterator[MessagePart]:
        """Yield the HTML body parts, stopping at the first missing one."""
        return self._iter_list(self.html_body)

    def iter_attachments(self) -> Iterator[MessagePart]:
        """Yield the attachments, stopping at the first missing one."""
        return self._iter_list(self.attachments)