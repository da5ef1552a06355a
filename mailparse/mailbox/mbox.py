"""Reading messages out of an mbox mailbox stream."""

from __future__ import annotations

import io
from dataclasses import dataclass, replace
from typing import BinaryIO, Iterator, Optional, Union

from ..headers import DateTime

_U8_MAX = 255
_U16_MAX = 65535

_MONTHS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

_FROM = b"From "


@dataclass(order=True)
class MboxMessage:
    """A message from an mbox file.

    ``internal_date`` is in UTC seconds since the UNIX epoch (0 when the
    separator line carries no valid date) and ``sender`` is the address
    found on the ``From`` separator line.
    """

    internal_date: int = 0
    sender: str = ""
    contents: bytes = b""


def _parse_uint(text: str, maximum: int) -> int:
    digits = text[1:] if text.startswith("+") else text
    if digits and digits.isascii() and digits.isdigit():
        value = int(digits)
        if value <= maximum:
            return value
    return maximum


def parse_from_line(line: str) -> MboxMessage:
    """Parse a ``From sender date`` separator line into an empty message."""
    if not line.startswith("From "):
        return MboxMessage()
    rest = line[len("From "):]
    sender, sep, date = rest.partition(" ")
    if not sep:
        return MboxMessage()

    dt = DateTime(
        year=_U16_MAX,
        month=_U8_MAX,
        day=_U8_MAX,
        hour=_U8_MAX,
        minute=_U8_MAX,
        second=_U8_MAX,
    )
    for pos, part in enumerate(date.split()):
        if pos == 1:
            dt.month = _MONTHS.get(part.lower(), _U8_MAX) if part.isascii() else _U8_MAX
        elif pos == 2:
            dt.day = _parse_uint(part, _U8_MAX)
        elif pos == 3:
            fields = part.split(":")[:3]
            for index, value in enumerate(fields):
                parsed = _parse_uint(value, _U8_MAX)
                if index == 0:
                    dt.hour = parsed
                elif index == 1:
                    dt.minute = parsed
                else:
                    dt.second = parsed
        elif pos == 4:
            dt.year = _parse_uint(part, _U16_MAX)

    internal_date = dt.to_timestamp() if dt.is_valid() else 0
    return MboxMessage(internal_date=internal_date, sender=sender.strip())


def _is_quoted_from(line: bytes) -> bool:
    return line.lstrip(b">")[:5] == _FROM


class MessageIterator:
    """Iterate over the messages of an mbox stream.

    Lines of the form ``>From `` (with any number of ``>``) lose one
    level of quoting. Anything before the first ``From `` line is ignored.
    """

    def __init__(self, reader: Union[BinaryIO, bytes, bytearray]) -> None:
        if isinstance(reader, (bytes, bytearray, memoryview)):
            reader = io.BytesIO(bytes(reader))
        self._reader = reader
        self._header: Optional[MboxMessage] = None
        self._contents = bytearray()

    def __iter__(self) -> Iterator[MboxMessage]:
        return self

    def _take(self) -> Optional[MboxMessage]:
        if self._header is None:
            return None
        message = replace(self._header, contents=bytes(self._contents))
        self._header = None
        self._contents = bytearray()
        return message

    def _start(self, line: bytes) -> None:
        try:
            text = line.decode("utf-8")
        except UnicodeDecodeError:
            text = ""
        self._header = parse_from_line(text)
        self._contents = bytearray()

    def __next__(self) -> MboxMessage:
        while True:
            line = self._reader.readline()
            if not line:
                break
            is_from = line[:5] == _FROM

            if self._header is not None:
                if not is_from:
                    if line.startswith(b">") and _is_quoted_from(line):
                        self._contents += line[1:]
                    else:
                        self._contents += line
                else:
                    message = self._take()
                    self._start(line)
                    assert message is not None
                    return message
            elif is_from:
                self._start(line)

        message = self._take()
        if message is None:
            raise StopIteration
        return message