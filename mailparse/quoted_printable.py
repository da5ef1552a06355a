"""Quoted-printable decoding for bodies, MIME parts and encoded words."""

from __future__ import annotations

import enum
from typing import Optional

_HEX_VALUES = {
    **{ord(c): v for v, c in enumerate("0123456789")},
    **{ord(c): 10 + v for v, c in enumerate("abcdef")},
    **{ord(c): 10 + v for v, c in enumerate("ABCDEF")},
}

_NEWLINE = ord("\n")
_CR = ord("\r")
_EQ = ord("=")
_DASH = ord("-")
_QUESTION = ord("?")
_UNDERSCORE = ord("_")
_SPACE = ord(" ")
_WSP = frozenset(b" \t")


class QuotedPrintableError(ValueError):
    """Raised when quoted-printable data is malformed."""


class _State(enum.Enum):
    NONE = enum.auto()
    EQ = enum.auto()
    HEX1 = enum.auto()


def _hex(ch: int) -> int:
    value = _HEX_VALUES.get(ch)
    if value is None:
        raise QuotedPrintableError(f"invalid hex digit {bytes([ch])!r}")
    return value


class _Decoder:
    """State machine shared by the decoders: handles '=XX' escapes."""

    def __init__(self) -> None:
        self.state = _State.NONE
        self.hex1 = 0
        self.buf = bytearray()

    def equals(self) -> None:
        if self.state is not _State.NONE:
            raise QuotedPrintableError("unexpected '='")
        self.state = _State.EQ

    def other(self, ch: int) -> None:
        if self.state is _State.NONE:
            self.buf.append(ch)
        elif self.state is _State.EQ:
            self.hex1 = _hex(ch)
            self.state = _State.HEX1
        else:
            self.state = _State.NONE
            self.buf.append((self.hex1 << 4) | _hex(ch))


def quoted_printable_decode_char(hex1: int, hex2: int) -> int:
    """Decode the two hex digit bytes of an escape into one byte value."""
    return (_hex(hex1) << 4) | _hex(hex2)


def quoted_printable_decode(data: bytes) -> bytes:
    """Decode a whole quoted-printable body."""
    decoder = _Decoder()
    for ch in bytes(data):
        if ch == _EQ:
            decoder.equals()
        elif ch == _NEWLINE:
            if decoder.state is _State.EQ:
                decoder.state = _State.NONE
            else:
                decoder.buf.append(_NEWLINE)
        elif ch != _CR:
            decoder.other(ch)
    return bytes(decoder.buf)


def decode_quoted_printable_mime(
    data: bytes, boundary: bytes, start: int = 0
) -> tuple[Optional[int], bytes, int]:
    """Decode a quoted-printable MIME part body starting at ``start``.

    Returns ``(end, decoded, offset)``: ``end`` is where the part body ends
    in ``data`` and ``offset`` is the position after the boundary. When a
    boundary is given but not found, ``end`` is None and ``offset`` is
    ``start``. Raises QuotedPrintableError on malformed escapes.
    """
    data = bytes(data)
    boundary = bytes(boundary)
    decoder = _Decoder()
    buf = decoder.buf
    last_ch = 0
    before_last_ch = 0
    end_pos = start
    pos = start

    while pos < len(data):
        ch = data[pos]
        pos += 1
        if ch == _EQ:
            decoder.equals()
        elif ch == _NEWLINE:
            end_pos = pos - 2 if last_ch == _CR else pos - 1
            if decoder.state is _State.EQ:
                decoder.state = _State.NONE
            else:
                buf.append(_NEWLINE)
        elif ch == _CR:
            pass
        elif (
            ch == _DASH
            and boundary
            and last_ch == _DASH
            and data.startswith(boundary, pos)
        ):
            pos += len(boundary)
            if before_last_ch == _NEWLINE:
                del buf[-2:]
            else:
                del buf[-1:]
                end_pos = pos - len(boundary) - 2
            return end_pos, bytes(buf), pos
        else:
            decoder.other(ch)

        before_last_ch = last_ch
        last_ch = ch

    if boundary:
        return None, bytes(buf), start
    return pos, bytes(buf), pos


def decode_quoted_printable_word(data: bytes, start: int = 0) -> tuple[bytes, int]:
    """Decode the text of a 'Q' encoded word up to its closing '?='.

    Returns the decoded bytes and the position after '?='. Raises
    QuotedPrintableError when the word is malformed or never closed.
    """
    data = bytes(data)
    decoder = _Decoder()
    buf = decoder.buf
    pos = start
    size = len(data)

    while pos < size:
        ch = data[pos]
        pos += 1
        if ch == _EQ:
            decoder.equals()
        elif ch == _QUESTION:
            if pos < size and data[pos] == _EQ:
                return bytes(buf), pos + 1
            buf.append(_QUESTION)
        elif ch == _NEWLINE:
            if pos < size and data[pos] in _WSP:
                while pos < size and data[pos] in _WSP:
                    pos += 1
            else:
                raise QuotedPrintableError("line break inside encoded word")
        elif ch == _UNDERSCORE:
            buf.append(_SPACE)
        elif ch != _CR:
            decoder.other(ch)

    raise QuotedPrintableError("unterminated encoded word")