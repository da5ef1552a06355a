"""Header names, parsed header values and helpers to look headers up."""

from __future__ import annotations

import enum
import string
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def _ascii_lower(text: str) -> str:
    return text.translate(_ASCII_LOWER)


def _eq_ignore_ascii_case(a: str, b: str) -> bool:
    return _ascii_lower(a) == _ascii_lower(b)


def _byte_len(text: Optional[str]) -> int:
    return len(text.encode("utf-8")) if text is not None else 0


class RfcHeader(enum.Enum):
    """A header field known to the parser."""

    SUBJECT = 0
    FROM = 1
    TO = 2
    CC = 3
    DATE = 4
    BCC = 5
    REPLY_TO = 6
    SENDER = 7
    COMMENTS = 8
    IN_REPLY_TO = 9
    KEYWORDS = 10
    RECEIVED = 11
    MESSAGE_ID = 12
    REFERENCES = 13
    RETURN_PATH = 14
    MIME_VERSION = 15
    CONTENT_DESCRIPTION = 16
    CONTENT_ID = 17
    CONTENT_LANGUAGE = 18
    CONTENT_LOCATION = 19
    CONTENT_TRANSFER_ENCODING = 20
    CONTENT_TYPE = 21
    CONTENT_DISPOSITION = 22
    RESENT_TO = 23
    RESENT_FROM = 24
    RESENT_BCC = 25
    RESENT_CC = 26
    RESENT_SENDER = 27
    RESENT_DATE = 28
    RESENT_MESSAGE_ID = 29
    LIST_ARCHIVE = 30
    LIST_HELP = 31
    LIST_ID = 32
    LIST_OWNER = 33
    LIST_POST = 34
    LIST_SUBSCRIBE = 35
    LIST_UNSUBSCRIBE = 36

    def as_str(self) -> str:
        """Return the canonical spelling of the header name."""
        return _RFC_NAMES[self.value]

    def is_mime_header(self) -> bool:
        """Return True for the Content-* MIME headers."""
        return self in _MIME_HEADERS

    @staticmethod
    def parse(name: str) -> Optional["RfcHeader"]:
        """Look a header name up case-insensitively; None if unknown."""
        return _RFC_BY_LOWER.get(_ascii_lower(name))

    def __len__(self) -> int:
        return len(self.as_str())

    def __str__(self) -> str:
        return self.as_str()


_RFC_NAMES = (
    "Subject",
    "From",
    "To",
    "Cc",
    "Date",
    "Bcc",
    "Reply-To",
    "Sender",
    "Comments",
    "In-Reply-To",
    "Keywords",
    "Received",
    "Message-ID",
    "References",
    "Return-Path",
    "MIME-Version",
    "Content-Description",
    "Content-ID",
    "Content-Language",
    "Content-Location",
    "Content-Transfer-Encoding",
    "Content-Type",
    "Content-Disposition",
    "Resent-To",
    "Resent-From",
    "Resent-Bcc",
    "Resent-Cc",
    "Resent-Sender",
    "Resent-Date",
    "Resent-Message-ID",
    "List-Archive",
    "List-Help",
    "List-ID",
    "List-Owner",
    "List-Post",
    "List-Subscribe",
    "List-Unsubscribe",
)

_RFC_BY_LOWER = {_ascii_lower(_RFC_NAMES[h.value]): h for h in RfcHeader}

_MIME_HEADERS = frozenset(
    {
        RfcHeader.CONTENT_DESCRIPTION,
        RfcHeader.CONTENT_ID,
        RfcHeader.CONTENT_LANGUAGE,
        RfcHeader.CONTENT_LOCATION,
        RfcHeader.CONTENT_TRANSFER_ENCODING,
        RfcHeader.CONTENT_TYPE,
        RfcHeader.CONTENT_DISPOSITION,
    }
)


class HeaderName:
    """Either a known RFC header or any other header name.

    Other names compare and hash without regard to ASCII case.
    """

    __slots__ = ("_rfc", "_name")

    def __init__(self, name: RfcHeader | str) -> None:
        if isinstance(name, RfcHeader):
            self._rfc: Optional[RfcHeader] = name
            self._name = name.as_str()
        elif isinstance(name, str):
            self._rfc = None
            self._name = name
        else:
            raise TypeError(f"header name must be RfcHeader or str, not {type(name).__name__}")

    @property
    def rfc(self) -> Optional[RfcHeader]:
        """The known header, or None for other names."""
        return self._rfc

    def as_str(self) -> str:
        return self._name

    def is_rfc(self) -> bool:
        return self._rfc is not None

    def is_mime_header(self) -> bool:
        return self._rfc is not None and self._rfc.is_mime_header()

    def __len__(self) -> int:
        return _byte_len(self._name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderName):
            return NotImplemented
        if self._rfc is not None and other._rfc is not None:
            return self._rfc is other._rfc
        if self._rfc is None and other._rfc is None:
            return _eq_ignore_ascii_case(self._name, other._name)
        return False

    def __hash__(self) -> int:
        if self._rfc is not None:
            return hash(("rfc", self._rfc))
        return hash(("other", _ascii_lower(self._name)))

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        if self._rfc is not None:
            return f"HeaderName({self._rfc})"
        return f"HeaderName({self._name!r})"


@dataclass
class Addr:
    """An e-mail address or URL, with an optional display name."""

    name: Optional[str] = None
    address: Optional[str] = None

    def _byte_len(self) -> int:
        return _byte_len(self.name) + _byte_len(self.address)


@dataclass
class Group:
    """A named group of addresses."""

    name: Optional[str] = None
    addresses: list[Addr] = field(default_factory=list)


@dataclass
class ContentType:
    """A Content-Type or Content-Disposition value."""

    c_type: str
    c_subtype: Optional[str] = None
    attributes: Optional[list[tuple[str, str]]] = None

    def attribute(self, name: str) -> Optional[str]:
        """Return the value of the first attribute called ``name``."""
        for key, value in self.attributes or ():
            if key == name:
                return value
        return None

    def remove_attribute(self, name: str) -> Optional[str]:
        """Remove the first attribute called ``name``, moving the last one into its place."""
        if not self.attributes:
            return None
        for pos, (key, value) in enumerate(self.attributes):
            if key == name:
                last = self.attributes.pop()
                if pos < len(self.attributes):
                    self.attributes[pos] = last
                return value
        return None

    def has_attribute(self, name: str) -> bool:
        return any(key == name for key, _ in self.attributes or ())

    def is_attachment(self) -> bool:
        return _eq_ignore_ascii_case(self.c_type, "attachment")

    def is_inline(self) -> bool:
        return _eq_ignore_ascii_case(self.c_type, "inline")

    def __len__(self) -> int:
        return (
            _byte_len(self.c_type)
            + _byte_len(self.c_subtype)
            + sum(_byte_len(k) + _byte_len(v) for k, v in self.attributes or ())
        )


def _days_from_civil(year: int, month: int, day: int) -> int:
    year -= month <= 2
    era = (year if year >= 0 else year - 399) // 400
    yoe = year - era * 400
    doy = (153 * (month + (-3 if month > 2 else 9)) + 2) // 5 + day - 1
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy
    return era * 146097 + doe - 719468


@dataclass
class DateTime:
    """A date and time with a UTC offset, as found in mail headers."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    tz_before_gmt: bool = False
    tz_hour: int = 0
    tz_minute: int = 0

    def is_valid(self) -> bool:
        """Return True when every field is within its range."""
        return (
            1970 <= self.year <= 3000
            and 1 <= self.month <= 12
            and 1 <= self.day <= 31
            and 0 <= self.hour <= 23
            and 0 <= self.minute <= 59
            and 0 <= self.second <= 59
            and 0 <= self.tz_hour <= 23
            and 0 <= self.tz_minute <= 59
        )

    def to_timestamp(self) -> int:
        """Return seconds since the UNIX epoch, in UTC."""
        local = (
            _days_from_civil(self.year, self.month, self.day) * 86400
            + self.hour * 3600
            + self.minute * 60
            + self.second
        )
        offset = self.tz_hour * 3600 + self.tz_minute * 60
        return local + offset if self.tz_before_gmt else local - offset


class HeaderValueKind(enum.Enum):
    ADDRESS = "address"
    ADDRESS_LIST = "address_list"
    GROUP = "group"
    GROUP_LIST = "group_list"
    TEXT = "text"
    TEXT_LIST = "text_list"
    DATETIME = "datetime"
    CONTENT_TYPE = "content_type"
    EMPTY = "empty"


@dataclass
class HeaderValue:
    """A parsed header value tagged with its kind."""

    kind: HeaderValueKind = HeaderValueKind.EMPTY
    value: object = None

    @staticmethod
    def empty() -> "HeaderValue":
        return HeaderValue(HeaderValueKind.EMPTY, None)

    def is_empty(self) -> bool:
        return self.kind is HeaderValueKind.EMPTY

    def as_text(self) -> Optional[str]:
        """Return the text, or the last entry of a text list."""
        if self.kind is HeaderValueKind.TEXT:
            return self.value  # type: ignore[return-value]
        if self.kind is HeaderValueKind.TEXT_LIST:
            items = self.value or []
            return items[-1] if items else None  # type: ignore[index]
        return None

    def as_text_list(self) -> Optional[list[str]]:
        if self.kind is HeaderValueKind.TEXT:
            return [self.value]  # type: ignore[list-item]
        if self.kind is HeaderValueKind.TEXT_LIST:
            return list(self.value or [])  # type: ignore[arg-type]
        return None

    def as_content_type(self) -> Optional[ContentType]:
        if self.kind is HeaderValueKind.CONTENT_TYPE:
            return self.value  # type: ignore[return-value]
        return None

    def as_datetime(self) -> Optional[DateTime]:
        if self.kind is HeaderValueKind.DATETIME:
            return self.value  # type: ignore[return-value]
        return None

    def unwrap_text(self) -> str:
        if self.kind is not HeaderValueKind.TEXT:
            raise ValueError("HeaderValue.unwrap_text called on non-Text value")
        return self.value  # type: ignore[return-value]

    def unwrap_datetime(self) -> DateTime:
        if self.kind is not HeaderValueKind.DATETIME:
            raise ValueError("HeaderValue.unwrap_datetime called on non-DateTime value")
        return self.value  # type: ignore[return-value]

    def unwrap_content_type(self) -> ContentType:
        if self.kind is not HeaderValueKind.CONTENT_TYPE:
            raise ValueError("HeaderValue.unwrap_content_type called on non-ContentType value")
        return self.value  # type: ignore[return-value]

    def __len__(self) -> int:
        """Approximate size of the value in UTF-8 bytes."""
        kind = self.kind
        if kind is HeaderValueKind.TEXT:
            return _byte_len(self.value)  # type: ignore[arg-type]
        if kind is HeaderValueKind.TEXT_LIST:
            return sum(_byte_len(t) for t in self.value or [])  # type: ignore[union-attr]
        if kind is HeaderValueKind.ADDRESS:
            return self.value._byte_len()  # type: ignore[union-attr]
        if kind is HeaderValueKind.ADDRESS_LIST:
            return sum(a._byte_len() for a in self.value or [])  # type: ignore[union-attr]
        if kind is HeaderValueKind.GROUP:
            return sum(a._byte_len() for a in self.value.addresses)  # type: ignore[union-attr]
        if kind is HeaderValueKind.GROUP_LIST:
            return sum(
                a._byte_len() for g in self.value or [] for a in g.addresses  # type: ignore[union-attr]
            )
        if kind is HeaderValueKind.DATETIME:
            return 24
        if kind is HeaderValueKind.CONTENT_TYPE:
            return len(self.value)  # type: ignore[arg-type]
        return 0


@dataclass
class Header:
    """A header with its parsed value and raw offsets."""

    name: HeaderName
    value: HeaderValue
    offset_field: int = 0
    offset_start: int = 0
    offset_end: int = 0


def find_rfc(headers: Sequence[Header], name: RfcHeader) -> Optional[HeaderValue]:
    """Return the value of the last header that is ``name``."""
    for header in reversed(headers):
        if header.name.rfc is name:
            return header.value
    return None


def find_header(headers: Sequence[Header] | Iterable[Header], name: str) -> Optional[Header]:
    """Return the last header whose name matches ``name`` ignoring ASCII case."""
    for header in reversed(list(headers)):
        if _eq_ignore_ascii_case(header.name.as_str(), name):
            return header
    return None