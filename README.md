# mailparse

A small library for working with Internet e-mail messages:

- a model of parsed messages, MIME parts and header values
  (`mailparse.message`, `mailparse.part`, `mailparse.headers`);
- quoted-printable decoding for whole bodies, MIME part bodies bounded by
  a boundary, and the text of "Q" encoded words (`mailparse.quoted_printable`);
- readers for Mbox streams (`mailparse.mailbox.mbox`) and Maildir /
  Maildir++ directory trees (`mailparse.mailbox.maildir`).

It has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Quoted-printable

```python
from mailparse.quoted_printable import (
    QuotedPrintableError,
    decode_quoted_printable_mime,
    decode_quoted_printable_word,
    quoted_printable_decode,
)

quoted_printable_decode(b"Saint-Exup=C3=A9ry").decode()  # 'Saint-Exupéry'
```

`quoted_printable_decode(data)` removes soft line breaks (`=` at the end
of a line), drops carriage returns and decodes `=XX` escapes. Malformed
escapes raise `QuotedPrintableError` (a `ValueError`).
`quoted_printable_decode_char(hex1, hex2)` decodes a single escape from
its two hex digit byte values.

`decode_quoted_printable_mime(data, boundary, start=0)` decodes from
`start` up to the next `--boundary` and returns `(end, decoded, offset)`:
`end` is where the part body ends in `data` (the line break before the
boundary is not part of it) and `offset` is the position just after the
boundary. When a boundary is given and never found, `end` is `None` and
`offset` is `start`. With an empty boundary the whole rest of `data` is
decoded.

```python
end, body, offset = decode_quoted_printable_mime(b"caf=C3=A9\n--b", b"b")
# body == b"caf\xc3\xa9"
```

`decode_quoted_printable_word(data, start=0)` decodes the text of an
encoded word up to its closing `?=`, turning `_` into a space and
allowing folded lines, and returns `(decoded, position after "?=")`. It
raises `QuotedPrintableError` when the word is malformed or never closed.

## Mbox

```python
from mailparse.mailbox.mbox import MessageIterator

with open("archive.mbox", "rb") as fh:
    for message in MessageIterator(fh):
        print(message.sender, message.internal_date, len(message.contents))
```

`MessageIterator` takes a binary stream or a `bytes` object and yields
`MboxMessage` items with `internal_date`, `sender` and `contents`. The
date on the `From ` separator line becomes a UTC timestamp, or 0 when it
cannot be read. Lines of the form `>From `, `>>From ` and so on lose one
`>`; anything before the first `From ` line is ignored.
`parse_from_line(line)` parses a single separator line into an
`MboxMessage` with empty contents.

## Maildir

```python
from mailparse.mailbox.maildir import FolderIterator

for folder in FolderIterator("/path/to/Maildir", "."):
    name = folder.name or "INBOX"
    for message in folder:
        print(name, message.flags, message.path)
```

`FolderIterator(path, sub_folder_prefix=".")` yields a `MessageIterator`
for the inbox first (when the root has `cur` and `new` directories), then
one for every sub-folder. With the `"."` prefix (Maildir++) only
directories starting with `.` are folders and nested names are joined
with `.`; with `None` every directory other than `cur`, `new` and `tmp` is
a folder and nested names are joined with `/`.

`MessageIterator(path, name=None)` reads the files in `cur`, then in
`new`, skipping names that start with `.`. It raises `FileNotFoundError`
when either directory is missing. Each `MaildirMessage` holds
`internal_date` (modification time in seconds), `flags`, `contents` and
`path`. Flags come from the letters after the last `2,` in the file name;
`parse_flags(name)` returns them as `Flag` members (`PASSED`, `REPLIED`,
`SEEN`, `TRASHED`, `DRAFT`, `FLAGGED`).

## Messages, parts and headers

`Message` holds its `parts` (the root part first), the part ids of its
text and HTML bodies and attachments, and the raw bytes. Its header
accessors (`subject()`, `from_()`, `to()`, `cc()`, `date()`,
`message_id()`, `return_address()` and the rest) read the root part;
where a header occurs more than once, the last occurrence wins. It also
offers `header()`, `header_raw()`, `header_values()`, `headers_raw()`,
`remove_header()`, `remove_header_rfc()`, `part()`, `text_part()`,
`html_part()`, `attachment()`, the `*_count()` methods and the
`text_bodies()`, `html_bodies()` and `iter_attachments()` iterators.

`MessagePart` holds headers, a `PartBody` tagged with a `PartKind`, the
transfer `Encoding` and raw offsets. It exposes `contents()`,
`text_contents()`, `message()`, `sub_parts()`, `is_text()`,
`is_binary()`, `raw_len()` and the MIME accessors from `MimeHeaders`
such as `content_type()` and `attachment_name()`.

`mailparse.headers` provides `RfcHeader`, `HeaderName`, `HeaderValue`
(tagged by `HeaderValueKind`), `Addr`, `Group`, `ContentType`,
`DateTime` (with `is_valid()` and `to_timestamp()`), `Header`, and the
lookup helpers `find_rfc()` and `find_header()`.

## What it does not do

The package does not parse raw message bytes into a `Message`: messages
and parts are built by the caller. There is no base64 or character-set
decoding, no HTML-to-text conversion, no body previews and no
command-line tool.