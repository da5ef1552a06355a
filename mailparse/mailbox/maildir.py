"""Walking Maildir folders and reading their messages."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, Union

_SPECIAL_DIRS = frozenset({"cur", "new", "tmp"})

PathLike = Union[str, os.PathLike]


class Flag(enum.IntEnum):
    """Flags of a Maildir message."""

    PASSED = 0
    REPLIED = 1
    SEEN = 2
    TRASHED = 3
    DRAFT = 4
    FLAGGED = 5


_FLAG_LETTERS = {
    "P": Flag.PASSED,
    "R": Flag.REPLIED,
    "S": Flag.SEEN,
    "T": Flag.TRASHED,
    "D": Flag.DRAFT,
    "F": Flag.FLAGGED,
}


def parse_flags(name: str) -> list[Flag]:
    """Return the flags from the info part (after the last ``2,``) of a file name."""
    head, sep, info = name.rpartition("2,")
    flags: list[Flag] = []
    if not sep:
        return flags
    for ch in info:
        flag = _FLAG_LETTERS.get(ch)
        if flag is not None:
            flags.append(flag)
        elif not (ch.isascii() and ch.isalnum()):
            break
    return flags


@dataclass(order=True)
class MaildirMessage:
    """A Maildir message: modification time in seconds, flags, contents and path."""

    internal_date: int
    flags: list[Flag] = field(default_factory=list)
    contents: bytes = b""
    path: Path = field(default_factory=Path)


class MessageIterator:
    """Iterate over the messages in the ``cur`` and ``new`` directories of a folder.

    ``name`` is the folder name, or None for the inbox.
    """

    def __init__(self, path: PathLike, name: Optional[str] = None) -> None:
        root = Path(path)
        cur_path = root / "cur"
        if not cur_path.exists():
            raise FileNotFoundError("Invalid Maildir format, 'cur' directory not found.")
        new_path = root / "new"
        if not new_path.exists():
            raise FileNotFoundError("Invalid Maildir format, 'new' directory not found.")
        self.name = name
        self.path = root
        self._cur = os.scandir(cur_path)
        self._new = os.scandir(new_path)

    def __iter__(self) -> Iterator[MaildirMessage]:
        return self

    def _next_entry(self) -> Optional[os.DirEntry]:
        entry = next(self._cur, None)
        if entry is None:
            entry = next(self._new, None)
        return entry

    def __next__(self) -> MaildirMessage:
        while True:
            entry = self._next_entry()
            if entry is None:
                raise StopIteration
            path = Path(entry.path)
            if not path.is_file() or entry.name.startswith("."):
                continue
            mtime = path.stat().st_mtime
            if mtime < 0:
                raise ValueError(f"modification time of {path} is before the UNIX epoch")
            return MaildirMessage(
                internal_date=int(mtime),
                flags=parse_flags(entry.name),
                contents=path.read_bytes(),
                path=path,
            )


class FolderIterator:
    """Iterate over the folders of a Maildir mailbox, inbox first.

    Use ``"."`` as ``sub_folder_prefix`` for Maildir++ mailboxes and None
    for mailboxes with nested folder directories; nested names are then
    joined with ``/``.
    """

    def __init__(self, path: PathLike, sub_folder_prefix: Optional[str] = ".") -> None:
        root = Path(path)
        self._stack = [os.scandir(root)]
        self._names: list[str] = []
        self._prefix = sub_folder_prefix
        try:
            self._inbox: Optional[MessageIterator] = MessageIterator(root, None)
        except FileNotFoundError:
            self._inbox = None

    def __iter__(self) -> Iterator[MessageIterator]:
        return self

    def _folder_name(self, dir_name: str) -> Optional[str]:
        if dir_name in _SPECIAL_DIRS:
            return None
        if self._prefix is None:
            return dir_name
        if dir_name.startswith(self._prefix):
            return dir_name[len(self._prefix):]
        return None

    def __next__(self) -> MessageIterator:
        if self._inbox is not None:
            inbox, self._inbox = self._inbox, None
            return inbox

        while self._stack:
            entry = next(self._stack[-1], None)
            if entry is None:
                self._stack.pop()
                if self._names:
                    self._names.pop()
                continue

            path = Path(entry.path)
            if not path.is_dir():
                continue
            name = self._folder_name(entry.name)
            if name is None:
                continue

            self._stack.append(os.scandir(path))
            self._names.append(name)
            separator = self._prefix if self._prefix is not None else "/"
            try:
                return MessageIterator(path, separator.join(self._names))
            except FileNotFoundError:
                continue

        raise StopIteration