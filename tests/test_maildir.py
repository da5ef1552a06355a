import os
from dataclasses import replace
from pathlib import Path

import pytest

from mailparse.mailbox.maildir import (
    Flag,
    FolderIterator,
    MaildirMessage,
    MessageIterator,
    parse_flags,
)


def _folder(root: Path, files: dict) -> None:
    for sub in ("cur", "new", "tmp"):
        (root / sub).mkdir(parents=True, exist_ok=True)
    for rel, data in files.items():
        (root / rel).write_bytes(data)


@pytest.fixture
def maildir(tmp_path):
    _folder(
        tmp_path,
        {
            "cur/1000.host!2,S": b"b\n",
            "cur/1001.host!2,ST": b"a\n",
            "cur/.hidden": b"hidden\n",
            "tmp/1002.host": b"tmp\n",
        },
    )
    _folder(
        tmp_path / ".My Folder",
        {"new/2000.host": b"d\n", "cur/2001.host!2,TDR": b"c\n"},
    )
    _folder(
        tmp_path / ".My Folder.Nested Folder",
        {"cur/3000.host!2,RDF": b"f\n", "cur/3001.host!2,FP": b"e\n"},
    )
    (tmp_path / "not-a-folder").mkdir()
    return tmp_path


def _collect(iterator):
    messages = []
    for folder in iterator:
        name = folder.name or "INBOX"
        for message in folder:
            assert message.internal_date != 0
            assert message.path.exists()
            messages.append((name, replace(message, internal_date=0, path=Path("unknown"))))
    messages.sort()
    return messages


def test_parse_maildir(maildir):
    unknown = Path("unknown")
    expected = [
        ("INBOX", MaildirMessage(0, [Flag.SEEN], b"b\n", unknown)),
        ("INBOX", MaildirMessage(0, [Flag.SEEN, Flag.TRASHED], b"a\n", unknown)),
        ("My Folder", MaildirMessage(0, [], b"d\n", unknown)),
        (
            "My Folder",
            MaildirMessage(0, [Flag.TRASHED, Flag.DRAFT, Flag.REPLIED], b"c\n", unknown),
        ),
        (
            "My Folder.Nested Folder",
            MaildirMessage(0, [Flag.REPLIED, Flag.DRAFT, Flag.FLAGGED], b"f\n", unknown),
        ),
        (
            "My Folder.Nested Folder",
            MaildirMessage(0, [Flag.FLAGGED, Flag.PASSED], b"e\n", unknown),
        ),
    ]
    assert _collect(FolderIterator(maildir, ".")) == expected


def test_inbox_comes_first(maildir):
    folders = list(FolderIterator(maildir, "."))
    assert folders[0].name is None
    assert sorted(f.name for f in folders[1:]) == ["My Folder", "My Folder.Nested Folder"]


def test_fs_layout_nested_names(tmp_path):
    _folder(tmp_path, {})
    _folder(tmp_path / "Work", {"cur/1.host!2,S": b"w\n"})
    _folder(tmp_path / "Work" / "Sub", {"new/2.host": b"s\n"})
    _folder(tmp_path / "Archive" / "2020", {"new/3.host": b"x\n"})
    names = sorted(f.name for f in FolderIterator(tmp_path, None) if f.name)
    assert names == ["Archive/2020", "Work", "Work/Sub"]


def test_missing_inbox_is_skipped(tmp_path):
    _folder(tmp_path / ".Only", {"new/1.host": b"o\n"})
    folders = list(FolderIterator(tmp_path, "."))
    assert [f.name for f in folders] == ["Only"]


def test_missing_root_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        FolderIterator(tmp_path / "absent", ".")


def test_message_iterator_requires_cur(tmp_path):
    (tmp_path / "new").mkdir()
    with pytest.raises(FileNotFoundError, match="'cur'"):
        MessageIterator(tmp_path)


def test_message_iterator_requires_new(tmp_path):
    (tmp_path / "cur").mkdir()
    with pytest.raises(FileNotFoundError, match="'new'"):
        MessageIterator(tmp_path)


def test_internal_date_is_mtime(tmp_path):
    _folder(tmp_path, {"cur/1.host!2,F": b"hello\n"})
    os.utime(tmp_path / "cur" / "1.host!2,F", (1_600_000_000, 1_600_000_000))
    messages = list(MessageIterator(tmp_path))
    assert len(messages) == 1
    assert messages[0].internal_date == 1_600_000_000
    assert messages[0].flags == [Flag.FLAGGED]
    assert messages[0].contents == b"hello\n"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("1.host:2,S", [Flag.SEEN]),
        ("1.host:2,PRSTDF", list(Flag)),
        ("1.host:2,aS", [Flag.SEEN]),
        ("1.host:2,S,T", [Flag.SEEN]),
        ("1.host", []),
        ("12,x:2,D", [Flag.DRAFT]),
    ],
)
def test_parse_flags(name, expected):
    assert parse_flags(name) == expected


def test_parsed_flags_sort_in_declaration_order():
    flags = parse_flags("1.host:2,FSP")
    assert flags == [Flag.FLAGGED, Flag.SEEN, Flag.PASSED]
    assert sorted(flags) == [Flag.PASSED, Flag.SEEN, Flag.FLAGGED]