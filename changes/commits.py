from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple


LOG_MARKER = "» "
# Makes `git log` emit "» <subject> (<author>)\n\n<body>\n" per commit
LOG_FORMAT = LOG_MARKER + "%s (%an)%n%n%b"

BLOCK_START_RE = re.compile(r"^" + re.escape(LOG_MARKER), re.MULTILINE)
SUBJECT_RE = re.compile(r"^(?P<title>.*) \((?P<author>[^()]*)\)$")
BODY_INDENT = "    > "


@dataclass(frozen=True)
class CommitEntry:
    title: str
    author: Optional[str] = None
    body: Tuple[str, ...] = ()


def _parse_block(block: str) -> CommitEntry:
    lines = [line.rstrip("\r") for line in block.split("\n")]
    subject = lines[0].strip()
    author = None
    m = SUBJECT_RE.match(subject)
    if m:
        subject = m.group("title").strip()
        author = m.group("author").strip() or None

    body = lines[1:]
    # Drop the blank lines git puts around the body
    while body and not body[0].strip():
        body.pop(0)
    while body and not body[-1].strip():
        body.pop()
    return CommitEntry(title=subject, author=author, body=tuple(body))


def parse_log(text: str) -> List[CommitEntry]:
    """Split raw `git log` output produced with LOG_FORMAT into entries.

    Anything before the first marker is ignored. Output without any marker
    yields an empty list, which means there are no new commits.
    """
    blocks = BLOCK_START_RE.split(text)
    # blocks[0] is whatever preceded the first marker
    return [_parse_block(block) for block in blocks[1:]]


def author_name(author: str) -> str:
    """Return the name part of an author string such as "Name <email>"."""
    name, _, _ = author.partition("<")
    return name.strip()


def format_entry(entry: CommitEntry, default_author: str = "") -> str:
    default_name = author_name(default_author) if default_author else ""
    line = f"- {entry.title}"
    if entry.author and entry.author != default_name:
        line += f" ({entry.author})"
    out = [line + "\n"]
    if entry.body:
        out.append("\n")
        out.extend(f"{BODY_INDENT}{body_line}\n" for body_line in entry.body)
        out.append("\n")
    return "".join(out)


def format_entries(entries: Iterable[CommitEntry], default_author: str = "") -> str:
    return "".join(format_entry(e, default_author) for e in entries)
