from __future__ import annotations

import re
from typing import Optional


HEADER = "# Changes"
VERSION_HEADER_RE = re.compile(r"^## +(?P<version>\S+)", re.MULTILINE)
SECTION_START_RE = re.compile(r"^## ", re.MULTILINE)


class ChangesError(Exception):
    """Base class for conditions that stop a changelog update."""


class HeaderMismatch(ChangesError):
    def __init__(self, file_name: str) -> None:
        self.file_name = file_name
        super().__init__(f"Unexpected {file_name} file header")


class AlreadyRecorded(ChangesError):
    def __init__(self, version: str, file_name: str, outstanding: str = "") -> None:
        self.version = version
        self.file_name = file_name
        # Formatted entries committed since the recorded release, if any
        self.outstanding = outstanding
        super().__init__(f"Version {version} is already in {file_name}")


def detect_newline(document: Optional[str]) -> str:
    if document and "\r\n" in document:
        return "\r\n"
    return "\n"


def is_blank(document: Optional[str]) -> bool:
    return document is None or not document.strip()


def check_header(document: Optional[str], file_name: str) -> None:
    if is_blank(document):
        return
    first_line = document.split("\n", 1)[0].rstrip("\r")
    if first_line != HEADER:
        raise HeaderMismatch(file_name)


def has_version(document: Optional[str], version: str) -> bool:
    if is_blank(document):
        return False
    return any(m.group("version") == version for m in VERSION_HEADER_RE.finditer(document))


def previous_version(document: Optional[str]) -> Optional[str]:
    """Version of the first (newest) section in the document, if any."""
    if is_blank(document):
        return None
    m = SECTION_START_RE.search(document)
    if not m:
        return None
    tokens = document[m.end():].split("\n", 1)[0].split()
    return tokens[0] if tokens else None


def log_range(previous: Optional[str]) -> str:
    if not previous:
        return ""
    return f"v{previous}..HEAD"


def build_section(version: str, entries_text: str) -> str:
    return f"## {version}\n\n{entries_text}"


def merge_section(document: Optional[str], section: str) -> str:
    """Insert a rendered section ahead of the newest section in document.

    section is composed with "\\n" line endings and is translated to the
    document's convention. Everything from the first existing "## " line
    onward is kept exactly as it was.
    """
    newline = detect_newline(document)
    if is_blank(document):
        return f"{HEADER}\n\n{section}".replace("\n", newline)

    m = SECTION_START_RE.search(document)
    head = document[: m.start()] if m else document
    tail = document[m.start():] if m else ""

    merged_head = head.replace("\r\n", "\n").rstrip("\n") + "\n\n" + section
    if tail:
        # Exactly one blank line between the new section and the old ones
        merged_head = merged_head.rstrip("\n") + "\n\n"
    return merged_head.replace("\n", newline) + tail
