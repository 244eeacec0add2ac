from typing import Optional

import pytest

from changes.package import PackageMetadata


class FakeLog:
    def __init__(self, text: str = "") -> None:
        self.text = text
        self.ranges: list[str] = []

    def fetch_log(self, rev_range: str = "") -> str:
        self.ranges.append(rev_range)
        return self.text


class MemoryStore:
    def __init__(self, text: Optional[str] = None, name: str = "CHANGES.md") -> None:
        self.name = name
        self.text = text
        self.writes: list[str] = []

    def read(self) -> Optional[str]:
        return self.text

    def write(self, text: str) -> None:
        self.writes.append(text)
        self.text = text

    def restore(self, previous: Optional[str]) -> None:
        self.text = previous


@pytest.fixture
def meta():
    return PackageMetadata(version="1.0.0", author="Studio <support@javascript.studio>")


@pytest.fixture
def fake_log():
    return FakeLog()


@pytest.fixture
def missing_store():
    return MemoryStore()


@pytest.fixture
def log_with():
    return FakeLog


@pytest.fixture
def store_with():
    return MemoryStore
