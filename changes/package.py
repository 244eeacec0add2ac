"""
Package metadata - version and author of the project being released.

Reads pyproject.toml ([project] table) and falls back to package.json.
"""

from __future__ import annotations

import json
import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path

from .changelog import ChangesError


class MetadataError(ChangesError):
    """Raised when the package version cannot be determined."""


@dataclass(frozen=True)
class PackageMetadata:
    version: str
    author: str = ""


def _join_author(name: str, email: str) -> str:
    name = (name or "").strip()
    email = (email or "").strip()
    if name and email:
        return f"{name} <{email}>"
    return name or email


def _from_pyproject(path: Path) -> PackageMetadata | None:
    with path.open("rb") as f:
        data = tomllib.load(f)
    project = data.get("project", {})
    version = project.get("version")
    if not isinstance(version, str) or not version.strip():
        logging.debug(f"No static [project] version in {path}")
        return None
    author = ""
    authors = project.get("authors") or []
    if authors and isinstance(authors[0], dict):
        author = _join_author(authors[0].get("name", ""), authors[0].get("email", ""))
    return PackageMetadata(version=version.strip(), author=author)


def _from_package_json(path: Path) -> PackageMetadata:
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    version = data.get("version")
    if not isinstance(version, str) or not version.strip():
        raise MetadataError(f"No version in {path}")
    author = data.get("author") or ""
    if isinstance(author, dict):
        author = _join_author(author.get("name", ""), author.get("email", ""))
    return PackageMetadata(version=version.strip(), author=str(author).strip())


def read_metadata(root: str | Path = ".") -> PackageMetadata:
    """Load version and author from the package manifest in root.

    Raises:
        MetadataError: If no manifest exists or it carries no version.
    """
    root = Path(root)
    pyproject = root / "pyproject.toml"
    package_json = root / "package.json"
    if not pyproject.exists() and not package_json.exists():
        raise MetadataError(f"No pyproject.toml or package.json in {root.resolve()}")
    meta = None
    try:
        if pyproject.exists():
            meta = _from_pyproject(pyproject)
        if meta is None and package_json.exists():
            meta = _from_package_json(package_json)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise MetadataError(f"Cannot parse package manifest: {e}")
    if meta is None:
        raise MetadataError(f"No [project] version in {pyproject} and no package.json to fall back to")
    logging.debug(f"Package version={meta.version}, author={meta.author or '<none>'}")
    return meta
