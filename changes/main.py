from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from .changelog import (
    AlreadyRecorded,
    ChangesError,
    build_section,
    check_header,
    has_version,
    log_range,
    merge_section,
    previous_version,
)
from .commits import format_entries, parse_log
from .config import Config
from .git import GitError, GitLog
from .package import PackageMetadata, read_metadata
from .store import ChangesFile


def write_changes(meta: PackageMetadata, log_source, store: ChangesFile) -> Optional[str]:
    """Add a section for meta.version to the changelog in store.

    log_source needs a fetch_log(rev_range) method returning raw log text.
    Returns the changelog contents before the update, or None if the file
    did not exist.

    Raises:
        HeaderMismatch: If the existing file does not start with "# Changes".
        AlreadyRecorded: If a section for meta.version already exists.
    """
    document = store.read()
    check_header(document, store.name)

    rev_range = log_range(previous_version(document))

    if has_version(document, meta.version):
        try:
            entries = parse_log(log_source.fetch_log(rev_range))
        except GitError as e:
            # e.g. the release tag does not exist yet
            logging.warning(f"Could not look up outstanding commits: {e}")
            entries = []
        logging.info(f"Version {meta.version} already recorded, {len(entries)} outstanding commits")
        raise AlreadyRecorded(meta.version, store.name, format_entries(entries, meta.author))

    entries = parse_log(log_source.fetch_log(rev_range))
    logging.info(f"Parsed {len(entries)} commits for version {meta.version}")
    section = build_section(meta.version, format_entries(entries, meta.author))

    store.write(merge_section(document, section))
    return document


def report_error(error: ChangesError) -> None:
    if isinstance(error, AlreadyRecorded) and error.outstanding:
        print("# Changes for next release:\n", file=sys.stderr)
        print(error.outstanding, file=sys.stderr)
    print(f"{error}\n", file=sys.stderr)


def setup_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _parse_args(argv: Optional[list[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="changes",
        description="Add the commits since the last release to the changelog",
    )
    parser.add_argument("-f", "--file", help="changelog file (default: $CHANGES_FILE or CHANGES.md)")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> None:
    args = _parse_args(argv)
    cfg = Config(changes_file=args.file)
    setup_logging(cfg.log_level)
    try:
        cfg.validate()
    except RuntimeError:
        # validate() has already logged the problem
        sys.exit(1)

    store = ChangesFile(cfg.changes_file)
    git = GitLog()
    try:
        meta = read_metadata()
        previous = write_changes(meta, git, store)
    except ChangesError as e:
        report_error(e)
        sys.exit(1)

    if cfg.stage:
        try:
            git.stage(store.name)
        except ChangesError as e:
            logging.error(f"Staging {store.name} failed, rolling back")
            store.restore(previous)
            report_error(e)
            sys.exit(1)

    logging.info(f"Updated {store.name} for version {meta.version}")
