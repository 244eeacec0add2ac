from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Optional

from .changelog import ChangesError
from .commits import LOG_FORMAT


class GitError(ChangesError):
    """Raised when a git command cannot be run or exits non-zero."""


@dataclass(frozen=True)
class CmdResult:
    code: int
    stdout: str
    stderr: str


def run(cmd: list[str], cwd: Optional[str] = None) -> CmdResult:
    try:
        proc = subprocess.run(
            cmd,
            cwd=cwd,
            text=True,
            encoding="utf-8",
            errors="replace",
            capture_output=True,
            check=False,
        )
    except FileNotFoundError:
        raise GitError("Git is not installed or not found in PATH")
    # stdout is left untouched, commit bodies depend on its blank lines
    return CmdResult(proc.returncode, proc.stdout, proc.stderr.strip())


class GitLog:
    """Commit log source backed by the git executable."""

    def __init__(self, cwd: Optional[str] = None) -> None:
        self.cwd = cwd

    def _git(self, args: list[str]) -> CmdResult:
        logging.debug(f"Running git {' '.join(args)}")
        res = run(["git"] + args, cwd=self.cwd)
        if res.code != 0:
            raise GitError(f"Git command failed: {' '.join(args)}\nError: {res.stderr or res.code}")
        return res

    def fetch_log(self, rev_range: str = "") -> str:
        args = ["log"]
        if rev_range:
            args.append(rev_range)
        args.append(f"--format={LOG_FORMAT}")
        res = self._git(args)
        logging.info(f"Fetched {len(res.stdout)} chars of log for range {rev_range or '<all>'}")
        return res.stdout

    def stage(self, path: str) -> None:
        self._git(["add", "--", path])
        logging.info(f"Staged {path}")
