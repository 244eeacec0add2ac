from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional


class ChangesFile:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    @property
    def name(self) -> str:
        return str(self.path)

    def read(self) -> Optional[str]:
        try:
            # newline="" keeps CRLF intact
            with self.path.open("r", encoding="utf-8", newline="") as f:
                text = f.read()
        except FileNotFoundError:
            logging.debug(f"{self.path} does not exist yet")
            return None
        logging.debug(f"Read {len(text)} chars from {self.path}")
        return text

    def write(self, text: str) -> None:
        with self.path.open("w", encoding="utf-8", newline="") as f:
            f.write(text)
        logging.info(f"Wrote {len(text)} chars to {self.path}")

    def restore(self, previous: Optional[str]) -> None:
        """Put back the contents returned by a previous read()."""
        if previous is None:
            self.path.unlink(missing_ok=True)
            logging.info(f"Removed {self.path}")
        else:
            self.write(previous)
            logging.info(f"Restored previous contents of {self.path}")
