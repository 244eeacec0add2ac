import logging
import os
from dotenv import load_dotenv


DEFAULT_CHANGES_FILE = "CHANGES.md"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config:
    def __init__(self, changes_file: str | None = None) -> None:
        logging.debug("Loading configuration...")
        load_dotenv()
        self.changes_file = changes_file or os.getenv("CHANGES_FILE", DEFAULT_CHANGES_FILE).strip()
        self.stage = os.getenv("CHANGES_STAGE", "1").strip().lower() not in ("0", "false", "no", "off")
        self.log_level = os.getenv("CHANGES_LOG_LEVEL", "WARNING").strip().upper()

        logging.debug(f"Loaded config: changes_file={self.changes_file}, stage={self.stage}, log_level={self.log_level}")

    def validate(self) -> None:
        problems = []
        if not self.changes_file:
            problems.append("CHANGES_FILE must not be empty")
        if self.log_level not in LOG_LEVELS:
            problems.append(f"CHANGES_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
        if problems:
            logging.error(f"Invalid configuration: {'; '.join(problems)}")
            raise RuntimeError("Invalid configuration: " + "; ".join(problems))
        logging.debug("Configuration validation passed")
