import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_DATABASE_URL = "sqlite:///data/jobly.db"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    log_level: str = "INFO"
    log_dir: Optional[Path] = None

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not self.database_url or not self.database_url.strip():
            raise ValueError("database_url cannot be empty")
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            )

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from environment variables.

        Reads DATABASE_URL, JOBLY_LOG_LEVEL and JOBLY_LOG_DIR. Call
        jobly.env.load_env() first to pick up a .env file.
        """
        log_dir = os.getenv("JOBLY_LOG_DIR")
        return cls(
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            log_level=os.getenv("JOBLY_LOG_LEVEL", "INFO"),
            log_dir=Path(log_dir) if log_dir else None,
        )
