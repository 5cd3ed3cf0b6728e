"""
Client configuration.
Reads settings from environment variables with sensible defaults.
"""

import os


DEFAULT_BASE_URL = "https://api.dbhub.io"


class Settings:
    """Client settings loaded from environment variables."""

    def __init__(self):
        # Root URL of the DBHub.io API; the versioned paths are appended to it
        self.BASE_URL: str = os.environ.get("DBHUB_BASE_URL", DEFAULT_BASE_URL)

        # Level for the dbhub.* loggers (name or number)
        self.LOG_LEVEL: str = os.environ.get("DBHUB_LOG_LEVEL", "WARNING")


settings = Settings()
