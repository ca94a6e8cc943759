"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
tool starts without any setup; point ``SHOP_DATABASE_URL`` at the
shop's database file in a real deployment.  No credentials are read
here: the SQLite store does not need any.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Mechanic Shop")

    # The interactive console shares stderr with the log handler, so the
    # default level only lets warnings through.
    log_level: str = os.getenv("LOG_LEVEL", "WARNING")
    log_file: str = os.getenv("SHOP_LOG_FILE", "")

    # Path to the SQLite database.  Relative paths are resolved against
    # the project root by the ``db`` module; ``:memory:`` is passed through.
    database_url: str = os.getenv("SHOP_DATABASE_URL", "mechanic_shop.db")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
