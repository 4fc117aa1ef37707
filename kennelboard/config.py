"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    database_path: str = "kennel_board.db"
    secret_key: str = "kennel-secret"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            database_path=os.environ.get("KENNEL_DATABASE", cls.database_path),
            secret_key=os.environ.get("KENNEL_SECRET_KEY", cls.secret_key),
            log_level=os.environ.get("KENNEL_LOG_LEVEL", cls.log_level),
        )
