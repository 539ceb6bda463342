from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv


# Load environment from a .env file at the project root, if present.
_BASE_DIR = Path(__file__).resolve().parents[2]
load_dotenv(_BASE_DIR / ".env")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class EnvConfig:
    dsn: str | None = field(default_factory=lambda: os.getenv("DSN"))
    aws_hosted_zone_id: str | None = field(
        default_factory=lambda: os.getenv("AWS_HOSTED_ZONE_ID")
    )
    aws_access_key_id: str | None = field(
        default_factory=lambda: os.getenv("AWS_ACCESS_KEY_ID")
    )
    aws_secret_access_key: str | None = field(
        default_factory=lambda: os.getenv("AWS_SECRET_ACCESS_KEY")
    )
    aws_region: str | None = field(default_factory=lambda: os.getenv("AWS_REGION"))

    debug: bool = field(default_factory=lambda: _bool_env("DEBUG", False))

    max_open_connections: int = field(
        default_factory=lambda: _int_env("MAX_OPEN_CONNECTIONS", 2000)
    )
    max_idle_connections: int = field(
        default_factory=lambda: _int_env("MAX_IDLE_CONNECTIONS", 1000)
    )

    def validate(self) -> None:
        missing = [
            name
            for name, value in (
                ("dsn", self.dsn),
                ("aws_hosted_zone_id", self.aws_hosted_zone_id),
            )
            if not value
        ]
        if missing:
            raise ValueError(f"missing required configuration: {', '.join(missing)}")

