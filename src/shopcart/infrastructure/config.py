"""Runtime settings read from the environment.

A ``.env`` file in the working directory is loaded first, but never
overrides variables that are already set.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_LEVEL_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    environment: str
    log_level: str
    abandon_after: timedelta


def load_settings() -> Settings:
    load_dotenv(".env", override=False)

    environment = os.environ.get("SHOPCART_ENV", "development").lower()
    log_level = os.environ.get(
        "SHOPCART_LOG_LEVEL", _LEVEL_BY_ENV.get(environment, "INFO")
    ).upper()

    raw_minutes = os.environ.get("SHOPCART_ABANDON_AFTER_MINUTES", "1440")
    try:
        minutes = int(raw_minutes)
    except ValueError as exc:
        raise ValueError(
            f"SHOPCART_ABANDON_AFTER_MINUTES must be an integer, got {raw_minutes!r}"
        ) from exc

    return Settings(
        data_dir=Path(os.environ.get("SHOPCART_DATA_DIR", _DEFAULT_DATA_DIR)),
        environment=environment,
        log_level=log_level,
        abandon_after=timedelta(minutes=minutes),
    )
