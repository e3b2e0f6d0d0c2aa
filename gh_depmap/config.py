"""Environment-backed defaults for the CLI."""

import os
from typing import Optional


def _int_from_env(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


class Settings:
    """Defaults read from environment variables (and ``.env``)."""

    def __init__(self) -> None:
        """Initialize settings from environment variables."""
        self.repository: Optional[str] = os.getenv("GH_DEPMAP_REPO") or None
        workers = _int_from_env("GH_DEPMAP_WORKERS")
        self.workers: int = 1 if workers is None else workers
        self.prior_days: Optional[int] = _int_from_env("GH_DEPMAP_PRIOR_DAYS")

    def validate(self) -> None:
        """Raise ValueError if a setting is out of range."""
        if self.workers < 1:
            raise ValueError("GH_DEPMAP_WORKERS must be at least 1")
        if self.prior_days is not None and self.prior_days < 0:
            raise ValueError("GH_DEPMAP_PRIOR_DAYS must not be negative")
