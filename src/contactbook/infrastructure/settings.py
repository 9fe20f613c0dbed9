"""Runtime settings read from the environment (.env is loaded by the entry points)."""

import os
from dataclasses import dataclass

DEFAULT_BASE_URL = "http://localhost:3000"


def _timeout_from_env(raw: str) -> float | None:
    raw = raw.strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"CONTACTBOOK_HTTP_TIMEOUT must be a number of seconds, got {raw!r}") from None
    return value if value > 0 else None


@dataclass(frozen=True)
class Settings:
    """
    Where the contact service lives and how to talk to it.
    http_timeout None means requests wait indefinitely.
    """

    base_url: str = DEFAULT_BASE_URL
    csrf_token: str = ""
    http_timeout: float | None = None

    @classmethod
    def from_env(cls) -> "Settings":
        base_url = os.environ.get("CONTACTBOOK_BASE_URL", "").strip() or DEFAULT_BASE_URL
        return cls(
            base_url=base_url.rstrip("/"),
            csrf_token=os.environ.get("CONTACTBOOK_CSRF_TOKEN", "").strip(),
            http_timeout=_timeout_from_env(os.environ.get("CONTACTBOOK_HTTP_TIMEOUT", "")),
        )
