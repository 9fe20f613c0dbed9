"""Errors raised across the application boundary."""


class NetworkError(Exception):
    """A call to the contact service failed (transport, HTTP status or bad body)."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
