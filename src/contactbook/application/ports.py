"""Application ports (interfaces). Implemented by infrastructure adapters."""

from collections.abc import Awaitable, Callable
from typing import Protocol

from contactbook.domain import Contact

# Blocking yes/no decision, given the pre-rendered prompt text.
ConfirmationPort = Callable[[str], bool]

# Called once after a successful create (e.g. ContactListLoader.refetch).
RefreshCallback = Callable[[], Awaitable[object]]


class DuplicateChecker(Protocol):
    """Asks the contact service which stored contacts a candidate might duplicate."""

    async def find_near_duplicates(self, candidate: Contact) -> list[Contact]:
        """Return the near-duplicate contacts; raise NetworkError on failure."""
        ...


class ContactGateway(DuplicateChecker, Protocol):
    """Duplicate check plus the create call."""

    async def create_contact(self, contact: Contact) -> None:
        """Submit a new contact; raise NetworkError on failure."""
        ...


class ContactListSource(Protocol):
    """The loaded contact set with its loading/error/data state."""

    loading: bool
    error: Exception | None
    data: list[Contact] | None

    async def refetch(self) -> list[Contact] | None:
        """Reload the contact set. Failures are recorded in error, not raised."""
        ...
