"""UI state objects and result types for the contact creation flow."""

from dataclasses import dataclass, field

from contactbook.domain import Contact


@dataclass
class QueryState:
    """Search text before and after the latest input change."""

    previous_text: str = ""
    current_text: str = ""


@dataclass
class ContactBookState:
    """
    Transient UI state, passed by reference to the controller and the contact book.
    filtered caches the last filter result and source is the contact set it was
    computed from; stale marks a text change that has not been evaluated yet.
    """

    query: QueryState = field(default_factory=QueryState)
    filtered: list[Contact] | None = None
    selected: Contact | None = None
    source: list[Contact] | None = field(default=None, repr=False)
    stale: bool = False


# --- ContactCreationFlow outcomes ---


@dataclass(frozen=True)
class ContactCreated:
    """The create call was accepted by the contact service."""

    contact: Contact
    duplicates: tuple[Contact, ...] = ()


@dataclass(frozen=True)
class CreationAborted:
    """The user declined to create the contact after seeing its near-duplicates."""

    contact: Contact
    duplicates: tuple[Contact, ...] = ()
    prompt: str = ""


@dataclass(frozen=True)
class CreationFailed:
    """The duplicate check or the create call failed. stage is the flow state it failed in."""

    contact: Contact
    stage: str
    reason: str


CreationOutcome = ContactCreated | CreationAborted | CreationFailed
