"""Application layer: use cases, ports, and DTOs. Depends only on domain."""

from contactbook.application.contact_book import ContactBook
from contactbook.application.creation_flow import (
    ContactCreationFlow,
    render_duplicates_prompt,
)
from contactbook.application.dto import (
    ContactBookState,
    ContactCreated,
    CreationAborted,
    CreationFailed,
    CreationOutcome,
    QueryState,
)
from contactbook.application.errors import NetworkError
from contactbook.application.ports import (
    ConfirmationPort,
    ContactGateway,
    ContactListSource,
    DuplicateChecker,
)
from contactbook.application.search_controller import SearchController
from contactbook.application.search_index import SearchIndex, filter_contacts

__all__ = [
    "ConfirmationPort",
    "ContactBook",
    "ContactBookState",
    "ContactCreated",
    "ContactCreationFlow",
    "ContactGateway",
    "ContactListSource",
    "CreationAborted",
    "CreationFailed",
    "CreationOutcome",
    "DuplicateChecker",
    "NetworkError",
    "QueryState",
    "SearchController",
    "SearchIndex",
    "filter_contacts",
    "render_duplicates_prompt",
]
