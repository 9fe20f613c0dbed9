"""
Contact book core: clean-architecture layout.

- domain: the Contact entity and its field schema. No outer dependencies.
- application: search index, search controller, creation flow, ContactBook, ports, DTOs.
- flows: XState machine and YAML messages for the creation flow.
- infrastructure: adapters (HttpContactGateway, GraphQLContactList, InMemoryContactService).
"""

from contactbook.application import (
    ContactBook,
    ContactBookState,
    ContactCreated,
    ContactCreationFlow,
    CreationAborted,
    CreationFailed,
    NetworkError,
    QueryState,
    SearchController,
    SearchIndex,
)
from contactbook.domain import Contact
from contactbook.infrastructure import (
    GraphQLContactList,
    HttpContactGateway,
    InMemoryContactService,
    Settings,
)

__all__ = [
    "Contact",
    "ContactBook",
    "ContactBookState",
    "ContactCreated",
    "ContactCreationFlow",
    "CreationAborted",
    "CreationFailed",
    "GraphQLContactList",
    "HttpContactGateway",
    "InMemoryContactService",
    "NetworkError",
    "QueryState",
    "SearchController",
    "SearchIndex",
    "Settings",
]
