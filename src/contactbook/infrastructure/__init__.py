"""Infrastructure layer: concrete implementations of application ports."""

from contactbook.infrastructure.contact_list import GraphQLContactList
from contactbook.infrastructure.http_gateway import HttpContactGateway, contact_from_json
from contactbook.infrastructure.memory_service import InMemoryContactService
from contactbook.infrastructure.settings import Settings

__all__ = [
    "GraphQLContactList",
    "HttpContactGateway",
    "InMemoryContactService",
    "Settings",
    "contact_from_json",
]
