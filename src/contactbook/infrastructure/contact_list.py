"""Contact list source: the GraphQL contacts query with loading/error/data state."""

import logging

import httpx

from contactbook.application.errors import NetworkError
from contactbook.domain import Contact
from contactbook.infrastructure.http_gateway import (
    JSON_HEADERS,
    contact_from_json,
    decode_json,
    new_client,
    send_request,
)
from contactbook.infrastructure.settings import Settings

logger = logging.getLogger(__name__)

GRAPHQL_PATH = "/graphql"
CONTACTS_QUERY = "{ contacts { id name address postalCode city } }"


class GraphQLContactList:
    """
    Runs the contacts query. data keeps the last good list; error holds the
    last failure (cleared by the next successful load).
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client
        self.loading = False
        self.error: Exception | None = None
        self.data: list[Contact] | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "GraphQLContactList":
        return cls(new_client(settings))

    async def _fetch(self) -> list[Contact]:
        response = await send_request(
            self._client,
            "POST",
            GRAPHQL_PATH,
            json={"query": CONTACTS_QUERY},
            headers=JSON_HEADERS,
        )
        body = decode_json(response)
        if not isinstance(body, dict):
            raise NetworkError("GraphQL response must be an object")
        errors = body.get("errors")
        if errors:
            messages = "; ".join(
                str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors
            )
            raise NetworkError(f"GraphQL errors: {messages}")
        contacts = (body.get("data") or {}).get("contacts")
        if not isinstance(contacts, list):
            raise NetworkError("GraphQL response has no contacts list")
        return [contact_from_json(item) for item in contacts]

    async def refetch(self) -> list[Contact] | None:
        self.loading = True
        try:
            contacts = await self._fetch()
        except NetworkError as e:
            logger.warning("Contact list load failed: %s", e)
            self.error = e
            return self.data
        finally:
            self.loading = False
        self.error = None
        self.data = contacts
        logger.info("Loaded %d contacts", len(contacts))
        return contacts

    async def aclose(self) -> None:
        await self._client.aclose()
