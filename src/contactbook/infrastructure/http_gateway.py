"""httpx client for the contact service: near-duplicate check and create call."""

import logging
from typing import Any

import httpx

from contactbook.application.errors import NetworkError
from contactbook.domain import Contact
from contactbook.infrastructure.settings import Settings

logger = logging.getLogger(__name__)

CONTACTS_PATH = "/contacts"
NEAR_DUPLICATES_PATH = "/contacts/near_duplicates"
JSON_HEADERS = {"Accept": "application/json"}


def contact_from_json(item: dict) -> Contact:
    """Build a Contact from a service payload (postal_code or postalCode)."""
    if not isinstance(item, dict):
        raise NetworkError(f"Expected a contact object, got {type(item).__name__}")
    postal_code = item.get("postal_code", item.get("postalCode"))
    return Contact(
        id=item.get("id"),
        name=item.get("name") or "",
        address=item.get("address") or "",
        postal_code=postal_code or "",
        city=item.get("city") or "",
    )


def new_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=settings.base_url, timeout=settings.http_timeout)


async def send_request(
    client: httpx.AsyncClient, method: str, url: str, **kwargs: Any
) -> httpx.Response:
    """Send a request and raise NetworkError for transport failures and non-2xx statuses."""
    try:
        response = await client.request(method, url, **kwargs)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        logger.warning("%s %s failed: HTTP %s", method, url, status)
        raise NetworkError(f"HTTP {status} from {method} {url}", status_code=status) from e
    except httpx.RequestError as e:
        logger.warning("%s %s request error: %s", method, url, e)
        raise NetworkError(f"Request error on {method} {url}: {e}") from e
    return response


def decode_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise NetworkError(
            f"Invalid JSON from {response.request.method} {response.request.url}",
            status_code=response.status_code,
        ) from e


class HttpContactGateway:
    """Talks to /contacts and /contacts/near_duplicates with JSON."""

    def __init__(self, client: httpx.AsyncClient, *, csrf_token: str = "") -> None:
        self._client = client
        self._csrf_token = csrf_token

    @classmethod
    def from_settings(cls, settings: Settings) -> "HttpContactGateway":
        return cls(new_client(settings), csrf_token=settings.csrf_token)

    async def find_near_duplicates(self, candidate: Contact) -> list[Contact]:
        params = {f"contact[{key}]": value for key, value in candidate.text_fields().items()}
        response = await send_request(
            self._client, "GET", NEAR_DUPLICATES_PATH, params=params, headers=JSON_HEADERS
        )
        body = decode_json(response)
        if not isinstance(body, list):
            raise NetworkError(
                "Near-duplicate response must be a list", status_code=response.status_code
            )
        return [contact_from_json(item) for item in body]

    async def create_contact(self, contact: Contact) -> None:
        payload = {
            "contact": contact.text_fields(),
            "authenticity_token": self._csrf_token,
        }
        await send_request(
            self._client, "POST", CONTACTS_PATH, json=payload, headers=JSON_HEADERS
        )
        logger.info("Contact %s submitted", contact.name)

    async def aclose(self) -> None:
        await self._client.aclose()
