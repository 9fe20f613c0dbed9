"""In-memory contact service (no HTTP). Order preserved by insertion."""

from contactbook.domain import Contact


def _key(value: str) -> str:
    return " ".join((value or "").lower().split())


class InMemoryContactService:
    """
    Stands in for the remote service in tests and offline runs.
    A stored contact is a near-duplicate when its name matches, or when both
    address and postal code match (case and spacing ignored).
    """

    def __init__(self, contacts: list[Contact] | None = None) -> None:
        self._contacts: list[Contact] = []
        self._next_id = 1
        self.created: list[Contact] = []
        self.duplicate_checks: list[Contact] = []
        self.loading = False
        self.error: Exception | None = None
        self.data: list[Contact] | None = None
        for contact in contacts or []:
            self._store(contact)

    def _store(self, contact: Contact) -> Contact:
        contact_id = contact.id if contact.id is not None else self._next_id
        if isinstance(contact_id, int) and contact_id >= self._next_id:
            self._next_id = contact_id + 1
        stored = Contact(
            id=contact_id,
            name=contact.name,
            address=contact.address,
            postal_code=contact.postal_code,
            city=contact.city,
        )
        self._contacts.append(stored)
        return stored

    async def find_near_duplicates(self, candidate: Contact) -> list[Contact]:
        self.duplicate_checks.append(candidate)
        name = _key(candidate.name)
        place = (_key(candidate.address), _key(candidate.postal_code))
        return [
            c
            for c in self._contacts
            if (name and _key(c.name) == name)
            or (all(place) and (_key(c.address), _key(c.postal_code)) == place)
        ]

    async def create_contact(self, contact: Contact) -> None:
        self.created.append(self._store(contact))

    async def refetch(self) -> list[Contact]:
        # A new list each time, like a fresh query result.
        self.data = list(self._contacts)
        return self.data
