"""Domain entities: Contact and its declared field schema."""

from dataclasses import asdict, dataclass

# Text fields a contact carries when it is checked for duplicates or created.
CONTACT_TEXT_FIELDS = ("name", "address", "postal_code", "city")

# Fields the search index treats as text, in order.
CONTACT_FIELDS = ("id",) + CONTACT_TEXT_FIELDS


@dataclass(frozen=True)
class Contact:
    """
    A directory entry.
    The id is assigned by the contact service and is None until then;
    the text fields are not validated here (the service owns validation).
    """

    name: str = ""
    address: str = ""
    postal_code: str = ""
    city: str = ""
    id: int | str | None = None

    def text_fields(self) -> dict[str, str]:
        """Return the four text fields, as sent to the duplicate and create endpoints."""
        return {key: getattr(self, key) for key in CONTACT_TEXT_FIELDS}

    def to_dict(self) -> dict:
        return asdict(self)

    def summary_line(self) -> str:
        """One-line rendering: name, address, postal code, city."""
        return ", ".join(str(v) for v in self.text_fields().values())
