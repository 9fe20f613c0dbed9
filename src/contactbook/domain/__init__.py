"""Domain layer: entities and value objects. No dependencies on outer layers."""

from contactbook.domain.entities import CONTACT_FIELDS, CONTACT_TEXT_FIELDS, Contact

__all__ = ["CONTACT_FIELDS", "CONTACT_TEXT_FIELDS", "Contact"]
