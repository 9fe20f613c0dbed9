"""
In-memory text index over a loaded contact set.

An index is built for one query and thrown away: it is never patched when the
contact set changes. Terms are lower-cased words; a query word matches a term
that starts with it (prefix) or lies within an edit distance proportional to
the query word's length (fuzzy).
"""

import logging
import re
from collections.abc import Iterable, Sequence

from rapidfuzz.distance import Levenshtein

from contactbook.domain import CONTACT_FIELDS, Contact

logger = logging.getLogger(__name__)

FUZZY_RATIO = 0.2
MAX_FUZZY_DISTANCE = 6
COMBINE_OR = "OR"
COMBINE_AND = "AND"

_SPACE_OR_PUNCTUATION = re.compile(r"[\W_]+")


def tokenize(text: str) -> list[str]:
    """Split on whitespace and punctuation; lower-case; drop empty pieces."""
    return [term for term in _SPACE_OR_PUNCTUATION.split((text or "").lower()) if term]


def max_edit_distance(term: str, fuzzy: float = FUZZY_RATIO) -> int:
    """Edits tolerated for a query word: fuzzy * length, rounded half up, capped."""
    return min(MAX_FUZZY_DISTANCE, int(len(term) * fuzzy + 0.5))


class SearchIndex:
    """Inverted index from term to contact ids, over a fixed field schema."""

    def __init__(
        self,
        fields: Sequence[str] = CONTACT_FIELDS,
        *,
        prefix: bool = True,
        fuzzy: float = FUZZY_RATIO,
        combine_with: str = COMBINE_OR,
    ) -> None:
        if combine_with not in (COMBINE_OR, COMBINE_AND):
            raise ValueError(f"combine_with must be {COMBINE_OR!r} or {COMBINE_AND!r}")
        self._fields = tuple(fields)
        self._prefix = prefix
        self._fuzzy = fuzzy
        self._combine_with = combine_with
        self._documents: dict[int | str, Contact] = {}
        self._order: list[int | str] = []
        self._terms: dict[str, set[int | str]] = {}

    @classmethod
    def build(
        cls,
        contacts: Sequence[Contact] | None,
        fields: Sequence[str] | None = None,
        **options,
    ) -> "SearchIndex":
        """Index every contact. An empty set gives an empty schema and an index that matches nothing."""
        if not contacts:
            index = cls((), **options)
        else:
            index = cls(CONTACT_FIELDS if fields is None else fields, **options)
            index.add_all(contacts)
        logger.debug("Search index built: %d contacts, %d terms", len(index), len(index._terms))
        return index

    @property
    def fields(self) -> tuple[str, ...]:
        return self._fields

    def __len__(self) -> int:
        return len(self._order)

    def add_all(self, contacts: Iterable[Contact]) -> None:
        for contact in contacts:
            self.add(contact)

    def add(self, contact: Contact) -> None:
        if contact.id is None:
            raise ValueError("Contact must have an id to be indexed.")
        if contact.id in self._documents:
            raise ValueError(f"Contact {contact.id!r} is already indexed.")
        self._documents[contact.id] = contact
        self._order.append(contact.id)
        for field_name in self._fields:
            value = getattr(contact, field_name, None)
            if value is None:
                continue
            for term in tokenize(str(value)):
                self._terms.setdefault(term, set()).add(contact.id)

    def search(self, query: str) -> list[Contact]:
        """Return matching contacts in the order they were added."""
        tokens = tokenize(query)
        if not tokens or not self._terms:
            return []
        per_token = [self._match(token) for token in tokens]
        if self._combine_with == COMBINE_AND:
            ids = set.intersection(*per_token)
        else:
            ids = set().union(*per_token)
        return [self._documents[doc_id] for doc_id in self._order if doc_id in ids]

    def _match(self, token: str) -> set[int | str]:
        distance = max_edit_distance(token, self._fuzzy) if self._fuzzy else 0
        found: set[int | str] = set()
        for term, ids in self._terms.items():
            if term == token or (self._prefix and term.startswith(token)):
                found |= ids
            elif distance and Levenshtein.distance(token, term, score_cutoff=distance) <= distance:
                found |= ids
        return found


def filter_contacts(contacts: Sequence[Contact], query: str, **options) -> list[Contact]:
    """Build a fresh index over contacts and return the matches in source order."""
    matched = {contact.id for contact in SearchIndex.build(contacts, **options).search(query)}
    return [contact for contact in contacts if contact.id in matched]
