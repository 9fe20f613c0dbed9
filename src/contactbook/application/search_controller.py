"""Decides when the search index is rebuilt and re-queried for the current text."""

from collections.abc import Callable, Sequence

from contactbook.application.dto import ContactBookState
from contactbook.application.search_index import filter_contacts
from contactbook.domain import Contact


class SearchController:
    """
    Tracks the previous and current search text on a shared ContactBookState.
    The filter result is recomputed when the text changed or the loaded contact
    set was replaced, then cached on the state until the next change.
    """

    def __init__(
        self,
        state: ContactBookState | None = None,
        *,
        search: Callable[[Sequence[Contact], str], list[Contact]] = filter_contacts,
    ) -> None:
        self.state = state if state is not None else ContactBookState()
        self._search = search

    def on_text_change(self, text: str) -> None:
        query = self.state.query
        query.previous_text = query.current_text
        query.current_text = text
        self.state.stale = True

    def evaluate(self, contacts: Sequence[Contact] | None) -> Sequence[Contact] | None:
        """Recompute the filter result if a qualifying change happened; return the cached result."""
        state = self.state
        query = state.query
        if contacts is None or query.previous_text == query.current_text:
            return state.filtered
        if not state.stale and state.source is contacts:
            return state.filtered
        if query.current_text:
            state.filtered = self._search(contacts, query.current_text)
        else:
            state.filtered = contacts
        state.source = contacts
        state.stale = False
        return state.filtered

    def visible(self, contacts: Sequence[Contact] | None) -> Sequence[Contact] | None:
        """The list to render: the filter result when there is one, otherwise the full set."""
        if self.state.filtered is not None:
            return self.state.filtered
        return contacts
