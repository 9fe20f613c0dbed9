"""Contact book use cases: load, search, select, and create with duplicate check."""

from collections.abc import Sequence

from contactbook.application.creation_flow import ContactCreationFlow
from contactbook.application.dto import ContactBookState, CreationOutcome
from contactbook.application.ports import (
    ConfirmationPort,
    ContactGateway,
    ContactListSource,
)
from contactbook.application.search_controller import SearchController
from contactbook.domain import Contact
from contactbook.flows import CreationMachine


class ContactBook:
    """Wires the contact list source, the search controller and the creation flow over one state object."""

    def __init__(
        self,
        source: ContactListSource,
        gateway: ContactGateway,
        confirm: ConfirmationPort,
        *,
        state: ContactBookState | None = None,
        machine: CreationMachine | None = None,
        messages: dict | None = None,
    ) -> None:
        self.source = source
        self.state = state if state is not None else ContactBookState()
        self.controller = SearchController(self.state)
        self._gateway = gateway
        self._confirm = confirm
        self._machine = machine
        self._messages = messages

    async def load(self) -> list[Contact] | None:
        """(Re)load the contact set and re-run the current filter against it."""
        contacts = await self.source.refetch()
        self.controller.evaluate(self.source.data)
        return contacts

    def set_query(self, text: str) -> Sequence[Contact] | None:
        """Record new search text and return the list to show."""
        self.controller.on_text_change(text)
        self.controller.evaluate(self.source.data)
        return self.visible_contacts()

    def visible_contacts(self) -> Sequence[Contact] | None:
        """The list to show, re-filtered if the shared contact set was reloaded meanwhile."""
        self.controller.evaluate(self.source.data)
        return self.controller.visible(self.source.data)

    def select(self, contact_id: int | str) -> Contact | None:
        """Select a loaded contact by id. Unknown ids leave the selection unchanged."""
        for contact in self.source.data or []:
            if contact.id == contact_id:
                self.state.selected = contact
                return contact
        return None

    def deselect(self) -> None:
        self.state.selected = None

    async def create_contact(
        self, draft: Contact, *, confirm: ConfirmationPort | None = None
    ) -> CreationOutcome:
        """Run a fresh creation flow; on success the contact set is reloaded."""
        flow = ContactCreationFlow(
            self._gateway,
            confirm if confirm is not None else self._confirm,
            on_success=self.load,
            machine=self._machine,
            messages=self._messages,
        )
        return await flow.run(draft)
