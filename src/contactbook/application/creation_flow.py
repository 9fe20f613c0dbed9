"""
Duplicate-aware contact creation: check -> (confirm) -> create -> refresh.

States and transitions come from the XState machine document; this module
runs the effect of each state and feeds its outcome back as the next event.
"""

import logging

from contactbook.application.dto import (
    ContactCreated,
    CreationAborted,
    CreationFailed,
    CreationOutcome,
)
from contactbook.application.errors import NetworkError
from contactbook.application.ports import (
    ConfirmationPort,
    ContactGateway,
    RefreshCallback,
)
from contactbook.domain import Contact
from contactbook.flows import (
    CreationMachine,
    format_message,
    get_machine,
    get_messages,
)

logger = logging.getLogger(__name__)


def render_duplicates_prompt(duplicates: list[Contact], messages: dict | None = None) -> str:
    """Confirmation text: explanation, one line per candidate, then the yes/no question."""
    if messages is None:
        messages = get_messages()
    preview = "\n".join(duplicate.summary_line() for duplicate in duplicates)
    return format_message(messages, "confirm_duplicates", {"duplicates": preview})


class ContactCreationFlow:
    """One creation attempt. Steps run strictly in sequence; there are no retries."""

    def __init__(
        self,
        gateway: ContactGateway,
        confirm: ConfirmationPort,
        *,
        on_success: RefreshCallback | None = None,
        machine: CreationMachine | None = None,
        messages: dict | None = None,
    ) -> None:
        self._gateway = gateway
        self._confirm = confirm
        self._on_success = on_success
        self._machine = machine if machine is not None else get_machine()
        self._messages = messages if messages is not None else get_messages()
        self.state: str = self._machine.initial
        self.history: list[str] = [self.state]

    @property
    def finished(self) -> bool:
        return self._machine.is_final(self.state)

    def _send(self, event: str) -> str:
        next_state = self._machine.next_state(self.state, event)
        if next_state is None:
            raise RuntimeError(f"No transition from '{self.state}' on {event}")
        logger.debug("Creation flow: %s --%s--> %s", self.state, event, next_state)
        self.state = next_state
        self.history.append(next_state)
        return next_state

    async def run(self, candidate: Contact) -> CreationOutcome:
        """Run the flow for a contact without id. A flow instance runs once."""
        if self.state != self._machine.initial:
            raise RuntimeError("A creation flow runs only once; start a new one.")
        if candidate.id is not None:
            raise ValueError("Only contacts without an id can be created.")
        self._send("SUBMIT")

        try:
            duplicates = list(await self._gateway.find_near_duplicates(candidate))
        except NetworkError as exc:
            stage = self.state
            self._send("CHECK_FAILED")
            logger.warning("Duplicate check failed for %s: %s", candidate.name, exc)
            return CreationFailed(contact=candidate, stage=stage, reason=str(exc))

        if duplicates:
            self._send("DUPLICATES_FOUND")
            prompt = render_duplicates_prompt(duplicates, self._messages)
            if not self._confirm(prompt):
                self._send("DECLINED")
                logger.info("Creation of %s declined (%d near-duplicates)", candidate.name, len(duplicates))
                return CreationAborted(
                    contact=candidate, duplicates=tuple(duplicates), prompt=prompt
                )
            self._send("CONFIRMED")
        else:
            self._send("NO_DUPLICATES")

        try:
            await self._gateway.create_contact(candidate)
        except NetworkError as exc:
            stage = self.state
            self._send("CREATE_FAILED")
            logger.warning("Create call failed for %s: %s", candidate.name, exc)
            return CreationFailed(contact=candidate, stage=stage, reason=str(exc))

        self._send("CREATED")
        if self._on_success is not None:
            await self._on_success()
        return ContactCreated(contact=candidate, duplicates=tuple(duplicates))
