"""Declarative flow documents: the creation state machine (XState JSON) and messages (YAML)."""

from contactbook.flows.machine import CreationMachine, get_machine, load_machine
from contactbook.flows.messages import format_message, get_messages, load_messages

__all__ = [
    "CreationMachine",
    "format_message",
    "get_machine",
    "get_messages",
    "load_machine",
    "load_messages",
]
