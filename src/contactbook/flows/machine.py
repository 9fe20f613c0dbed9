"""
Contact creation states, declared as XState JSON and stepped with xstate-python.

The JSON (id, initial, states with on: { EVENT: target }) can be opened in
Stately Studio unchanged.
"""

import json
import os
from pathlib import Path

from xstate.machine import Machine

DEFAULT_MACHINE_PATH = Path(__file__).resolve().parent / "contact_creation_machine.json"


def get_machine_path() -> Path:
    """Return path to the machine JSON (CREATION_MACHINE_PATH env or the packaged file)."""
    path = os.environ.get("CREATION_MACHINE_PATH", "").strip()
    if path:
        return Path(path).resolve()
    return DEFAULT_MACHINE_PATH


class CreationMachine:
    """A validated machine document with its xstate Machine."""

    def __init__(self, config: dict) -> None:
        if "initial" not in config or "states" not in config:
            raise ValueError("Machine must have 'initial' and 'states'")
        if config["initial"] not in config["states"]:
            raise ValueError(f"initial '{config['initial']}' must be a state")
        self.config = config
        self._machine = Machine(config)

    @property
    def initial(self) -> str:
        return self.config["initial"]

    @property
    def states(self) -> tuple[str, ...]:
        return tuple(self.config["states"])

    def next_state(self, state_value: str, event: str) -> str | None:
        """Target of event from state_value, or None when the event is not handled there."""
        try:
            target = self._machine.transition(self._machine.state_from(state_value), event)
        except (ValueError, KeyError):
            return None
        if target.value == state_value:
            return None
        return target.value

    def is_final(self, state_value: str) -> bool:
        """A state with no outgoing transitions ends the flow."""
        if state_value not in self.config["states"]:
            raise KeyError(state_value)
        return not self.config["states"][state_value].get("on")


def load_machine(path: Path | None = None) -> CreationMachine:
    if path is None:
        path = get_machine_path()
    return CreationMachine(json.loads(path.read_text(encoding="utf-8")))


_machine_cache: CreationMachine | None = None


def get_machine(cache: bool = True) -> CreationMachine:
    """Load the machine (cached by default). Pass cache=False to reload."""
    global _machine_cache
    if cache and _machine_cache is not None:
        return _machine_cache
    _machine_cache = load_machine()
    return _machine_cache
