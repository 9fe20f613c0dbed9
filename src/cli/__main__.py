"""
Interactive contact book in the terminal: contact service over HTTP.
Run: python -m cli (from repo root, with .env or env vars set).
"""
import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

# Repo root: from src/cli/__main__.py go up to repo root (parent.parent.parent when in src layout)
_REPO_ROOT = Path(__file__).resolve().parent.parent.parent
# Load .env from repo root or current dir
for path in (_REPO_ROOT / ".env", Path.cwd() / ".env"):
    if path.exists():
        load_dotenv(path)
        break

from contactbook.application import (
    ContactBook,
    ContactCreated,
    CreationAborted,
    CreationFailed,
)
from contactbook.domain import Contact
from contactbook.flows import format_message, get_messages
from contactbook.infrastructure import GraphQLContactList, HttpContactGateway, Settings

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)

HELP = (
    "Commands: /list — show contacts; /search <text> — filter (empty text clears); "
    "/show <n> — contact details; /hide; /add — new contact; /refresh; /quit."
)


def confirm_in_terminal(prompt: str) -> bool:
    answer = input(f"{prompt} [y/N] ").strip().lower()
    return answer in ("y", "yes")


def format_contact_line(position: int, contact: Contact) -> str:
    return f"{position}. {contact.name} — {contact.address}, {contact.postal_code} {contact.city}"


def format_contact_details(contact: Contact) -> str:
    return "\n".join(
        [
            contact.name,
            f"Address: {contact.address}",
            f"Postal code: {contact.postal_code}",
            f"City: {contact.city}",
        ]
    )


def _print_list(book: ContactBook, messages: dict) -> None:
    if book.source.loading:
        print("Loading...")
    if book.source.error is not None:
        print(format_message(messages, "list_error", {"reason": book.source.error}))
    contacts = book.visible_contacts()
    if contacts is None:
        return
    if not contacts:
        key = "no_match" if book.state.query.current_text else "empty_list"
        print(format_message(messages, key))
        return
    for position, contact in enumerate(contacts, start=1):
        print(format_contact_line(position, contact))


def _read_draft() -> Contact:
    return Contact(
        name=input("Name: ").strip(),
        address=input("Address: ").strip(),
        postal_code=input("Postal code: ").strip(),
        city=input("City: ").strip(),
    )


def _report(outcome, messages: dict) -> str:
    if isinstance(outcome, ContactCreated):
        return format_message(messages, "contact_created", {"name": outcome.contact.name})
    if isinstance(outcome, CreationAborted):
        return format_message(messages, "creation_aborted", {"name": outcome.contact.name})
    if isinstance(outcome, CreationFailed):
        key = "check_failed" if outcome.stage == "checking" else "create_failed"
        return format_message(messages, key, {"reason": outcome.reason})
    return ""


async def handle_line(book: ContactBook, text: str, messages: dict) -> bool:
    """Run one command. Returns False when the user quits."""
    command, _, argument = text.strip().partition(" ")
    if command == "/quit":
        return False
    if command == "/list":
        _print_list(book, messages)
    elif command == "/search":
        book.set_query(argument.strip())
        _print_list(book, messages)
    elif command == "/show":
        contacts = book.visible_contacts() or []
        try:
            position = int(argument)
            if position < 1:
                raise IndexError(position)
            contact = contacts[position - 1]
        except (ValueError, IndexError):
            print("Usage: /show <n> (a number from /list)")
            return True
        book.select(contact.id)
        print(format_contact_details(contact))
    elif command == "/hide":
        book.deselect()
    elif command == "/add":
        outcome = await book.create_contact(_read_draft())
        print(_report(outcome, messages))
        if isinstance(outcome, ContactCreated):
            _print_list(book, messages)
    elif command == "/refresh":
        await book.load()
        _print_list(book, messages)
    else:
        print(HELP)
    return True


async def run() -> None:
    settings = Settings.from_env()
    source = GraphQLContactList.from_settings(settings)
    gateway = HttpContactGateway.from_settings(settings)
    book = ContactBook(source, gateway, confirm_in_terminal)
    messages = get_messages()
    logger.info("Contact book running against %s", settings.base_url)
    try:
        await book.load()
        print(HELP)
        _print_list(book, messages)
        while True:
            try:
                line = input("> ")
            except EOFError:
                break
            if not await handle_line(book, line, messages):
                break
    finally:
        await source.aclose()
        await gateway.aclose()


def main() -> None:
    asyncio.run(run())


if __name__ == "__main__":
    main()
