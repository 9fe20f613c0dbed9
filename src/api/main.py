"""
FastAPI backend: contact book search and duplicate-aware creation over REST.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root (when run from repo root or from Docker)
for path in (
    Path(__file__).resolve().parent.parent.parent / ".env",
    Path.cwd() / ".env",
):
    if path.exists():
        load_dotenv(path)
        break

from contextlib import asynccontextmanager

from fastapi import FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from contactbook.application import (
    ContactBook,
    ContactCreated,
    CreationAborted,
    CreationFailed,
)
from contactbook.domain import Contact
from contactbook.infrastructure import GraphQLContactList, HttpContactGateway, Settings

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)

# Optional: multi-user placeholder (REST)
USER_ID_HEADER = "X-User-Id"
DEFAULT_USER_ID = "default"

# Per-user ContactBook cache: each caller keeps its own query state and selection.
_book_cache: dict[str, ContactBook] = {}


def _get_settings(app: FastAPI) -> Settings:
    if getattr(app.state, "settings", None) is None:
        app.state.settings = Settings.from_env()
    return app.state.settings


def _get_source(app: FastAPI):
    if getattr(app.state, "source", None) is None:
        app.state.source = GraphQLContactList.from_settings(_get_settings(app))
    return app.state.source


def _get_gateway(app: FastAPI):
    if getattr(app.state, "gateway", None) is None:
        app.state.gateway = HttpContactGateway.from_settings(_get_settings(app))
    return app.state.gateway


def _refuse(prompt: str) -> bool:
    return False


def get_book(user_id: str, app: FastAPI) -> ContactBook:
    if user_id not in _book_cache:
        _book_cache[user_id] = ContactBook(_get_source(app), _get_gateway(app), _refuse)
    return _book_cache[user_id]


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = _get_settings(app)
    logger.info("Contact service: %s", settings.base_url)
    try:
        yield
    finally:
        for name in ("source", "gateway"):
            adapter = getattr(app.state, name, None)
            if adapter is not None and hasattr(adapter, "aclose"):
                await adapter.aclose()
            setattr(app.state, name, None)
        _book_cache.clear()


app = FastAPI(title="Contact Book API", lifespan=lifespan)


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


# --- REST: contacts ---


class ContactBody(BaseModel):
    name: str = ""
    address: str = ""
    postal_code: str = ""
    city: str = ""
    confirm: bool = False


class ContactItem(BaseModel):
    id: int | str | None = None
    name: str
    address: str
    postal_code: str
    city: str


def _items(contacts) -> list[dict]:
    return [ContactItem(**c.to_dict()).model_dump() for c in contacts or []]


def _user_id(x_user_id: str | None) -> str:
    return (x_user_id or "").strip() or DEFAULT_USER_ID


@app.get("/contacts")
async def list_contacts(
    request: Request,
    q: str = "",
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    book = get_book(_user_id(x_user_id), request.app)
    if book.source.data is None:
        await book.load()
    if book.source.data is None:
        reason = str(book.source.error or "An unexpected error occurred")
        raise HTTPException(status_code=502, detail=reason)
    if q != book.state.query.current_text:
        book.set_query(q)
    return _items(book.visible_contacts())


@app.post("/contacts/refresh")
async def refresh_contacts(
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    book = get_book(_user_id(x_user_id), request.app)
    await book.load()
    if book.source.error is not None:
        raise HTTPException(status_code=502, detail=str(book.source.error))
    return {"count": len(book.source.data or [])}


@app.post("/contacts")
async def create_contact(
    body: ContactBody,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    book = get_book(_user_id(x_user_id), request.app)
    draft = Contact(
        name=body.name,
        address=body.address,
        postal_code=body.postal_code,
        city=body.city,
    )
    outcome = await book.create_contact(draft, confirm=lambda prompt: body.confirm)
    if isinstance(outcome, ContactCreated):
        return JSONResponse(
            content={"status": "created", "duplicates": _items(outcome.duplicates)},
            status_code=201,
        )
    if isinstance(outcome, CreationAborted):
        return JSONResponse(
            content={"detail": outcome.prompt, "duplicates": _items(outcome.duplicates)},
            status_code=409,
        )
    if isinstance(outcome, CreationFailed):
        return JSONResponse(
            content={"detail": outcome.reason, "stage": outcome.stage},
            status_code=502,
        )
    raise HTTPException(status_code=500, detail="Unexpected creation outcome")
