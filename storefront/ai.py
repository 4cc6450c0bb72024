# storefront/ai.py
"""
Catalog generation with Google Gemini.

One structured-output request asks the model for a batch of fictional
books. The reply is validated in full before anything is returned:
either every item conforms to ``GeneratedBook`` or the whole generation
fails. There is no retry and no caching.
"""

import asyncio
import logging
from typing import List, Optional

from google import genai
from google.genai import types
from pydantic import TypeAdapter, ValidationError

from .config import Settings
from .identity import IdSequence, default_sequence, random_cover_color
from .models import CatalogRecord, GeneratedBook

logger = logging.getLogger(__name__)

CATALOG_SIZE = 12

CATALOG_PROMPT = (
    f"Generate a list of {CATALOG_SIZE} fictional e-book titles, authors, brief "
    "one-sentence descriptions, and prices for a fantasy and sci-fi bookstore."
)

CATALOG_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    min_items=CATALOG_SIZE,
    max_items=CATALOG_SIZE,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "title": types.Schema(type=types.Type.STRING, description="The title of the book."),
            "author": types.Schema(type=types.Type.STRING, description="The name of the author."),
            "description": types.Schema(
                type=types.Type.STRING, description="A short, one-sentence description."
            ),
            "price": types.Schema(type=types.Type.NUMBER, description="The price of the book."),
        },
        required=["title", "author", "description", "price"],
    ),
)

_BOOKS_ADAPTER = TypeAdapter(List[GeneratedBook])


class CatalogGenerationError(Exception):
    """Base class for failures while building the initial catalog."""


class ServiceUnavailable(CatalogGenerationError):
    """The Gemini client could not be constructed (e.g. no credential)."""


class GenerationFailed(CatalogGenerationError):
    """The call failed, timed out, or returned something off-schema."""


def parse_catalog(text: str) -> List[GeneratedBook]:
    """Parse the raw JSON reply; anything off-schema raises ``GenerationFailed``."""
    body = (text or "").strip()
    if not body:
        raise GenerationFailed("Empty response from the AI service.")
    try:
        books = _BOOKS_ADAPTER.validate_json(body)
    except ValidationError as exc:
        raise GenerationFailed(f"Response does not match the catalog schema: {exc}") from exc
    if not books:
        raise GenerationFailed("The AI service returned an empty catalog.")
    return books


def to_records(books: List[GeneratedBook], ids: Optional[IdSequence] = None) -> List[CatalogRecord]:
    """Give each generated book an id (time + position) and a cover colour."""
    book_ids = (ids or default_sequence).reserve(len(books))
    return [
        CatalogRecord(
            id=book_id,
            title=book.title,
            author=book.author,
            description=book.description,
            price=book.price,
            cover_color=random_cover_color(),
        )
        for book_id, book in zip(book_ids, books)
    ]


class CatalogGenerator:
    def __init__(
        self,
        client: "genai.Client",
        model_name: str,
        timeout: float,
        ids: Optional[IdSequence] = None,
    ):
        self.client = client
        self.model_name = model_name
        self.timeout = timeout
        self.ids = ids or default_sequence

    @classmethod
    def from_settings(cls, settings: Settings) -> "CatalogGenerator":
        if not settings.api_key:
            raise ServiceUnavailable("GEMINI_API_KEY is missing.")
        try:
            client = genai.Client(
                api_key=settings.api_key,
                http_options=types.HttpOptions(timeout=int(settings.generation_timeout * 1000)),
            )
        except Exception as exc:
            logger.error("Failed to initialize the Gemini client: %s", exc)
            raise ServiceUnavailable(str(exc)) from exc
        return cls(client, settings.model_name, settings.generation_timeout)

    async def generate(self) -> List[CatalogRecord]:
        logger.info("Requesting %d books from %s", CATALOG_SIZE, self.model_name)
        try:
            response = await asyncio.wait_for(
                self.client.aio.models.generate_content(
                    model=self.model_name,
                    contents=CATALOG_PROMPT,
                    config=types.GenerateContentConfig(
                        response_mime_type="application/json",
                        response_schema=CATALOG_SCHEMA,
                    ),
                ),
                timeout=self.timeout,
            )
            text = getattr(response, "text", "") or ""
        except asyncio.TimeoutError as exc:
            raise GenerationFailed(
                f"The AI service did not answer within {self.timeout:.0f}s."
            ) from exc
        except Exception as exc:
            raise GenerationFailed(f"{type(exc).__name__}: {exc}") from exc

        books = parse_catalog(text)
        if len(books) != CATALOG_SIZE:
            logger.warning("Expected %d books, got %d", CATALOG_SIZE, len(books))

        records = to_records(books, self.ids)
        logger.info("Generated a catalog of %d books", len(records))
        return records
