# storefront/storage.py
"""
In-memory catalog store.

The catalog is an ordered list of ``CatalogRecord`` (insertion order is
the order cards are rendered in). It is owned by a single session and
mutated from one event loop only, so no locking is done here.
"""

import logging
from typing import Iterable, Iterator, List, Optional, Union

from .identity import IdSequence, default_sequence, random_cover_color
from .models import BookForm, CatalogRecord

logger = logging.getLogger(__name__)


class CatalogStore:
    def __init__(self, ids: Optional[IdSequence] = None) -> None:
        self._books: List[CatalogRecord] = []
        self._ids = ids or default_sequence

    def __len__(self) -> int:
        return len(self._books)

    def __iter__(self) -> Iterator[CatalogRecord]:
        return iter(list(self._books))

    def list(self) -> List[CatalogRecord]:
        return list(self._books)

    def get(self, book_id: int) -> Optional[CatalogRecord]:
        return next((b for b in self._books if b.id == book_id), None)

    def clear(self) -> None:
        self._books = []

    def replace_all(self, records: Iterable[CatalogRecord]) -> None:
        """Swap the whole catalog, e.g. after a successful generation."""
        books = list(records)
        seen = set()
        for book in books:
            if book.id in seen:
                raise ValueError(f"Duplicate catalog id {book.id}.")
            seen.add(book.id)
        self._books = books
        logger.info("Catalog replaced with %d books", len(books))

    def _fresh_id(self) -> int:
        taken = {b.id for b in self._books}
        book_id = self._ids.next()
        while book_id in taken:
            book_id = self._ids.next()
        return book_id

    def upsert(self, book: Union[BookForm, CatalogRecord]) -> CatalogRecord:
        """Replace the book with the same id in place, or append a new one.

        An id that is missing or unknown creates a new record with a
        fresh id and cover colour. Editing never changes the id, the
        position or the cover colour of an existing record.
        """
        price = book.price if book.price >= 0 else 0.0

        if book.id is not None:
            for index, existing in enumerate(self._books):
                if existing.id == book.id:
                    updated = CatalogRecord(
                        id=existing.id,
                        title=book.title,
                        author=book.author,
                        description=book.description,
                        price=price,
                        cover_color=existing.cover_color,
                    )
                    self._books[index] = updated
                    logger.info("Updated book %s", updated.id)
                    return updated

        created = CatalogRecord(
            id=self._fresh_id(),
            title=book.title,
            author=book.author,
            description=book.description,
            price=price,
            cover_color=random_cover_color(),
        )
        self._books.append(created)
        logger.info("Added book %s", created.id)
        return created

    def remove(self, book_id: int) -> bool:
        """Delete the book with ``book_id``; unknown ids are ignored."""
        for index, book in enumerate(self._books):
            if book.id == book_id:
                del self._books[index]
                logger.info("Removed book %s", book_id)
                return True
        return False
