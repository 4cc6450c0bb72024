# storefront/session.py
"""
Per-process storefront session.

This is the state the single-page front-end drives: which view is
shown, the (fake) sign-in flag, the cosmetic admin gate, and the status
of the one-time catalog generation. None of it is persisted and none of
it is a security mechanism.
"""

import logging
from typing import Awaitable, Callable, List, Optional

from .ai import GenerationFailed, ServiceUnavailable
from .config import DEFAULT_ADMIN_PASSWORD
from .models import BookForm, CatalogRecord, CatalogStatus, SessionState, ViewMode
from .storage import CatalogStore

logger = logging.getLogger(__name__)

SERVICE_UNAVAILABLE_MESSAGE = "The AI service is not available."
GENERATION_FAILED_MESSAGE = "Failed to generate the book library. Please try refreshing the page."


class StorefrontSession:
    def __init__(
        self,
        store: Optional[CatalogStore] = None,
        admin_password: str = DEFAULT_ADMIN_PASSWORD,
    ):
        self.store = store if store is not None else CatalogStore()
        self.admin_password = admin_password
        self.view = ViewMode.home
        self.is_logged_in = False
        self.is_admin = False
        self.catalog_status = CatalogStatus.loading
        self.error: Optional[str] = None

    def state(self) -> SessionState:
        return SessionState(
            view=self.view,
            is_logged_in=self.is_logged_in,
            is_admin=self.is_admin,
            catalog_status=self.catalog_status,
            error=self.error,
        )

    async def load_catalog(
        self, generate: Callable[[], Awaitable[List[CatalogRecord]]]
    ) -> None:
        """Run the one-time generation and fold any failure into ``error``.

        ``generate`` may raise ``ServiceUnavailable`` (before or during the
        call) or ``GenerationFailed``; anything else is reported as a failed
        generation too. The store is only touched when a complete, validated
        catalog came back.
        """
        self.catalog_status = CatalogStatus.loading
        self.error = None
        try:
            records = await generate()
        except ServiceUnavailable as exc:
            logger.error("AI service unavailable: %s", exc)
            self._fail(SERVICE_UNAVAILABLE_MESSAGE)
            return
        except GenerationFailed as exc:
            logger.error("Error fetching books: %s", exc)
            self._fail(GENERATION_FAILED_MESSAGE)
            return
        except Exception as exc:
            logger.error("Unexpected error fetching books: %s", exc, exc_info=True)
            self._fail(GENERATION_FAILED_MESSAGE)
            return

        try:
            self.store.replace_all(records)
        except ValueError as exc:
            logger.error("Generated catalog rejected by the store: %s", exc)
            self._fail(GENERATION_FAILED_MESSAGE)
            return
        self.catalog_status = CatalogStatus.ready

    def _fail(self, message: str) -> None:
        self.store.clear()
        self.catalog_status = CatalogStatus.error
        self.error = message

    # -- views and (no-op) authentication ---------------------------------

    def show(self, view: ViewMode) -> None:
        self.view = ViewMode(view)

    def sign_in(self) -> None:
        # Any credentials are accepted; nothing is verified or stored.
        self.is_logged_in = True
        self.view = ViewMode.home

    def sign_up(self) -> None:
        self.sign_in()

    def sign_out(self) -> None:
        self.is_logged_in = False
        self.is_admin = False
        self.view = ViewMode.home

    def unlock_admin(self, password: Optional[str]) -> Optional[bool]:
        """Compare against the admin password.

        Returns ``True`` when granted, ``False`` when rejected and ``None``
        when no password was entered (the prompt was dismissed).
        """
        if not password:
            return None
        if password == self.admin_password:
            self.is_admin = True
            logger.info("Admin mode enabled")
            return True
        logger.warning("Rejected admin password attempt")
        return False

    # -- admin editor -----------------------------------------------------

    def _require_admin(self) -> None:
        if not self.is_admin:
            raise PermissionError("Admin mode is required to edit the catalog.")

    def save_book(self, form: BookForm) -> CatalogRecord:
        self._require_admin()
        return self.store.upsert(form)

    def delete_book(self, book_id: int, confirmed: bool) -> bool:
        """Remove a book once the user confirmed; returns whether it was removed."""
        self._require_admin()
        if not confirmed:
            return False
        return self.store.remove(book_id)
