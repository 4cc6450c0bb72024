"""
Route definitions for the catalog API.

Endpoints under /api/catalog:
- GET    /books            : catalog status + books in display order
- GET    /books/{book_id}  : one book
- POST   /books            : add (or edit, when the id matches) a book   [admin]
- PUT    /books/{book_id}  : edit an existing book, 404 if unknown       [admin]
- DELETE /books/{book_id}  : delete a book, needs ?confirm=true          [admin]
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from ..models import BookForm, CatalogRecord, CatalogStatus
from ..session import StorefrontSession
from .schemas import CatalogView, DeleteResult

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


def get_session(request: Request) -> StorefrontSession:
    return request.app.state.session


def _save(session: StorefrontSession, form: BookForm) -> CatalogRecord:
    try:
        return session.save_book(form)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/books", response_model=CatalogView)
def list_books(session: StorefrontSession = Depends(get_session)) -> CatalogView:
    items = session.store.list() if session.catalog_status == CatalogStatus.ready else []
    return CatalogView(
        status=session.catalog_status,
        error=session.error,
        total=len(items),
        items=items,
    )


@router.get("/books/{book_id}", response_model=CatalogRecord)
def get_book(book_id: int, session: StorefrontSession = Depends(get_session)) -> CatalogRecord:
    book = session.store.get(book_id)
    if book is None:
        raise HTTPException(status_code=404, detail="Book not found")
    return book


@router.post("/books", response_model=CatalogRecord)
def save_book(form: BookForm, session: StorefrontSession = Depends(get_session)) -> CatalogRecord:
    return _save(session, form)


@router.put("/books/{book_id}", response_model=CatalogRecord)
def update_book(
    book_id: int, form: BookForm, session: StorefrontSession = Depends(get_session)
) -> CatalogRecord:
    if session.is_admin and session.store.get(book_id) is None:
        raise HTTPException(status_code=404, detail="Book not found")
    return _save(session, form.model_copy(update={"id": book_id}))


@router.delete("/books/{book_id}", response_model=DeleteResult)
def delete_book(
    book_id: int,
    confirm: bool = Query(default=False, description="Set once the user confirmed the deletion"),
    session: StorefrontSession = Depends(get_session),
) -> DeleteResult:
    try:
        removed = session.delete_book(book_id, confirmed=confirm)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    if not confirm:
        return DeleteResult(status="cancelled")
    return DeleteResult(status="ok", removed=removed)
