import pytest

from storefront.ai import CatalogGenerator, GenerationFailed, ServiceUnavailable, to_records
from storefront.models import BookForm, CatalogStatus, GeneratedBook, ViewMode
from storefront.session import (
    GENERATION_FAILED_MESSAGE,
    SERVICE_UNAVAILABLE_MESSAGE,
    StorefrontSession,
)


def _dune_echoes():
    return to_records(
        [GeneratedBook(title="Dune Echoes", author="A. Vey", description="...", price=9.99)]
    )


@pytest.mark.asyncio
async def test_load_catalog_fills_store():
    session = StorefrontSession()
    assert session.catalog_status == CatalogStatus.loading

    async def generate():
        return _dune_echoes()

    await session.load_catalog(generate)

    assert session.catalog_status == CatalogStatus.ready
    assert session.error is None
    assert len(session.store) == 1
    assert session.store.list()[0].title == "Dune Echoes"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error, message",
    [
        (ServiceUnavailable("no key"), SERVICE_UNAVAILABLE_MESSAGE),
        (GenerationFailed("bad json"), GENERATION_FAILED_MESSAGE),
    ],
)
async def test_load_failure_gives_one_error_and_empty_store(error, message):
    session = StorefrontSession()
    session.store.replace_all(_dune_echoes())

    async def generate():
        raise error

    await session.load_catalog(generate)

    assert session.catalog_status == CatalogStatus.error
    assert session.error == message
    assert len(session.store) == 0


def test_admin_gate():
    session = StorefrontSession(admin_password="2086")

    assert session.unlock_admin(None) is None
    assert session.unlock_admin("") is None
    assert session.is_admin is False

    assert session.unlock_admin("1234") is False
    assert session.is_admin is False

    assert session.unlock_admin("2086") is True
    assert session.is_admin is True


def test_sign_in_and_out():
    session = StorefrontSession()
    session.show(ViewMode.signin)
    session.sign_in()
    assert session.is_logged_in is True
    assert session.view == ViewMode.home

    session.unlock_admin("2086")
    session.show(ViewMode.signup)
    session.sign_out()
    assert session.is_logged_in is False
    assert session.is_admin is False
    assert session.view == ViewMode.home


def test_editing_requires_admin():
    session = StorefrontSession()
    with pytest.raises(PermissionError):
        session.save_book(BookForm(title="T", author="A", price="1"))
    with pytest.raises(PermissionError):
        session.delete_book(1, confirmed=True)


def test_delete_needs_confirmation():
    session = StorefrontSession()
    session.unlock_admin("2086")
    book = session.save_book(BookForm(title="Nightglass", author="R. Quill", price="3.50"))

    assert session.delete_book(book.id, confirmed=False) is False
    assert len(session.store) == 1

    assert session.delete_book(book.id, confirmed=True) is True
    assert len(session.store) == 0


@pytest.mark.asyncio
async def test_unexpected_generator_error_still_settles_as_error():
    session = StorefrontSession()

    async def generate():
        raise KeyError("boom")

    await session.load_catalog(generate)

    assert session.catalog_status == CatalogStatus.error
    assert session.error == GENERATION_FAILED_MESSAGE
    assert len(session.store) == 0


@pytest.mark.asyncio
async def test_duplicate_generated_ids_are_a_failed_generation():
    session = StorefrontSession()
    record = _dune_echoes()[0]

    async def generate():
        return [record, record]

    await session.load_catalog(generate)

    assert session.catalog_status == CatalogStatus.error
    assert session.error == GENERATION_FAILED_MESSAGE
    assert len(session.store) == 0


@pytest.mark.asyncio
async def test_malformed_gemini_reply_leaves_empty_store_and_one_error(dummy_client):
    session = StorefrontSession()
    client = dummy_client(text="not json")
    generator = CatalogGenerator(client, "gemini-2.5-flash", 5.0)

    await session.load_catalog(generator.generate)

    assert len(client.models.calls) == 1
    assert session.catalog_status == CatalogStatus.error
    assert session.error == GENERATION_FAILED_MESSAGE
    assert len(session.store) == 0
    assert session.state().error == GENERATION_FAILED_MESSAGE
