# storefront/main.py
import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from typing import Awaitable, Callable, List, Optional

from fastapi import Depends, FastAPI, HTTPException

from .ai import CatalogGenerator
from .catalog import catalog_router
from .catalog.router import get_session
from .config import Settings
from .models import (
    AdminRequest,
    AdminResult,
    CatalogRecord,
    SessionState,
    SignInRequest,
    SignUpRequest,
    ViewRequest,
)
from .session import StorefrontSession

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

Generate = Callable[[], Awaitable[List[CatalogRecord]]]


def create_app(settings: Optional[Settings] = None, generate: Optional[Generate] = None) -> FastAPI:
    if settings is None:
        settings = Settings.from_env()

    async def generate_with_gemini() -> List[CatalogRecord]:
        # ServiceUnavailable from a missing key surfaces here, inside load_catalog.
        generator = CatalogGenerator.from_settings(settings)
        return await generator.generate()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Scheduling catalog generation with %s", settings.model_name)
        # The front-end sees ``loading`` until this task settles.
        task = asyncio.create_task(app.state.session.load_catalog(generate or generate_with_gemini))
        app.state.catalog_task = task
        yield
        if not task.done():
            task.cancel()
        with suppress(asyncio.CancelledError):
            await task

    app = FastAPI(
        title="Gemini Books",
        description=(
            "Storefront API for a catalog of fictional fantasy and sci-fi books "
            "generated by Gemini, with a cosmetic admin editor."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.session = StorefrontSession(admin_password=settings.admin_password)
    app.include_router(catalog_router)

    @app.get("/")
    def health_check():
        return {"status": "ok", "catalog": app.state.session.catalog_status.value}

    @app.get("/api/session", response_model=SessionState)
    def session_state(session: StorefrontSession = Depends(get_session)):
        return session.state()

    @app.post("/api/session/view", response_model=SessionState)
    def change_view(req: ViewRequest, session: StorefrontSession = Depends(get_session)):
        session.show(req.view)
        return session.state()

    @app.post("/api/session/signin", response_model=SessionState)
    def sign_in(req: SignInRequest, session: StorefrontSession = Depends(get_session)):
        session.sign_in()
        return session.state()

    @app.post("/api/session/signup", response_model=SessionState)
    def sign_up(req: SignUpRequest, session: StorefrontSession = Depends(get_session)):
        session.sign_up()
        return session.state()

    @app.post("/api/session/signout", response_model=SessionState)
    def sign_out(session: StorefrontSession = Depends(get_session)):
        session.sign_out()
        return session.state()

    @app.post("/api/session/admin", response_model=AdminResult)
    def admin_access(req: AdminRequest, session: StorefrontSession = Depends(get_session)):
        granted = session.unlock_admin(req.password)
        if granted is False:
            raise HTTPException(status_code=401, detail="Incorrect password.")
        return AdminResult(
            granted=bool(granted),
            is_admin=session.is_admin,
            message="Admin access granted!" if granted else None,
        )

    return app


app = create_app()
