# storefront/models.py
import math
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def coerce_price(value: Any) -> float:
    """Turn whatever the editor submitted into a non-negative price.

    Unparseable, non-finite and negative input all become ``0``.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip()
    try:
        price = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(price) or price < 0:
        return 0.0
    return price


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


class CatalogRecord(BaseModel):
    """One book card in the storefront."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    author: str
    description: str = ""
    price: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    # Assigned once at creation; serialised as ``coverColor`` for the front-end.
    cover_color: str = Field(alias="coverColor", pattern=r"^#[0-9a-f]{6}$")

    @field_validator("title", "author")
    @classmethod
    def check_text(cls, value: str) -> str:
        return _require_text(value)


class GeneratedBook(BaseModel):
    """One item of the structured output requested from Gemini.

    Strict: a number sent as a string, a missing field or a blank
    title/author makes the whole response invalid.
    """

    model_config = ConfigDict(strict=True)

    title: str
    author: str
    description: str
    price: float = Field(ge=0, allow_inf_nan=False)

    @field_validator("title", "author")
    @classmethod
    def check_text(cls, value: str) -> str:
        return _require_text(value)


class BookForm(BaseModel):
    """Add/edit submission from the admin editor."""

    id: Optional[int] = None
    title: str
    author: str
    description: str = ""
    price: float = 0.0

    @field_validator("price", mode="before")
    @classmethod
    def parse_price(cls, value: Any) -> float:
        return coerce_price(value)


class ViewMode(str, Enum):
    home = "home"
    signin = "signin"
    signup = "signup"


class CatalogStatus(str, Enum):
    loading = "loading"
    ready = "ready"
    error = "error"


class ViewRequest(BaseModel):
    view: ViewMode


class SignInRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class SignUpRequest(SignInRequest):
    name: str = Field(min_length=1)


class AdminRequest(BaseModel):
    # ``None``/empty mirrors a cancelled password prompt.
    password: Optional[str] = None


class AdminResult(BaseModel):
    granted: bool
    is_admin: bool
    message: Optional[str] = None


class SessionState(BaseModel):
    view: ViewMode
    is_logged_in: bool
    is_admin: bool
    catalog_status: CatalogStatus
    error: Optional[str] = None
