# storefront/config.py
"""
Runtime settings for the storefront.

Everything is read from the process environment (a local ``.env`` file
is loaded first when present). The only secret is the Gemini
credential; when it is missing the service still starts and the
catalog simply reports that the AI service is unavailable.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_MODEL_NAME = "gemini-2.5-flash"
DEFAULT_GENERATION_TIMEOUT = 30.0
# Cosmetic gate for the admin editor, not a security boundary.
DEFAULT_ADMIN_PASSWORD = "2086"


class Settings(BaseModel):
    api_key: Optional[str] = None
    model_name: str = DEFAULT_MODEL_NAME
    generation_timeout: float = DEFAULT_GENERATION_TIMEOUT
    admin_password: str = DEFAULT_ADMIN_PASSWORD

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()

        api_key = os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY")

        raw_timeout = os.environ.get("STOREFRONT_GENERATION_TIMEOUT")
        timeout = DEFAULT_GENERATION_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                logger.warning(
                    "Ignoring invalid STOREFRONT_GENERATION_TIMEOUT=%r", raw_timeout
                )
            if timeout <= 0:
                timeout = DEFAULT_GENERATION_TIMEOUT

        return cls(
            api_key=api_key or None,
            model_name=os.environ.get("STOREFRONT_MODEL") or DEFAULT_MODEL_NAME,
            generation_timeout=timeout,
            admin_password=os.environ.get("STOREFRONT_ADMIN_PASSWORD")
            or DEFAULT_ADMIN_PASSWORD,
        )
