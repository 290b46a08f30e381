import os
import logging
from dataclasses import dataclass
from dotenv import load_dotenv

# Load local .env if present (ignored on Cloud Run)
load_dotenv()

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_SHARE_URL = "https://carbonmedia.co.zw/report"


def _clean_secret(value: str) -> str:
    """Clean any unwanted characters from secrets/env vars."""
    if value is None:
        return ""
    value = str(value).replace("\r", "").replace("\n", "").strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        value = value[1:-1].strip()
    if value.lower().startswith("-n "):
        value = value[3:].strip()
    return value


@dataclass(frozen=True)
class Settings:
    gemini_api_key: str = ""
    gemini_model: str = DEFAULT_MODEL
    share_url: str = DEFAULT_SHARE_URL
    secret_key: str = "dev-secret-key-change-in-production"

    @property
    def has_gemini_key(self) -> bool:
        return bool(self.gemini_api_key)


def load_settings() -> Settings:
    """Build Settings from the process environment."""
    api_key = _clean_secret(os.getenv("GEMINI_API_KEY")) or _clean_secret(os.getenv("API_KEY"))
    if not api_key:
        logger.warning("GEMINI_API_KEY not set - recommendations will use the fallback list.")

    return Settings(
        gemini_api_key=api_key,
        gemini_model=_clean_secret(os.getenv("GEMINI_MODEL")) or DEFAULT_MODEL,
        share_url=_clean_secret(os.getenv("SHARE_URL")) or DEFAULT_SHARE_URL,
        secret_key=_clean_secret(os.getenv("SECRET_KEY")) or Settings.secret_key,
    )
