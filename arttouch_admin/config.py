import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv, find_dotenv

# Values from a local .env win over the process environment
_env_path = find_dotenv(usecwd=True)
if _env_path:
    load_dotenv(_env_path, override=True)

BASE_DIR = Path(__file__).resolve().parents[1]


class Settings:
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./arttouch.db")
    # Uploaded product images live under MEDIA_ROOT and are served from MEDIA_URL
    MEDIA_ROOT: Path = Path(os.getenv("MEDIA_ROOT", str(BASE_DIR / "media")))
    MEDIA_URL: str = os.getenv("MEDIA_URL", "/media").rstrip("/")
    # HTTP Basic credentials for the admin back-office
    ADMIN_EMAIL: str = os.getenv("ADMIN_EMAIL", "admin@example.com")
    ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    PORT: int = int(os.getenv("PORT", "8000"))


@lru_cache
def get_settings():
    return Settings()
