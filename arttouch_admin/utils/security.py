import logging
import secrets

from fastapi import Depends, HTTPException
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from arttouch_admin.config import get_settings

logger = logging.getLogger(__name__)

http_basic = HTTPBasic()


def is_admin_email(email: str) -> bool:
    if not email:
        return False
    expected = (get_settings().ADMIN_EMAIL or "").lower()
    return secrets.compare_digest(email.lower().encode("utf-8"), expected.encode("utf-8"))


def require_admin(credentials: HTTPBasicCredentials = Depends(http_basic)) -> str:
    """Accept only the configured admin account. Returns the admin email."""
    settings = get_settings()
    password_ok = bool(settings.ADMIN_PASSWORD) and secrets.compare_digest(
        credentials.password.encode("utf-8"), settings.ADMIN_PASSWORD.encode("utf-8")
    )
    if not is_admin_email(credentials.username) or not password_ok:
        logger.warning("Rejected admin login for %s", credentials.username)
        raise HTTPException(status_code=401, detail="Invalid credentials", headers={"WWW-Authenticate": "Basic"})
    return credentials.username
