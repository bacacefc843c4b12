from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from arttouch_admin.config import get_settings


def normalize_database_url(url: str) -> str:
    """Point Postgres URLs at the psycopg (v3) driver regardless of the incoming scheme."""
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg://", 1)
    if url.startswith("postgresql://") and "+" not in url.split("://", 1)[0]:
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


DATABASE_URL = normalize_database_url(get_settings().DATABASE_URL)

# SQLite connections are handed between FastAPI's worker threads
_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, pool_pre_ping=True, future=True, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
