from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime

from arttouch_admin.database import Base


class User(Base):
    """Customer account an order belongs to. Accounts are managed outside the back-office."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100))
    last_name = Column(String(100))
    email = Column(String(255), unique=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)
