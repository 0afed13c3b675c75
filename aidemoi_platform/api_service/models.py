from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime, timezone
from .auth import isoformat_z
from .db import Base
import uuid


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_utc(moment: datetime) -> datetime:
    """Columns hold naive UTC datetimes; tag them before rendering."""
    return moment.replace(tzinfo=timezone.utc) if moment.tzinfo is None else moment


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    username = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    # Users created through the admin CRUD surface may have no password and cannot log in
    password_hash = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def to_dict(self) -> dict:
        """
        Serialize User for API responses.

        The password hash is never included; datetimes are ISO 8601 UTC with a Z suffix.
        """
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "createdAt": isoformat_z(as_utc(self.created_at)) if self.created_at else None,
            "updatedAt": isoformat_z(as_utc(self.updated_at)) if self.updated_at else None,
        }


class Company(Base):
    __tablename__ = "companies"
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    address = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(64), nullable=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "email": self.email,
            "phone": self.phone,
        }
