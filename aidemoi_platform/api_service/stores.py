"""
Stores over the SQLAlchemy session.

Routes and the session service receive a store bound to the request's
session instead of querying the database directly.
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from .auth import hash_password
from .models import Company, User


class UserStore:
    """Credential store: persistence of user records."""

    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> List[User]:
        return self.db.query(User).order_by(User.id.asc()).all()

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def create(self, username: str, email: str, password: Optional[str] = None) -> User:
        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password) if password else None,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def update(self, user_id: int, **fields) -> Optional[User]:
        user = self.find_by_id(user_id)
        if not user:
            return None

        password = fields.pop("password", None)
        if password:
            user.password_hash = hash_password(password)
        for name, value in fields.items():
            setattr(user, name, value)

        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def delete(self, user_id: int) -> bool:
        deleted = self.db.query(User).filter(User.id == user_id).delete()
        self.db.commit()
        return deleted > 0

    def count(self) -> int:
        return self.db.query(User).count()


class CompanyStore:
    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> List[Company]:
        return self.db.query(Company).order_by(Company.name.asc()).all()

    def find_by_id(self, company_id: str) -> Optional[Company]:
        return self.db.query(Company).filter(Company.id == company_id).first()

    def create(self, **fields) -> Company:
        company = Company(**fields)
        self.db.add(company)
        self.db.commit()
        self.db.refresh(company)
        return company

    def update(self, company_id: str, **fields) -> Optional[Company]:
        """Apply a partial update; fields left out are unchanged."""
        company = self.find_by_id(company_id)
        if not company:
            return None
        for name, value in fields.items():
            setattr(company, name, value)
        self.db.add(company)
        self.db.commit()
        self.db.refresh(company)
        return company

    def delete(self, company_id: str) -> bool:
        deleted = self.db.query(Company).filter(Company.id == company_id).delete()
        self.db.commit()
        return deleted > 0
