"""
api_service package

This package contains the backend logic for the Aide Moi API.
It includes:

- FastAPI application factory (`main.py`)
- SQLAlchemy models, stores and database integration (`models.py`, `stores.py`, `db.py`)
- Password hashing, duration parsing and JWT logic (`auth.py`)
- Login / refresh / profile / logout orchestration (`sessions.py`)
- Pydantic schemas (`schemas.py`)
"""
