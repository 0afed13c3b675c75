"""
FastAPI dependencies: stores, services and the bearer authentication gate.
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .auth import ACCESS_TOKEN, TokenService
from .db import get_db
from .errors import AuthenticationRequired
from .schemas import TokenPayload
from .sessions import SessionService
from .stores import CompanyStore, UserStore

bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_user_store(db: Session = Depends(get_db)) -> UserStore:
    return UserStore(db)


def get_company_store(db: Session = Depends(get_db)) -> CompanyStore:
    return CompanyStore(db)


def get_session_service(
    users: UserStore = Depends(get_user_store),
    tokens: TokenService = Depends(get_token_service),
) -> SessionService:
    return SessionService(users, tokens)


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> TokenPayload:
    """Resolve the bearer access token on the request into its claims."""
    if credentials is None:
        raise AuthenticationRequired()

    principal = tokens.verify(credentials.credentials, ACCESS_TOKEN)
    if principal is None:
        raise AuthenticationRequired("Invalid or expired token")
    return principal
