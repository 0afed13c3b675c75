"""
Session lifecycle: login, refresh, profile and logout.

The service holds no mutable state of its own. Its credential store and
token service are handed in by the caller, one store per request.
"""
import logging

from .auth import REFRESH_TOKEN, TokenService, verify_password
from .errors import ApiError, InternalFailure, InvalidCredentials, InvalidToken, UserNotFound
from .schemas import TokenPayload
from .stores import UserStore

logger = logging.getLogger(__name__)

DEFAULT_ROLES = ["user"]


class SessionService:
    def __init__(self, users: UserStore, tokens: TokenService):
        self.users = users
        self.tokens = tokens

    def login(self, email: str, password: str) -> dict:
        """
        Authenticate by email and password and issue a token pair.

        Raises:
            InvalidCredentials: unknown email or wrong password (indistinguishable)
            InternalFailure: the credential store could not be reached
        """
        try:
            user = self.users.find_by_email(email)
            if not user or not verify_password(password, user.password_hash):
                logger.info("Failed login attempt: email=%s", email)
                raise InvalidCredentials()

            payload = TokenPayload(user_id=user.id, email=user.email, username=user.username)
            pair = self.tokens.issue_pair(payload)

            logger.info("User logged in: user_id=%s username=%s", user.id, user.username)
            return {
                "message": "Login successful",
                "tokens": pair.to_dict(),
                "user": {
                    "id": str(user.id),
                    "username": user.username,
                    "email": user.email,
                    "roles": list(DEFAULT_ROLES),
                },
            }
        except ApiError:
            raise
        except Exception as e:
            logger.exception("Login error for %s: %s", email, e)
            raise InternalFailure("Login failed") from e

    def refresh(self, refresh_token: str) -> dict:
        """Mint a new access token from a valid refresh token. The refresh token is not rotated."""
        try:
            check = self.tokens.inspect(refresh_token, REFRESH_TOKEN)
            if not check.ok:
                logger.info("Refresh rejected: reason=%s", check.failure)
                raise InvalidToken()

            access_token = self.tokens.issue_access_token(check.payload)
            logger.info("Access token refreshed: user_id=%s", check.payload.user_id)
            return {"accessToken": access_token, "expiresIn": self.tokens.access_expires_in}
        except ApiError:
            raise
        except Exception as e:
            logger.exception("Token refresh error: %s", e)
            raise InternalFailure("Token refresh failed") from e

    def profile(self, user_id: int) -> dict:
        try:
            user = self.users.find_by_id(user_id)
            if not user:
                # Deleted after the token was issued
                raise UserNotFound()
            return {"user": user.to_dict()}
        except ApiError:
            raise
        except Exception as e:
            logger.exception("Profile lookup error for user_id=%s: %s", user_id, e)
            raise InternalFailure("Failed to get user profile") from e

    def logout(self, principal: TokenPayload) -> dict:
        # No revocation list: the client discards its tokens, which stay valid until they expire.
        logger.info("User logged out: user_id=%s username=%s", principal.user_id, principal.username)
        return {"message": "Logged out successfully"}
