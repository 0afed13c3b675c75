"""User CRUD route handlers."""
import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.exc import IntegrityError

from ..errors import ApiError, DuplicateEmail, InternalFailure, UserNotFound
from ..schemas import ErrorResponse, UserCreate, UserOut
from ..stores import UserStore
from ..dependencies import get_user_store

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[UserOut], summary="Get all users")
def list_users(users: UserStore = Depends(get_user_store)):
    return [user.to_dict() for user in users.find_all()]


@router.get(
    "/{user_id}",
    response_model=UserOut,
    responses={404: {"model": ErrorResponse}},
    summary="Get user by ID",
)
def get_user(user_id: int, users: UserStore = Depends(get_user_store)):
    user = users.find_by_id(user_id)
    if not user:
        raise UserNotFound()
    return user.to_dict()


@router.post(
    "",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Create a new user",
)
def create_user(payload: UserCreate, users: UserStore = Depends(get_user_store)):
    try:
        if users.find_by_email(payload.email):
            raise DuplicateEmail()

        user = users.create(payload.username, payload.email, payload.password)
        logger.info("User created: user_id=%s username=%s", user.id, user.username)
        return user.to_dict()
    except ApiError:
        raise
    except IntegrityError as e:
        # Lost a race with a concurrent insert of the same email
        users.db.rollback()
        raise DuplicateEmail() from e
    except Exception as e:
        logger.exception("Failed to create user %s: %s", payload.email, e)
        raise InternalFailure("Failed to create user") from e


@router.put(
    "/{user_id}",
    response_model=UserOut,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Update a user",
)
def update_user(user_id: int, payload: UserCreate, users: UserStore = Depends(get_user_store)):
    try:
        if not users.find_by_id(user_id):
            raise UserNotFound()

        owner = users.find_by_email(payload.email)
        if owner and owner.id != user_id:
            raise DuplicateEmail()

        user = users.update(user_id, **payload.model_dump(exclude_none=True))
        logger.info("User updated: user_id=%s", user_id)
        return user.to_dict()
    except ApiError:
        raise
    except IntegrityError as e:
        users.db.rollback()
        raise DuplicateEmail() from e
    except Exception as e:
        logger.exception("Failed to update user %s: %s", user_id, e)
        raise InternalFailure("Failed to update user") from e


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
    summary="Delete a user",
)
def delete_user(user_id: int, users: UserStore = Depends(get_user_store)):
    if not users.delete(user_id):
        raise UserNotFound()
    logger.info("User deleted: user_id=%s", user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
