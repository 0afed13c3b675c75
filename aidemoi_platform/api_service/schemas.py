from pydantic import BaseModel, ConfigDict, EmailStr, Field

from typing import List, Optional


class TokenPayload(BaseModel):
    """Claims embedded in every access and refresh token."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(..., alias="userId")
    email: str
    username: str

    def claims(self) -> dict:
        return self.model_dump(by_alias=True)


# Auth
class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class RefreshRequest(BaseModel):
    refreshToken: str


class TokensOut(BaseModel):
    token: str
    refreshToken: str
    expiresIn: str
    expiresAt: str
    refreshExpiresIn: str
    refreshExpiresAt: str


class LoginUserOut(BaseModel):
    id: str
    username: str
    email: str
    roles: List[str] = ["user"]


class LoginResponse(BaseModel):
    message: str = "Login successful"
    tokens: TokensOut
    user: LoginUserOut


class RefreshResponse(BaseModel):
    accessToken: str
    expiresIn: str


class MessageResponse(BaseModel):
    message: str


# Users
class UserOut(BaseModel):
    id: int
    username: str
    email: str
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None


class ProfileResponse(BaseModel):
    user: UserOut


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: Optional[str] = Field(None, min_length=6)


# Companies
class CompanyCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    address: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None


class CompanyUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None


class CompanyOut(BaseModel):
    id: str
    name: str
    address: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


# Errors
class ErrorDetail(BaseModel):
    message: str
    statusCode: int


class ErrorResponse(BaseModel):
    error: ErrorDetail
