"""Pydantic models for API request/response.

JSON field names are camelCase on the wire (displayName, avatarUrl, from,
to); Python attributes stay snake_case through field aliases.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from domain.model.history import HistoryEntry
from domain.model.identity import Identity, Profile


class ProfileRequest(BaseModel):
    """Optional profile fields supplied at registration."""
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    avatar_url: Optional[str] = Field(None, alias="avatarUrl")

    def to_domain(self) -> Profile:
        return Profile(name=self.name, avatar_url=self.avatar_url)


class RegisterRequest(BaseModel):
    """Request model for user registration.

    Fields are optional here so that missing and empty values are both
    reported by the service as a 400 with the same message.
    """
    username: Optional[str] = None
    password: Optional[str] = None
    profile: Optional[ProfileRequest] = None


class LoginRequest(BaseModel):
    """Request model for password login."""
    username: Optional[str] = None
    password: Optional[str] = None


class GoogleAuthRequest(BaseModel):
    """Request model for Google login.

    Only the authorization code is read; client id and redirect URI are
    server configuration and any such fields in the body are ignored.
    """
    code: Optional[str] = None


class SuccessResponse(BaseModel):
    success: bool = True


class UserSummary(BaseModel):
    """Profile fields returned alongside a session token."""
    model_config = ConfigDict(populate_by_name=True)

    display_name: Optional[str] = Field(None, alias="displayName")
    avatar_url: Optional[str] = Field(None, alias="avatarUrl")

    @classmethod
    def from_identity(cls, identity: Identity) -> "UserSummary":
        return cls(display_name=identity.display_name, avatar_url=identity.avatar_url)


class AuthResponse(BaseModel):
    """Response model for password and Google login."""
    token: str
    user: UserSummary


class MeResponse(BaseModel):
    """Response model for the current user's profile."""
    model_config = ConfigDict(populate_by_name=True)

    username: str
    display_name: Optional[str] = Field(None, alias="displayName")
    avatar_url: Optional[str] = Field(None, alias="avatarUrl")

    @classmethod
    def from_identity(cls, identity: Identity) -> "MeResponse":
        return cls(
            username=identity.username,
            display_name=identity.display_name,
            avatar_url=identity.avatar_url,
        )


class HistoryRequest(BaseModel):
    """Request model for recording a conversion."""
    model_config = ConfigDict(populate_by_name=True)

    from_currency: Optional[str] = Field(None, alias="from")
    to_currency: Optional[str] = Field(None, alias="to")
    amount: Optional[float] = None
    result: Optional[float] = None


class HistoryItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    from_currency: str = Field(..., alias="from")
    to_currency: str = Field(..., alias="to")
    amount: float
    result: float

    @classmethod
    def from_entry(cls, entry: HistoryEntry) -> "HistoryItem":
        return cls(
            id=entry.id,
            from_currency=entry.from_currency,
            to_currency=entry.to_currency,
            amount=entry.amount,
            result=entry.result,
        )


class HistoryListResponse(BaseModel):
    history: list[HistoryItem]
