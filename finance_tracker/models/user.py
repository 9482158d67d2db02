"""
User Models

A user account owns every transaction row tagged with its username.
Passwords never leave the auth service in plaintext; the stored row keeps
only a passlib hash.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """A signed-in user as seen by the rest of the application."""
    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Unique account name, also the row-scoping attribute"
    )
    avatar_url: Optional[str] = Field(
        default=None,
        description="Profile picture URL"
    )


class AuthResult(BaseModel):
    """Outcome of a login or registration attempt."""

    success: bool
    message: Optional[str] = None
    user: Optional[User] = None
