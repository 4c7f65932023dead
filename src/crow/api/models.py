"""
Request and response schemas for the social backend.

Field aliases follow the backend's camelCase JSON; Python code uses the
snake_case attribute names.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _BackendModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class UserSummary(_BackendModel):
    """Author information embedded in posts and comments."""

    id: str
    name: str
    avatar: str = ""


class User(_BackendModel):
    """Stored user profile."""

    id: str
    email: str = ""
    name: str
    bio: str = ""
    avatar: str = ""
    created_at: Optional[datetime] = Field(None, alias="createdAt")


class UserStats(_BackendModel):
    followers: int = 0
    following: int = 0


class UserProfile(_BackendModel):
    """Response of GET /users/{id}."""

    user: User
    stats: UserStats = Field(default_factory=UserStats)


class Post(_BackendModel):
    """A post as listed in the feed."""

    id: str
    user_id: str = Field(alias="userId")
    content: str
    created_at: datetime = Field(alias="createdAt")
    user: Optional[UserSummary] = None
    likes_count: int = Field(0, alias="likesCount")
    comments_count: int = Field(0, alias="commentsCount")


class Comment(_BackendModel):
    id: str
    post_id: str = Field(alias="postId")
    user_id: str = Field(alias="userId")
    content: str
    created_at: datetime = Field(alias="createdAt")
    user: Optional[UserSummary] = None


class SignUpRequest(_BackendModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)
    name: str = Field(min_length=1)


class ProfileUpdate(_BackendModel):
    """Body of PUT /users/{id}; unset fields keep their stored value."""

    name: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None


class ContentRequest(_BackendModel):
    """Body of POST /posts and POST /posts/{id}/comments."""

    content: str
