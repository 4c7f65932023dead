"""Typed client for the social backend."""

from .client import SocialApi
from .models import Comment, Post, User, UserProfile, UserStats, UserSummary

__all__ = [
    "SocialApi",
    "Comment",
    "Post",
    "User",
    "UserProfile",
    "UserStats",
    "UserSummary",
]
