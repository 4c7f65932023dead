"""
Typed client for the social backend.

Each method binds one backend route to its request/response schema. Writes
go through the authenticated request client; public reads use a plain HTTP
client carrying the project's anon key.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import quote

import pydantic
import requests

from crow.core.constants import ApiConstants, AuthConstants
from crow.exceptions import ApiError, MissingConfigurationError, ValidationError
from crow.infrastructure.http.client import AuthenticatedRequestClient, HttpClient
from crow.infrastructure.session.protocol import SessionProvider
from crow.logging import get_logger

from .models import (
    Comment,
    ContentRequest,
    Post,
    ProfileUpdate,
    SignUpRequest,
    User,
    UserProfile,
)


def _segment(value: str) -> str:
    return quote(str(value), safe="")


class SocialApi:
    """Operations of the social backend."""

    def __init__(self, auth_client: AuthenticatedRequestClient, public_client: HttpClient):
        """
        Args:
            auth_client: Client for routes that need the signed-in user's credential
            public_client: Client for routes open to anonymous callers
        """
        self.auth_client = auth_client
        self.public_client = public_client
        self.logger = get_logger(__name__)

    @classmethod
    def create(
        cls,
        base_url: str,
        session_provider: SessionProvider,
        anon_key: str,
        timeout: Optional[int] = None,
    ) -> "SocialApi":
        """Build an API bound to ``base_url`` with both underlying clients."""
        if not base_url:
            raise MissingConfigurationError("api.functions_url")
        kwargs: Dict[str, Any] = {"timeout": timeout} if timeout else {}
        auth_client = AuthenticatedRequestClient(session_provider, base_url, **kwargs)
        public_client = HttpClient(
            base_url,
            default_headers={
                "apikey": anon_key,
                "Authorization": f"{AuthConstants.BEARER_PREFIX}{anon_key}",
            },
            **kwargs,
        )
        return cls(auth_client, public_client)

    def close(self) -> None:
        self.auth_client.close()
        self.public_client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False

    # Health and registration

    def health(self) -> bool:
        body = self._parse(self.public_client.get("/health"))
        return body.get("status") == "ok"

    def sign_up(self, email: str, password: str, name: str) -> str:
        """Register a new account and return its user id.

        The caller signs in afterwards to obtain a session.
        """
        try:
            payload = SignUpRequest(email=email.strip(), password=password, name=name.strip())
        except pydantic.ValidationError as e:
            field = e.errors()[0]["loc"][0] if e.errors() else "input"
            raise ValidationError(str(field), "is required") from e

        body = self._parse(
            self.public_client.post("/auth/signup", json=payload.model_dump())
        )
        try:
            return body["user"]["id"]
        except (KeyError, TypeError) as e:
            raise ApiError(None, "Sign up response did not include a user id") from e

    # Users

    def get_profile(self, user_id: str) -> UserProfile:
        body = self._parse(self.public_client.get(f"/users/{_segment(user_id)}"))
        return self._model(UserProfile, body)

    def update_profile(
        self,
        user_id: str,
        name: Optional[str] = None,
        bio: Optional[str] = None,
        avatar: Optional[str] = None,
    ) -> User:
        """Update the signed-in user's profile. Only the owner may do this (403 otherwise)."""
        update = ProfileUpdate(name=name, bio=bio, avatar=avatar)
        body = self._parse(
            self.auth_client.put(
                f"/users/{_segment(user_id)}", update.model_dump(exclude_none=True)
            )
        )
        return self._model(User, body.get("user"))

    def search_users(self, query: str) -> List[User]:
        """Find users whose name or email contains ``query`` (case-insensitive)."""
        if not query.strip():
            return []
        body = self._parse(
            self.public_client.get("/users/search/query", params={"q": query.strip()})
        )
        return self._models(User, body, "users")

    # Posts

    def list_posts(self) -> List[Post]:
        """Return every post, newest first."""
        body = self._parse(self.public_client.get("/posts"))
        return self._models(Post, body, "posts")

    def create_post(self, content: str) -> Post:
        payload = ContentRequest(content=self._validate_content("content", content, ApiConstants.MAX_POST_LENGTH))
        body = self._parse(self.auth_client.post("/posts", payload.model_dump()))
        self.logger.info("Post created", post_id=(body.get("post") or {}).get("id"))
        return self._model(Post, body.get("post"))

    def delete_post(self, post_id: str) -> None:
        """Delete one of the signed-in user's posts with its likes and comments."""
        self._parse(self.auth_client.delete(f"/posts/{_segment(post_id)}"))
        self.logger.info("Post deleted", post_id=post_id)

    # Likes

    def toggle_like(self, post_id: str) -> bool:
        """Like or unlike a post; returns True when the post is now liked."""
        body = self._parse(self.auth_client.post(f"/posts/{_segment(post_id)}/like"))
        return bool(body.get("liked"))

    def has_liked(self, post_id: str) -> bool:
        body = self._parse(self.auth_client.get(f"/posts/{_segment(post_id)}/like/check"))
        return bool(body.get("liked"))

    # Comments

    def list_comments(self, post_id: str) -> List[Comment]:
        """Return a post's comments, oldest first."""
        body = self._parse(self.public_client.get(f"/posts/{_segment(post_id)}/comments"))
        return self._models(Comment, body, "comments")

    def add_comment(self, post_id: str, content: str) -> Comment:
        payload = ContentRequest(content=self._validate_content("comment", content))
        body = self._parse(
            self.auth_client.post(f"/posts/{_segment(post_id)}/comments", payload.model_dump())
        )
        return self._model(Comment, body.get("comment"))

    # Follows

    def toggle_follow(self, user_id: str) -> bool:
        """Follow or unfollow a user; returns True when now following."""
        body = self._parse(self.auth_client.post(f"/follows/{_segment(user_id)}", {}))
        return bool(body.get("following"))

    def is_following(self, user_id: str) -> bool:
        body = self._parse(self.auth_client.get(f"/follows/{_segment(user_id)}/check"))
        return bool(body.get("following"))

    # Helpers

    @staticmethod
    def _validate_content(field: str, content: str, max_length: Optional[int] = None) -> str:
        text = (content or "").strip()
        if not text:
            raise ValidationError(field, "must not be empty")
        if max_length is not None and len(text) > max_length:
            raise ValidationError(field, f"must be {max_length} characters or less")
        return text

    def _parse(self, response: requests.Response) -> Dict[str, Any]:
        """Return the JSON body of a 2xx response, or raise ApiError."""
        try:
            body = response.json()
        except ValueError:
            body = None

        if not response.ok:
            message = None
            if isinstance(body, dict):
                message = body.get("error")
            raise ApiError(response.status_code, message or response.reason or "request failed")

        if not isinstance(body, dict):
            raise ApiError(response.status_code, "Expected a JSON object in the response")
        return body

    @staticmethod
    def _model(model_cls, data: Any):
        try:
            return model_cls.model_validate(data)
        except pydantic.ValidationError as e:
            raise ApiError(None, f"Unexpected {model_cls.__name__} payload: {e.error_count()} invalid field(s)") from e

    def _models(self, model_cls, body: Dict[str, Any], key: str) -> list:
        """Validate each item of the list under ``key``; a missing or null list is empty."""
        items = body.get(key)
        if items is None:
            return []
        if not isinstance(items, list):
            raise ApiError(None, f"Expected a list of {key} in the response")
        return [self._model(model_cls, item) for item in items]
