"""
Sensitive Data Sanitization Module.

Utilities for masking bearer tokens, refresh tokens and API keys before
they reach a log record.
"""

from typing import Any, Dict, Set


class SensitiveDataSanitizer:
    """Sanitize sensitive data from payloads and headers."""

    SENSITIVE_PAYLOAD_KEYS: Set[str] = {
        "password",
        "token",
        "access_token",
        "refresh_token",
        "secret",
        "authorization",
        "apikey",
        "api_key",
    }

    SENSITIVE_HEADER_KEYS: Set[str] = {
        "authorization",
        "apikey",
        "x-api-key",
        "cookie",
        "set-cookie",
        "proxy-authorization",
    }

    @classmethod
    def sanitize_payload(cls, payload: Any) -> Any:
        """Return a copy of ``payload`` with sensitive fields redacted.

        Non-dict values are returned unchanged.
        """
        if not isinstance(payload, dict):
            return payload

        sanitized = {}
        for key, value in payload.items():
            key_lower = str(key).lower()
            if any(sensitive in key_lower for sensitive in cls.SENSITIVE_PAYLOAD_KEYS):
                if isinstance(value, str):
                    sanitized[key] = f"[REDACTED_{len(value)}_CHARS]"
                else:
                    sanitized[key] = "[REDACTED]"
            elif isinstance(value, dict):
                sanitized[key] = cls.sanitize_payload(value)
            else:
                sanitized[key] = value

        return sanitized

    @classmethod
    def sanitize_headers(cls, headers: Dict[str, str]) -> Dict[str, str]:
        """Return a copy of ``headers`` with credentials masked.

        Bearer tokens keep their scheme so the log still shows which kind
        of credential was sent.
        """
        if not isinstance(headers, dict):
            return headers

        sanitized = {}
        for key, value in headers.items():
            if key.lower() not in cls.SENSITIVE_HEADER_KEYS:
                sanitized[key] = value
            elif isinstance(value, str) and value.startswith("Bearer "):
                sanitized[key] = "Bearer " + cls.mask_credential(value[len("Bearer "):])
            else:
                sanitized[key] = "[REDACTED]"

        return sanitized

    @staticmethod
    def mask_credential(credential: str, visible_chars: int = 4) -> str:
        """Mask a credential, keeping only its last ``visible_chars`` characters.

        Args:
            credential: Credential to mask
            visible_chars: Number of characters to show at the end

        Returns:
            Masked credential string
        """
        if not credential:
            return "[empty]"

        if len(credential) <= visible_chars * 2:
            return "*" * len(credential)

        return f"***{credential[-visible_chars:]} ({len(credential)} chars)"
