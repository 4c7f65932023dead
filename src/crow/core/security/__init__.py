"""Security utilities for Crow."""

from .sanitizer import SensitiveDataSanitizer

__all__ = ["SensitiveDataSanitizer"]
