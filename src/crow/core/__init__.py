"""Core configuration, constants and security helpers."""
