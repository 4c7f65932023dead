"""Infrastructure: HTTP transport and session management."""
