"""Infrastructure layer implementations."""

from src.infrastructure import auth, pdf, remote, storage

__all__ = ["storage", "remote", "auth", "pdf"]
