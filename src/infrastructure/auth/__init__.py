"""Authentication implementations."""

from src.infrastructure.auth.static_authenticator import StaticAuthenticator

__all__ = ["StaticAuthenticator"]
