"""Abstract interface for credential verification."""

from abc import ABC, abstractmethod


class IAuthenticator(ABC):
    """Verifies a username/password pair."""

    @abstractmethod
    def verify(self, username: str, password: str) -> str:
        """Return the user's role, or raise AuthenticationError."""
        pass
