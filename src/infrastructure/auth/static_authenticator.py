"""Credential check against a fixed user list from settings."""

import secrets
from collections.abc import Iterable

from src.config import get_logger
from src.config.settings import AuthUser
from src.core.exceptions import AuthenticationError
from src.core.interfaces.auth import IAuthenticator

logger = get_logger(__name__)


class StaticAuthenticator(IAuthenticator):
    """
    Usernames match case-insensitively after trimming; passwords match
    exactly after trimming.
    """

    def __init__(self, users: Iterable[AuthUser]):
        self._users = {user.username.strip().lower(): user for user in users}

    def verify(self, username: str, password: str) -> str:
        user = self._users.get(username.strip().lower())

        # Compare even when the user is unknown so timing does not reveal it
        expected = user.password.strip() if user else ""
        matched = secrets.compare_digest(
            expected.encode("utf-8"), password.strip().encode("utf-8")
        )
        if user is None or not matched:
            raise AuthenticationError(username.strip())

        logger.debug("credentials_verified", username=user.username, role=user.role)
        return user.role
