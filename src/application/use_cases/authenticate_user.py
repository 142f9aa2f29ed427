"""Authenticate User Use Case: verify credentials and open a session."""

from dataclasses import dataclass
from datetime import UTC, datetime

from src.application.dto.requests import LoginRequest
from src.application.dto.responses import LoginResponse
from src.config import get_logger
from src.core.exceptions import AuthenticationError
from src.core.interfaces.auth import IAuthenticator

logger = get_logger(__name__)


@dataclass
class AuthenticatedUser:
    """A verified login."""

    username: str
    role: str
    login_time: datetime


class AuthenticateUserUseCase:
    """Delegate credential checks to the configured authenticator."""

    def __init__(self, authenticator: IAuthenticator | None = None):
        self._authenticator = authenticator

    def _get_authenticator(self) -> IAuthenticator:
        if self._authenticator is None:
            from src.application.services import get_authenticator

            self._authenticator = get_authenticator()
        return self._authenticator

    async def execute(self, request: LoginRequest) -> AuthenticatedUser:
        """Execute authenticate user use case."""
        username = request.username.strip()
        try:
            role = self._get_authenticator().verify(username, request.password.strip())
        except AuthenticationError:
            logger.warning("login_rejected", username=username)
            raise

        logger.info("login_succeeded", username=username, role=role)
        return AuthenticatedUser(
            username=username,
            role=role,
            login_time=datetime.now(UTC),
        )

    def to_response(self, result: AuthenticatedUser) -> LoginResponse:
        """Convert result to API response."""
        return LoginResponse(
            username=result.username,
            role=result.role,
            login_time=result.login_time,
        )
