"""Login endpoint."""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_authenticate_user_use_case
from src.application.dto.requests import LoginRequest
from src.application.dto.responses import ErrorResponse, LoginResponse
from src.application.use_cases import AuthenticateUserUseCase

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"model": ErrorResponse}},
)
async def login(
    request: LoginRequest,
    use_case: AuthenticateUserUseCase = Depends(get_authenticate_user_use_case),
) -> LoginResponse:
    """Verify credentials and return the session's user and role."""
    result = await use_case.execute(request)
    return use_case.to_response(result)
