"""Auth API router: register, login, logout.

Error responses come from the AppError handler in src/main.py.
"""

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import PlainTextResponse

from src.sb_account.domain.repository import AccountRepositoryProtocol
from src.sb_account.infrastructure.factory import get_account_repository
from src.sb_gateway.auth.dependencies import get_session_id
from src.sb_gateway.session.cookie import (
    clear_session_cookie,
    new_session_id,
    set_session_cookie,
)
from src.sb_gateway.session.store import SessionStoreProtocol, get_session_store
from src.sb_gateway.user.schemas import LoginRequest, LoginResponse, RegisterRequest
from src.sb_gateway.user.service import UserService

router = APIRouter(tags=["auth"])


def get_user_service(
    repo: AccountRepositoryProtocol = Depends(get_account_repository),
    sessions: SessionStoreProtocol = Depends(get_session_store),
) -> UserService:
    return UserService(repo, sessions)


@router.post(
    "/register",
    status_code=status.HTTP_200_OK,
    response_class=PlainTextResponse,
    summary="User registration",
)
async def register(
    body: RegisterRequest,
    service: UserService = Depends(get_user_service),
) -> str:
    await service.register(body.username, body.password)
    return "Registered successfully"


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=LoginResponse,
    summary="User login",
)
async def login(
    body: LoginRequest,
    response: Response,
    previous_session_id: str | None = Depends(get_session_id),
    service: UserService = Depends(get_user_service),
) -> LoginResponse:
    # Fresh id on every login; the caller's old id is dropped
    session_id = new_session_id()
    account = await service.login(
        session_id, body.username, body.password, previous_session_id=previous_session_id
    )
    set_session_cookie(response, session_id)
    return LoginResponse(balance=account.balance)


@router.post(
    "/logout",
    status_code=status.HTTP_200_OK,
    response_class=PlainTextResponse,
    summary="End the session",
)
async def logout(
    response: Response,
    session_id: str | None = Depends(get_session_id),
    service: UserService = Depends(get_user_service),
) -> str:
    await service.logout(session_id)
    clear_session_cookie(response)
    return "Logged out"
