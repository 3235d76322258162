"""sb_account REST API: both endpoints require a logged-in session."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.sb_account.application.schemas import BalanceResponse, UpdateBalanceRequest
from src.sb_account.application.service import AccountApplicationService
from src.sb_account.domain.repository import AccountRepositoryProtocol
from src.sb_account.infrastructure.factory import get_account_repository
from src.sb_gateway.auth.dependencies import CurrentSession, get_current_session
from src.sb_gateway.session.store import SessionStoreProtocol, get_session_store

router = APIRouter(tags=["account"])


def get_account_service(
    repo: AccountRepositoryProtocol = Depends(get_account_repository),
    sessions: SessionStoreProtocol = Depends(get_session_store),
) -> AccountApplicationService:
    return AccountApplicationService(repo, sessions)


@router.get("/balance", response_model=BalanceResponse)
async def get_balance(
    session: Annotated[CurrentSession, Depends(get_current_session)],
    service: Annotated[AccountApplicationService, Depends(get_account_service)],
) -> BalanceResponse:
    return await service.get_balance(session)


@router.post("/update-balance", response_model=BalanceResponse)
async def update_balance(
    session: Annotated[CurrentSession, Depends(get_current_session)],
    body: UpdateBalanceRequest,
    service: Annotated[AccountApplicationService, Depends(get_account_service)],
) -> BalanceResponse:
    return await service.update_balance(session, body.amount)
