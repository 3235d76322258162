"""Account store selection: one repository per process, chosen by STORE_BACKEND."""

import logging

from config.settings import settings
from src.sb_account.domain.repository import AccountRepositoryProtocol

logger = logging.getLogger(__name__)

_repository: AccountRepositoryProtocol | None = None


def build_account_repository(backend: str) -> AccountRepositoryProtocol:
    # Imports are local so unused backends never load their drivers
    if backend == "sheets":
        from src.sb_account.infrastructure.sheet_repository import SheetAccountRepository

        return SheetAccountRepository()
    if backend == "sql":
        from src.sb_account.infrastructure.persistence import SqlAccountRepository

        return SqlAccountRepository()
    if backend == "memory":
        from src.sb_account.infrastructure.memory import InMemoryAccountRepository

        return InMemoryAccountRepository()
    raise ValueError(f"Unknown STORE_BACKEND: {backend}")


def get_account_repository() -> AccountRepositoryProtocol:
    """FastAPI dependency: the process-wide account repository."""
    global _repository  # noqa: PLW0603
    if _repository is None:
        _repository = build_account_repository(settings.STORE_BACKEND)
        logger.info("Account store backend: %s", settings.STORE_BACKEND)
    return _repository
