"""SqlAccountRepository: AccountRepositoryProtocol over PostgreSQL.

Both mutations are single atomic statements, so no read-then-write race
exists on this backend:
  - insert:          INSERT ... ON CONFLICT DO NOTHING RETURNING
  - update_balance:  UPDATE ... SET balance = GREATEST(balance + :amount, 0) RETURNING

0 rows returned means the business condition failed (duplicate username /
unknown user). Each call runs in its own short transaction. Driver errors
(connection loss, numeric overflow) surface as StoreError.
"""

from sqlalchemy import select, text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.sb_account.domain.models import Account
from src.sb_account.infrastructure.db_models import AccountORM
from src.sb_common.errors import StoreError, UserExistsError

_INSERT_ACCOUNT_SQL = text("""
    INSERT INTO accounts (username, password_hash, balance)
    VALUES (:username, :password_hash, :balance)
    ON CONFLICT (username) DO NOTHING
    RETURNING username, password_hash, balance
""")

_UPDATE_BALANCE_SQL = text("""
    UPDATE accounts
    SET balance = GREATEST(balance + :amount, 0),
        updated_at = NOW()
    WHERE username = :username
    RETURNING username, password_hash, balance
""")


def _row_to_account(row: object) -> Account:
    return Account(
        username=row.username,  # type: ignore[attr-defined]
        password_hash=row.password_hash,  # type: ignore[attr-defined]
        balance=row.balance,  # type: ignore[attr-defined]
    )


class SqlAccountRepository:
    """Concrete repository: all mutations atomic at the SQL level."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None) -> None:
        if session_factory is None:
            from src.sb_common.database import async_session_factory

            session_factory = async_session_factory
        self._session_factory = session_factory

    async def find_by_username(self, username: str) -> Account | None:
        try:
            async with self._session_factory() as db:
                result = await db.execute(
                    select(AccountORM).where(AccountORM.username == username)
                )
                orm = result.scalar_one_or_none()
        except DBAPIError as e:
            raise StoreError(f"find_by_username({username!r}) failed: {e}") from e
        return _row_to_account(orm) if orm else None

    async def insert(self, username: str, password_hash: str, balance: int) -> Account:
        try:
            async with self._session_factory() as db, db.begin():
                result = await db.execute(
                    _INSERT_ACCOUNT_SQL,
                    {"username": username, "password_hash": password_hash, "balance": balance},
                )
                row = result.fetchone()
        except DBAPIError as e:
            raise StoreError(f"insert({username!r}) failed: {e}") from e
        if row is None:
            raise UserExistsError()
        return _row_to_account(row)

    async def update_balance(self, username: str, amount: int) -> Account | None:
        try:
            async with self._session_factory() as db, db.begin():
                result = await db.execute(
                    _UPDATE_BALANCE_SQL, {"username": username, "amount": amount}
                )
                row = result.fetchone()
        except DBAPIError as e:
            raise StoreError(f"update_balance({username!r}) failed: {e}") from e
        return _row_to_account(row) if row else None
