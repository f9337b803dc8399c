from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from brincapark.application.interfaces.transaction_manager import TransactionManager
from brincapark.infrastructure.db.retry import retry_on_deadlock

T = TypeVar("T")


class SQLAlchemyTransactionManager(TransactionManager):
    def __init__(self, session: AsyncSession, max_attempts: int = 3, base_delay: float = 0.1) -> None:
        self._session = session
        self._max_attempts = max_attempts
        self._base_delay = base_delay

    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        if self._session.in_transaction():
            yield
        else:
            async with self._session.begin():
                yield

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        async def attempt() -> T:
            async with self.start():
                return await operation()

        return await retry_on_deadlock(attempt, self._max_attempts, self._base_delay)
