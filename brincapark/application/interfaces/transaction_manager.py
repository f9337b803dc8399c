from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Protocol, TypeVar

T = TypeVar("T")


class TransactionManager(Protocol):
    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        yield

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Ejecuta `operation` dentro de una transacción."""
        ...
