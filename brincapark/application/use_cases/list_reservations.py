from typing import Sequence

from brincapark.application.interfaces.reservation_repo import ReservationRepo
from brincapark.application.interfaces.transaction_manager import TransactionManager
from brincapark.domain.entities.reservation import Reservation, ReservationFilter
from brincapark.domain.errors import ReservationNotFoundError


class ListReservationsUseCase:
    def __init__(self, reservation_repo: ReservationRepo, transaction_manager: TransactionManager) -> None:
        self._reservation_repo = reservation_repo
        self._transaction_manager = transaction_manager

    async def execute(self, criteria: ReservationFilter | None = None) -> Sequence[Reservation]:
        async with self._transaction_manager.start():
            return await self._reservation_repo.list(criteria or ReservationFilter())


class GetReservationUseCase:
    def __init__(self, reservation_repo: ReservationRepo, transaction_manager: TransactionManager) -> None:
        self._reservation_repo = reservation_repo
        self._transaction_manager = transaction_manager

    async def execute(self, reservation_id: str) -> Reservation:
        async with self._transaction_manager.start():
            reservation = await self._reservation_repo.get_by_id(reservation_id)
        if reservation is None:
            raise ReservationNotFoundError(reservation_id)
        return reservation
