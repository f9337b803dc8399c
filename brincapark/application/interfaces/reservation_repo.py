from datetime import datetime
from typing import Sequence

from brincapark.domain.entities.reservation import (
    EstadoReserva,
    Horario,
    NewReservation,
    Parque,
    Reservation,
    ReservationFilter,
)


class ReservationRepo:
    async def create(
        self,
        reservation_id: str,
        data: NewReservation,
        created_at: datetime,
    ) -> Reservation:
        """Persiste una reserva pendiente; SlotConflictError si el turno ya fue aprobado."""
        raise NotImplementedError

    async def get_by_id(self, reservation_id: str) -> Reservation | None:
        raise NotImplementedError

    async def list(self, criteria: ReservationFilter) -> Sequence[Reservation]:
        raise NotImplementedError

    async def apply_transition(
        self,
        reservation: Reservation,
        target: EstadoReserva,
    ) -> Reservation:
        """
        Escribe el cambio de estado de forma atómica.

        El UPDATE está condicionado al estado leído; aprobar ocupa el turno y
        cancelar una reserva aprobada lo libera, en la misma transacción.
        """
        raise NotImplementedError

    async def occupied_slots(self, parque: Parque, fecha_servicio: str) -> set[Horario]:
        raise NotImplementedError
