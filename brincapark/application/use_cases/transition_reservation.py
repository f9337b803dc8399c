import logging

from brincapark.application.interfaces.reservation_repo import ReservationRepo
from brincapark.application.interfaces.transaction_manager import TransactionManager
from brincapark.domain.entities.reservation import EstadoReserva, Reservation
from brincapark.domain.errors import (
    InvalidTransitionError,
    ReservationNotFoundError,
    SlotConflictError,
)
from brincapark.domain.lifecycle import transition

logger = logging.getLogger(__name__)


class TransitionReservationUseCase:
    """
    Aplica un cambio de estado administrativo (aprobar o cancelar).

    La regla de la máquina de estados se evalúa sobre la reserva leída y la
    escritura se condiciona a ese mismo estado, de modo que dos
    administradores concurrentes no pueden aprobar dos reservas del mismo
    turno ni pisar un cambio ajeno.
    """

    def __init__(self, reservation_repo: ReservationRepo, transaction_manager: TransactionManager) -> None:
        self._reservation_repo = reservation_repo
        self._transaction_manager = transaction_manager

    async def execute(self, reservation_id: str, target: EstadoReserva) -> Reservation:
        async def apply() -> Reservation:
            reservation = await self._reservation_repo.get_by_id(reservation_id)
            if reservation is None:
                raise ReservationNotFoundError(reservation_id)
            # Raises before touching the store when the change is not allowed
            transition(reservation, target)
            return await self._reservation_repo.apply_transition(reservation, target)

        try:
            updated = await self._transaction_manager.run(apply)
        except (InvalidTransitionError, SlotConflictError) as exc:
            logger.warning(
                "Status change refused",
                extra={"reservation_id": reservation_id, "target": target.value, "code": exc.code},
            )
            raise

        logger.info(
            "Reservation status changed",
            extra={"reservation_id": updated.id, "estado_reserva": updated.estado_reserva.value},
        )
        return updated

    async def approve(self, reservation_id: str) -> Reservation:
        return await self.execute(reservation_id, EstadoReserva.APROBADO)

    async def cancel(self, reservation_id: str) -> Reservation:
        return await self.execute(reservation_id, EstadoReserva.CANCELADO)
