from dataclasses import dataclass

from brincapark.application.interfaces.config_repo import ConfigurationRepo
from brincapark.application.interfaces.reservation_repo import ReservationRepo
from brincapark.application.interfaces.transaction_manager import TransactionManager
from brincapark.domain.entities.reservation import Horario, Parque


@dataclass(frozen=True)
class SlotAvailability:
    parque: Parque
    fecha_servicio: str
    fecha_bloqueada: bool
    disponibles: dict[Horario, bool]


class SlotAvailabilityUseCase:
    """Turnos libres de un parque en una fecha."""

    def __init__(
        self,
        reservation_repo: ReservationRepo,
        config_repo: ConfigurationRepo,
        transaction_manager: TransactionManager,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._config_repo = config_repo
        self._transaction_manager = transaction_manager

    async def execute(self, parque: Parque, fecha_servicio: str) -> SlotAvailability:
        async with self._transaction_manager.start():
            config = await self._config_repo.get()
            occupied = await self._reservation_repo.occupied_slots(parque, fecha_servicio)

        closed = (
            config.is_blocked(fecha_servicio)
            or not config.reservas_abiertas
            or parque not in config.parques_activos
        )
        return SlotAvailability(
            parque=parque,
            fecha_servicio=fecha_servicio,
            fecha_bloqueada=config.is_blocked(fecha_servicio),
            disponibles={hora: not closed and hora not in occupied for hora in Horario},
        )
