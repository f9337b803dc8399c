import logging
from collections.abc import Callable
from typing import Any, Mapping

from brincapark.application.interfaces.clock import Clock
from brincapark.application.interfaces.config_repo import ConfigurationRepo
from brincapark.application.interfaces.reservation_repo import ReservationRepo
from brincapark.application.interfaces.transaction_manager import TransactionManager
from brincapark.domain.entities.reservation import Reservation
from brincapark.domain.errors import ReservationsClosedError, SlotConflictError, ValidationError
from brincapark.domain.validation import Invalid, validate_reservation

logger = logging.getLogger(__name__)


class CreateReservationUseCase:
    def __init__(
        self,
        reservation_repo: ReservationRepo,
        config_repo: ConfigurationRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
        id_generator: Callable[[], str],
    ) -> None:
        self._reservation_repo = reservation_repo
        self._config_repo = config_repo
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._id_generator = id_generator

    async def execute(self, fields: Mapping[str, Any]) -> Reservation:
        async def create() -> Reservation:
            config = await self._config_repo.get()
            if not config.reservas_abiertas:
                raise ReservationsClosedError()

            result = validate_reservation(fields, config)
            if isinstance(result, Invalid):
                raise ValidationError(result.errors)

            return await self._reservation_repo.create(
                reservation_id=self._id_generator(),
                data=result.reservation,
                created_at=self._clock.now(),
            )

        try:
            reservation = await self._transaction_manager.run(create)
        except ValidationError as exc:
            logger.info("Reservation rejected", extra={"fields": exc.fields})
            raise
        except SlotConflictError as exc:
            logger.warning(
                "Reservation rejected: slot already approved",
                extra={
                    "parque": exc.parque,
                    "fecha_servicio": exc.fecha_servicio,
                    "hora_reservacion": exc.hora_reservacion,
                },
            )
            raise

        logger.info(
            "Reservation created",
            extra={
                "reservation_id": reservation.id,
                "parque": reservation.parque.value,
                "fecha_servicio": reservation.fecha_servicio,
                "hora_reservacion": reservation.hora_reservacion.value,
            },
        )
        return reservation
