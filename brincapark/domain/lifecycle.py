"""Máquina de estados de una reserva."""

from dataclasses import replace

from brincapark.domain.entities.reservation import EstadoReserva, Reservation
from brincapark.domain.errors import InvalidTransitionError

ALLOWED_TRANSITIONS: dict[EstadoReserva, frozenset[EstadoReserva]] = {
    EstadoReserva.PENDIENTE: frozenset({EstadoReserva.APROBADO, EstadoReserva.CANCELADO}),
    EstadoReserva.APROBADO: frozenset({EstadoReserva.CANCELADO}),
    EstadoReserva.CANCELADO: frozenset(),
}


def can_transition(current: EstadoReserva, target: EstadoReserva) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def transition(reservation: Reservation, target: EstadoReserva) -> Reservation:
    """
    Retorna la reserva en el estado `target`.

    Raises:
        InvalidTransitionError: si el par de estados no está en la tabla
            (ninguna reserva vuelve a pendiente; cancelado es terminal).
    """
    if not can_transition(reservation.estado_reserva, target):
        raise InvalidTransitionError(
            reservation_id=reservation.id,
            current_status=reservation.estado_reserva.value,
            target_status=target.value,
        )
    return replace(reservation, estado_reserva=target)
