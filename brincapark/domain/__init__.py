"""
Capa de Dominio - Sistema de Reservas BRINCAPARK.

Esta capa contiene la lógica de negocio pura, sin dependencias de frameworks.

Estructura:
- entities/: Entidades del dominio (Reservation, Configuration)
- validation.py: Construcción validada de reservas
- lifecycle.py: Máquina de estados de la reserva
- errors.py: Excepciones específicas del dominio
"""

from brincapark.domain.entities import (
    Configuration,
    EstadoReserva,
    Horario,
    NewReservation,
    Paquete,
    Parque,
    Reservation,
    ReservationFilter,
)
from brincapark.domain.errors import (
    DomainError,
    InvalidTransitionError,
    ReservationNotFoundError,
    ReservationsClosedError,
    SlotConflictError,
    UnauthorizedError,
    ValidationError,
)

__all__ = [
    # Entities
    "Configuration",
    "EstadoReserva",
    "Horario",
    "NewReservation",
    "Paquete",
    "Parque",
    "Reservation",
    "ReservationFilter",
    # Errors
    "DomainError",
    "InvalidTransitionError",
    "ReservationNotFoundError",
    "ReservationsClosedError",
    "SlotConflictError",
    "UnauthorizedError",
    "ValidationError",
]
