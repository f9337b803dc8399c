"""Entidades del dominio."""

from brincapark.domain.entities.configuration import Configuration
from brincapark.domain.entities.reservation import (
    EstadoReserva,
    Horario,
    NewReservation,
    Paquete,
    Parque,
    Reservation,
    ReservationFilter,
)

__all__ = [
    "Configuration",
    "EstadoReserva",
    "Horario",
    "NewReservation",
    "Paquete",
    "Parque",
    "Reservation",
    "ReservationFilter",
]
