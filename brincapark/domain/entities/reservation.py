"""Entidad Reservation - reserva de un parque BRINCAPARK."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Paquete(str, Enum):
    """Paquetes disponibles (la capacidad vive en la configuración)."""

    MINI = "mini"
    MEDIANO = "mediano"
    FULL = "full"


class Parque(str, Enum):
    """Sedes de BRINCAPARK."""

    MARACAIBO = "Maracaibo"
    CARACAS = "Caracas"
    PUNTO_FIJO = "Punto Fijo"


class Horario(str, Enum):
    """
    Turnos diarios del parque.

    Solo se permite un evento aprobado por turno en cada parque.
    """

    MANANA = "10am-1pm"
    TARDE = "2pm-5pm"
    NOCHE = "6pm-9pm"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            return _HORARIO_ALIASES.get(value.strip().lower())
        return None


_HORARIO_ALIASES = {
    "morning": Horario.MANANA,
    "mañana": Horario.MANANA,
    "manana": Horario.MANANA,
    "afternoon": Horario.TARDE,
    "tarde": Horario.TARDE,
    "evening": Horario.NOCHE,
    "noche": Horario.NOCHE,
}


class EstadoReserva(str, Enum):
    """Estados del ciclo de vida de una reserva."""

    PENDIENTE = "pendiente"
    APROBADO = "aprobado"
    CANCELADO = "cancelado"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            return _ESTADO_ALIASES.get(value.strip().lower())
        return None


_ESTADO_ALIASES = {
    "pending": EstadoReserva.PENDIENTE,
    "approved": EstadoReserva.APROBADO,
    "cancelled": EstadoReserva.CANCELADO,
    "canceled": EstadoReserva.CANCELADO,
}


@dataclass(frozen=True)
class NewReservation:
    """Datos ya validados de una solicitud, antes de ser persistida."""

    nombre_completo: str
    correo: str
    telefono: str
    paquete: Paquete
    fecha_servicio: str
    hora_reservacion: Horario
    parque: Parque
    estado_ubicacion: str
    tipo_evento: str


@dataclass(frozen=True)
class Reservation:
    """
    Reserva persistida.

    `fecha_servicio` se guarda como texto "YYYY-MM-DD" para evitar
    corrimientos por zona horaria.
    """

    id: str
    nombre_completo: str
    correo: str
    telefono: str
    paquete: Paquete
    fecha_servicio: str
    hora_reservacion: Horario
    parque: Parque
    estado_ubicacion: str
    tipo_evento: str
    estado_reserva: EstadoReserva
    created_at: datetime

    @property
    def slot(self) -> tuple[Parque, str, Horario]:
        """Tripleta (parque, fecha, turno) que ocupa la reserva."""
        return (self.parque, self.fecha_servicio, self.hora_reservacion)

    @property
    def is_approved(self) -> bool:
        return self.estado_reserva == EstadoReserva.APROBADO


@dataclass(frozen=True)
class ReservationFilter:
    """Criterios de búsqueda; los campos en None no filtran."""

    estado_reserva: EstadoReserva | None = None
    parque: Parque | None = None
    fecha_servicio: str | None = None
    correo: str | None = None
    telefono: str | None = None
