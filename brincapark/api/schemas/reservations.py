from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from brincapark.application.use_cases.slot_availability import SlotAvailability
from brincapark.domain.entities.reservation import EstadoReserva, Reservation


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateReservationRequest(CamelModel):
    """
    Cuerpo de una solicitud de reserva.

    Solo se comprueba la forma (texto o ausente); las reglas de cada campo
    las aplica `validate_reservation` para poder reportar todos los campos
    rechazados a la vez.
    """

    model_config = ConfigDict(extra="forbid")

    nombre_completo: str | None = None
    correo: str | None = None
    telefono: str | None = None
    paquete: str | None = None
    fecha_servicio: str | None = None
    hora_reservacion: str | None = None
    parque: str | None = None
    estado_ubicacion: str | None = None
    tipo_evento: str | None = None


class ReservationResponse(CamelModel):
    id: str
    nombre_completo: str
    correo: str
    telefono: str
    paquete: str
    fecha_servicio: str
    hora_reservacion: str
    parque: str
    estado_ubicacion: str
    tipo_evento: str
    estado_reserva: str
    created_at: datetime

    @classmethod
    def from_entity(cls, reservation: Reservation) -> "ReservationResponse":
        return cls(
            id=reservation.id,
            nombre_completo=reservation.nombre_completo,
            correo=reservation.correo,
            telefono=reservation.telefono,
            paquete=reservation.paquete.value,
            fecha_servicio=reservation.fecha_servicio,
            hora_reservacion=reservation.hora_reservacion.value,
            parque=reservation.parque.value,
            estado_ubicacion=reservation.estado_ubicacion,
            tipo_evento=reservation.tipo_evento,
            estado_reserva=reservation.estado_reserva.value,
            created_at=reservation.created_at,
        )


class UpdateStatusRequest(CamelModel):
    model_config = ConfigDict(extra="forbid")

    estado_reserva: EstadoReserva = Field(
        validation_alias=AliasChoices("estadoReserva", "status", "estado_reserva"),
    )


class SlotStatus(CamelModel):
    hora_reservacion: str
    disponible: bool


class SlotAvailabilityResponse(CamelModel):
    parque: str
    fecha_servicio: str
    fecha_bloqueada: bool
    horarios: list[SlotStatus]

    @classmethod
    def from_result(cls, result: SlotAvailability) -> "SlotAvailabilityResponse":
        return cls(
            parque=result.parque.value,
            fecha_servicio=result.fecha_servicio,
            fecha_bloqueada=result.fecha_bloqueada,
            horarios=[
                SlotStatus(hora_reservacion=hora.value, disponible=free)
                for hora, free in result.disponibles.items()
            ],
        )
