from fastapi import Query

from brincapark.domain.entities.reservation import EstadoReserva, Parque, ReservationFilter
from brincapark.domain.errors import ValidationError
from brincapark.domain.validation import parse_service_date


def service_date_or_400(value: str, field: str = "fechaServicio") -> str:
    parsed = parse_service_date(value)
    if parsed is None:
        raise ValidationError({field: "fecha inválida; formato esperado YYYY-MM-DD"})
    return parsed


def reservation_filter(
    estado: EstadoReserva | None = Query(default=None),
    parque: Parque | None = Query(default=None),
    fecha: str | None = Query(default=None),
    correo: str | None = Query(default=None),
    telefono: str | None = Query(default=None),
) -> ReservationFilter:
    return ReservationFilter(
        estado_reserva=estado,
        parque=parque,
        fecha_servicio=service_date_or_400(fecha, "fecha") if fecha else None,
        correo=correo.strip() if correo else None,
        telefono=telefono.strip() if telefono else None,
    )
