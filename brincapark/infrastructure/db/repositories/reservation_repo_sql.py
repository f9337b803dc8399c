from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from brincapark.application.interfaces.reservation_repo import ReservationRepo
from brincapark.domain.entities.reservation import (
    EstadoReserva,
    Horario,
    NewReservation,
    Paquete,
    Parque,
    Reservation,
    ReservationFilter,
)
from brincapark.domain.errors import (
    InvalidTransitionError,
    ReservationNotFoundError,
    SlotConflictError,
)
from brincapark.infrastructure.db.tables import reservations, slot_occupancies


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_entity(row: Mapping[str, Any]) -> Reservation:
    return Reservation(
        id=row["id"],
        nombre_completo=row["nombre_completo"],
        correo=row["correo"],
        telefono=row["telefono"],
        paquete=Paquete(row["paquete"]),
        fecha_servicio=row["fecha_servicio"],
        hora_reservacion=Horario(row["hora_reservacion"]),
        parque=Parque(row["parque"]),
        estado_ubicacion=row["estado_ubicacion"],
        tipo_evento=row["tipo_evento"],
        estado_reserva=EstadoReserva(row["estado_reserva"]),
        created_at=_as_utc(row["created_at"]),
    )


def _slot_conflict(reservation: Reservation) -> SlotConflictError:
    parque, fecha_servicio, hora = reservation.slot
    return SlotConflictError(
        parque=parque.value,
        fecha_servicio=fecha_servicio,
        hora_reservacion=hora.value,
    )


class ReservationRepoSQL(ReservationRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _slot_taken(self, slot: tuple[Parque, str, Horario]) -> bool:
        parque, fecha_servicio, hora = slot
        stmt = (
            select(slot_occupancies.c.id)
            .where(
                slot_occupancies.c.parque == parque.value,
                slot_occupancies.c.fecha_servicio == fecha_servicio,
                slot_occupancies.c.hora_reservacion == hora.value,
            )
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar() is not None

    async def create(
        self,
        reservation_id: str,
        data: NewReservation,
        created_at: datetime,
    ) -> Reservation:
        reservation = Reservation(
            id=reservation_id,
            nombre_completo=data.nombre_completo,
            correo=data.correo,
            telefono=data.telefono,
            paquete=data.paquete,
            fecha_servicio=data.fecha_servicio,
            hora_reservacion=data.hora_reservacion,
            parque=data.parque,
            estado_ubicacion=data.estado_ubicacion,
            tipo_evento=data.tipo_evento,
            estado_reserva=EstadoReserva.PENDIENTE,
            created_at=created_at,
        )
        if await self._slot_taken(reservation.slot):
            raise _slot_conflict(reservation)

        stmt = insert(reservations).values(
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
        await self._session.execute(stmt)
        return reservation

    async def get_by_id(self, reservation_id: str) -> Reservation | None:
        stmt = select(reservations).where(reservations.c.id == reservation_id).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return _to_entity(row)

    async def list(self, criteria: ReservationFilter) -> Sequence[Reservation]:
        where_clause = []
        if criteria.estado_reserva is not None:
            where_clause.append(reservations.c.estado_reserva == criteria.estado_reserva.value)
        if criteria.parque is not None:
            where_clause.append(reservations.c.parque == criteria.parque.value)
        if criteria.fecha_servicio is not None:
            where_clause.append(reservations.c.fecha_servicio == criteria.fecha_servicio)
        if criteria.correo is not None:
            where_clause.append(reservations.c.correo == criteria.correo)
        if criteria.telefono is not None:
            where_clause.append(reservations.c.telefono == criteria.telefono)

        stmt = (
            select(reservations)
            .where(*where_clause)
            .order_by(reservations.c.created_at.desc(), reservations.c.id)
        )
        result = await self._session.execute(stmt)
        return [_to_entity(row) for row in result.mappings().all()]

    async def apply_transition(
        self,
        reservation: Reservation,
        target: EstadoReserva,
    ) -> Reservation:
        stmt = (
            update(reservations)
            .where(
                reservations.c.id == reservation.id,
                reservations.c.estado_reserva == reservation.estado_reserva.value,
            )
            .values(estado_reserva=target.value)
        )
        result = await self._session.execute(stmt)
        if result.rowcount != 1:
            # Someone else moved the reservation since it was read
            current = await self.get_by_id(reservation.id)
            if current is None:
                raise ReservationNotFoundError(reservation.id)
            raise InvalidTransitionError(
                reservation_id=reservation.id,
                current_status=current.estado_reserva.value,
                target_status=target.value,
            )

        if target == EstadoReserva.APROBADO:
            parque, fecha_servicio, hora = reservation.slot
            try:
                await self._session.execute(
                    insert(slot_occupancies).values(
                        parque=parque.value,
                        fecha_servicio=fecha_servicio,
                        hora_reservacion=hora.value,
                        reservation_id=reservation.id,
                    )
                )
            except IntegrityError as exc:
                raise _slot_conflict(reservation) from exc
        elif reservation.is_approved:
            await self._session.execute(
                delete(slot_occupancies).where(slot_occupancies.c.reservation_id == reservation.id)
            )

        return replace(reservation, estado_reserva=target)

    async def occupied_slots(self, parque: Parque, fecha_servicio: str) -> set[Horario]:
        stmt = select(slot_occupancies.c.hora_reservacion).where(
            slot_occupancies.c.parque == parque.value,
            slot_occupancies.c.fecha_servicio == fecha_servicio,
        )
        result = await self._session.execute(stmt)
        return {Horario(value) for value in result.scalars().all()}
