"""
Integration tests: aprobación concurrente del mismo turno

Verifica que la invariante "un aprobado por turno" la garantiza el almacén:
- Dos aprobaciones simultáneas, cada una con su propia sesión, producen
  exactamente un éxito y un SlotConflictError
- Una escritura basada en una lectura vieja no pisa un cambio ajeno
- Un rechazo deja la reserva perdedora intacta
"""

import asyncio

import pytest

from brincapark.api.dependencies import get_use_cases
from brincapark.domain.entities.reservation import EstadoReserva, Reservation
from brincapark.domain.errors import InvalidTransitionError, SlotConflictError
from brincapark.infrastructure.db.repositories.reservation_repo_sql import ReservationRepoSQL


async def _create_pair(use_cases, reservation_fields):
    a = await use_cases["create_reservation"].execute(reservation_fields)
    b = await use_cases["create_reservation"].execute(
        reservation_fields | {"nombre_completo": "Luis Gil", "correo": "luis.gil@gmail.com"}
    )
    return a, b


class TestConcurrentApproval:
    """Dos administradores aprueban a la vez reservas del mismo turno"""

    @pytest.mark.asyncio
    async def test_only_one_approval_wins(self, store, use_cases, fake_clock, reservation_fields):
        a, b = await _create_pair(use_cases, reservation_fields)

        async def approve(reservation_id: str):
            async with store.sessionmaker() as session:
                own = get_use_cases(session=session, clock=fake_clock)
                return await own["transition_reservation"].approve(reservation_id)

        results = await asyncio.gather(approve(a.id), approve(b.id), return_exceptions=True)

        approved = [r for r in results if isinstance(r, Reservation)]
        conflicts = [r for r in results if isinstance(r, SlotConflictError)]
        assert len(approved) == 1, f"Resultados inesperados: {results}"
        assert len(conflicts) == 1, f"Resultados inesperados: {results}"

        async with store.sessionmaker() as session:
            fresh = get_use_cases(session=session, clock=fake_clock)
            a_now = await fresh["get_reservation"].execute(a.id)
            b_now = await fresh["get_reservation"].execute(b.id)
        statuses = sorted([a_now.estado_reserva, b_now.estado_reserva])
        assert statuses == sorted([EstadoReserva.APROBADO, EstadoReserva.PENDIENTE])

    @pytest.mark.asyncio
    async def test_different_slots_both_approve(self, store, use_cases, fake_clock, reservation_fields):
        a = await use_cases["create_reservation"].execute(reservation_fields)
        b = await use_cases["create_reservation"].execute(
            reservation_fields | {"hora_reservacion": "6pm-9pm"}
        )

        async def approve(reservation_id: str):
            async with store.sessionmaker() as session:
                own = get_use_cases(session=session, clock=fake_clock)
                return await own["transition_reservation"].approve(reservation_id)

        results = await asyncio.gather(approve(a.id), approve(b.id))

        assert all(r.estado_reserva == EstadoReserva.APROBADO for r in results)


class TestStaleWrites:
    """El cambio de estado se condiciona al estado leído"""

    @pytest.mark.asyncio
    async def test_stale_read_cannot_overwrite(self, session, use_cases, reservation_fields):
        reservation = await use_cases["create_reservation"].execute(reservation_fields)
        await use_cases["transition_reservation"].cancel(reservation.id)

        repo = ReservationRepoSQL(session)
        with pytest.raises(InvalidTransitionError) as exc_info:
            async with session.begin():
                # `reservation` still says pendiente
                await repo.apply_transition(reservation, EstadoReserva.APROBADO)

        assert exc_info.value.current_status == "cancelado"

    @pytest.mark.asyncio
    async def test_conflict_leaves_loser_pending(self, use_cases, reservation_fields):
        a, b = await _create_pair(use_cases, reservation_fields)
        await use_cases["transition_reservation"].approve(a.id)

        with pytest.raises(SlotConflictError):
            await use_cases["transition_reservation"].approve(b.id)

        loser = await use_cases["get_reservation"].execute(b.id)
        assert loser.estado_reserva == EstadoReserva.PENDIENTE

    @pytest.mark.asyncio
    async def test_cancel_releases_slot_for_availability(self, use_cases, reservation_fields):
        a = await use_cases["create_reservation"].execute(reservation_fields)
        await use_cases["transition_reservation"].approve(a.id)
        await use_cases["transition_reservation"].cancel(a.id)

        result = await use_cases["slot_availability"].execute(a.parque, a.fecha_servicio)

        assert all(result.disponibles.values())
