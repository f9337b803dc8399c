"""
Integration tests: escrituras concurrentes de la configuración

Verifica que:
- Store.connect siembra la fila única una sola vez
- Dos PUT simultáneos sobre campos distintos conservan ambos cambios
- Las primeras actualizaciones sobre una base recién creada no fallan
"""

import asyncio

import pytest
from sqlalchemy import func, select

from brincapark.api.dependencies import get_use_cases
from brincapark.domain.entities.reservation import Paquete
from brincapark.infrastructure.db.tables import configuration


async def _update(store, clock, fields):
    async with store.sessionmaker() as session:
        use_cases = get_use_cases(session=session, clock=clock)
        return await use_cases["update_configuration"].execute(fields)


async def _current(store, clock):
    async with store.sessionmaker() as session:
        use_cases = get_use_cases(session=session, clock=clock)
        return await use_cases["get_configuration"].execute()


class TestConfigurationSeed:
    @pytest.mark.asyncio
    async def test_connect_seeds_single_default_row(self, store):
        await store.connect()

        async with store.engine.connect() as conn:
            count = await conn.scalar(select(func.count()).select_from(configuration))
            updated_at = await conn.scalar(select(configuration.c.updated_at))

        assert count == 1
        assert updated_at is None

    @pytest.mark.asyncio
    async def test_seeded_row_reads_as_defaults(self, store, fake_clock):
        config = await _current(store, fake_clock)

        assert config.reservas_abiertas is True
        assert config.capacidades() == {Paquete.MINI: 30, Paquete.MEDIANO: 60, Paquete.FULL: 80}
        assert config.updated_at is None


class TestConcurrentConfigurationUpdates:
    """Dos administradores guardan la configuración a la vez"""

    @pytest.mark.asyncio
    async def test_both_changes_survive(self, store, fake_clock):
        results = await asyncio.gather(
            _update(store, fake_clock, {"reservas_abiertas": False}),
            _update(store, fake_clock, {"fechas_bloqueadas": ("2025-12-24",)}),
            return_exceptions=True,
        )

        assert not [r for r in results if isinstance(r, Exception)], results
        final = await _current(store, fake_clock)
        assert final.reservas_abiertas is False, "Se perdió el cierre de reservas"
        assert final.fechas_bloqueadas == ("2025-12-24",)

    @pytest.mark.asyncio
    async def test_capacity_merges_are_not_lost(self, store, fake_clock):
        await asyncio.gather(
            _update(store, fake_clock, {"capacidad_por_paquete": {Paquete.MINI: 10}}),
            _update(store, fake_clock, {"capacidad_por_paquete": {Paquete.FULL: 99}}),
            _update(store, fake_clock, {"paquetes_activos": (Paquete.MINI,)}),
        )

        final = await _current(store, fake_clock)
        assert final.capacidades() == {Paquete.MINI: 10, Paquete.MEDIANO: 60, Paquete.FULL: 99}
        assert final.paquetes_activos == (Paquete.MINI,)
