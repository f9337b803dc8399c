from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Mapping

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncSession

from brincapark.application.interfaces.config_repo import ConfigurationRepo
from brincapark.domain.entities.configuration import Configuration, as_capacidades
from brincapark.domain.entities.reservation import Paquete, Parque
from brincapark.infrastructure.db.tables import configuration

CONFIGURATION_ID = 1


def _to_data(config: Configuration) -> dict[str, Any]:
    return {
        "reservas_abiertas": config.reservas_abiertas,
        "paquetes_activos": [p.value for p in config.paquetes_activos],
        "parques_activos": [p.value for p in config.parques_activos],
        "capacidad_por_paquete": {p.value: n for p, n in config.capacidad_por_paquete},
        "fechas_bloqueadas": list(config.fechas_bloqueadas),
    }


def _from_data(data: Mapping[str, Any], updated_at: datetime | None) -> Configuration:
    defaults = Configuration()
    if updated_at is not None and updated_at.tzinfo is None:
        updated_at = updated_at.replace(tzinfo=timezone.utc)
    capacidades = data.get("capacidad_por_paquete")
    return Configuration(
        reservas_abiertas=data.get("reservas_abiertas", defaults.reservas_abiertas),
        paquetes_activos=tuple(
            Paquete(v) for v in data.get("paquetes_activos", defaults.paquetes_activos)
        ),
        parques_activos=tuple(
            Parque(v) for v in data.get("parques_activos", defaults.parques_activos)
        ),
        capacidad_por_paquete=(
            as_capacidades({Paquete(k): v for k, v in capacidades.items()})
            if capacidades is not None
            else defaults.capacidad_por_paquete
        ),
        fechas_bloqueadas=tuple(data.get("fechas_bloqueadas", defaults.fechas_bloqueadas)),
        updated_at=updated_at,
    )


async def ensure_configuration_row(conn: AsyncConnection) -> bool:
    """
    Inserta la configuración de fábrica si la fila única no existe.

    Retorna True si la fila fue creada en esta llamada.
    """
    exists = await conn.execute(
        select(configuration.c.id).where(configuration.c.id == CONFIGURATION_ID)
    )
    if exists.scalar() is not None:
        return False
    await conn.execute(
        insert(configuration).values(
            id=CONFIGURATION_ID, data=_to_data(Configuration()), updated_at=None
        )
    )
    return True


class ConfigurationRepoSQL(ConfigurationRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self) -> Configuration:
        stmt = select(configuration).where(configuration.c.id == CONFIGURATION_ID)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return Configuration()
        return _from_data(row["data"], row["updated_at"])

    async def _lock_row(self) -> Mapping[str, Any]:
        # Take the write lock before reading so the merge below starts from the
        # last committed document; SQLite ignores FOR UPDATE.
        await self._session.execute(
            update(configuration)
            .where(configuration.c.id == CONFIGURATION_ID)
            .values(updated_at=configuration.c.updated_at)
        )
        stmt = (
            select(configuration)
            .where(configuration.c.id == CONFIGURATION_ID)
            .with_for_update()
        )
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            raise RuntimeError("configuration row missing; Store.connect() seeds it")
        return row

    async def update(self, fields: Mapping[str, Any]) -> Configuration:
        row = await self._lock_row()
        current = _from_data(row["data"], row["updated_at"])
        changes = dict(fields)
        if "capacidad_por_paquete" in changes:
            changes["capacidad_por_paquete"] = as_capacidades(
                {**current.capacidades(), **changes["capacidad_por_paquete"]}
            )
        merged = replace(current, **changes)

        await self._session.execute(
            update(configuration)
            .where(configuration.c.id == CONFIGURATION_ID)
            .values(data=_to_data(merged), updated_at=merged.updated_at)
        )
        return merged
