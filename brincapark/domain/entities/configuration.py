"""Entidad Configuration - documento único de reglas de negocio."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime

from brincapark.domain.entities.reservation import Paquete, Parque

Capacidades = tuple[tuple[Paquete, int], ...]


def as_capacidades(mapping: Mapping[Paquete, int]) -> Capacidades:
    """Pares (paquete, capacidad) en el orden de `Paquete`."""
    return tuple((paquete, int(mapping[paquete])) for paquete in Paquete if paquete in mapping)


DEFAULT_CAPACIDAD_POR_PAQUETE: Capacidades = as_capacidades(
    {
        Paquete.MINI: 30,
        Paquete.MEDIANO: 60,
        Paquete.FULL: 80,
    }
)


@dataclass(frozen=True)
class Configuration:
    """
    Parámetros vigentes del sistema.

    Todos los campos son inmutables; `capacidad_por_paquete` se guarda como
    pares y `capacidades()` devuelve una copia en forma de dict.
    """

    reservas_abiertas: bool = True
    paquetes_activos: tuple[Paquete, ...] = tuple(Paquete)
    parques_activos: tuple[Parque, ...] = tuple(Parque)
    capacidad_por_paquete: Capacidades = DEFAULT_CAPACIDAD_POR_PAQUETE
    fechas_bloqueadas: tuple[str, ...] = ()
    updated_at: datetime | None = None

    def capacidades(self) -> dict[Paquete, int]:
        return dict(self.capacidad_por_paquete)

    def is_blocked(self, fecha_servicio: str) -> bool:
        return fecha_servicio in self.fechas_bloqueadas
