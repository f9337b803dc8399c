from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, PositiveInt, field_validator
from pydantic.alias_generators import to_camel

from brincapark.domain.entities.configuration import Configuration
from brincapark.domain.entities.reservation import Paquete, Parque


class ConfigurationResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    reservas_abiertas: bool
    paquetes_activos: list[Paquete]
    parques_activos: list[Parque]
    capacidad_por_paquete: dict[Paquete, int]
    fechas_bloqueadas: list[str]
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, config: Configuration) -> "ConfigurationResponse":
        return cls(
            reservas_abiertas=config.reservas_abiertas,
            paquetes_activos=list(config.paquetes_activos),
            parques_activos=list(config.parques_activos),
            capacidad_por_paquete=config.capacidades(),
            fechas_bloqueadas=list(config.fechas_bloqueadas),
            updated_at=config.updated_at,
        )


class UpdateConfigurationRequest(BaseModel):
    """Actualización parcial: solo se tocan los campos enviados."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    reservas_abiertas: bool | None = None
    paquetes_activos: list[Paquete] | None = None
    parques_activos: list[Parque] | None = None
    capacidad_por_paquete: dict[Paquete, PositiveInt] | None = None
    fechas_bloqueadas: list[date] | None = None

    @field_validator("paquetes_activos", "parques_activos")
    @classmethod
    def dedupe(cls, value):
        if value is None:
            return value
        return list(dict.fromkeys(value))

    def to_fields(self) -> dict:
        fields = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if value is None:
                continue
            if name in ("paquetes_activos", "parques_activos"):
                value = tuple(value)
            elif name == "fechas_bloqueadas":
                value = tuple(sorted({d.isoformat() for d in value}))
            elif name == "capacidad_por_paquete":
                value = dict(value)
            fields[name] = value
        return fields
