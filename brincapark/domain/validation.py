"""
Construcción validada de reservas.

`validate_reservation` recibe los campos crudos de una solicitud y devuelve
un resultado etiquetado: `Valid` con la reserva lista para persistir, o
`Invalid` con el mensaje de cada campo rechazado.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any

from email_validator import EmailNotValidError, validate_email

from brincapark.domain.entities.configuration import Configuration
from brincapark.domain.entities.reservation import Horario, NewReservation, Paquete, Parque

# Nombre del atributo -> nombre del campo en el cuerpo JSON
FIELD_NAMES = {
    "nombre_completo": "nombreCompleto",
    "correo": "correo",
    "telefono": "telefono",
    "paquete": "paquete",
    "fecha_servicio": "fechaServicio",
    "hora_reservacion": "horaReservacion",
    "parque": "parque",
    "estado_ubicacion": "estadoUbicacion",
    "tipo_evento": "tipoEvento",
}

# Longitud máxima de los campos de texto libre (coincide con las columnas)
MAX_LENGTHS = {
    "nombre_completo": 255,
    "correo": 255,
    "telefono": 50,
    "estado_ubicacion": 100,
    "tipo_evento": 100,
}

_ENUM_FIELDS: dict[str, type[Enum]] = {
    "paquete": Paquete,
    "hora_reservacion": Horario,
    "parque": Parque,
}

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass(frozen=True)
class Valid:
    reservation: NewReservation


@dataclass(frozen=True)
class Invalid:
    errors: dict[str, str]


ValidationResult = Valid | Invalid


def parse_service_date(value: str) -> str | None:
    """Normaliza una fecha "YYYY-MM-DD"; None si no es una fecha real."""
    value = value.strip()
    if not _DATE_RE.match(value):
        return None
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError:
        return None


def _allowed(enum_cls: type[Enum]) -> str:
    return ", ".join(member.value for member in enum_cls)


def validate_reservation(
    fields: Mapping[str, Any],
    config: Configuration | None = None,
) -> ValidationResult:
    """
    Valida una solicitud de reserva.

    `fields` usa los nombres de atributo en Python (snake_case). Los errores
    se reportan con el nombre del campo en el cuerpo JSON.
    """
    errors: dict[str, str] = {}
    cleaned: dict[str, Any] = {}

    for attr, wire_name in FIELD_NAMES.items():
        raw = fields.get(attr)
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            errors[wire_name] = "campo requerido"
            continue
        if not isinstance(raw, str):
            errors[wire_name] = "debe ser texto"
            continue
        value = raw.strip()
        max_length = MAX_LENGTHS.get(attr)
        if max_length is not None and len(value) > max_length:
            errors[wire_name] = f"máximo {max_length} caracteres"
            continue

        enum_cls = _ENUM_FIELDS.get(attr)
        if enum_cls is not None:
            try:
                cleaned[attr] = enum_cls(value)
            except ValueError:
                errors[wire_name] = f"valor inválido '{value}'; permitidos: {_allowed(enum_cls)}"
            continue

        if attr == "correo":
            try:
                validate_email(value, check_deliverability=False)
            except EmailNotValidError:
                errors[wire_name] = "correo electrónico inválido"
                continue
        if attr == "fecha_servicio":
            parsed = parse_service_date(value)
            if parsed is None:
                errors[wire_name] = "fecha inválida; formato esperado YYYY-MM-DD"
                continue
            value = parsed
        cleaned[attr] = value

    if config is not None:
        paquete = cleaned.get("paquete")
        if paquete is not None and paquete not in config.paquetes_activos:
            errors["paquete"] = f"el paquete '{paquete.value}' no está disponible"
        parque = cleaned.get("parque")
        if parque is not None and parque not in config.parques_activos:
            errors["parque"] = f"el parque '{parque.value}' no está disponible"
        fecha = cleaned.get("fecha_servicio")
        if fecha is not None and config.is_blocked(fecha):
            errors["fechaServicio"] = f"la fecha {fecha} no está disponible"

    if errors:
        return Invalid(errors=errors)
    return Valid(reservation=NewReservation(**cleaned))
