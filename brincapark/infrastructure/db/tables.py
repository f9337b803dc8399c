from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)

from brincapark.domain.validation import MAX_LENGTHS

metadata = MetaData()

reservations = Table(
    "reservations",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("nombre_completo", String(MAX_LENGTHS["nombre_completo"]), nullable=False),
    Column("correo", String(MAX_LENGTHS["correo"]), nullable=False),
    Column("telefono", String(MAX_LENGTHS["telefono"]), nullable=False),
    Column("paquete", String(16), nullable=False),
    Column("fecha_servicio", String(10), nullable=False),
    Column("hora_reservacion", String(16), nullable=False),
    Column("parque", String(32), nullable=False),
    Column("estado_ubicacion", String(MAX_LENGTHS["estado_ubicacion"]), nullable=False),
    Column("tipo_evento", String(MAX_LENGTHS["tipo_evento"]), nullable=False),
    Column("estado_reserva", String(16), nullable=False, default="pendiente"),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Index("ix_reservations_slot", "parque", "fecha_servicio", "hora_reservacion"),
    Index("ix_reservations_estado", "estado_reserva"),
    Index("ix_reservations_contacto", "correo", "telefono"),
)

# One row per approved reservation; the unique triple is what keeps two
# approvals from sharing a shift.
slot_occupancies = Table(
    "slot_occupancies",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("parque", String(32), nullable=False),
    Column("fecha_servicio", String(10), nullable=False),
    Column("hora_reservacion", String(16), nullable=False),
    Column("reservation_id", String(32), nullable=False, unique=True),
    UniqueConstraint(
        "parque", "fecha_servicio", "hora_reservacion", name="uq_slot_occupancies_slot"
    ),
)

configuration = Table(
    "configuration",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("data", JSON, nullable=False),
    Column("updated_at", DateTime(timezone=True)),
)
