"""Excepciones de dominio para el sistema de reservas."""


class DomainError(Exception):
    """Clase base para todos los errores de dominio."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


# === Errores de Reserva ===


class ReservationNotFoundError(DomainError):
    """La reserva no existe."""

    def __init__(self, reservation_id: str):
        super().__init__(
            message=f"Reserva no encontrada: {reservation_id}",
            code="RESERVATION_NOT_FOUND",
        )
        self.reservation_id = reservation_id


class InvalidTransitionError(DomainError):
    """El estado actual de la reserva no admite el cambio pedido."""

    def __init__(self, reservation_id: str, current_status: str, target_status: str):
        super().__init__(
            message=f"No se puede pasar la reserva {reservation_id} "
            f"de '{current_status}' a '{target_status}'",
            code="INVALID_TRANSITION",
        )
        self.reservation_id = reservation_id
        self.current_status = current_status
        self.target_status = target_status


class SlotConflictError(DomainError):
    """El turno ya está ocupado por una reserva aprobada."""

    def __init__(self, parque: str, fecha_servicio: str, hora_reservacion: str):
        super().__init__(
            message=f"El turno {hora_reservacion} del {fecha_servicio} en {parque} "
            "ya está ocupado",
            code="SLOT_CONFLICT",
        )
        self.parque = parque
        self.fecha_servicio = fecha_servicio
        self.hora_reservacion = hora_reservacion


class ReservationsClosedError(DomainError):
    """El sistema no está aceptando reservas nuevas."""

    def __init__(self):
        super().__init__(
            message="Las reservas están cerradas temporalmente",
            code="RESERVATIONS_CLOSED",
        )


# === Errores de Validación ===


class ValidationError(DomainError):
    """Error de validación de datos de entrada; lista todos los campos."""

    def __init__(self, errors: dict[str, str]):
        fields = ", ".join(sorted(errors))
        super().__init__(
            message=f"Validación fallida en: {fields}",
            code="VALIDATION_ERROR",
        )
        self.errors = dict(errors)

    @property
    def fields(self) -> list[str]:
        return sorted(self.errors)


# === Errores de Acceso ===


class UnauthorizedError(DomainError):
    """Credencial de administrador ausente o inválida."""

    def __init__(self):
        super().__init__(
            message="Se requiere una clave de administrador válida",
            code="UNAUTHORIZED",
        )
