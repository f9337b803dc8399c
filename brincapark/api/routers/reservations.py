from fastapi import APIRouter, Depends, Query, status

from brincapark.api.dependencies import get_use_cases, require_admin
from brincapark.api.routers._filters import reservation_filter, service_date_or_400
from brincapark.api.schemas.reservations import (
    CreateReservationRequest,
    ReservationResponse,
    SlotAvailabilityResponse,
)
from brincapark.domain.entities.reservation import Parque, ReservationFilter

router = APIRouter()


@router.post(
    "",
    response_model=ReservationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_reservation(
    payload: CreateReservationRequest,
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    reservation = await use_cases["create_reservation"].execute(payload.model_dump())
    return ReservationResponse.from_entity(reservation)


@router.get(
    "",
    response_model=list[ReservationResponse],
    dependencies=[Depends(require_admin)],
)
async def list_all_reservations(
    criteria: ReservationFilter = Depends(reservation_filter),
    use_cases=Depends(get_use_cases),
) -> list[ReservationResponse]:
    reservations = await use_cases["list_reservations"].execute(criteria)
    return [ReservationResponse.from_entity(r) for r in reservations]


@router.get("/mine", response_model=list[ReservationResponse])
async def list_own_reservations(
    correo: str = Query(min_length=3),
    telefono: str = Query(min_length=1),
    use_cases=Depends(get_use_cases),
) -> list[ReservationResponse]:
    """Reservas de un cliente; se exigen correo y teléfono juntos."""
    criteria = ReservationFilter(correo=correo.strip(), telefono=telefono.strip())
    reservations = await use_cases["list_reservations"].execute(criteria)
    return [ReservationResponse.from_entity(r) for r in reservations]


@router.get("/availability", response_model=SlotAvailabilityResponse)
async def slot_availability(
    parque: Parque,
    fecha: str,
    use_cases=Depends(get_use_cases),
) -> SlotAvailabilityResponse:
    result = await use_cases["slot_availability"].execute(parque, service_date_or_400(fecha, "fecha"))
    return SlotAvailabilityResponse.from_result(result)
