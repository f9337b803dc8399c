from fastapi import APIRouter, Depends

from brincapark.api.dependencies import get_use_cases, require_admin
from brincapark.api.routers._filters import reservation_filter
from brincapark.api.schemas.reservations import ReservationResponse, UpdateStatusRequest
from brincapark.domain.entities.reservation import ReservationFilter

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/reservations", response_model=list[ReservationResponse])
async def list_reservations(
    criteria: ReservationFilter = Depends(reservation_filter),
    use_cases=Depends(get_use_cases),
) -> list[ReservationResponse]:
    reservations = await use_cases["list_reservations"].execute(criteria)
    return [ReservationResponse.from_entity(r) for r in reservations]


@router.get("/reservations/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(
    reservation_id: str,
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    reservation = await use_cases["get_reservation"].execute(reservation_id)
    return ReservationResponse.from_entity(reservation)


@router.patch("/reservations/{reservation_id}", response_model=ReservationResponse)
async def update_reservation_status(
    reservation_id: str,
    payload: UpdateStatusRequest,
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    reservation = await use_cases["transition_reservation"].execute(
        reservation_id, payload.estado_reserva
    )
    return ReservationResponse.from_entity(reservation)


@router.post("/reservations/{reservation_id}/approve", response_model=ReservationResponse)
async def approve_reservation(
    reservation_id: str,
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    reservation = await use_cases["transition_reservation"].approve(reservation_id)
    return ReservationResponse.from_entity(reservation)


@router.post("/reservations/{reservation_id}/cancel", response_model=ReservationResponse)
async def cancel_reservation(
    reservation_id: str,
    use_cases=Depends(get_use_cases),
) -> ReservationResponse:
    reservation = await use_cases["transition_reservation"].cancel(reservation_id)
    return ReservationResponse.from_entity(reservation)
