import secrets
from collections.abc import AsyncIterator
from uuid import uuid4

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from brincapark.application.interfaces.clock import Clock, SystemClock
from brincapark.application.use_cases.configuration import (
    GetConfigurationUseCase,
    UpdateConfigurationUseCase,
)
from brincapark.application.use_cases.create_reservation import CreateReservationUseCase
from brincapark.application.use_cases.list_reservations import (
    GetReservationUseCase,
    ListReservationsUseCase,
)
from brincapark.application.use_cases.slot_availability import SlotAvailabilityUseCase
from brincapark.application.use_cases.transition_reservation import TransitionReservationUseCase
from brincapark.config import Settings
from brincapark.domain.errors import UnauthorizedError
from brincapark.infrastructure.db.engine import Store
from brincapark.infrastructure.db.repositories.config_repo_sql import ConfigurationRepoSQL
from brincapark.infrastructure.db.repositories.reservation_repo_sql import ReservationRepoSQL
from brincapark.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager

_system_clock = SystemClock()


def get_settings_from_app(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_clock() -> Clock:
    return _system_clock


async def get_session(store: Store = Depends(get_store)) -> AsyncIterator[AsyncSession]:
    async with store.sessionmaker() as session:
        yield session


def _generate_reservation_id() -> str:
    return uuid4().hex


def get_use_cases(
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
) -> dict:
    reservation_repo = ReservationRepoSQL(session)
    config_repo = ConfigurationRepoSQL(session)
    tx_manager = SQLAlchemyTransactionManager(session)

    return {
        "create_reservation": CreateReservationUseCase(
            reservation_repo=reservation_repo,
            config_repo=config_repo,
            transaction_manager=tx_manager,
            clock=clock,
            id_generator=_generate_reservation_id,
        ),
        "list_reservations": ListReservationsUseCase(
            reservation_repo=reservation_repo,
            transaction_manager=tx_manager,
        ),
        "get_reservation": GetReservationUseCase(
            reservation_repo=reservation_repo,
            transaction_manager=tx_manager,
        ),
        "transition_reservation": TransitionReservationUseCase(
            reservation_repo=reservation_repo,
            transaction_manager=tx_manager,
        ),
        "slot_availability": SlotAvailabilityUseCase(
            reservation_repo=reservation_repo,
            config_repo=config_repo,
            transaction_manager=tx_manager,
        ),
        "get_configuration": GetConfigurationUseCase(
            config_repo=config_repo,
            transaction_manager=tx_manager,
        ),
        "update_configuration": UpdateConfigurationUseCase(
            config_repo=config_repo,
            transaction_manager=tx_manager,
            clock=clock,
        ),
    }


def require_admin(
    settings: Settings = Depends(get_settings_from_app),
    admin_key: str | None = Header(default=None, convert_underscores=False, alias="X-Admin-Key"),
) -> None:
    """Static API key gate for the admin surface; no key configured means no access."""
    expected = settings.admin_api_key
    if not expected or not admin_key:
        raise UnauthorizedError()
    if not secrets.compare_digest(admin_key.encode(), expected.encode()):
        raise UnauthorizedError()
