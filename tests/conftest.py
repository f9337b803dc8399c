"""
Pytest configuration and shared fixtures.

Este módulo provee fixtures reutilizables para:
- Settings apuntando a una base SQLite en archivo, una por test
- Cliente HTTP de prueba (FastAPI TestClient) con el lifespan real
- Store conectado para pruebas a nivel de casos de uso
- Datos de prueba (payload de reserva, cabeceras de administrador)
"""

from collections.abc import AsyncGenerator, Generator
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from brincapark.api.dependencies import get_clock, get_use_cases
from brincapark.application.interfaces.clock import FakeClock
from brincapark.config import Settings
from brincapark.infrastructure.db.engine import Store
from brincapark.main import create_app

ADMIN_KEY = "test-admin-key"


# ============================================================================
# CONFIGURACIÓN
# ============================================================================


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'brincapark.db'}",
        admin_api_key=ADMIN_KEY,
        log_level="WARNING",
    )


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock(datetime(2025, 11, 1, 12, 0, tzinfo=timezone.utc))


# ============================================================================
# FIXTURES DE CLIENTE HTTP
# ============================================================================


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """TestClient que ejecuta el lifespan real (conexión y creación de tablas)."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def client_with_fake_clock(app, fake_clock) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_clock] = lambda: fake_clock
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"X-Admin-Key": ADMIN_KEY}


# ============================================================================
# FIXTURES DE STORE
# ============================================================================


@pytest_asyncio.fixture
async def store(settings) -> AsyncGenerator[Store, None]:
    store = Store.from_settings(settings)
    await store.connect()
    yield store
    await store.dispose()


@pytest_asyncio.fixture
async def session(store) -> AsyncGenerator[AsyncSession, None]:
    async with store.sessionmaker() as session:
        yield session


@pytest.fixture
def use_cases(session, fake_clock) -> dict:
    """Los mismos casos de uso que arma la API, sobre una sesión de prueba."""
    return get_use_cases(session=session, clock=fake_clock)


# ============================================================================
# FIXTURES DE DATOS DE PRUEBA
# ============================================================================


@pytest.fixture
def reservation_payload() -> dict:
    """
    Payload de ejemplo para crear una reserva.
    Reutilizable en múltiples tests.
    """
    return {
        "nombreCompleto": "Ana Pérez",
        "correo": "ana.perez@gmail.com",
        "telefono": "+58 414-1234567",
        "paquete": "mini",
        "fechaServicio": "2025-12-25",
        "horaReservacion": "10am-1pm",
        "parque": "Caracas",
        "estadoUbicacion": "Miranda",
        "tipoEvento": "Cumpleaños",
    }


@pytest.fixture
def reservation_fields(reservation_payload) -> dict:
    """El mismo payload con los nombres de atributo en Python."""
    return {
        "nombre_completo": reservation_payload["nombreCompleto"],
        "correo": reservation_payload["correo"],
        "telefono": reservation_payload["telefono"],
        "paquete": reservation_payload["paquete"],
        "fecha_servicio": reservation_payload["fechaServicio"],
        "hora_reservacion": reservation_payload["horaReservacion"],
        "parque": reservation_payload["parque"],
        "estado_ubicacion": reservation_payload["estadoUbicacion"],
        "tipo_evento": reservation_payload["tipoEvento"],
    }
