def test_default_configuration(client):
    res = client.get("/api/config")

    assert res.status_code == 200
    body = res.json()
    assert body["reservasAbiertas"] is True
    assert body["paquetesActivos"] == ["mini", "mediano", "full"]
    assert body["parquesActivos"] == ["Maracaibo", "Caracas", "Punto Fijo"]
    assert body["capacidadPorPaquete"] == {"mini": 30, "mediano": 60, "full": 80}
    assert body["fechasBloqueadas"] == []
    assert body["updatedAt"] is None


def test_update_requires_admin_key(client):
    res = client.put("/api/config", json={"reservasAbiertas": False})

    assert res.status_code == 401


def test_partial_update(client, admin_headers):
    res = client.put(
        "/api/config",
        json={"fechasBloqueadas": ["2025-12-31", "2025-12-24"], "capacidadPorPaquete": {"full": 100}},
        headers=admin_headers,
    )

    assert res.status_code == 200
    body = res.json()
    assert body["fechasBloqueadas"] == ["2025-12-24", "2025-12-31"]
    assert body["capacidadPorPaquete"] == {"mini": 30, "mediano": 60, "full": 100}
    assert body["reservasAbiertas"] is True
    assert body["updatedAt"] is not None
    assert client.get("/api/config").json() == body


def test_update_rejects_unknown_values(client, admin_headers):
    res = client.put("/api/config", json={"paquetesActivos": ["mini", "gigante"]}, headers=admin_headers)

    assert res.status_code == 400
    assert res.json()["error"] == "VALIDATION_ERROR"


def test_update_rejects_unknown_fields(client, admin_headers):
    res = client.put("/api/config", json={"foo": 1}, headers=admin_headers)

    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert "foo" in body["fields"]


def test_update_rejects_non_positive_capacity(client, admin_headers):
    res = client.put("/api/config", json={"capacidadPorPaquete": {"mini": 0}}, headers=admin_headers)

    assert res.status_code == 400


def test_closed_bookings_refuse_new_reservations(client, admin_headers, reservation_payload):
    client.put("/api/config", json={"reservasAbiertas": False}, headers=admin_headers)

    res = client.post("/api/reservations", json=reservation_payload)

    assert res.status_code == 409
    assert res.json()["error"] == "RESERVATIONS_CLOSED"


def test_blocked_date_refuses_new_reservations(client, admin_headers, reservation_payload):
    client.put("/api/config", json={"fechasBloqueadas": ["2025-12-25"]}, headers=admin_headers)

    res = client.post("/api/reservations", json=reservation_payload)
    availability = client.get(
        "/api/reservations/availability", params={"parque": "Caracas", "fecha": "2025-12-25"}
    ).json()

    assert res.status_code == 400
    assert "fechaServicio" in res.json()["fields"]
    assert availability["fechaBloqueada"] is True
    assert not any(h["disponible"] for h in availability["horarios"])


def test_inactive_package_refuses_new_reservations(client, admin_headers, reservation_payload):
    client.put("/api/config", json={"paquetesActivos": ["mediano", "full"]}, headers=admin_headers)

    res = client.post("/api/reservations", json=reservation_payload)

    assert res.status_code == 400
    assert list(res.json()["fields"]) == ["paquete"]
