"""
Tests de API para clientes y vehículos, incluida la política de borrado.
"""

import uuid

from sqlalchemy import func, select

from taller.models import Appointment, Job, Vehicle

from helpers import API


# ============================================================
# Clientes
# ============================================================


class TestClientsApi:
    """Tests para /clients."""

    async def test_create_returns_input_fields(self, api_client):
        payload = {"name": "Ana", "phone": "555-1", "email": "ana@mail.com", "address": "Calle 1"}

        response = await api_client.post(f"{API}/clients", json=payload)

        assert response.status_code == 201
        body = response.json()
        for key, value in payload.items():
            assert body[key] == value
        uuid.UUID(body["id"])
        assert body["vehicles"] == []
        assert body["appointmentCount"] == 0

    async def test_create_missing_phone(self, api_client):
        response = await api_client.post(f"{API}/clients", json={"name": "Ana"})

        assert response.status_code == 400
        assert "phone" in response.json()["detail"]

    async def test_list_ordered_by_name_with_counts(
        self, api_client, create_client, create_vehicle, create_appointment
    ):
        zoe = await create_client(name="Zoe", phone="555-9")
        ana = await create_client(name="Ana", phone="555-1")
        vehicle = await create_vehicle(ana["id"])
        await create_appointment(ana["id"], vehicle["id"])
        await create_appointment(ana["id"], vehicle["id"], start_time="11:00")

        response = await api_client.get(f"{API}/clients")

        assert response.status_code == 200
        body = response.json()
        assert [c["name"] for c in body] == ["Ana", "Zoe"]
        assert body[0]["appointmentCount"] == 2
        assert body[0]["vehicles"][0]["plate"] == "XYZ999"
        assert body[1]["id"] == zoe["id"]
        assert body[1]["appointmentCount"] == 0

    async def test_get_not_found(self, api_client):
        response = await api_client.get(f"{API}/clients/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error_code"] == "RESOURCE_NOT_FOUND"

    async def test_malformed_id_is_bad_request(self, api_client):
        response = await api_client.get(f"{API}/clients/no-es-un-uuid")
        assert response.status_code == 400

    async def test_partial_update(self, api_client, create_client):
        client = await create_client()

        response = await api_client.put(
            f"{API}/clients/{client['id']}", json={"phone": "555-7"}
        )

        assert response.status_code == 200
        assert response.json()["phone"] == "555-7"
        assert response.json()["name"] == "Ana"

    async def test_update_not_found(self, api_client):
        response = await api_client.put(f"{API}/clients/{uuid.uuid4()}", json={"name": "X"})
        assert response.status_code == 404

    async def test_delete_not_found(self, api_client):
        response = await api_client.delete(f"{API}/clients/{uuid.uuid4()}")
        assert response.status_code == 404


# ============================================================
# Vehículos
# ============================================================


class TestVehiclesApi:
    """Tests para /vehicles."""

    async def test_plate_stored_upper_case(self, api_client, create_client, create_vehicle):
        client = await create_client()

        vehicle = await create_vehicle(client["id"], plate="abc123")

        assert vehicle["plate"] == "ABC123"
        assert vehicle["client"] == {"id": client["id"], "name": "Ana", "phone": "555-1"}

    async def test_duplicate_plate_any_case(self, api_client, create_client, create_vehicle):
        """Test la misma patente en otra combinación de mayúsculas es duplicada."""
        client = await create_client()
        await create_vehicle(client["id"], plate="abc123")

        response = await api_client.post(
            f"{API}/vehicles",
            json={"plate": "ABC123", "make": "Fiat", "model": "Uno", "clientId": client["id"]},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Ya existe un vehículo con esa patente"
        assert response.json()["error_code"] == "DUPLICATE_RESOURCE"

    async def test_update_to_taken_plate(self, api_client, create_client, create_vehicle):
        client = await create_client()
        await create_vehicle(client["id"], plate="abc123")
        other = await create_vehicle(client["id"], plate="def456")

        response = await api_client.put(
            f"{API}/vehicles/{other['id']}", json={"plate": "Abc123"}
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "DUPLICATE_RESOURCE"

    async def test_update_renormalizes_plate(self, api_client, create_client, create_vehicle):
        client = await create_client()
        vehicle = await create_vehicle(client["id"], plate="abc123")

        response = await api_client.put(
            f"{API}/vehicles/{vehicle['id']}", json={"plate": " ghi789 ", "color": "Rojo"}
        )

        assert response.status_code == 200
        assert response.json()["plate"] == "GHI789"
        assert response.json()["color"] == "Rojo"

    async def test_missing_fields(self, api_client, create_client):
        client = await create_client()

        response = await api_client.post(
            f"{API}/vehicles", json={"plate": "abc123", "clientId": client["id"]}
        )

        assert response.status_code == 400

    async def test_unknown_client(self, api_client):
        response = await api_client.post(
            f"{API}/vehicles",
            json={"plate": "abc123", "make": "Ford", "model": "Ka", "clientId": str(uuid.uuid4())},
        )
        assert response.status_code == 404

    async def test_list_filtered_and_ordered(self, api_client, create_client, create_vehicle):
        ana = await create_client()
        juan = await create_client(name="Juan", phone="555-2")
        await create_vehicle(ana["id"], plate="zzz111")
        await create_vehicle(ana["id"], plate="aaa111")
        await create_vehicle(juan["id"], plate="mmm111")

        all_response = await api_client.get(f"{API}/vehicles")
        ana_response = await api_client.get(f"{API}/vehicles", params={"clientId": ana["id"]})

        assert [v["plate"] for v in all_response.json()] == ["AAA111", "MMM111", "ZZZ111"]
        assert [v["plate"] for v in ana_response.json()] == ["AAA111", "ZZZ111"]


# ============================================================
# Política de borrado
# ============================================================


class TestDeletePolicy:
    """Tests para el borrado en cascada y restringido."""

    async def test_delete_client_cascades(
        self, api_client, session_factory, owner, create_appointment
    ):
        """Test borrar un cliente borra sus vehículos, turnos y trabajos."""
        client, vehicle = owner
        appointment = await create_appointment(client["id"], vehicle["id"])
        await api_client.post(
            f"{API}/appointments/{appointment['id']}/jobs",
            json={"description": "Cambio de aceite", "price": 1500},
        )

        response = await api_client.delete(f"{API}/clients/{client['id']}")

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert (await api_client.get(f"{API}/clients/{client['id']}")).status_code == 404
        assert (await api_client.get(f"{API}/vehicles/{vehicle['id']}")).status_code == 404
        assert (
            await api_client.get(f"{API}/appointments/{appointment['id']}")
        ).status_code == 404

        async with session_factory() as session:
            for model in (Vehicle, Appointment, Job):
                count = (await session.execute(select(func.count()).select_from(model))).scalar()
                assert count == 0

    async def test_delete_vehicle_with_appointments_is_restricted(
        self, api_client, owner, create_appointment
    ):
        client, vehicle = owner
        appointment = await create_appointment(client["id"], vehicle["id"])

        response = await api_client.delete(f"{API}/vehicles/{vehicle['id']}")

        assert response.status_code == 400
        assert response.json()["error_code"] == "CONFLICT_STATE"
        assert (await api_client.get(f"{API}/vehicles/{vehicle['id']}")).status_code == 200

        await api_client.delete(f"{API}/appointments/{appointment['id']}")
        response = await api_client.delete(f"{API}/vehicles/{vehicle['id']}")

        assert response.status_code == 200
        assert response.json() == {"success": True}

    async def test_delete_vehicle_keeps_client(self, api_client, owner):
        client, vehicle = owner

        await api_client.delete(f"{API}/vehicles/{vehicle['id']}")

        response = await api_client.get(f"{API}/clients/{client['id']}")
        assert response.status_code == 200
        assert response.json()["vehicles"] == []

    async def test_change_owner_with_appointments_is_restricted(
        self, api_client, create_client, owner, create_appointment
    ):
        """Test un vehículo con turnos no cambia de dueño."""
        ana, vehicle = owner
        await create_appointment(ana["id"], vehicle["id"])
        bob = await create_client(name="Bob", phone="555-3")

        response = await api_client.put(
            f"{API}/vehicles/{vehicle['id']}", json={"clientId": bob["id"]}
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "CONFLICT_STATE"
        current = await api_client.get(f"{API}/vehicles/{vehicle['id']}")
        assert current.json()["clientId"] == ana["id"]

        response = await api_client.delete(f"{API}/clients/{bob['id']}")
        assert response.status_code == 200

    async def test_change_owner_without_appointments(self, api_client, create_client, owner):
        _, vehicle = owner
        bob = await create_client(name="Bob", phone="555-3")

        response = await api_client.put(
            f"{API}/vehicles/{vehicle['id']}", json={"clientId": bob["id"]}
        )

        assert response.status_code == 200
        assert response.json()["client"]["name"] == "Bob"

        await api_client.delete(f"{API}/clients/{bob['id']}")
        assert (await api_client.get(f"{API}/vehicles/{vehicle['id']}")).status_code == 404
