"""Tests for table endpoints and the seating workflow"""

import pytest
from httpx import AsyncClient

from tests.conftest import reservation_payload


async def seat(client: AsyncClient, table_id, reservation_id):
    return await client.put(
        f"/tables/{table_id}/seat",
        json={"data": {"reservation_id": reservation_id}},
    )


@pytest.mark.asyncio
async def test_create_table(client: AsyncClient):
    response = await client.post("/tables", json={"data": {"table_name": "Patio", "capacity": 4}})
    
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["table_id"] > 0
    assert data["table_name"] == "Patio"
    assert data["capacity"] == 4
    assert data["occupied"] is False
    assert data["reservation_id"] is None


@pytest.mark.asyncio
@pytest.mark.parametrize("payload,message", [
    ({"table_name": "A", "capacity": 4}, "Invalid table_name"),
    ({"capacity": 4}, "Invalid table_name"),
    ({"table_name": "Patio", "capacity": 0}, "Invalid capacity"),
    ({"table_name": "Patio", "capacity": "4"}, "Invalid capacity"),
    ({"table_name": "Patio"}, "Invalid capacity"),
])
async def test_create_table_invalid(client: AsyncClient, payload, message):
    response = await client.post("/tables", json={"data": payload})
    
    assert response.status_code == 400
    assert response.json()["error"] == message


@pytest.mark.asyncio
async def test_create_table_without_data(client: AsyncClient):
    response = await client.post("/tables", json={})
    
    assert response.status_code == 400
    assert response.json()["error"] == "Data Missing!"


@pytest.mark.asyncio
async def test_create_table_with_reservation_seats_it(client: AsyncClient, booked_reservation):
    response = await client.post(
        "/tables",
        json={"data": {
            "table_name": "Patio",
            "capacity": 4,
            "reservation_id": booked_reservation.reservation_id,
        }},
    )
    
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["occupied"] is True
    assert data["reservation_id"] == booked_reservation.reservation_id
    
    reservation = await client.get(f"/reservations/{booked_reservation.reservation_id}")
    assert reservation.json()["data"]["status"] == "seated"


@pytest.mark.asyncio
async def test_list_tables_sorted_by_name(client: AsyncClient, test_tables):
    response = await client.get("/tables")
    
    assert response.status_code == 200
    names = [t["table_name"] for t in response.json()["data"]]
    assert names == ["#1", "#2", "Bar #1", "Bar #2"]


@pytest.mark.asyncio
async def test_get_table(client: AsyncClient, test_tables):
    table = test_tables[2]
    
    response = await client.get(f"/tables/{table.table_id}")
    
    assert response.status_code == 200
    assert response.json()["data"]["table_name"] == "#1"


@pytest.mark.asyncio
async def test_get_missing_table(client: AsyncClient):
    response = await client.get("/tables/999")
    
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_seat_reservation(client: AsyncClient, test_tables, booked_reservation):
    table = test_tables[2]
    
    response = await seat(client, table.table_id, booked_reservation.reservation_id)
    
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["occupied"] is True
    assert data["reservation_id"] == booked_reservation.reservation_id
    
    reservation = await client.get(f"/reservations/{booked_reservation.reservation_id}")
    assert reservation.json()["data"]["status"] == "seated"


@pytest.mark.asyncio
async def test_seat_over_capacity(client: AsyncClient, test_tables, booked_reservation):
    bar = test_tables[0]
    
    response = await seat(client, bar.table_id, booked_reservation.reservation_id)
    
    assert response.status_code == 400
    assert response.json()["error"] == "The max capacity for Bar #1 is 1!"


@pytest.mark.asyncio
async def test_seat_exact_capacity(client: AsyncClient):
    created = await client.post("/reservations", json={"data": reservation_payload(people=6)})
    table = await client.post("/tables", json={"data": {"table_name": "Booth", "capacity": 6}})
    
    response = await seat(
        client, table.json()["data"]["table_id"], created.json()["data"]["reservation_id"]
    )
    
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_seat_occupied_table(client: AsyncClient, test_tables, booked_reservation):
    table = test_tables[2]
    other = await client.post("/reservations", json={"data": reservation_payload(people=2)})
    await seat(client, table.table_id, booked_reservation.reservation_id)
    
    response = await seat(client, table.table_id, other.json()["data"]["reservation_id"])
    
    assert response.status_code == 400
    assert response.json()["error"] == "#1 is already occupied!"


@pytest.mark.asyncio
async def test_seat_already_seated_party(client: AsyncClient, test_tables, booked_reservation):
    await seat(client, test_tables[2].table_id, booked_reservation.reservation_id)
    
    response = await seat(client, test_tables[3].table_id, booked_reservation.reservation_id)
    
    assert response.status_code == 400
    assert response.json()["error"] == "Party already seated"


@pytest.mark.asyncio
async def test_seat_missing_reservation_id(client: AsyncClient, test_tables):
    response = await client.put(f"/tables/{test_tables[2].table_id}/seat", json={"data": {}})
    
    assert response.status_code == 400
    assert response.json()["error"] == "Missing reservation_id"


@pytest.mark.asyncio
async def test_seat_without_data(client: AsyncClient, test_tables):
    response = await client.put(f"/tables/{test_tables[2].table_id}/seat", json={})
    
    assert response.status_code == 400
    assert response.json()["error"] == "Data Missing!"


@pytest.mark.asyncio
async def test_seat_unknown_reservation(client: AsyncClient, test_tables):
    response = await seat(client, test_tables[2].table_id, 999)
    
    assert response.status_code == 404
    assert "999" in response.json()["error"]


@pytest.mark.asyncio
async def test_seat_unknown_table(client: AsyncClient, booked_reservation):
    response = await seat(client, 999, booked_reservation.reservation_id)
    
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_seat_cancelled_reservation(client: AsyncClient, test_tables, booked_reservation):
    await client.put(
        f"/reservations/{booked_reservation.reservation_id}/status",
        json={"data": {"status": "cancelled"}},
    )
    
    response = await seat(client, test_tables[2].table_id, booked_reservation.reservation_id)
    
    assert response.status_code == 400
    
    table = await client.get(f"/tables/{test_tables[2].table_id}")
    assert table.json()["data"]["occupied"] is False


@pytest.mark.asyncio
async def test_finish_unoccupied_table(client: AsyncClient, test_tables):
    response = await client.delete(f"/tables/{test_tables[2].table_id}/seat")
    
    assert response.status_code == 400
    assert response.json()["error"] == "#1 is not occupied"


@pytest.mark.asyncio
async def test_finish_missing_table(client: AsyncClient):
    response = await client.delete("/tables/999/seat")
    
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_finish_table(client: AsyncClient, test_tables, booked_reservation):
    table = test_tables[2]
    await seat(client, table.table_id, booked_reservation.reservation_id)
    
    response = await client.delete(f"/tables/{table.table_id}/seat")
    
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["occupied"] is False
    assert data["reservation_id"] is None
    
    reservation = await client.get(f"/reservations/{booked_reservation.reservation_id}")
    assert reservation.json()["data"]["status"] == "finished"


@pytest.mark.asyncio
async def test_cancelling_seated_reservation_frees_table(client: AsyncClient, test_tables, booked_reservation):
    table = test_tables[2]
    await seat(client, table.table_id, booked_reservation.reservation_id)
    
    response = await client.put(
        f"/reservations/{booked_reservation.reservation_id}/status",
        json={"data": {"status": "cancelled"}},
    )
    
    assert response.status_code == 200
    freed = await client.get(f"/tables/{table.table_id}")
    assert freed.json()["data"]["occupied"] is False
    assert freed.json()["data"]["reservation_id"] is None


@pytest.mark.asyncio
async def test_full_seating_flow(client: AsyncClient):
    """
    Create a reservation, seat it at the bar, then finish:
    1. Reservation starts booked
    2. Seating occupies the table and seats the party
    3. Finishing frees the table and finishes the party
    """
    # Step 1: Create reservation
    created = await client.post("/reservations", json={"data": reservation_payload()})
    
    assert created.status_code == 201
    reservation = created.json()["data"]
    assert reservation["status"] == "booked"
    reservation_id = reservation["reservation_id"]
    
    table_response = await client.post(
        "/tables", json={"data": {"table_name": "Bar #1", "capacity": 6}}
    )
    assert table_response.status_code == 201
    table_id = table_response.json()["data"]["table_id"]
    
    # Step 2: Seat it
    seated = await seat(client, table_id, reservation_id)
    
    assert seated.status_code == 200
    assert seated.json()["data"]["occupied"] is True
    assert seated.json()["data"]["reservation_id"] == reservation_id
    status = await client.get(f"/reservations/{reservation_id}")
    assert status.json()["data"]["status"] == "seated"
    
    # Step 3: Finish
    finished = await client.delete(f"/tables/{table_id}/seat")
    
    assert finished.status_code == 200
    assert finished.json()["data"]["occupied"] is False
    assert finished.json()["data"]["reservation_id"] is None
    status = await client.get(f"/reservations/{reservation_id}")
    assert status.json()["data"]["status"] == "finished"
    
    # Finished parties drop off the day's list
    listing = await client.get("/reservations", params={"date": reservation["reservation_date"]})
    assert reservation_id not in [r["reservation_id"] for r in listing.json()["data"]]


@pytest.mark.asyncio
async def test_status_route_cannot_seat(client: AsyncClient, test_tables, booked_reservation):
    """Seating goes through a table so the pair stays consistent"""
    response = await client.put(
        f"/reservations/{booked_reservation.reservation_id}/status",
        json={"data": {"status": "seated"}},
    )
    
    assert response.status_code == 400
    assert "/tables/{table_id}/seat" in response.json()["error"]
    
    reservation = await client.get(f"/reservations/{booked_reservation.reservation_id}")
    assert reservation.json()["data"]["status"] == "booked"
    
    seated = await seat(client, test_tables[2].table_id, booked_reservation.reservation_id)
    assert seated.status_code == 200


@pytest.mark.asyncio
async def test_status_route_cannot_finish_booked(client: AsyncClient, booked_reservation):
    response = await client.put(
        f"/reservations/{booked_reservation.reservation_id}/status",
        json={"data": {"status": "finished"}},
    )
    
    assert response.status_code == 400
    assert response.json()["error"] == "Only a seated reservation can be finished"


@pytest.mark.asyncio
async def test_status_route_finishes_seated_and_frees_table(client: AsyncClient, test_tables, booked_reservation):
    table = test_tables[2]
    await seat(client, table.table_id, booked_reservation.reservation_id)
    
    response = await client.put(
        f"/reservations/{booked_reservation.reservation_id}/status",
        json={"data": {"status": "finished"}},
    )
    
    assert response.status_code == 200
    assert response.json()["data"] == {"status": "finished"}
    freed = await client.get(f"/tables/{table.table_id}")
    assert freed.json()["data"]["occupied"] is False
    assert freed.json()["data"]["reservation_id"] is None


@pytest.mark.asyncio
async def test_edit_seated_party_beyond_table_capacity(client: AsyncClient, test_tables, booked_reservation):
    table = test_tables[2]
    await seat(client, table.table_id, booked_reservation.reservation_id)
    
    response = await client.put(
        f"/reservations/{booked_reservation.reservation_id}/edit",
        json={"data": reservation_payload(first_name="Rick", people=8)},
    )
    
    assert response.status_code == 400
    assert response.json()["error"] == "The max capacity for #1 is 6!"
    
    reservation = await client.get(f"/reservations/{booked_reservation.reservation_id}")
    assert reservation.json()["data"]["people"] == 4


@pytest.mark.asyncio
async def test_edit_seated_party_within_table_capacity(client: AsyncClient, test_tables, booked_reservation):
    await seat(client, test_tables[2].table_id, booked_reservation.reservation_id)
    
    response = await client.put(
        f"/reservations/{booked_reservation.reservation_id}/edit",
        json={"data": reservation_payload(first_name="Rick", people=6)},
    )
    
    assert response.status_code == 200
    assert response.json()["data"]["people"] == 6
    assert response.json()["data"]["status"] == "seated"
