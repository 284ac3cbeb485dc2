"""Vehicle, driver, company and rate card endpoint tests."""
from datetime import date

from sqlalchemy import select

from app.models import Booking


# ==================== VEHICLES ====================

async def test_create_vehicle_defaults_to_available(client):
    response = await client.post(
        "/api/v1/vehicles",
        json={"registration_number": "mh12ab1234", "vehicle_type": "Truck", "capacity": "4 Tons"},
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["registration_number"] == "MH12AB1234"
    assert data["status"] == "Available"
    assert data["assignedParcels"] == 0


async def test_duplicate_vehicle_is_409(client, seed):
    await seed.vehicle("MH12AB1234")

    response = await client.post("/api/v1/vehicles", json={"registration_number": "MH12AB1234"})

    assert response.status_code == 409
    assert response.json()["error"] == "Conflict"


async def test_list_vehicles_counts_in_transit_parcels(client, seed):
    company = await seed.company()
    driver = await seed.driver()
    truck = await seed.vehicle("MH14CD5678", current_driver_id=driver.id)
    await seed.vehicle("DL04EF9012")
    await seed.booking(company, vehicle=truck, status="IN-TRANSIT")
    await seed.booking(company, vehicle=truck, status="IN-TRANSIT")
    await seed.booking(company, vehicle=truck, status="DELIVERED")

    body = (await client.get("/api/v1/vehicles")).json()

    assert body["count"] == 2
    by_reg = {v["registration_number"]: v for v in body["data"]}
    assert [v["registration_number"] for v in body["data"]] == ["DL04EF9012", "MH14CD5678"]
    assert by_reg["MH14CD5678"]["assignedParcels"] == 2
    assert by_reg["MH14CD5678"]["driver"]["name"] == "Ramesh Yadav"
    assert by_reg["DL04EF9012"]["assignedParcels"] == 0


async def test_dispatch_moves_booked_parcels_in_transit(client, seed, db):
    company = await seed.company()
    truck = await seed.vehicle()
    other = await seed.vehicle("KA01GH3456")
    booked = await seed.booking(company, vehicle=truck)
    delivered = await seed.booking(company, vehicle=truck, status="DELIVERED")
    untouched = await seed.booking(company, vehicle=other)

    response = await client.post(f"/api/v1/vehicles/{truck.id}/dispatch")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["bookingsDispatched"] == 1
    assert data["vehicle"]["status"] == "Dispatched"
    assert data["vehicle"]["assignedParcels"] == 1

    rows = (
        await db.execute(
            select(Booking.id, Booking.status, Booking.dispatched_at)
            .execution_options(populate_existing=True)
        )
    ).all()
    status_by_id = {row.id: (row.status, row.dispatched_at) for row in rows}
    assert status_by_id[booked.id][0] == "IN-TRANSIT"
    assert status_by_id[booked.id][1] is not None
    assert status_by_id[delivered.id][0] == "DELIVERED"
    assert status_by_id[untouched.id][0] == "BOOKED"


async def test_dispatch_unknown_vehicle_is_404(client, missing_id):
    response = await client.post(f"/api/v1/vehicles/{missing_id}/dispatch")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Not found", "message": "Vehicle not found"}


# ==================== DRIVERS ====================

async def test_create_and_list_drivers(client):
    response = await client.post(
        "/api/v1/drivers", json={"name": "Suresh Patil", "phone": "9812345671"}
    )
    assert response.status_code == 201

    body = (await client.get("/api/v1/drivers")).json()
    assert body["count"] == 1
    assert body["data"][0]["name"] == "Suresh Patil"


# ==================== COMPANIES ====================

async def test_company_names_unique_ignoring_case(client):
    first = await client.post("/api/v1/companies", json={"name": "TechCorp"})
    second = await client.post("/api/v1/companies", json={"name": "techcorp"})

    assert first.status_code == 201
    assert first.json()["data"]["status"] == "Active"
    assert second.status_code == 409


async def test_list_and_get_companies(client, seed, missing_id):
    await seed.company("Zeta Movers")
    alpha = await seed.company("Alpha Traders")

    body = (await client.get("/api/v1/companies")).json()
    assert [c["name"] for c in body["data"]] == ["Alpha Traders", "Zeta Movers"]

    response = await client.get(f"/api/v1/companies/{alpha.id}")
    assert response.json()["data"]["name"] == "Alpha Traders"

    response = await client.get(f"/api/v1/companies/{missing_id}")
    assert response.status_code == 404


# ==================== RATE CARDS ====================

async def test_upsert_rate_card_by_name_replaces_existing(client, seed):
    company = await seed.company("TechCorp")
    await seed.rate_card(company)

    response = await client.put(
        "/api/v1/ratecards",
        json={
            "company_name": "techcorp",
            "base_rate": "650",
            "per_article_rate": "20",
            "parcel_type_surcharges": {"Heavy": "30"},
            "zone_rate": "120",
            "effective_from": "2024-04-01",
        },
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["company_name"] == "TechCorp"
    assert data["base_rate"] == "650.00"
    assert data["parcel_type_surcharges"] == {"Heavy": "30.00"}
    assert data["effective_from"] == "2024-04-01"

    body = (await client.get("/api/v1/ratecards")).json()
    assert body["count"] == 1
    assert body["data"][0]["zone_rate"] == "120.00"


async def test_upsert_rate_card_by_id_creates(client, seed):
    company = await seed.company("GlobalTrade")

    response = await client.put(
        "/api/v1/ratecards", json={"company_id": str(company.id), "base_rate": "450"}
    )

    assert response.status_code == 200
    assert response.json()["data"]["effective_from"] == date.today().isoformat()


async def test_upsert_rate_card_unknown_company_is_404(client):
    response = await client.put(
        "/api/v1/ratecards", json={"company_name": "Nobody", "base_rate": "100"}
    )

    assert response.status_code == 404
    assert response.json()["success"] is False


async def test_upsert_rate_card_requires_company(client):
    response = await client.put("/api/v1/ratecards", json={"base_rate": "100"})

    assert response.status_code == 422
