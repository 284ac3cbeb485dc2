"""Booking endpoint tests."""
from datetime import date

import pytest


@pytest.fixture
async def company(seed):
    company = await seed.company("TechCorp")
    await seed.rate_card(company)
    return company


def booking_payload(company, **overrides):
    payload = {
        "company_id": str(company.id),
        "booking_date": "2024-01-15",
        "consignee_name": "Asha Traders",
        "origin": "Mumbai",
        "destination": "Pune",
        "destination_pincode": "411001",
        "article_count": 4,
        "parcel_type": "Express",
    }
    payload.update(overrides)
    return payload


async def test_create_booking_priced_from_rate_card(client, company):
    response = await client.post("/api/v1/bookings", json=booking_payload(company))

    assert response.status_code == 201
    data = response.json()["data"]
    # 500 + 15 * 4 + 25 * 4
    assert data["total_amount"] == "660.00"
    assert data["gst_amount"] == "118.80"
    assert data["grand_total"] == "778.80"
    assert data["status"] == "BOOKED"
    assert data["lr_number"] == "LR-20240115-0001"
    assert data["company"]["name"] == "TechCorp"


async def test_lr_numbers_are_sequential_per_day(client, company):
    first = await client.post("/api/v1/bookings", json=booking_payload(company))
    second = await client.post("/api/v1/bookings", json=booking_payload(company))

    assert first.json()["data"]["lr_number"] == "LR-20240115-0001"
    assert second.json()["data"]["lr_number"] == "LR-20240115-0002"


async def test_explicit_amounts_are_kept(client, company):
    payload = booking_payload(company, total_amount="100", gst_amount="18", grand_total="118")
    data = (await client.post("/api/v1/bookings", json=payload)).json()["data"]

    assert data["grand_total"] == "118.00"


async def test_company_without_rate_card_prices_zero(client, seed):
    other = await seed.company("NoCard")
    data = (await client.post("/api/v1/bookings", json=booking_payload(other))).json()["data"]

    assert data["grand_total"] == "0.00"


async def test_parcel_type_defaults_to_standard(client, company):
    payload = booking_payload(company)
    del payload["parcel_type"]

    response = await client.post("/api/v1/bookings", json=payload)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["parcel_type"] == "Standard"
    # No Express surcharge: 500 + 15 * 4
    assert data["total_amount"] == "560.00"


async def test_negative_amount_rejected(client, company):
    response = await client.post("/api/v1/bookings", json=booking_payload(company, grand_total="-5"))

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Validation failed"


async def test_unknown_company_is_404(client, missing_id):
    response = await client.post(
        "/api/v1/bookings", json={"company_id": missing_id, "article_count": 1}
    )

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Not found", "message": "Company not found"}


async def test_duplicate_lr_number_is_409(client, company):
    payload = booking_payload(company, lr_number="LR-MANUAL-1")
    await client.post("/api/v1/bookings", json=payload)
    response = await client.post("/api/v1/bookings", json=payload)

    assert response.status_code == 409
    assert response.json()["success"] is False


async def test_batch_create(client, company):
    payload = {"bookings": [booking_payload(company), booking_payload(company, parcel_type="Standard")]}
    response = await client.post("/api/v1/bookings/batch", json=payload)

    assert response.status_code == 201
    body = response.json()
    assert body["count"] == 2
    assert [b["lr_number"] for b in body["data"]] == ["LR-20240115-0001", "LR-20240115-0002"]


async def test_batch_is_all_or_nothing(client, company, missing_id):
    payload = {"bookings": [booking_payload(company), booking_payload(company, company_id=missing_id)]}
    response = await client.post("/api/v1/bookings/batch", json=payload)

    assert response.status_code == 404
    assert (await client.get("/api/v1/bookings")).json()["count"] == 0


async def test_list_filters(client, seed, company):
    other = await seed.company("GlobalTrade")
    await seed.booking(company, date(2024, 1, 10), lr_number="LR-20240110-0001")
    await seed.booking(company, date(2024, 2, 10), lr_number="LR-20240210-0001", status="IN-TRANSIT")
    await seed.booking(other, date(2024, 3, 10), lr_number="LR-20240310-0001")

    body = (await client.get("/api/v1/bookings")).json()
    assert body["count"] == 3
    assert body["data"][0]["lr_number"] == "LR-20240310-0001"

    body = (await client.get("/api/v1/bookings", params={"company": "TechCorp"})).json()
    assert body["count"] == 2

    body = (await client.get("/api/v1/bookings", params={"company": "All", "status": "IN-TRANSIT"})).json()
    assert [b["lr_number"] for b in body["data"]] == ["LR-20240210-0001"]

    body = (await client.get("/api/v1/bookings", params={"lrNumber": "20240110"})).json()
    assert body["count"] == 1

    body = (
        await client.get("/api/v1/bookings", params={"dateFrom": "2024-02-01", "dateTo": "2024-03-10"})
    ).json()
    assert body["count"] == 2


async def test_get_booking_404(client, missing_id):
    response = await client.get(f"/api/v1/bookings/{missing_id}")

    assert response.status_code == 404
    assert response.json()["success"] is False


async def test_update_assigns_and_moves_forward(client, seed, company):
    vehicle = await seed.vehicle()
    driver = await seed.driver()
    booking = await seed.booking(company)

    response = await client.put(
        f"/api/v1/bookings/{booking.id}",
        json={"assigned_vehicle_id": str(vehicle.id), "assigned_driver_id": str(driver.id), "status": "IN-TRANSIT"},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "IN-TRANSIT"
    assert data["vehicle"]["registration_number"] == "MH12AB1234"
    assert data["driver"]["name"] == "Ramesh Yadav"
    assert data["dispatched_at"] is not None

    response = await client.put(f"/api/v1/bookings/{booking.id}", json={"status": "DELIVERED"})
    assert response.json()["data"]["delivered_at"] is not None


async def test_backward_status_is_409(client, seed, company):
    booking = await seed.booking(company, status="DELIVERED")

    response = await client.put(f"/api/v1/bookings/{booking.id}", json={"status": "BOOKED"})

    assert response.status_code == 409
    assert response.json()["error"] == "Invalid status transition"


@pytest.mark.parametrize("legacy_status", ["Pending", "Dispatched"])
async def test_legacy_status_can_move_to_any_status(client, seed, company, legacy_status):
    booking = await seed.booking(company, status=legacy_status)

    response = await client.put(f"/api/v1/bookings/{booking.id}", json={"status": "BOOKED"})

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "BOOKED"


async def test_update_with_unknown_vehicle_is_404(client, seed, company, missing_id):
    booking = await seed.booking(company)

    response = await client.put(f"/api/v1/bookings/{booking.id}", json={"assigned_vehicle_id": missing_id})

    assert response.status_code == 404
    assert response.json()["message"] == "Vehicle not found"
