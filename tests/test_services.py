from washify.domain.services.repository import ServiceRepository
from washify.models import Service, ServiceTier, UserRole

from .conftest import auth_headers


def service_payload(business, **overrides):
    payload = {
        "businessId": business.id,
        "name": "Premium Wash",
        "description": "Wash, wax and tire shine",
        "price": 45.0,
        "duration": 60,
        "tier": "PREMIUM",
    }
    payload.update(overrides)
    return payload


def test_owner_creates_service(client, operator, make_business):
    business = make_business(operator)

    response = client.post(
        "/api/services", json=service_payload(business), headers=auth_headers(operator)
    )

    assert response.status_code == 201
    body = response.json()
    assert body["businessId"] == business.id
    assert body["tier"] == "PREMIUM"
    assert body["business"]["id"] == business.id
    assert body["business"]["name"] == business.name


def test_admin_creates_service_for_any_business(client, admin, operator, make_business):
    business = make_business(operator)

    response = client.post(
        "/api/services", json=service_payload(business), headers=auth_headers(admin)
    )

    assert response.status_code == 201


def test_other_operator_cannot_add_service(client, operator, make_user, make_business):
    business = make_business(operator)
    rival = make_user(UserRole.OPERATOR)

    response = client.post(
        "/api/services", json=service_payload(business), headers=auth_headers(rival)
    )

    assert response.status_code == 403
    assert response.json() == {"error": "You can only create services for businesses you own"}


def test_customer_cannot_create_service(client, customer, operator, make_business):
    business = make_business(operator)

    response = client.post(
        "/api/services", json=service_payload(business), headers=auth_headers(customer)
    )

    assert response.status_code == 403


def test_unknown_business_is_not_found(client, operator):
    response = client.post(
        "/api/services",
        json={
            "businessId": "00000000-0000-4000-8000-000000000000",
            "name": "Wash",
            "description": "Basic",
            "price": 10,
            "duration": 15,
            "tier": "BASIC",
        },
        headers=auth_headers(operator),
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Business not found"}


def test_duplicate_service_name_in_business_conflicts(client, db, operator, make_business):
    business = make_business(operator)
    other_business = make_business(operator)

    first = client.post("/api/services", json=service_payload(business), headers=auth_headers(operator))
    second = client.post("/api/services", json=service_payload(business), headers=auth_headers(operator))
    elsewhere = client.post(
        "/api/services", json=service_payload(other_business), headers=auth_headers(operator)
    )

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json() == {"error": "A service with this name already exists for this business"}
    assert elsewhere.status_code == 201
    assert db.query(Service).count() == 2


def test_service_name_taken_after_the_check_still_conflicts(
    client, db, monkeypatch, operator, make_business, make_service
):
    business = make_business(operator)
    make_service(business, name="Premium Wash")
    monkeypatch.setattr(ServiceRepository, "get_by_name", staticmethod(lambda *args: None))

    response = client.post(
        "/api/services", json=service_payload(business), headers=auth_headers(operator)
    )

    assert response.status_code == 409
    assert response.json() == {"error": "A service with this name already exists for this business"}
    assert db.query(Service).count() == 1


def test_service_validation(client, operator, make_business):
    business = make_business(operator)

    response = client.post(
        "/api/services",
        json=service_payload(business, price=0, duration=-5, tier="GOLD"),
        headers=auth_headers(operator),
    )

    assert response.status_code == 400
    details = response.json()["details"]
    assert "price" in details
    assert "duration" in details
    assert "tier" in details


def test_list_orders_by_tier_then_price(client, operator, make_business, make_service):
    business = make_business(operator)
    make_service(business, name="Full Detail", price=50.0, tier=ServiceTier.LUXURY)
    make_service(business, name="Rinse Plus", price=20.0, tier=ServiceTier.BASIC)
    make_service(business, name="Wax", price=30.0, tier=ServiceTier.PREMIUM)
    make_service(business, name="Rinse", price=10.0, tier=ServiceTier.BASIC)

    response = client.get("/api/services")

    assert response.status_code == 200
    names = [s["name"] for s in response.json()["services"]]
    assert names == ["Rinse", "Rinse Plus", "Wax", "Full Detail"]


def test_list_filters(client, operator, make_business, make_service):
    business = make_business(operator)
    other = make_business(operator)
    make_service(business, name="Cheap", price=10.0)
    make_service(business, name="Mid", price=35.0, tier=ServiceTier.PREMIUM)
    make_service(business, name="Posh", price=90.0, tier=ServiceTier.LUXURY)
    make_service(other, name="Elsewhere", price=35.0, tier=ServiceTier.PREMIUM)

    by_business = client.get("/api/services", params={"businessId": business.id})
    by_tier = client.get("/api/services", params={"tier": "PREMIUM"})
    by_price = client.get("/api/services", params={"minPrice": 20, "maxPrice": 50})

    assert by_business.json()["pagination"]["total"] == 3
    assert sorted(s["name"] for s in by_tier.json()["services"]) == ["Elsewhere", "Mid"]
    assert sorted(s["name"] for s in by_price.json()["services"]) == ["Elsewhere", "Mid"]


def test_list_includes_business_and_booking_count(
    client, customer, operator, make_business, make_service, make_booking
):
    business = make_business(operator)
    service = make_service(business)
    make_booking(customer, service)

    response = client.get("/api/services", headers=auth_headers(customer))

    item = response.json()["services"][0]
    assert item["business"]["id"] == business.id
    assert item["_count"] == {"bookings": 1}


def test_list_ignores_bad_token(client, operator, make_business, make_service):
    make_service(make_business(operator))

    response = client.get("/api/services", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == 200
    assert len(response.json()["services"]) == 1
