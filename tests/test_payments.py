from washify.domain.payments.repository import PaymentRepository
from washify.models import Payment, PaymentStatus, UserRole

from .conftest import auth_headers


def pay(client, user, booking, **overrides):
    payload = {"bookingId": booking.id, "amount": 25.0, "provider": "cash"}
    payload.update(overrides)
    return client.post("/api/payments", json=payload, headers=auth_headers(user))


def test_cash_payment_is_settled_immediately(client, customer, make_booking, shop):
    _, service = shop
    booking = make_booking(customer, service)

    response = pay(client, customer, booking)

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "PAID"
    assert body["paidAt"] is not None
    assert body["currency"] == "USD"
    assert body["booking"]["id"] == booking.id
    assert body["booking"]["service"]["price"] == 25.0
    assert body["booking"]["user"]["id"] == customer.id


def test_cash_provider_is_case_insensitive(client, customer, make_booking, shop):
    _, service = shop
    booking = make_booking(customer, service)

    response = pay(client, customer, booking, provider="CASH")

    assert response.json()["status"] == "PAID"


def test_card_payment_stays_pending(client, customer, make_booking, shop):
    _, service = shop
    booking = make_booking(customer, service)

    response = pay(client, customer, booking, provider="stripe", providerId="pi_123", currency="eur")

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "PENDING"
    assert body["paidAt"] is None
    assert body["providerId"] == "pi_123"
    assert body["currency"] == "EUR"


def test_amount_must_match_service_price(client, db, customer, make_booking, shop):
    _, service = shop
    booking = make_booking(customer, service)

    response = pay(client, customer, booking, amount=20.0)

    assert response.status_code == 400
    assert response.json() == {"error": "Payment amount does not match service price"}
    assert db.query(Payment).count() == 0


def test_second_payment_conflicts(client, customer, make_booking, shop):
    _, service = shop
    booking = make_booking(customer, service)

    first = pay(client, customer, booking)
    second = pay(client, customer, booking)

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json() == {"error": "Payment already exists for this booking"}


def test_payment_recorded_after_the_check_still_conflicts(
    client, db, monkeypatch, customer, make_booking, make_payment, shop
):
    _, service = shop
    booking = make_booking(customer, service)

    def record_at_the_counter(session, booking_id):
        make_payment(booking, amount=25.0)
        return None

    monkeypatch.setattr(PaymentRepository, "get_by_booking", staticmethod(record_at_the_counter))

    response = pay(client, customer, booking, provider="stripe")

    assert response.status_code == 409
    assert response.json() == {"error": "Payment already exists for this booking"}
    assert db.query(Payment).count() == 1
    assert db.query(Payment).one().provider == "cash"


def test_unknown_booking_is_not_found(client, customer):
    response = client.post(
        "/api/payments",
        json={"bookingId": "00000000-0000-4000-8000-000000000000", "amount": 25.0, "provider": "cash"},
        headers=auth_headers(customer),
    )

    assert response.status_code == 404


def test_cannot_pay_for_someone_elses_booking(client, customer, make_user, make_booking, shop):
    _, service = shop
    booking = make_booking(customer, service)

    response = pay(client, make_user(), booking)

    assert response.status_code == 403


def test_business_owner_records_payment(client, operator, customer, make_booking, shop):
    _, service = shop
    booking = make_booking(customer, service)

    response = pay(client, operator, booking)

    assert response.status_code == 201


def test_payment_validation(client, customer, make_booking, shop):
    _, service = shop
    booking = make_booking(customer, service)

    response = pay(client, customer, booking, amount=-1, currency="DOLLARS")

    assert response.status_code == 400
    assert "amount" in response.json()["details"]
    assert "currency" in response.json()["details"]


def test_listing_requires_operator(client, customer):
    response = client.get("/api/payments", headers=auth_headers(customer))

    assert response.status_code == 403


def test_operator_lists_only_own_business_payments(
    client, operator, admin, customer, make_user, make_business, make_service, make_booking, make_payment, shop
):
    _, service = shop
    mine = make_payment(make_booking(customer, service), amount=25.0)
    rival_service = make_service(make_business(make_user(UserRole.OPERATOR)), price=40.0)
    make_payment(make_booking(customer, rival_service), amount=40.0)

    as_operator = client.get("/api/payments", headers=auth_headers(operator))
    as_admin = client.get("/api/payments", headers=auth_headers(admin))

    assert [p["id"] for p in as_operator.json()["payments"]] == [mine.id]
    assert as_admin.json()["pagination"]["total"] == 2


def test_listing_filters(client, admin, customer, make_booking, make_payment, shop):
    business, service = shop
    paid_booking = make_booking(customer, service)
    paid = make_payment(paid_booking, amount=25.0)
    pending_booking = make_booking(customer, service, scheduled_at=paid_booking.created_at)
    make_payment(pending_booking, amount=25.0, status=PaymentStatus.PENDING, provider="stripe")

    by_status = client.get("/api/payments", params={"status": "PAID"}, headers=auth_headers(admin))
    by_booking = client.get(
        "/api/payments", params={"bookingId": paid_booking.id}, headers=auth_headers(admin)
    )
    by_business = client.get(
        "/api/payments", params={"businessId": business.id}, headers=auth_headers(admin)
    )

    assert [p["id"] for p in by_status.json()["payments"]] == [paid.id]
    assert [p["id"] for p in by_booking.json()["payments"]] == [paid.id]
    assert by_business.json()["pagination"]["total"] == 2
