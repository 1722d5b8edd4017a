from washify.models import Booking, Business, Review, User, UserRole

from .conftest import auth_headers


def test_list_users_with_counts_stats_and_pagination(client, admin, operator, customer, make_business):
    make_business(operator)

    response = client.get("/api/admin/users", headers=auth_headers(admin))

    assert response.status_code == 200
    body = response.json()
    assert body["pagination"] == {"total": 3, "limit": 20, "offset": 0, "hasMore": False}
    assert body["stats"] == {"ADMIN": 1, "OPERATOR": 1, "CUSTOMER": 1}
    by_id = {user["id"]: user for user in body["users"]}
    assert by_id[operator.id]["_count"]["ownedBusinesses"] == 1
    assert by_id[customer.id]["_count"] == {"ownedBusinesses": 0, "bookings": 0, "reviews": 0}


def test_list_users_filters_by_role_and_search(client, admin, make_user):
    make_user(UserRole.OPERATOR, name="Alice Washer")
    make_user(UserRole.CUSTOMER, name="Alice Customer")
    make_user(UserRole.CUSTOMER, name="Bob Customer")

    response = client.get(
        "/api/admin/users",
        params={"role": "CUSTOMER", "search": "alice"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 200
    names = [user["name"] for user in response.json()["users"]]
    assert names == ["Alice Customer"]


def test_search_with_sql_metacharacters_is_literal(client, admin, make_user):
    make_user(name="Percent 100% Clean")

    quote = client.get("/api/admin/users", params={"search": "O'Brien"}, headers=auth_headers(admin))
    percent = client.get("/api/admin/users", params={"search": "%"}, headers=auth_headers(admin))

    assert quote.status_code == 200
    assert quote.json()["users"] == []
    assert percent.status_code == 200
    assert [user["name"] for user in percent.json()["users"]] == ["Percent 100% Clean"]


def test_pagination_is_clamped(client, admin, make_user):
    for _ in range(3):
        make_user()

    response = client.get(
        "/api/admin/users", params={"limit": 1000, "offset": -5}, headers=auth_headers(admin)
    )

    assert response.json()["pagination"]["limit"] == 100
    assert response.json()["pagination"]["offset"] == 0


def test_admin_endpoints_reject_other_roles(client, operator):
    response = client.get("/api/admin/users", headers=auth_headers(operator))

    assert response.status_code == 403
    assert response.json() == {"error": "Access denied. Required roles: ADMIN"}


def test_delete_requires_user_id(client, admin):
    response = client.delete("/api/admin/users", headers=auth_headers(admin))

    assert response.status_code == 400
    assert response.json() == {"error": "User ID is required"}


def test_admin_cannot_delete_own_account(client, admin):
    response = client.delete(
        "/api/admin/users", params={"userId": admin.id}, headers=auth_headers(admin)
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Cannot delete your own account"}


def test_delete_unknown_user(client, admin):
    response = client.delete(
        "/api/admin/users",
        params={"userId": "00000000-0000-4000-8000-000000000000"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 404


def test_deleting_another_admin_cascades(
    client, db, admin, make_user, customer, make_business, make_service, make_booking
):
    other_admin = make_user(UserRole.ADMIN)
    business = make_business(other_admin)
    service = make_service(business)
    make_booking(customer, service)
    own_booking = make_booking(other_admin, service, scheduled_at=service.created_at)
    db.add(Review(user_id=other_admin.id, booking_id=own_booking.id, rating=5))
    db.commit()

    other_admin_id = other_admin.id

    response = client.delete(
        "/api/admin/users", params={"userId": other_admin_id}, headers=auth_headers(admin)
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "User deleted successfully"
    assert body["deletedUser"]["id"] == other_admin_id
    assert body["deletedUser"]["role"] == "ADMIN"

    db.expire_all()
    assert db.get(User, other_admin_id) is None
    assert db.query(Business).filter(Business.owner_id == other_admin_id).count() == 0
    assert db.query(Booking).count() == 0
    assert db.query(Review).count() == 0
    assert db.get(User, customer.id) is not None
