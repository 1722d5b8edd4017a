import os
import tempfile

# Settings must be in place before washify is imported: the engine and the
# password context read them at import time.
_db_dir = tempfile.mkdtemp(prefix="washify-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'washify-test.db')}"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-secret-key"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

from datetime import datetime  # noqa: E402
from itertools import count  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from washify.database import Base, SessionLocal, engine  # noqa: E402
from washify.main import app  # noqa: E402
from washify.models import (  # noqa: E402
    Booking,
    BookingStatus,
    Business,
    Payment,
    PaymentStatus,
    Service,
    ServiceTier,
    User,
    UserRole,
    utcnow,
)
from washify.security import create_access_token, hash_password  # noqa: E402

DEFAULT_PASSWORD = "secret123"
SLOT = datetime(2030, 1, 15, 10, 0)

_sequence = count(1)


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


def auth_headers(user: User) -> dict:
    token = create_access_token(user.id, user.email, user.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_user(db):
    def _make(role=UserRole.CUSTOMER, name=None, email=None, password=DEFAULT_PASSWORD, phone=None):
        n = next(_sequence)
        user = User(
            name=name or f"{role.value.title()} {n}",
            email=email or f"{role.value.lower()}{n}@example.com",
            password=hash_password(password),
            role=role,
            phone=phone,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def customer(make_user):
    return make_user(UserRole.CUSTOMER)


@pytest.fixture
def operator(make_user):
    return make_user(UserRole.OPERATOR)


@pytest.fixture
def admin(make_user):
    return make_user(UserRole.ADMIN)


@pytest.fixture
def make_business(db):
    def _make(owner, name=None, lat=40.7505, lng=-73.9934, address="1 Main St, New York, NY"):
        business = Business(
            name=name or f"Sparkle Wash {next(_sequence)}",
            address=address,
            lat=lat,
            lng=lng,
            owner_id=owner.id,
        )
        db.add(business)
        db.commit()
        db.refresh(business)
        return business

    return _make


@pytest.fixture
def make_service(db):
    def _make(business, name=None, price=25.0, tier=ServiceTier.BASIC, duration=30):
        service = Service(
            business_id=business.id,
            name=name or f"Wash {next(_sequence)}",
            description="Exterior wash and dry",
            price=price,
            duration=duration,
            tier=tier,
        )
        db.add(service)
        db.commit()
        db.refresh(service)
        return service

    return _make


@pytest.fixture
def make_booking(db):
    def _make(user, service, scheduled_at=SLOT, status=BookingStatus.PENDING, notes=None):
        booking = Booking(
            user_id=user.id,
            business_id=service.business_id,
            service_id=service.id,
            scheduled_at=scheduled_at,
            status=status,
            notes=notes,
            photos=[],
        )
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    return _make


@pytest.fixture
def make_payment(db):
    def _make(booking, amount, status=PaymentStatus.PAID, provider="cash"):
        payment = Payment(
            booking_id=booking.id,
            amount=amount,
            currency="USD",
            status=status,
            provider=provider,
            paid_at=utcnow() if status == PaymentStatus.PAID else None,
        )
        db.add(payment)
        db.commit()
        db.refresh(payment)
        return payment

    return _make


@pytest.fixture
def shop(operator, make_business, make_service):
    """An operator-owned business with one BASIC service priced 25.00"""
    business = make_business(operator)
    service = make_service(business, name="Express Wash", price=25.0)
    return business, service
