import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./washify.db")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Token signing - CRITICAL: No default secret in production
JWT_SECRET = os.getenv("JWT_SECRET")
if not JWT_SECRET:
    import warnings

    warnings.warn(
        "JWT_SECRET not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    JWT_SECRET = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

JWT_ALGORITHM = "HS256"
JWT_EXPIRES_IN = os.getenv("JWT_EXPIRES_IN", "7d")  # e.g. 3600, 90m, 12h, 7d

# Password hashing cost factor
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

# Cookie the HTML pages read the token from (API clients use the Authorization header)
TOKEN_COOKIE_NAME = os.getenv("TOKEN_COOKIE_NAME", "washify_token")

ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "http://localhost:3000,http://localhost:5173",
).split(",")

SECURITY_HEADERS_ENABLED = os.getenv("SECURITY_HEADERS_ENABLED", "true").lower() == "true"
IS_PRODUCTION = os.getenv("ENVIRONMENT", "development").lower() == "production"

# Pagination
DEFAULT_PAGE_LIMIT = 20
DEFAULT_BOOKING_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100

# Geolocation
EARTH_RADIUS_KM = 6371
DEFAULT_SEARCH_RADIUS_KM = 10.0
DUPLICATE_BUSINESS_RADIUS_KM = 0.1
