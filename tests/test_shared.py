from datetime import timedelta

import pytest

from washify.security import extract_bearer_token, parse_duration
from washify.shared.geo import haversine_km, has_coordinates
from washify.shared.pagination import build_pagination, page_params
from washify.shared.validators import contains_pattern, validate_email, validate_phone


def test_haversine_known_distance():
    # Midtown Manhattan to the Upper West Side
    assert haversine_km(40.7505, -73.9934, 40.7831, -73.9712) == pytest.approx(4.08, abs=0.1)


def test_haversine_same_point_rounds_to_zero():
    # acos near 1 leaves a residue well below the reported 2-decimal precision
    assert round(haversine_km(40.0, -73.0, 40.0, -73.0), 2) == 0.0


def test_zero_coordinate_means_no_location():
    assert has_coordinates(40.0, -73.0)
    assert not has_coordinates(0, -73.0)
    assert not has_coordinates(40.0, 0)
    assert not has_coordinates(None, None)


def test_page_params_defaults_and_clamping():
    assert page_params(None, None).limit == 20
    assert page_params(None, None, default_limit=10).limit == 10
    assert page_params(0, None).limit == 1
    assert page_params(500, -3).model_dump() == {"limit": 100, "offset": 0}


def test_has_more():
    assert build_pagination(25, page_params(10, 10)).hasMore is True
    assert build_pagination(20, page_params(10, 10)).hasMore is False


def test_contains_pattern_escapes_wildcards():
    assert contains_pattern("50%_off") == "%50\\%\\_off%"
    assert contains_pattern("a\\b") == "%a\\\\b%"


def test_validate_email_normalizes():
    assert validate_email("  Someone@Example.COM ") == "someone@example.com"
    with pytest.raises(ValueError):
        validate_email("someone@")


def test_validate_phone():
    assert validate_phone("(555) 010-2030") == "(555) 010-2030"
    assert validate_phone("   ") is None
    with pytest.raises(ValueError):
        validate_phone("12-34")


@pytest.mark.parametrize(
    "value,expected",
    [("3600", timedelta(hours=1)), ("90m", timedelta(minutes=90)), ("7d", timedelta(days=7))],
)
def test_parse_duration(value, expected):
    assert parse_duration(value) == expected


def test_extract_bearer_token():
    assert extract_bearer_token("Bearer abc") == "abc"
    assert extract_bearer_token("Basic abc") is None
    assert extract_bearer_token(None) is None
