import math

import pytest

from app.core.exceptions import NoClinicLocation, OutsideRange
from app.schemas.clinic import ClinicLocation
from app.services.geofence_service import GeoPoint, calculate_distance, evaluate
from tests.helpers import CLINIC_LAT, CLINIC_LNG, FAR_LAT


def clinic(cl_id, name, lat, lng, radius):
    return ClinicLocation(
        cl_id=cl_id,
        cl_name=name,
        cl_latitude=lat,
        cl_longitude=lng,
        cl_allowed_radius_meters=radius,
    )


def test_distance_is_zero_for_same_point():
    assert calculate_distance(CLINIC_LAT, CLINIC_LNG, CLINIC_LAT, CLINIC_LNG) == 0


def test_one_degree_of_latitude_is_about_111_km():
    assert calculate_distance(0, 0, 1, 0) == pytest.approx(111195, abs=1)


def test_distance_is_symmetric():
    forward = calculate_distance(CLINIC_LAT, CLINIC_LNG, FAR_LAT, CLINIC_LNG)
    backward = calculate_distance(FAR_LAT, CLINIC_LNG, CLINIC_LAT, CLINIC_LNG)
    assert forward == pytest.approx(backward)


def test_no_clinics_raises_no_clinic_location():
    with pytest.raises(NoClinicLocation) as exc_info:
        evaluate(GeoPoint(CLINIC_LAT, CLINIC_LNG), [])

    assert exc_info.value.details["error"] == "NO_CLINIC_LOCATION"


def test_point_inside_radius_matches_clinic():
    main = clinic(1, "Main", CLINIC_LAT, CLINIC_LNG, 100)

    result = evaluate(GeoPoint(CLINIC_LAT + 0.0005, CLINIC_LNG), [main])

    assert result.inside is True
    assert result.clinic.cl_name == "Main"
    assert result.distance_meters < 100


def test_point_just_inside_radius_is_inside():
    point = GeoPoint(FAR_LAT, CLINIC_LNG)
    distance = calculate_distance(point.latitude, point.longitude, CLINIC_LAT, CLINIC_LNG)
    main = clinic(1, "Main", CLINIC_LAT, CLINIC_LNG, math.ceil(distance))

    assert evaluate(point, [main]).inside is True


def test_first_matching_clinic_wins_over_nearer_one():
    wide = clinic(1, "Wide", CLINIC_LAT, CLINIC_LNG, 5000)
    exact = clinic(2, "Exact", FAR_LAT, CLINIC_LNG, 50)

    result = evaluate(GeoPoint(FAR_LAT, CLINIC_LNG), [wide, exact])

    assert result.clinic.cl_name == "Wide"


def test_later_clinic_matches_when_first_does_not():
    first = clinic(1, "First", CLINIC_LAT, CLINIC_LNG, 100)
    second = clinic(2, "Second", FAR_LAT, CLINIC_LNG, 100)

    result = evaluate(GeoPoint(FAR_LAT, CLINIC_LNG), [first, second])

    assert result.clinic.cl_name == "Second"


def test_miss_reports_distance_to_first_clinic():
    first = clinic(1, "First", CLINIC_LAT, CLINIC_LNG, 100)
    # The second clinic is much nearer to the point but still out of range
    second = clinic(2, "Second", FAR_LAT + 0.001, CLINIC_LNG, 50)
    point = GeoPoint(FAR_LAT, CLINIC_LNG)

    with pytest.raises(OutsideRange) as exc_info:
        evaluate(point, [first, second])

    expected = round(calculate_distance(FAR_LAT, CLINIC_LNG, CLINIC_LAT, CLINIC_LNG))
    error = exc_info.value
    assert error.distance == expected
    assert error.limit == 100
    assert error.details == {"error": "OUTSIDE_RANGE", "distance": expected, "limit": 100}
    assert "First" in error.message
    assert error.status_code == 400
