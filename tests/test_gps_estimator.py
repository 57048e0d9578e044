import copy
import math

import pytest

from gnssrx.gps_estimator import CommonGPSEphemerisStorage, GPSSatLocationEstimator
from gnssrx.protocol import ProtocolType

PI = 3.1415926535
SQRT_A = 5153.762765884399414
ECCENTRICITY = 0.010925623239018
C_RS = -148.875
C_RC = 177.03125


def _example_storage():
    return CommonGPSEphemerisStorage(
        201584.0,
        0.304183455184102 * PI,
        SQRT_A ** 2,
        ECCENTRICITY,
        -0.207362390588969 * PI,
        0.306331528816372 * PI,
        0.514487708918750 * PI,
        0.000000001370950 * PI,
        -0.000000002564661 * PI,
        0.000000000002956 * PI,
        0.000010803341866,
        -0.000007700175047,
        C_RS,
        C_RC,
        -0.000000111758709,
        -0.000000176951289,
    )


def _circular_storage(semi_major):
    return CommonGPSEphemerisStorage(0.0, 0.0, semi_major, *([0.0] * 13))


def test_fields_follow_constructor_order():
    storage = _example_storage()
    assert storage.timestamp == 201584.0
    assert storage.semi_major_axis == SQRT_A ** 2
    assert storage.eccentricity == ECCENTRICITY
    assert storage.correction_sin_radial == C_RS
    assert storage.correction_cos_radial == C_RC
    assert storage.protocol_type is ProtocolType.GPS


def test_circular_orbit_at_epoch():
    semi_major = 26_560_000.0
    location = GPSSatLocationEstimator(_circular_storage(semi_major)).calculate_location(0.0)
    assert location.x == pytest.approx(semi_major)
    assert location.y == pytest.approx(0.0, abs=1e-6)
    assert location.z == pytest.approx(0.0, abs=1e-6)


@pytest.mark.parametrize("time", [10.0, 600.0, 3600.0])
def test_circular_orbit_keeps_radius(time):
    semi_major = 26_560_000.0
    location = GPSSatLocationEstimator(_circular_storage(semi_major)).calculate_location(time)
    assert location.magnitude() == pytest.approx(semi_major, rel=1e-12)


@pytest.mark.parametrize("time", [28818.0, 201584.0, 210000.0])
def test_example_orbit_radius_within_bounds(time):
    semi_major = SQRT_A ** 2
    slack = abs(C_RS) + abs(C_RC)
    location = GPSSatLocationEstimator(_example_storage()).calculate_location(time)
    radius = location.magnitude()
    assert semi_major * (1 - ECCENTRICITY) - slack <= radius
    assert radius <= semi_major * (1 + ECCENTRICITY) + slack


def test_calculation_leaves_storage_unchanged_and_is_repeatable():
    storage = _example_storage()
    snapshot = copy.deepcopy(storage)
    estimator = GPSSatLocationEstimator(storage)
    first = estimator.calculate_location(28818.0)
    second = estimator.calculate_location(28818.0)
    assert first == second
    assert storage == snapshot
    assert all(math.isfinite(v) for v in first.to_tuple())