"""GLONASS satellite position by numerical integration of its motion."""

from __future__ import annotations

import logging
import math
from abc import abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from .estimation import EphemerisStorage, SatLocationEstimator
from .protocol import ProtocolType
from .vector3 import Vector3

logger = logging.getLogger(__name__)

_SECONDS_IN_DAY = 86400
_INTEGRATION_STEP = 0.001
_STAGE_WEIGHTS = (1, 2, 2, 1)

_EARTH_RADIUS = 6378.136
_MU = 398600.44
_C20 = -1082.63e-6
_EARTH_ROTATION = 0.7292115e-4

_ELLIPSOID_E = 0.006694379990141316996137335400448
_ELLIPSOID_A = 6378.137
_LATITUDE_TOLERANCE = 4.85e-10


class GlonassEphemerisStorage(EphemerisStorage):
    """State vector ephemeris: position, velocity and lunisolar acceleration."""

    timestamp: float
    location_and_velocity: tuple[float, ...]
    acceleration: tuple[float, ...]
    sat_time_to_mdv: float
    gamma: float

    @property
    def protocol_type(self) -> ProtocolType:
        return ProtocolType.GLONASS

    @abstractmethod
    def update_location_and_velocity(
            self, location_and_velocity: Sequence[float], timestamp: float) -> None:
        """Replace the state vector and the time it refers to."""


def _as_tuple(values: Sequence[float], length: int, what: str) -> tuple[float, ...]:
    result = tuple(float(v) for v in values)
    if len(result) != length:
        raise ValueError(f"{what} needs {length} values, got {len(result)}")
    return result


@dataclass
class CommonGlonassEphemerisStorage(GlonassEphemerisStorage):
    """GLONASS ephemeris held in memory."""

    timestamp: float
    location_and_velocity: tuple[float, ...]
    acceleration: tuple[float, ...]
    sat_time_to_mdv: float
    gamma: float

    def __post_init__(self) -> None:
        self.location_and_velocity = _as_tuple(
            self.location_and_velocity, 6, "location and velocity")
        self.acceleration = _as_tuple(self.acceleration, 3, "acceleration")

    def update_location_and_velocity(
            self, location_and_velocity: Sequence[float], timestamp: float) -> None:
        self.location_and_velocity = _as_tuple(
            location_and_velocity, 6, "location and velocity")
        self.timestamp = timestamp


def _derivatives(state: Sequence[float], acceleration: Sequence[float]) -> tuple[float, ...]:
    x, y, z, vx, vy, vz = state
    ax, ay, az = acceleration
    r = math.sqrt(x * x + y * y + z * z)
    c1 = 3 * _C20 * _MU * _EARTH_RADIUS ** 2 / (2 * r ** 5)
    c2 = -_MU / r ** 3
    c3 = 5 * z * z / r ** 2
    w2 = _EARTH_ROTATION ** 2
    return (
        vx,
        vy,
        vz,
        c2 * x + c1 * x * (1 - c3) + w2 * x + 2 * _EARTH_ROTATION * vy + ax,
        c2 * y + c1 * y * (1 - c3) + w2 * y - 2 * _EARTH_ROTATION * vx + ay,
        c2 * z + c1 * z * (3 - c3) + az,
    )


def _integrate(state: Sequence[float], acceleration: Sequence[float],
               delta_time: float) -> list[float]:
    """Advance the state vector by ``delta_time`` with a four-stage scheme."""
    y = list(state)
    elapsed = 0.0
    step = _INTEGRATION_STEP
    while elapsed < delta_time:
        dy = [0.0] * 6
        probe = y
        for weight in _STAGE_WEIGHTS:
            k = [step * d for d in _derivatives(probe, acceleration)]
            dy = [acc + weight * inc for acc, inc in zip(dy, k)]
            probe = [base + d / 2 for base, d in zip(y, dy)]
        y = [base + d / 6.0 for base, d in zip(y, dy)]
        elapsed += step
        if elapsed + step > delta_time:
            step = delta_time - elapsed
    return y


def to_geocentric(vector: Vector3) -> Vector3:
    """Convert Cartesian coordinates (km) to (latitude, longitude, height)."""
    x, y, z = vector.x, vector.y, vector.z
    e, a = _ELLIPSOID_E, _ELLIPSOID_A
    d = math.sqrt(x * x + y * y)

    if d == 0:
        if z == 0:
            raise ValueError("the Earth's centre has no geodetic coordinates")
        b = math.pi * z / (2 * abs(z))
        h = z * math.sin(b) - math.sqrt(1 - (e * math.sin(b)) ** 2)
        return Vector3(b, 0.0, h)

    la = abs(math.asin(y / d))
    if y < 0 and x >= 0:
        longitude = 2 * math.pi - la
    elif y < 0 and x < 0:
        longitude = math.pi + la
    elif y > 0 and x < 0:
        longitude = math.pi - la
    elif y > 0 and x >= 0:
        longitude = la
    elif y == 0 and x > 0:
        longitude = 0.0
    else:
        longitude = math.pi

    if z == 0:
        return Vector3(0.0, longitude, d - a)

    r = vector.magnitude()
    c = math.asin(z / r)
    p = (e * e * a) / (2 * r)
    s1 = 0.0
    s2 = 0.0
    iterations = 0
    while True:
        s1 = s2
        b = c + s1
        s2 = math.asin(p * math.sin(2 * b) / math.sqrt(1 - (e * math.sin(b)) ** 2))
        iterations += 1
        if abs(s1 - s2) <= _LATITUDE_TOLERANCE:
            break
    logger.debug("latitude converged after %d iterations", iterations)

    h = d * math.cos(b) + z * math.sin(b) - a * math.sqrt(1 - (e * math.sin(b)) ** 2)
    return Vector3(b, longitude, h)


class GlonassSatLocationEstimator(SatLocationEstimator):
    """Integrates the GLONASS state vector forward and updates the storage."""

    def __init__(self, storage: GlonassEphemerisStorage) -> None:
        self._storage = storage

    def calculate_location(self, current_time: float) -> Vector3:
        storage = self._storage
        time = self._ephemeridic_time(current_time)
        state = _integrate(storage.location_and_velocity, storage.acceleration,
                           time - storage.timestamp)
        storage.update_location_and_velocity(state, time)
        return to_geocentric(Vector3(state[0], state[1], state[2]))

    def _ephemeridic_time(self, current_time: float) -> float:
        storage = self._storage
        current_time += storage.sat_time_to_mdv - storage.gamma * (current_time - storage.timestamp)
        if current_time < 0:
            current_time += _SECONDS_IN_DAY
        else:
            while current_time > _SECONDS_IN_DAY:
                current_time -= _SECONDS_IN_DAY
        return current_time