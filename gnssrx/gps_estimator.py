"""GPS satellite position from Keplerian broadcast ephemeris."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .estimation import EphemerisStorage, SatLocationEstimator
from .matrix import DenseMatrix
from .protocol import ProtocolType
from .vector3 import Vector3

_EARTH_GRAVITATION = 398_600_441_800_000.0
_EARTH_ANGULAR_SPEED = 7.2921151467e-5
_KEPLER_ITERATIONS = 20
_KEPLER_TOLERANCE = 1e-12


class GPSEphemerisStorage(EphemerisStorage):
    """Keplerian orbit parameters with harmonic corrections."""

    timestamp: float
    mean_anomaly: float
    semi_major_axis: float
    eccentricity: float
    longitude_of_ascending_node: float
    inclination: float
    argument_of_perigee: float
    mean_motion_difference: float
    ascending_rate: float
    inclination_rate: float
    correction_sin_perigee: float
    correction_cos_perigee: float
    correction_sin_radial: float
    correction_cos_radial: float
    correction_sin_inclination: float
    correction_cos_inclination: float

    @property
    def protocol_type(self) -> ProtocolType:
        return ProtocolType.GPS


@dataclass
class CommonGPSEphemerisStorage(GPSEphemerisStorage):
    """GPS ephemeris held in memory."""

    timestamp: float
    mean_anomaly: float
    semi_major_axis: float
    eccentricity: float
    longitude_of_ascending_node: float
    inclination: float
    argument_of_perigee: float
    mean_motion_difference: float
    ascending_rate: float
    inclination_rate: float
    correction_sin_perigee: float
    correction_cos_perigee: float
    correction_sin_radial: float
    correction_cos_radial: float
    correction_sin_inclination: float
    correction_cos_inclination: float


def _r1(angle: float) -> DenseMatrix:
    c, s = math.cos(angle), math.sin(angle)
    return DenseMatrix(3, 3, [c, s, 0.0, -s, c, 0.0, 0.0, 0.0, 1.0])


def _r3(angle: float) -> DenseMatrix:
    c, s = math.cos(angle), math.sin(angle)
    return DenseMatrix(3, 3, [1.0, 0.0, 0.0, 0.0, c, s, 0.0, -s, c])


class GPSSatLocationEstimator(SatLocationEstimator):
    """Propagates a GPS orbit to a given time of week."""

    def __init__(self, storage: GPSEphemerisStorage) -> None:
        self._storage = storage

    def calculate_location(self, current_time: float) -> Vector3:
        delta_time = current_time - self._storage.timestamp

        mean_anomaly = self._mean_anomaly(delta_time)
        eccentric_anomaly = self._eccentric_anomaly(mean_anomaly)
        true_anomaly = self._true_anomaly(eccentric_anomaly)
        ascending = self._ascending(delta_time)
        perigee = self._argument_of_perigee(true_anomaly)
        inclination = self._inclination(true_anomaly)
        radius = self._radial_distance(true_anomaly, eccentric_anomaly)

        orbital = [radius * math.cos(true_anomaly), radius * math.sin(true_anomaly), 0.0]
        rotation = _r1(-ascending) * _r3(-inclination) * _r1(-perigee)
        x, y, z = rotation * orbital
        return Vector3(x, y, z)

    def _mean_anomaly(self, delta_time: float) -> float:
        eph = self._storage
        keplerian = math.sqrt(_EARTH_GRAVITATION / eph.semi_major_axis ** 3)
        return eph.mean_anomaly + (keplerian + eph.mean_motion_difference) * delta_time

    def _eccentric_anomaly(self, mean_anomaly: float) -> float:
        eccentricity = self._storage.eccentricity
        anomaly = 1.0
        for _ in range(_KEPLER_ITERATIONS):
            previous = anomaly
            anomaly = mean_anomaly + eccentricity * math.sin(anomaly)
            if abs(previous - anomaly) < _KEPLER_TOLERANCE:
                break
        return anomaly

    def _true_anomaly(self, eccentric_anomaly: float) -> float:
        e = self._storage.eccentricity
        multiplier = math.sqrt(1 - e * e)
        return (multiplier * math.sin(eccentric_anomaly)) / (math.cos(eccentric_anomaly) - e)

    def _ascending(self, delta_time: float) -> float:
        eph = self._storage
        ascending_delta = (eph.ascending_rate - _EARTH_ANGULAR_SPEED) * delta_time
        earth_initial = _EARTH_ANGULAR_SPEED * eph.timestamp
        return eph.longitude_of_ascending_node + ascending_delta - earth_initial

    def _correction_arg(self, true_anomaly: float) -> float:
        return 2 * (self._storage.argument_of_perigee + true_anomaly)

    def _argument_of_perigee(self, true_anomaly: float) -> float:
        eph = self._storage
        arg = self._correction_arg(true_anomaly)
        return (eph.argument_of_perigee + true_anomaly
                + eph.correction_cos_perigee * math.cos(arg)
                + eph.correction_sin_perigee * math.sin(arg))

    def _inclination(self, true_anomaly: float) -> float:
        eph = self._storage
        arg = self._correction_arg(true_anomaly)
        return (eph.inclination + arg
                + eph.correction_cos_inclination * math.cos(arg)
                + eph.correction_sin_inclination * math.sin(arg))

    def _radial_distance(self, true_anomaly: float, eccentric_anomaly: float) -> float:
        eph = self._storage
        arg = self._correction_arg(true_anomaly)
        eccentric_multiplier = 1 - eph.eccentricity * math.cos(eccentric_anomaly)
        return (eph.semi_major_axis * eccentric_multiplier
                + eph.correction_cos_radial * math.cos(arg)
                + eph.correction_sin_radial * math.sin(arg))