"""Common interfaces for ephemeris stores and satellite location estimators."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .protocol import ProtocolType
from .vector3 import Vector3


class EphemerisStorage(ABC):
    """Holds the broadcast ephemeris of one satellite."""

    @property
    @abstractmethod
    def protocol_type(self) -> ProtocolType:
        """The navigation system the ephemeris belongs to."""


class SatLocationEstimator(ABC):
    """Computes a satellite position from its ephemeris."""

    @abstractmethod
    def calculate_location(self, current_time: float) -> Vector3:
        """Return the satellite location at ``current_time`` (seconds)."""