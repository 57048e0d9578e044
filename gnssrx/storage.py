"""Containers that receive data decoded from navigation frames."""

from __future__ import annotations

from dataclasses import dataclass

from .headers import EphemerisHeader, SatClockHeader


class SatelliteStorage:
    """Base for stores that receive decoded navigation data of any system."""


class GPSSatelliteStorage(SatelliteStorage):
    """A store for GPS data; the frame processors assign these attributes."""

    z_counter: int
    satellite_clock: SatClockHeader | None
    ephemeris: EphemerisHeader | None


@dataclass
class CommonGPSSatelliteStorage(GPSSatelliteStorage):
    """Keeps the latest decoded GPS values in memory."""

    z_counter: int = 0
    satellite_clock: SatClockHeader | None = None
    ephemeris: EphemerisHeader | None = None