"""Processors that decode GPS subframe bodies into the satellite storage."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import IntEnum

from .bytedata import ByteData
from .headers import EphemerisHeader, HandoverWordHeader, SatClockHeader
from .stat import Stat
from .storage import GPSSatelliteStorage

logger = logging.getLogger(__name__)


class SubframeType(IntEnum):
    """Subframe identifiers carried in the handover word."""

    SAT_CLOCK = 1
    EPHEMERIS_1 = 2
    EPHEMERIS_2 = 3
    ALMANAC_1 = 4
    ALMANAC_2 = 5


class DataProcessor(ABC):
    """Handles the body of one kind of subframe."""

    @abstractmethod
    def on_data(self, data: ByteData, subframe_type: SubframeType) -> bool:
        """Consume a subframe body; return whether it was accepted."""

    @abstractmethod
    def clear(self) -> None:
        """Drop any partially collected message."""


class SatClockProcessor(DataProcessor):
    """Decodes subframe 1 into the satellite clock record."""

    def __init__(self, storage: GPSSatelliteStorage) -> None:
        self._storage = storage

    def on_data(self, data: ByteData, subframe_type: SubframeType) -> bool:
        try:
            header = SatClockHeader.from_bytes(data)
        except ValueError:
            logger.error("Sat Clock message is too short to be parsed!")
            return False
        self._storage.satellite_clock = header
        return True

    def clear(self) -> None:
        """Nothing is buffered between subframes."""


class EphemerisProcessor(DataProcessor):
    """Joins subframes 2 and 3 and decodes the ephemeris."""

    def __init__(self, storage: GPSSatelliteStorage) -> None:
        self._storage = storage
        self._collected = ByteData()

    def on_data(self, data: ByteData, subframe_type: SubframeType) -> bool:
        if subframe_type == SubframeType.EPHEMERIS_1:
            return self._collect_first(data)
        if subframe_type == SubframeType.EPHEMERIS_2:
            return self._collect_second(data)
        logger.error("Unknown subframe type appeared in Ephemeris processor; type = %s",
                     int(subframe_type))
        return False

    def clear(self) -> None:
        self._collected.clear()

    def _collect_first(self, data: ByteData) -> bool:
        if len(self._collected):
            logger.warning("Missed ending of previous Ephemeris message")
            return False
        self._collected = ByteData(data)
        return len(data) > 0

    def _collect_second(self, data: ByteData) -> bool:
        if not len(self._collected):
            logger.warning("Missed beginning of Ephemeris message")
            return False
        self._collected.append(data)
        try:
            header = EphemerisHeader.from_bytes(self._collected)
        except ValueError:
            logger.error("Ephemeris message is too short to be parsed!")
            return False
        self._storage.ephemeris = header
        self._collected.clear()
        return True


class SubframeProcessor:
    """Reads the handover word and dispatches the subframe body."""

    class Key(IntEnum):
        RECEIVED_SUBFRAMES = 0
        PRODUCED_SAT_CLOCK = 1
        PRODUCED_EPHEMERIS_1 = 2
        PRODUCED_EPHEMERIS_2 = 3
        PRODUCED_ALMANAC_1 = 4
        PRODUCED_ALMANAC_2 = 5

    _COUNTERS = {
        SubframeType.SAT_CLOCK: Key.PRODUCED_SAT_CLOCK,
        SubframeType.EPHEMERIS_1: Key.PRODUCED_EPHEMERIS_1,
        SubframeType.EPHEMERIS_2: Key.PRODUCED_EPHEMERIS_2,
        SubframeType.ALMANAC_1: Key.PRODUCED_ALMANAC_1,
        SubframeType.ALMANAC_2: Key.PRODUCED_ALMANAC_2,
    }

    def __init__(self, storage: GPSSatelliteStorage) -> None:
        self._storage = storage
        self._sat_clock = SatClockProcessor(storage)
        self._ephemeris = EphemerisProcessor(storage)
        self.stat = Stat(
            "Subframe parser",
            {
                self.Key.RECEIVED_SUBFRAMES: "Received subframes",
                self.Key.PRODUCED_SAT_CLOCK: "Produced satellite clock",
                self.Key.PRODUCED_EPHEMERIS_1: "Produced ephemeris 1",
                self.Key.PRODUCED_EPHEMERIS_2: "Produced ephemeris 2",
                self.Key.PRODUCED_ALMANAC_1: "Produced almanac 1",
                self.Key.PRODUCED_ALMANAC_2: "Produced almanac 2",
            },
        )

    def on_data(self, data: ByteData) -> bool:
        """Consume the handover word from ``data`` and process the rest."""
        self.stat.increment(self.Key.RECEIVED_SUBFRAMES)
        try:
            how = HandoverWordHeader.from_bytes(data.take(HandoverWordHeader.SIZE))
        except ValueError:
            logger.error("Cannot cut HOW header; ByteData size = %d", len(data))
            return False
        self._storage.z_counter = how.z_counter

        try:
            subframe_type = SubframeType(how.subframe_id)
        except ValueError:
            logger.error("Unknown Subframe ID = %d", how.subframe_id)
            return True

        self.stat.increment(self._COUNTERS[subframe_type])
        if subframe_type == SubframeType.SAT_CLOCK:
            return self._sat_clock.on_data(data, subframe_type)
        if subframe_type in (SubframeType.EPHEMERIS_1, SubframeType.EPHEMERIS_2):
            return self._ephemeris.on_data(data, subframe_type)
        return True

    def clear(self) -> None:
        self._sat_clock.clear()
        self._ephemeris.clear()
        self.stat.clear()