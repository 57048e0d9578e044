"""Navigation frame parsers that turn correlator output into decoded data."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .collectors import BitCollector, SubframeCollector
from .processors import SubframeProcessor
from .stat import Stat
from .storage import GPSSatelliteStorage, SatelliteStorage


class FrameParser(ABC):
    """Consumes correlator samples and fills a satellite storage."""

    @abstractmethod
    def handle_signal(self, signal: float) -> None:
        """Feed one correlator sample."""

    @abstractmethod
    def clear(self) -> None:
        """Reset all internal state and statistics."""

    @abstractmethod
    def stat(self) -> list[Stat]:
        """Return the statistics of every processing stage."""


class GPSFrameParser(FrameParser):
    """Decodes the GPS L1 C/A navigation message."""

    def __init__(self, storage: GPSSatelliteStorage) -> None:
        self._bit_collector = BitCollector()
        self._subframe_collector = SubframeCollector()
        self._subframe_processor = SubframeProcessor(storage)

    def handle_signal(self, signal: float) -> None:
        self._bit_collector.collect_signal(signal)
        for bit in self._bit_collector.bit_sequence():
            subframe = self._subframe_collector.make_subframe(bit)
            if subframe is not None:
                self._subframe_processor.on_data(subframe)

    def clear(self) -> None:
        self._bit_collector.clear()
        self._subframe_collector.clear()
        self._subframe_processor.clear()

    def stat(self) -> list[Stat]:
        return [
            self._bit_collector.stat,
            self._subframe_collector.stat,
            self._subframe_processor.stat,
        ]


def make_parser(storage: SatelliteStorage) -> FrameParser:
    """Return the parser matching the kind of ``storage``."""
    if isinstance(storage, GPSSatelliteStorage):
        return GPSFrameParser(storage)
    raise ValueError("Given navigation frame protocol is not supported")