"""Satellite navigation systems known to the receiver."""

from enum import Enum, auto


class ProtocolType(Enum):
    """A global navigation satellite system."""

    GLONASS = auto()
    GPS = auto()
    BEIDOU = auto()
    GALILEO = auto()