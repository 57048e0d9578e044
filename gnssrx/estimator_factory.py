"""Selects the location estimator for an ephemeris storage."""

from __future__ import annotations

from .estimation import EphemerisStorage, SatLocationEstimator
from .glonass_estimator import GlonassEphemerisStorage, GlonassSatLocationEstimator
from .gps_estimator import GPSEphemerisStorage, GPSSatLocationEstimator
from .protocol import ProtocolType

_UNSUPPORTED = {
    ProtocolType.BEIDOU: "BeiDou",
    ProtocolType.GALILEO: "Galileo",
}


def make_estimator(storage: EphemerisStorage) -> SatLocationEstimator:
    """Return an estimator for ``storage``.

    Raises TypeError when the storage does not match the protocol it reports,
    and ValueError for protocols without an estimator.
    """
    protocol = storage.protocol_type
    if protocol is ProtocolType.GLONASS:
        if not isinstance(storage, GlonassEphemerisStorage):
            raise TypeError("Bad ephemeris storage format!")
        return GlonassSatLocationEstimator(storage)
    if protocol is ProtocolType.GPS:
        if not isinstance(storage, GPSEphemerisStorage):
            raise TypeError("Bad ephemeris storage format!")
        return GPSSatLocationEstimator(storage)
    name = _UNSUPPORTED.get(protocol, "such format")
    raise ValueError(f"Satellite location estimator doesn't support {name}")