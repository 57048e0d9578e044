"""Decoders for GPS navigation message fields (big-endian wire layout)."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar

_HOW = struct.Struct(">3s")
_SAT_CLOCK = struct.Struct(">HB11sBBHBH3s")
_EPHEMERIS = struct.Struct(">BHHIHIHIHBHIHIHI3sBH")


def _signed16(value: int) -> int:
    return (value & 0x7FFF) - (value & 0x8000)


def _signed32(value: int) -> int:
    return (value & 0x7FFFFFFF) - (value & 0x80000000)


def _uint24(raw: bytes) -> int:
    return int.from_bytes(raw, "big")


def _unpack(layout: struct.Struct, data: object, what: str) -> tuple:
    raw = bytes(data)  # type: ignore[call-overload]
    if len(raw) < layout.size:
        raise ValueError(f"{what} needs {layout.size} bytes, got {len(raw)}")
    return layout.unpack_from(raw)


@dataclass(frozen=True)
class HandoverWordHeader:
    """The handover word that opens each subframe payload."""

    SIZE: ClassVar[int] = _HOW.size

    z_counter: int
    emergency: bool
    anti_spoof: bool
    subframe_id: int

    @classmethod
    def from_bytes(cls, data) -> HandoverWordHeader:
        (raw,) = _unpack(_HOW, data, "handover word")
        b0, b1, b2 = raw
        return cls(
            z_counter=(b0 << 9) + (b1 << 1) + (b2 >> 7),
            emergency=bool(b2 & 0b0100_0000),
            anti_spoof=bool(b2 & 0b0010_0000),
            subframe_id=(b2 >> 2) & 0b111,
        )


@dataclass(frozen=True)
class SatClockHeader:
    """Subframe 1: week number, health and satellite clock correction."""

    SIZE: ClassVar[int] = _SAT_CLOCK.size

    week_number: int
    ura_index: int
    sv_health: int
    l2p_data_flag: bool
    t_gd: int
    iodc: int
    t_oc: int
    af2: int
    af1: int
    af0: int

    @classmethod
    def from_bytes(cls, data) -> SatClockHeader:
        (wn_and_ura, health, reserved, t_gd, iodc_last,
         t_oc, af2, af1, af0) = _unpack(_SAT_CLOCK, data, "satellite clock")
        return cls(
            week_number=wn_and_ura >> 6,
            ura_index=wn_and_ura & 0b1111,
            sv_health=health >> 2,
            l2p_data_flag=bool(reserved[0] & 0b1000_0000),
            t_gd=t_gd,
            iodc=(health & 0x03) * 0x100 + iodc_last,
            t_oc=t_oc,
            af2=af2,
            af1=af1,
            af0=_uint24(af0) >> 2,
        )


@dataclass(frozen=True)
class EphemerisHeader:
    """Subframes 2 and 3 joined: the broadcast orbit parameters."""

    SIZE: ClassVar[int] = _EPHEMERIS.size

    iode: int
    c_rs: float
    delta_n: float
    m0: float
    c_uc: float
    e: float
    c_us: float
    sqrt_of_a: float
    t_oe: float
    fit_interval: bool
    aodo: int
    c_ic: float
    omega0: float
    c_is: float
    i0: float
    c_rc: float
    omega: float
    ascending_rate: float
    inclination_rate: float

    @classmethod
    def from_bytes(cls, data) -> EphemerisHeader:
        (iode1, c_rs, delta_n, m0, c_uc, e, c_us, sqrt_a, t_oe, aodo,
         c_ic, omega0, c_is, i0, c_rc, omega, angular_speed, _iode2,
         idot) = _unpack(_EPHEMERIS, data, "ephemeris")
        return cls(
            iode=iode1,
            c_rs=_signed16(c_rs) * 2.0 ** -5,
            delta_n=_signed16(delta_n) * 2.0 ** -43,
            m0=_signed32(m0) * 2.0 ** -31,
            c_uc=_signed16(c_uc) * 2.0 ** -29,
            e=e * 2.0 ** -33,
            c_us=_signed16(c_us) * 2.0 ** -29,
            sqrt_of_a=sqrt_a * 2.0 ** -19,
            t_oe=t_oe * 2.0 ** 4,
            fit_interval=bool(aodo & 0b1000_0000),
            aodo=(aodo >> 2) & 0b1_1111,
            c_ic=_signed16(c_ic) * 2.0 ** -29,
            omega0=_signed32(omega0) * 2.0 ** -31,
            c_is=_signed16(c_is) * 2.0 ** -29,
            i0=_signed32(i0) * 2.0 ** -31,
            c_rc=_signed16(c_rc) * 2.0 ** -5,
            omega=_signed32(omega) * 2.0 ** -31,
            ascending_rate=_uint24(angular_speed) * 2.0 ** -43,
            inclination_rate=(_signed16(idot) >> 2) * 2.0 ** -43,
        )