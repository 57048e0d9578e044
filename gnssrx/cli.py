"""Command-line entry point: decode a signal file or estimate satellite positions."""

from __future__ import annotations

import argparse
import logging
import math
import sys
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

from .estimator_factory import make_estimator
from .glonass_estimator import CommonGlonassEphemerisStorage
from .gps_estimator import CommonGPSEphemerisStorage
from .headers import EphemerisHeader, SatClockHeader
from .parser import make_parser
from .storage import CommonGPSSatelliteStorage

logger = logging.getLogger(__name__)

_SECTION = "=" * 44

# (file label, console label, attribute)
_CLOCK_FIELDS = (
    ("Week_number", "Week number", "week_number"),
    ("URA_index", "URA index", "ura_index"),
    ("SV_Health", "SV Health", "sv_health"),
    ("L2_P_Data_Flag", "L2 P Data Flag", "l2p_data_flag"),
    ("t_GD", "t_GD", "t_gd"),
    ("IODC", "IODC", "iodc"),
    ("t_OC", "t_OC", "t_oc"),
    ("t_f2", "t_f2", "af2"),
    ("a_f1", "a_f1", "af1"),
    ("a_f0", "a_f0", "af0"),
)

_EPHEMERIS_FIELDS = (
    ("IODE", "IODE", "iode"),
    ("Mean_Motion_Correction", "Delta_N", "delta_n"),
    ("Mean_Anomaly", "M_0", "m0"),
    ("Eccentricity", "Eccentricity", "e"),
    ("Sqrt_of_Semimajor", "Sqrt of Semimajor", "sqrt_of_a"),
    ("t_OE", "t_OE", "t_oe"),
    ("AODO", "AODO", "aodo"),
    ("Longtitude_of_ascending_node", "Longtitude of ascending node", "omega0"),
    ("Inclination", "Inclination", "i0"),
    ("Argument_of_periapsis", "Argument of periapsis", "omega"),
    ("Ascending_rate", "Ascending rate", "ascending_rate"),
    ("Inclination_rate", "Inclination rate", "inclination_rate"),
    ("C_RS", "C_RS", "c_rs"),
    ("C_UC", "C_UC", "c_uc"),
    ("C_US", "C_US", "c_us"),
    ("C_IC", "C_IC", "c_ic"),
    ("C_IS", "C_IS", "c_is"),
    ("C_RC", "C_RC", "c_rc"),
)

_PI = 3.1415926535

_GPS_EXAMPLE = dict(
    timestamp=201584.0,
    mean_anomaly=0.304183455184102 * _PI,
    semi_major_axis=math.pow(5153.762765884399414, 2),
    eccentricity=0.010925623239018,
    longitude_of_ascending_node=-0.207362390588969 * _PI,
    inclination=0.306331528816372 * _PI,
    argument_of_perigee=0.514487708918750 * _PI,
    mean_motion_difference=0.000000001370950 * _PI,
    ascending_rate=-0.000000002564661 * _PI,
    inclination_rate=0.000000000002956 * _PI,
    correction_sin_perigee=0.000010803341866,
    correction_cos_perigee=-0.000007700175047,
    correction_sin_radial=-148.875000000000000,
    correction_cos_radial=177.031250000000000,
    correction_sin_inclination=-0.000000111758709,
    correction_cos_inclination=-0.000000176951289,
)
_GPS_DEFAULT_TIME = 28818.0

_GLONASS_EXAMPLE = dict(
    timestamp=78300.0,
    location_and_velocity=(
        -16050.5732421875, 14867.69921875, 13161.53955078125,
        1.122589111328125, -1.430501937866211, 2.971652984619141,
    ),
    acceleration=(-0.000000001862645, -0.000000000931323, 0.0),
    sat_time_to_mdv=12.326985597e-6,
    gamma=0.909e-12,
)
_GLONASS_DEFAULT_TIME = 79103 - 0.078468392917055


def _num(value: object) -> str:
    if isinstance(value, (bool, int)):
        return str(int(value))
    return f"{value:g}"


def _read_signal(lines: Iterable[str]) -> Iterator[float]:
    """Yield numbers from whitespace-separated text until the first non-number."""
    for line in lines:
        for token in line.split():
            try:
                yield float(token)
            except ValueError:
                return


def _field_lines(header: object, fields: Sequence[tuple[str, str, str]],
                 console: bool) -> list[str]:
    if console:
        return [f"{label}: {_num(getattr(header, attr))}" for _, label, attr in fields]
    return [f"{label} {_num(getattr(header, attr))}" for label, _, attr in fields]


def _write_fields(path: Path, header: object, fields: Sequence[tuple[str, str, str]]) -> None:
    path.write_text("".join(f"{line}\n" for line in _field_lines(header, fields, False)))


def _run_parse(args: argparse.Namespace) -> int:
    try:
        handle = open(args.signal, encoding="utf-8")
    except OSError:
        logger.error("Couldn't open signal file")
        return 1

    storage = CommonGPSSatelliteStorage()
    parser = make_parser(storage)
    with handle:
        for value in _read_signal(handle):
            parser.handle_signal(value)

    output_dir = Path(args.output_dir)
    clock: SatClockHeader | None = storage.satellite_clock
    ephemeris: EphemerisHeader | None = storage.ephemeris
    if clock is not None:
        _write_fields(output_dir / "SatClock.txt", clock, _CLOCK_FIELDS)
    if ephemeris is not None:
        _write_fields(output_dir / "Ephemeris.txt", ephemeris, _EPHEMERIS_FIELDS)

    out = [" STAT ".center(44, "=")]
    for stat in parser.stat():
        out.append(stat.name)
        out.extend(f"  {stat.param_name(key)}: {value}" for key, value in stat.values().items())
    out.append(" HOW ".center(44, "="))
    out.append(f"Z counter: {storage.z_counter}")
    out.append(" SATELLITE CLOCK ".center(44, "="))
    out.extend(_field_lines(clock, _CLOCK_FIELDS, True) if clock else ["Not received"])
    out.append(" EPHEMERIS ".center(44, "="))
    out.extend(_field_lines(ephemeris, _EPHEMERIS_FIELDS, True)
               if ephemeris else ["Not received"])
    out.append(_SECTION)
    print("\n".join(out) + "\n")

    logger.info("All data is successfully presented")
    return 0


def _run_gps(args: argparse.Namespace) -> int:
    storage = CommonGPSEphemerisStorage(**_GPS_EXAMPLE)
    location = make_estimator(storage).calculate_location(args.time)
    print(f"Sattelite geocentric location: ({_num(location.x)}, "
          f"{_num(location.y)}, {_num(location.z)})")
    return 0


def _run_glonass(args: argparse.Namespace) -> int:
    storage = CommonGlonassEphemerisStorage(**_GLONASS_EXAMPLE)
    location = make_estimator(storage).calculate_location(args.time)
    state = storage.location_and_velocity
    print("Current satellite location: (" + ", ".join(_num(v) for v in state[:3]) + ")")
    print("Current satellite velocity: (" + ", ".join(_num(v) for v in state[3:]) + ")")
    print(f"Current sattelite geocentric location: ({_num(location.x)}, "
          f"{_num(location.y)}, {_num(location.z)})")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gnssrx", description=__doc__)
    commands = parser.add_subparsers(dest="command", required=True)

    parse = commands.add_parser("parse", help="decode a GPS navigation signal file")
    parse.add_argument("signal", nargs="?", default="I_P.txt",
                       help="file of correlator samples (default: I_P.txt)")
    parse.add_argument("--output-dir", default=".",
                       help="where SatClock.txt and Ephemeris.txt are written")
    parse.set_defaults(handler=_run_parse)

    gps = commands.add_parser("gps", help="estimate the sample GPS satellite location")
    gps.add_argument("--time", type=float, default=_GPS_DEFAULT_TIME,
                     help="time of week in seconds")
    gps.set_defaults(handler=_run_gps)

    glonass = commands.add_parser("glonass",
                                  help="estimate the sample GLONASS satellite location")
    glonass.add_argument("--time", type=float, default=_GLONASS_DEFAULT_TIME,
                         help="time of day in seconds")
    glonass.set_defaults(handler=_run_glonass)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command given by ``argv`` and return the exit status."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    args = _build_parser().parse_args(argv)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())