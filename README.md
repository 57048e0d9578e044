# gnssrx

A small GNSS receiver toolkit in two parts:

* **GPS navigation frame parsing.** You feed the correlator output of a tracked
  GPS L1 C/A signal into a parser, one value per millisecond. The parser
  recovers the 50 bit/s navigation bits (20 samples per bit) and finds the
  TLM preamble. It checks the parity of every 30-bit word and decodes the
  handover word, subframe 1 (satellite clock) and subframes 2–3 (ephemeris)
  into a storage object. Each stage keeps counters that you can read
  afterwards.
* **Satellite position estimation.** The package computes a GPS satellite's
  position from Keplerian broadcast ephemeris. For GLONASS it propagates
  position and velocity with a four-stage Runge–Kutta integrator and converts
  the result to geodetic coordinates.

The package uses only the standard library. It needs Python 3.10 or later.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Parsing a GPS navigation frame

```python
from gnssrx.storage import CommonGPSSatelliteStorage
from gnssrx.parser import make_parser

storage = CommonGPSSatelliteStorage()
parser = make_parser(storage)

with open("I_P.txt") as samples:
    for line in samples:
        for token in line.split():
            parser.handle_signal(float(token))

for stat in parser.stat():
    print(stat.name)
    for key, value in stat.values().items():
        print(f"  {stat.param_name(key)}: {value}")

print(storage.z_counter)
print(storage.satellite_clock)   # SatClockHeader, or None if not decoded
print(storage.ephemeris)         # EphemerisHeader, or None if not decoded
```

`parser.stat()` returns three `Stat` objects, one for each of these stages:

* the bit collector, with received signals, collected bits and bit errors;
* the subframe collector, with received bits, produced words, produced
  subframes, TLM synchronization errors and parity errors;
* the subframe parser, with received subframes and one counter for each
  subframe type.

`parser.clear()` resets all state and counters. `make_parser` accepts only a
`GPSSatelliteStorage`. For any other storage it raises `ValueError`.

## Estimating a satellite position

GPS, from broadcast ephemeris:

```python
from gnssrx.gps_estimator import CommonGPSEphemerisStorage
from gnssrx.estimator_factory import make_estimator

storage = CommonGPSEphemerisStorage(
    timestamp=201584.0,
    mean_anomaly=0.9556,
    semi_major_axis=5153.762765884399414 ** 2,
    eccentricity=0.010925623239018,
    longitude_of_ascending_node=-0.6514,
    inclination=0.9624,
    argument_of_perigee=1.6163,
    mean_motion_difference=4.307e-9,
    ascending_rate=-8.057e-9,
    inclination_rate=9.287e-12,
    correction_sin_perigee=0.000010803341866,
    correction_cos_perigee=-0.000007700175047,
    correction_sin_radial=-148.875,
    correction_cos_radial=177.03125,
    correction_sin_inclination=-0.000000111758709,
    correction_cos_inclination=-0.000000176951289,
)
location = make_estimator(storage).calculate_location(28818)
print(location.x, location.y, location.z)
```

GLONASS, from position, velocity and acceleration (km, km/s, km/s²) at a
reference time:

```python
from gnssrx.glonass_estimator import CommonGlonassEphemerisStorage
from gnssrx.estimator_factory import make_estimator

storage = CommonGlonassEphemerisStorage(
    78300,
    (-16050.5732421875, 14867.69921875, 13161.53955078125,
     1.122589111328125, -1.430501937866211, 2.971652984619141),
    (-0.000000001862645, -0.000000000931323, 0.0),
    12.326985597e-6,
    0.909e-12,
)
location = make_estimator(storage).calculate_location(79103 - 0.078468392917055)
print(storage.location_and_velocity)   # propagated state vector
print(location)                         # Vector3(latitude, longitude, height)
```

The GLONASS estimator writes the propagated state and epoch back into the
storage. A second call therefore continues from the last computed epoch. The
geodetic result holds latitude and longitude in radians and height in km.
The conversion is also available on its own as
`gnssrx.glonass_estimator.to_geocentric`.

`make_estimator` picks the estimator from the storage's `protocol_type`
(`gnssrx.protocol.ProtocolType`):

* BeiDou and Galileo raise `ValueError`.
* A storage that reports a protocol but is not the matching storage class
  raises `TypeError`.

## Command line

The `gnssrx` command has three subcommands:

```
gnssrx parse [SIGNAL] [--output-dir DIR]
gnssrx gps [--time SECONDS]
gnssrx glonass [--time SECONDS]
```

* `parse` reads whitespace-separated samples from `SIGNAL` (default
  `I_P.txt`) and stops at the first token that is not a number. It prints
  the statistics, the Z counter, and the decoded clock and ephemeris fields.
  It writes `SatClock.txt` and `Ephemeris.txt` into `--output-dir` (default:
  the current directory) for whichever of the two was decoded. If the signal
  file cannot be opened, it exits with status 1.
* `gps` prints the location of a built-in sample GPS ephemeris at `--time`
  (default 28818).
* `glonass` propagates a built-in sample GLONASS ephemeris to `--time` and
  prints the new position, the velocity and the geodetic location.

Run `gnssrx --help` to list the options.

## Building blocks

You can also use the lower layers on their own:

* `gnssrx.collectors`: `BitCollector`, `ByteCollector`, `SyncrobyteSeeker`,
  `WordCollector` (with `ParityValidator` and `CollectResult`) and
  `SubframeCollector` (with `CollectorState`).
* `gnssrx.processors`: `SubframeProcessor`, `SatClockProcessor`,
  `EphemerisProcessor` and the `SubframeType` enumeration.
* `gnssrx.headers`: `HandoverWordHeader`, `SatClockHeader` and
  `EphemerisHeader`. Each is a frozen dataclass built with `from_bytes`,
  which raises `ValueError` on short input.
* `gnssrx.bytedata.ByteData`, `gnssrx.stat.Stat` and
  `gnssrx.vector3.Vector3`.
* `gnssrx.matrix`: `DenseMatrix` and the list helpers `scale`, `dot`, `vsub`,
  `vadd` and `format_vector`.

## What it does not do

* It does not acquire or track signals. The input must already be correlator
  output.
* Frame parsing covers GPS only. There is no GLONASS frame parser.
* Almanac subframes (4 and 5) are counted but not decoded.