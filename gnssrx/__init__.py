"""GPS navigation frame parsing and GPS/GLONASS satellite position estimation."""

__version__ = "0.1.0"