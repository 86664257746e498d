"""geoqc: check vector file attribute tables against standard schemas."""

__version__ = "1.0.0"
