"""Event-file reading and particle reconstruction for silicon-telescope data."""

__version__ = "0.1.0"