"""Podevim backend: school pickups and parking reservations."""

__version__ = "1.0.0"
