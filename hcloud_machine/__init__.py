"""Hetzner Cloud machine driver."""

__version__ = "0.1.0"
