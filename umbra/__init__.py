"""Umbra: a toroidal Game-of-Life simulation engine with foraging entities."""

__version__ = "0.1.0"
