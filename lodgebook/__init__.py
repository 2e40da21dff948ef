"""Residents, rooms and payments ledger for a small lodging facility."""

__version__ = "1.0.0"
