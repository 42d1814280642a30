"""Parkour academy management core: rosters, attendance, CRM and sync."""

__version__ = "0.1.0"
