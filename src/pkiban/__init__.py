"""pkiban: Pakistan IBAN generator."""

__version__ = "0.1.0"
