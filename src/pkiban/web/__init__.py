"""Web application module for the pkiban IBAN generator."""

from .api import app, get_builder

__all__ = [
    "app",
    "get_builder",
]
