"""BRINCAPARK - API de reservas de parques."""

__version__ = "1.0.0"
