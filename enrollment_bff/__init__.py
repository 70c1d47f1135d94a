"""Enrollment BFF: benefits-plan enrollment lifecycle service."""

__version__ = "1.0.0"
