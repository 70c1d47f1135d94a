"""Enrollment identifier generation."""

from uuid import uuid4


def new_enrollment_id() -> str:
    """Return a new random enrollment id.

    UUID4 draws from the OS entropy source, so ids stay unique across
    processes and restarts. A failing entropy source raises and is
    treated as fatal.
    """
    return str(uuid4())
