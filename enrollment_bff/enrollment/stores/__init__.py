"""Enrollment store implementations."""

from enrollment_bff.enrollment.store import EnrollmentStore
from enrollment_bff.enrollment.stores.inmemory import InMemoryEnrollmentStore

__all__ = [
    "EnrollmentStore",
    "InMemoryEnrollmentStore",
]
