"""Enums for the enrollment domain."""

from enum import Enum


class EnrollmentStatus(str, Enum):
    """Lifecycle status of an enrollment.

    Pending is the only initial state and is never re-entered.
    Deleted is terminal.
    """

    PENDING = "pending"
    ACTIVE = "active"
    DELETED = "deleted"
