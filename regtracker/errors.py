"""
Error taxonomy for the registration tracker.

Every operation either succeeds or is rejected with the prior state intact,
so there are no retryable or fatal classes here.
"""


class RegistrationTrackerError(Exception):
    """Base class for tracker errors."""


class RegistrationValidationError(RegistrationTrackerError, ValueError):
    """Required input is missing or an operation is not allowed (e.g. locked step)."""


class StorageDecodeError(RegistrationTrackerError, ValueError):
    """Persisted or imported student data is malformed."""
