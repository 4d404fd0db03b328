"""Errors raised by the layout core."""


class InvalidParameter(ValueError):
    """Raised for non-positive grid counts, negative estimator inputs or an invalid frame delta."""
