class EastcalError(Exception):
    """Base error."""

class InvalidDateError(EastcalError, ValueError):
    """Raised when an era/year/month/day combination does not exist."""

class DateRangeError(EastcalError, ValueError):
    """Raised when a civil date lies outside the data of a calendar variant."""

class UnknownVariantError(EastcalError, KeyError):
    """Raised when a calendar variant is not registered."""
