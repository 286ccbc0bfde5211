class CronzoneError(Exception):
    """Base error."""

class NotUtcError(CronzoneError, ValueError):
    """Raised when an instant argument is not tagged as UTC."""

class CronParseError(CronzoneError, ValueError):
    """Raised when a cron expression fails field or grammar validation."""

    def __init__(self, message: str, expression: str = "") -> None:
        self.expression = expression
        super().__init__(message)

class UnknownZoneError(CronzoneError, KeyError):
    """Raised when a timezone key cannot be resolved."""

class NoInstantError(CronzoneError, LookupError):
    """Raised by point helpers when the requested boundary does not exist."""
