"""Exception hierarchy for accelsend.

Request handling never raises these; they surface while settings and
interceptors are being built.
"""


class AccelSendError(Exception):
    """Base exception for accelsend errors."""

    def __init__(self, message: str, details: dict[str, object] | None = None):
        """Initialize the error.

        Args:
            message: Human readable error message
            details: Optional structured context for logging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(AccelSendError):
    """Raised when configuration loading or validation fails."""

    pass
