class IntakeException(Exception):
    """Base intake exception with message and optional data."""

    def __init__(self, message: str, data: dict = None):
        self.message = message
        self.data = data or {}
        super().__init__(self.message)


class IntakeConfigurationError(IntakeException):
    """Raised when a step map or gating table is internally inconsistent."""
    pass


class UnknownModeError(IntakeConfigurationError):
    """Raised when a caller asks for an intake mode that has no binding."""
    pass
