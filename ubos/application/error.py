"""Application layer errors."""


class ApplicationError(Exception):
    """Base application error."""

    pass


class InternalError(ApplicationError):
    """Unexpected fault while running a use case.

    Carries only the operation name. The underlying exception is chained
    and logged, never exposed to callers.
    """

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Internal error during {operation}")
