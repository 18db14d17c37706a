class OrderValidationError(ValueError):
    """Client-side validation failed; no request was sent."""

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(message)
