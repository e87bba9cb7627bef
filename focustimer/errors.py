"""Domain errors raised by the services and mapped to HTTP responses in main."""


class FocusTimerError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(FocusTimerError):
    """The id does not resolve under the caller's own user id."""
    status_code = 404


class ConflictError(FocusTimerError):
    """The operation is not allowed in the row's current state."""
    status_code = 409


class InvalidInputError(FocusTimerError):
    status_code = 422
