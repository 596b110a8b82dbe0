"""Error taxonomy shared by the services and the HTTP layer.

Every error carries the HTTP status it maps to; ``main.py`` registers a
single handler that renders them as ``{"error": message}``.
"""


class StackRoastError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(StackRoastError):
    """A required field is missing or has an invalid value."""

    status_code = 400


class NotFoundError(StackRoastError):
    status_code = 404


class DuplicateVoteError(StackRoastError):
    """The voter already voted on this roast."""

    status_code = 400

    def __init__(self, message: str = "You have already voted on this roast") -> None:
        super().__init__(message)


class CollaboratorError(StackRoastError):
    """The database or the AI provider call failed."""

    status_code = 500


class ConfigurationError(StackRoastError):
    status_code = 500
