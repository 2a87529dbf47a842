"""Domain exceptions for the User Directory service."""


class DirectoryError(Exception):
    """Base exception for directory errors."""


class InvalidArgumentError(DirectoryError):
    """Raised when an argument is outside its accepted range."""


class NotFoundError(DirectoryError):
    """Raised when a user lookup misses the dataset."""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")


class UnavailableError(DirectoryError):
    """Raised when the data source cannot serve a request."""
