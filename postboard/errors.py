"""
Exceptions raised across the service and store layers.

Validation problems are never raised; they travel back to the client as field
errors. The exceptions below cover the cases that are not plain validation.
"""


class PostboardError(Exception):
    """Base class for all application errors."""


class UsernameTakenError(PostboardError):
    """The username collided with the unique index on ``users.username``."""

    def __init__(self, username: str):
        super().__init__(f"Username {username!r} already exists")
        self.username = username


class PersistenceError(PostboardError):
    """The database rejected a write for a reason we do not recover from."""


class NotAuthenticatedError(PostboardError):
    def __init__(self, message: str = "not authenticated"):
        super().__init__(message)
