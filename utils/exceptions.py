"""
Error taxonomy shared by the storage layer, the repositories and the auth service.
Every error carries a machine-readable code so the HTTP layer can map kinds to
status codes without inspecting messages.
"""


class ChirpyError(Exception):
    """Base class for every error raised by the core."""

    code = "INTERNAL_ERROR"
    default_message = "Something went wrong"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailure(ChirpyError):
    code = "VALIDATION_ERROR"
    default_message = "Invalid input"


class Conflict(ChirpyError):
    code = "CONFLICT"
    default_message = "Record already exists"


class NotFound(ChirpyError):
    code = "NOT_FOUND"

    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} not found")


class Unauthorized(ChirpyError):
    """The caller is known but has no rights over the target."""

    code = "UNAUTHORIZED"
    default_message = "You do not have permission to perform this action"


class Unauthenticated(ChirpyError):
    """Missing, malformed, expired or otherwise invalid credential."""

    code = "UNAUTHENTICATED"
    default_message = "Authentication required"


class StorageFailure(ChirpyError):
    code = "STORAGE_FAILURE"
    default_message = "Could not access the datastore"
