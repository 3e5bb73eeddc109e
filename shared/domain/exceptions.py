"""Domain error taxonomy shared by all apps.

Services raise these; the API layer renders them through
``shared.api.exception_handler``. ``target`` names the thing that was
missing or invalid (``sport``, ``facility``, ``timeSlot`` ...).
"""


class DomainError(Exception):
    """Base domain error with a machine-readable code and HTTP status."""

    code = 'domain_error'
    status_code = 400

    def __init__(self, message: str, target: str | None = None):
        self.message = message
        self.target = target
        super().__init__(message)


class NotFound(DomainError):
    """A referenced sport, facility, coach, package or booking is absent."""

    code = 'not_found'
    status_code = 404


class InvalidArgument(DomainError):
    """Malformed input: booking kind, missing resource, status value."""

    code = 'invalid_argument'
    status_code = 400


class Conflict(DomainError):
    """The requested interval overlaps an existing booking."""

    code = 'conflict'
    status_code = 409


class PermissionDenied(DomainError):
    """The actor has no rights on the object."""

    code = 'permission_denied'
    status_code = 403


class InvalidState(DomainError):
    """The object's current state forbids the operation."""

    code = 'invalid_state'
    status_code = 400
