"""Domain errors raised by the services.

Endpoints translate them into HTTP responses; each carries only a
human-readable message and the status code it maps to.
"""


class HuddleError(Exception):
    """Base class for failures surfaced to the caller."""

    status_code = 400
    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class Unauthorized(HuddleError):
    """No identity, or the identity lacks the membership or role required."""

    status_code = 403
    default_message = "Unauthorized"


class NotFound(HuddleError):
    status_code = 404
    default_message = "Not found"


class InvalidJoinCode(HuddleError):
    status_code = 400
    default_message = "Invalid join code"


class AlreadyMember(HuddleError):
    status_code = 409
    default_message = "User is already a member of this workspace"


class WorkspaceBusy(HuddleError):
    """Another join or removal holds the workspace lock."""

    status_code = 409
    default_message = "Workspace is busy, try again"


class InvalidOperation(HuddleError):
    status_code = 400
    default_message = "Operation not allowed"
