# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Typed failures raised by the service and repository layers.
Controllers translate them to HTTP status codes; nothing here knows FastAPI.
"""


class MembershipServiceError(Exception):
    """Base class for every failure the core reports to its caller."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(MembershipServiceError):
    """Input violates a shape or business rule."""

    status_code = 400


class MalformedIdentifier(MembershipServiceError):
    """The id is not in a shape storage can resolve."""

    status_code = 400


class NotFound(MembershipServiceError):
    """The id is well-formed but nothing is stored under it."""

    status_code = 404


class DuplicateMember(MembershipServiceError):
    """Another record already holds the email or phone."""

    status_code = 409


class StorageUnavailable(MembershipServiceError):
    """Storage failed to answer; the caller may retry."""

    status_code = 500


class DuplicateAccount(MembershipServiceError):
    """A user account with the same email already exists."""

    status_code = 409
