"""Domain error taxonomy mapped onto DRF's APIException hierarchy.

Each failure kind carries its HTTP status and a stable ``default_code`` that
ends up in the error envelope, so clients can branch on ``code`` instead of
parsing messages.
"""

from rest_framework import status
from rest_framework.exceptions import APIException


class BadRequest(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Bad request."
    default_code = "bad_request"


class Unauthorized(APIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Authentication required."
    default_code = "unauthorized"


class Forbidden(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You do not have permission to perform this action on this resource."
    default_code = "forbidden"


class NotFound(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found."
    default_code = "not_found"


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists."
    default_code = "conflict"


class InternalError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error."
    default_code = "internal_error"


class EmailAlreadyRegistered(Conflict):
    default_detail = "Email already registered."
    default_code = "email_already_registered"


class EmailInUse(Conflict):
    default_detail = "Email already in use."
    default_code = "email_in_use"


class SlugConflict(Conflict):
    default_detail = "An article with this slug already exists."
    default_code = "slug_conflict"


class InvalidCredentials(Unauthorized):
    default_detail = "Invalid email or password."
    default_code = "invalid_credentials"


class TokenExpired(Unauthorized):
    default_detail = "Token has expired."
    default_code = "token_expired"


class TokenInvalid(Unauthorized):
    default_detail = "Invalid token."
    default_code = "token_invalid"


class UserNotFound(Unauthorized):
    """The token is well-formed but its account is gone or soft-deleted."""

    default_detail = "Invalid token or user does not exist."
    default_code = "user_not_found"


class CurrentPasswordRequired(BadRequest):
    default_detail = "Current password is required to update password."
    default_code = "current_password_required"


class CurrentPasswordIncorrect(BadRequest):
    default_detail = "Current password is incorrect."
    default_code = "current_password_incorrect"


class BlocklistUnavailable(Exception):
    """Raised when the Redis token blocklist cannot be reached (fail-closed)."""


__all__ = [
    "BadRequest",
    "Unauthorized",
    "Forbidden",
    "NotFound",
    "Conflict",
    "InternalError",
    "EmailAlreadyRegistered",
    "EmailInUse",
    "SlugConflict",
    "InvalidCredentials",
    "TokenExpired",
    "TokenInvalid",
    "UserNotFound",
    "CurrentPasswordRequired",
    "CurrentPasswordIncorrect",
    "BlocklistUnavailable",
]
