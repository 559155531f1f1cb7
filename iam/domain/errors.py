"""
IAM Error Catalogue

Every error code the core can return, grouped by kind. The API layer maps
kinds onto HTTP status codes; use cases only deal in codes.
"""

from enum import Enum

from .result import Error


class ErrorKind(str, Enum):
    """Coarse error classification"""

    validation = "validation"
    conflict = "conflict"
    authentication = "authentication"
    authorization = "authorization"
    not_found = "not_found"
    generation = "generation"
    internal = "internal"


# Password policy
PASSWORD_TOO_SHORT = Error("PASSWORD_TOO_SHORT", "Password must be at least 6 characters long")
PASSWORD_TOO_LONG = Error("PASSWORD_TOO_LONG", "Password must not exceed 128 characters")
PASSWORD_NO_UPPER = Error("PASSWORD_NO_UPPER", "Password must contain at least one uppercase letter")
PASSWORD_NO_LOWER = Error("PASSWORD_NO_LOWER", "Password must contain at least one lowercase letter")
PASSWORD_NO_DIGIT = Error("PASSWORD_NO_DIGIT", "Password must contain at least one digit")
PASSWORD_NO_SPECIAL = Error("PASSWORD_NO_SPECIAL", "Password must contain at least one special character")

# Authentication
EMAIL_ALREADY_EXISTS = Error("EMAIL_ALREADY_EXISTS", "Email already exists")
INVALID_CREDENTIALS = Error("INVALID_CREDENTIALS", "Invalid email or password")
USER_INACTIVE = Error("USER_INACTIVE", "User account is inactive")
USER_NOT_FOUND = Error("USER_NOT_FOUND", "User not found")
TOKEN_INVALID = Error("TOKEN_INVALID", "Token is invalid")
TOKEN_MALFORMED = Error("TOKEN_MALFORMED", "Token is malformed")
TOKEN_EXPIRED = Error("TOKEN_EXPIRED", "Token has expired")
TOKEN_REQUIRED = Error("TOKEN_REQUIRED", "Token is required")
AUTHENTICATION_FAILED = Error("AUTHENTICATION_FAILED", "Failed to authenticate user")

# Workspaces
WORKSPACE_CREATE_FORBIDDEN = Error(
    "WORKSPACE_CREATE_FORBIDDEN", "Only super admin users can create workspaces"
)
WORKSPACE_CREATE_FAILED = Error("WORKSPACE_CREATE_FAILED", "Failed to create workspace")
WORKSPACE_SLUG_GENERATION_FAILED = Error(
    "WORKSPACE_SLUG_GENERATION_FAILED", "Failed to generate unique workspace slug"
)

# Session cache
SESSION_REVOCATION_FAILED = Error("SESSION_REVOCATION_FAILED", "Failed to revoke sessions")


ERROR_KINDS: dict[str, ErrorKind] = {
    PASSWORD_TOO_SHORT.code: ErrorKind.validation,
    PASSWORD_TOO_LONG.code: ErrorKind.validation,
    PASSWORD_NO_UPPER.code: ErrorKind.validation,
    PASSWORD_NO_LOWER.code: ErrorKind.validation,
    PASSWORD_NO_DIGIT.code: ErrorKind.validation,
    PASSWORD_NO_SPECIAL.code: ErrorKind.validation,
    EMAIL_ALREADY_EXISTS.code: ErrorKind.conflict,
    INVALID_CREDENTIALS.code: ErrorKind.authentication,
    TOKEN_INVALID.code: ErrorKind.authentication,
    TOKEN_MALFORMED.code: ErrorKind.authentication,
    TOKEN_EXPIRED.code: ErrorKind.authentication,
    TOKEN_REQUIRED.code: ErrorKind.authentication,
    USER_INACTIVE.code: ErrorKind.authorization,
    WORKSPACE_CREATE_FORBIDDEN.code: ErrorKind.authorization,
    USER_NOT_FOUND.code: ErrorKind.not_found,
    WORKSPACE_SLUG_GENERATION_FAILED.code: ErrorKind.generation,
    WORKSPACE_CREATE_FAILED.code: ErrorKind.internal,
    AUTHENTICATION_FAILED.code: ErrorKind.internal,
    SESSION_REVOCATION_FAILED.code: ErrorKind.internal,
}


def kind_of(error: Error) -> ErrorKind:
    """Unknown codes are treated as internal so they never leak as client errors"""
    return ERROR_KINDS.get(error.code, ErrorKind.internal)
