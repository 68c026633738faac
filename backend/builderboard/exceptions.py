"""
Exception hierarchy for the BuilderBoard workflow.

Every exception carries a machine-readable ``code`` and the HTTP status the
API layer renders it with. Handlers in ``builderboard.main`` turn them into
``{"error": code, "message": text}`` responses.
"""


class DomainException(Exception):
    """Base exception for all domain errors"""

    code = "error"
    status_code = 400

    def __init__(self, message: str | None = None):
        self.message = message or self.__doc__ or self.code
        super().__init__(self.message)


class ValidationException(DomainException):
    """Data validation failed"""

    code = "validation_error"
    status_code = 400

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")
        self.details = [{"field": field, "message": message}]


class AuthenticationException(DomainException):
    """Authentication required"""

    code = "unauthorized"
    status_code = 401


class InvalidTokenException(AuthenticationException):
    """This link is invalid or has expired"""

    code = "invalid_token"


class AuthorizationException(DomainException):
    """You are not allowed to perform this action"""

    code = "forbidden"
    status_code = 403


class ResourceNotFoundException(DomainException):
    """Requested resource not found"""

    code = "not_found"
    status_code = 404

    def __init__(self, resource_type: str, identifier):
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(f"{resource_type} not found: {identifier}")


class ConflictException(DomainException):
    """Resource state conflicts with the request"""

    code = "conflict"
    status_code = 409


class DuplicateApplicationException(ConflictException):
    """You have already applied for this job"""

    code = "duplicate_application"


class TokenAlreadyUsedException(ConflictException):
    """This link has already been used"""

    code = "token_already_used"


class ApplicationAlreadyDecidedException(ConflictException):
    """This application has already been decided"""

    code = "application_already_decided"

    def __init__(self, status: str):
        self.status = status
        super().__init__(f"This application has already been {status}")


class NotificationDeliveryException(DomainException):
    """Sending a notification failed.

    Never surfaced to API clients; callers log and alert instead.
    """

    code = "notification_failed"
    status_code = 502
