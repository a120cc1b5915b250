from fastapi import status


class GatewayError(Exception):
    """Base class for failures that end a request with an ``{"error": ...}`` body."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class RequestValidationFailed(GatewayError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "invalid request"


class InvalidBodyError(RequestValidationFailed):
    default_message = "invalid JSON body"


class MissingBucketError(RequestValidationFailed):
    default_message = "bucket is required"


class MissingKeyError(RequestValidationFailed):
    default_message = "key is required"


class InvalidExpirationError(RequestValidationFailed):
    default_message = "days, hours and minutes must not be negative"


class UnauthorizedError(GatewayError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "unauthorized"


class AuthMisconfiguredError(GatewayError):
    default_message = "API_TOKEN is not set on server"


class ToolExecutionError(GatewayError):
    """Raised when ``mc`` exits non-zero. The message is the tool's own output."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "mc command failed"

    def __init__(self, message: str | None = None, exit_status: int | None = None) -> None:
        super().__init__(message)
        self.exit_status = exit_status


class SigningTimeoutError(GatewayError):
    status_code = status.HTTP_504_GATEWAY_TIMEOUT
    default_message = "mc command timed out"


class OutputParseError(GatewayError):
    """Raised when ``mc`` succeeded but its output carries no usable URL."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "could not parse mc output"


class NoShareLineError(OutputParseError):
    default_message = "could not find Share: line in mc output"


class NoURLFoundError(OutputParseError):
    default_message = "could not find a URL in mc output"


class ClientDisconnectedError(GatewayError):
    status_code = 499
    default_message = "client closed request"
