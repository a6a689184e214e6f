"""Exception hierarchy for jsonview.

All errors raised by the package derive from :class:`JsonViewError` and carry
an :class:`~jsonview.core.constants.ErrorCode`.
"""

from typing import Optional

from jsonview.core.constants import ErrorCode


class JsonViewError(Exception):
    """Base error for jsonview."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INTERNAL_ERROR):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class PropertyAccessError(JsonViewError):
    """A structured-object property could not be read.

    Recoverable: the traversal engine reports it and omits the property.
    """

    def __init__(self, name: str, declaring_type: type, cause: Optional[BaseException] = None):
        self.name = name
        self.declaring_type = declaring_type
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(
            f"Cannot read property {declaring_type.__qualname__}.{name}{detail}",
            ErrorCode.ACCESS_ERROR,
        )


class SinkError(JsonViewError):
    """Output sink received an emission it cannot accept."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.SINK_ERROR)


class ConfigError(JsonViewError):
    """Configuration error."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        super().__init__(message, error_code)
