class GenderException(Exception):
    """Base class for every error raised by the gender-api.com client."""

    name = 'GenderException'


class ConfigurationError(GenderException):
    name = 'ConfigurationError'


class ValidationError(GenderException, ValueError):
    name = 'ValidationError'


class ApiError(GenderException):
    """
    The HTTP call completed but did not report success.
    Only the status code is kept, the errno/errmsg fields of the body are left to the caller.
    """
    name = 'ApiError'

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code
