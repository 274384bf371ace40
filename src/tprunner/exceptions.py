#
# tprunner/exceptions.py
#
"""
Custom exceptions for tprunner.
"""


class TprunnerError(Exception):
    """Base class for all tprunner errors."""

    pass


class ApiError(TprunnerError):
    """Base class for errors talking to the TestProject API."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: Exception | None = None,
    ):
        self.path = path
        self.details = details
        full_message = f"[TestProject API] {message}"
        if path:
            full_message += f" (Path: '{path}')"
        super().__init__(full_message)
        if details is not None:
            self.add_note(f"Original error: {type(details).__name__}: {details}")


class ApiTransportError(ApiError):
    """The request never produced an HTTP response (connect, read, timeout)."""

    pass


class ApiStatusError(ApiError):
    """The service answered with a non-success HTTP status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        response_text: str = "",
        path: str | None = None,
        details: Exception | None = None,
    ):
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(f"{message} [HTTP {status_code}]", path=path, details=details)


class ApiNotFoundError(ApiStatusError):
    """The project, job or execution does not exist server-side."""

    pass


class ApiUnauthorizedError(ApiStatusError):
    """The API key was rejected."""

    pass


class ApiResponseError(ApiError):
    """A successful response did not carry the expected JSON body."""

    pass


# 🔼⚙️
