r"""Error values returned by request executors.

Errors are returned to the caller as values instead of being raised, so
one call always yields one outcome. They are still ``Exception``
subclasses so a caller can ``raise`` them where that is more convenient.
"""

from __future__ import annotations

__all__ = [
    "HttpError",
    "JsonDecodeError",
    "ParseError",
    "RequestError",
    "TransportError",
    "XmlParseError",
    "is_error",
]

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from reqlog.models import RawResponse


class RequestError(Exception):
    """Base class for all request error values.

    Args:
        code: A short machine-readable error code
            (e.g. ``"json_decode_error"``).
        message: A human-readable error message.
        data: Optional additional error data.

    Example:
        ```pycon
        >>> from reqlog.exceptions import RequestError
        >>> error = RequestError("invalid_order", "The order does not exist")
        >>> error.code
        'invalid_order'
        >>> str(error)
        'The order does not exist'

        ```
    """

    def __init__(self, code: str, message: str, data: Any = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Return the error as a log-friendly dictionary."""
        return {"code": self.code, "message": self.message, "data": self.data}


class TransportError(RequestError):
    """Raised-as-value when a request never completed.

    This covers DNS failures, refused connections and timeouts at the
    transport layer. No HTTP response is available.

    Args:
        code: A short machine-readable error code.
        message: A human-readable error message.
        cause: The underlying exception, if any.
    """

    def __init__(
        self, code: str, message: str, *, cause: BaseException | None = None, data: Any = None
    ) -> None:
        super().__init__(code, message, data)
        self.cause = cause


class HttpError(RequestError):
    """Error value for a response with a status outside [200, 299].

    Args:
        code: A short machine-readable error code, usually API-specific.
        message: A human-readable error message, usually extracted from
            the response body.
        status_code: The HTTP status code of the response.
        response: The raw response.
        data: Optional additional error data.
    """

    def __init__(
        self,
        code: str,
        message: str,
        *,
        status_code: int | None = None,
        response: RawResponse | None = None,
        data: Any = None,
    ) -> None:
        super().__init__(code, message, data)
        self.status_code = status_code
        self.response = response

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "status_code": self.status_code}


class ParseError(RequestError):
    """Error value for a 2xx response whose body does not match its
    declared content type."""


class JsonDecodeError(ParseError):
    """Error value for a malformed JSON body."""

    def __init__(self, message: str = "Failed to decode JSON", data: Any = None) -> None:
        super().__init__("json_decode_error", message, data)


class XmlParseError(ParseError):
    """Error value for a malformed XML body."""

    def __init__(self, message: str = "Failed to parse XML", data: Any = None) -> None:
        super().__init__("xml_parse_error", message, data)


def is_error(outcome: Any) -> bool:
    """Indicate if a request outcome is an error value.

    Args:
        outcome: The value returned by a request executor.

    Returns:
        ``True`` if the outcome is a ``RequestError``, otherwise ``False``.

    Example:
        ```pycon
        >>> from reqlog.exceptions import JsonDecodeError, is_error
        >>> is_error({"id": 1})
        False
        >>> is_error(JsonDecodeError())
        True

        ```
    """
    return isinstance(outcome, RequestError)
