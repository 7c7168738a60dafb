"""Exception hierarchy for tixte.

Every error raised by this library derives from TixteError. Programmer errors
(bad templates, wrong argument counts, bad configuration) additionally derive
from ValueError so callers validating input can catch them generically.
"""

from typing import TYPE_CHECKING, Literal, TypeAlias

if TYPE_CHECKING:
    from ._types import Location

PathErrorKind: TypeAlias = Literal["missing", "wrong_type", "invalid_path"]

__all__ = [
    "ArgumentCountError",
    "ConfigurationError",
    "Forbidden",
    "HTTPError",
    "InvalidTemplateError",
    "JsonParseError",
    "MissingOrWrongTypeError",
    "NotFound",
    "ParsingError",
    "PathErrorKind",
    "PathResolutionError",
    "PaymentRequired",
    "RateLimited",
    "TixteError",
    "TixteServerError",
    "Unauthorized",
]


class TixteError(Exception):
    """Base exception for all tixte errors."""


class InvalidTemplateError(TixteError, ValueError):
    """A route template is empty, contains whitespace, or has unbalanced braces."""


class ArgumentCountError(TixteError, ValueError):
    """A route or query string was given the wrong number of arguments."""


class ConfigurationError(TixteError, ValueError):
    """Client configuration is missing or malformed."""


class ParsingError(TixteError):
    """Response data could not be parsed or navigated."""


class JsonParseError(ParsingError):
    """JSON text is malformed or has the wrong top-level type."""


class MissingOrWrongTypeError(ParsingError):
    """A required value is absent, null, or cannot be coerced to the requested type.

    Attributes:
        key: The key or index that was looked up.
        expected: Name of the requested type.
        value: The value found at that location, or None if absent/null.
    """

    key: "Location"
    expected: str
    value: object

    def __init__(
        self, message: str, *, key: "Location", expected: str, value: object = None
    ) -> None:
        super().__init__(message)
        self.key = key
        self.expected = expected
        self.value = value

    @property
    def is_missing(self) -> bool:
        """Whether the failure was caused by a null or absent value."""
        return self.value is None


class PathResolutionError(ParsingError):
    """A path expression could not be resolved.

    Attributes:
        path: The path expression.
        expected: Name of the requested type, if known.
        kind: "missing" when the path led to a null or absent value,
            "wrong_type" when a value had the wrong type, "invalid_path"
            when the expression itself is malformed.
    """

    path: str
    expected: str | None
    kind: PathErrorKind

    def __init__(
        self,
        message: str,
        *,
        path: str,
        kind: PathErrorKind,
        expected: str | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.kind = kind
        self.expected = expected


class HTTPError(TixteError):
    """The Tixte API answered with an unsuccessful status code.

    Attributes:
        status_code: The HTTP status code.
        code: The API error code from the response body, if any.
    """

    status_code: int
    code: str | None

    def __init__(
        self, message: str, *, status_code: int, code: str | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code


class Unauthorized(HTTPError):
    """HTTP 401: the API key or session token was rejected."""


class PaymentRequired(HTTPError):
    """HTTP 402: the feature requires a Tixte subscription."""


class Forbidden(HTTPError):
    """HTTP 403."""


class NotFound(HTTPError):
    """HTTP 404."""


class RateLimited(HTTPError):
    """HTTP 429 that persisted after the retry."""


class TixteServerError(HTTPError):
    """HTTP 500."""
