"""Route templates and their compiled form.

A Route is an HTTP method plus a path template such as
``users/@me/domains/{domain}``. Compiling it with positional arguments
substitutes the placeholders in order and yields a CompiledRoute, which
also carries the route's major parameters: the placeholder values that
decide which rate-limit bucket a request belongs to.
"""

from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Final
from urllib.parse import quote

from ._constants import (
    MAJOR_PARAMETER_NAMES,
    MAX_MAJOR_PARAMETER_LENGTH,
    NO_MAJOR_PARAMETERS,
)
from ._exceptions import ArgumentCountError, InvalidTemplateError

if TYPE_CHECKING:
    from ._types import QueryParam

__all__ = ["CompiledRoute", "Method", "Route", "unsigned_hash"]

_HASH_MASK: Final = 0xFFFFFFFF


class Method(Enum):
    """HTTP methods used by the Tixte API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


def unsigned_hash(value: str) -> int:
    """Hash a string to an unsigned 32-bit integer.

    The polynomial ``h = 31 * h + c`` over UTF-16 code units. Unlike hash(),
    the result does not change between interpreter runs.
    """
    encoded = value.encode("utf-16-be")
    result = 0
    for i in range(0, len(encoded), 2):
        unit = (encoded[i] << 8) | encoded[i + 1]
        result = (31 * result + unit) & _HASH_MASK
    return result


def _utf16_length(value: str) -> int:
    return len(value.encode("utf-16-be")) // 2


def _encode(value: str) -> str:
    return quote(value, safe="")


def _parse_template(template: str) -> tuple[str, ...]:
    """Validate a template and return its placeholder names in order.

    Raises:
        InvalidTemplateError: If the template is empty, contains whitespace,
            or its braces are unbalanced or malformed.
    """
    if not template:
        msg = "route template may not be empty"
        raise InvalidTemplateError(msg)
    if any(char.isspace() for char in template):
        msg = f"route template may not contain whitespace: {template!r}"
        raise InvalidTemplateError(msg)
    if template.count("{") != template.count("}"):
        msg = f"route template has unbalanced braces: {template!r}"
        raise InvalidTemplateError(msg)

    names: list[str] = []
    offset = 0
    while (start := template.find("{", offset)) > -1:
        end = template.find("}", start)
        if end == -1 or "}" in template[offset:start]:
            msg = f"route template has a misplaced '}}': {template!r}"
            raise InvalidTemplateError(msg)
        name = template[start + 1 : end]
        if not name or "{" in name:
            msg = f"route template has a malformed placeholder: {template!r}"
            raise InvalidTemplateError(msg)
        names.append(name)
        offset = end + 1
    return tuple(names)


class Route:
    """An HTTP method and a path template with ``{name}`` placeholders.

    Routes are immutable and compare equal when method and template match.

    Example:
        >>> route = Route.delete("users/@me/domains/{domain}")
        >>> route.compile("example.com").compiled_route
        'users/@me/domains/example.com'
    """

    __slots__: ClassVar[tuple[str, ...]] = ("_method", "_names", "_route")

    _method: Method
    _route: str
    _names: tuple[str, ...]

    def __init__(self, method: Method, route: str) -> None:
        self._names = _parse_template(route)
        self._method = method
        self._route = route

    @classmethod
    def custom(cls, method: Method, route: str) -> "Route":
        """Create a route with any method.

        Raises:
            InvalidTemplateError: If the template is invalid.
        """
        return cls(method, route)

    @classmethod
    def get(cls, route: str) -> "Route":
        return cls(Method.GET, route)

    @classmethod
    def post(cls, route: str) -> "Route":
        return cls(Method.POST, route)

    @classmethod
    def put(cls, route: str) -> "Route":
        return cls(Method.PUT, route)

    @classmethod
    def patch(cls, route: str) -> "Route":
        return cls(Method.PATCH, route)

    @classmethod
    def delete(cls, route: str) -> "Route":
        return cls(Method.DELETE, route)

    @property
    def method(self) -> Method:
        return self._method

    @property
    def route(self) -> str:
        """The uncompiled template."""
        return self._route

    @property
    def param_count(self) -> int:
        """Number of placeholders in the template."""
        return len(self._names)

    @property
    def param_names(self) -> tuple[str, ...]:
        return self._names

    def compile(self, *params: str) -> "CompiledRoute":
        """Substitute placeholders with params, in order of appearance.

        Each value is percent-encoded as UTF-8. Placeholders named in
        MAJOR_PARAMETER_NAMES contribute ``name=value`` to the major
        parameters; values longer than 30 UTF-16 code units are replaced
        by their unsigned hash.

        Args:
            *params: One value per placeholder.

        Returns:
            The compiled route.

        Raises:
            ArgumentCountError: If the number of params differs from
                the number of placeholders.
        """
        if len(params) != len(self._names):
            msg = (
                f"route {self._route!r} expects {len(self._names)} "
                f"argument(s), got {len(params)}"
            )
            raise ArgumentCountError(msg)

        parts: list[str] = []
        major: dict[str, None] = {}
        offset = 0
        for name, value in zip(self._names, params, strict=True):
            start = self._route.index("{", offset)
            parts.append(self._route[offset:start])
            parts.append(_encode(value))
            offset = self._route.index("}", start) + 1
            if name in MAJOR_PARAMETER_NAMES:
                if _utf16_length(value) > MAX_MAJOR_PARAMETER_LENGTH:
                    major[f"{name}={unsigned_hash(value)}"] = None
                else:
                    major[f"{name}={value}"] = None
        parts.append(self._route[offset:])

        major_parameters = ":".join(major) if major else NO_MAJOR_PARAMETERS
        return CompiledRoute(self, "".join(parts), major_parameters)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Route):
            return NotImplemented
        return self._method is other._method and self._route == other._route

    def __hash__(self) -> int:
        return hash((self._method, self._route))

    def __repr__(self) -> str:
        return f"Route({self._method.value} /{self._route})"

    def __str__(self) -> str:
        return f"{self._method.value}/{self._route}"


class CompiledRoute:
    """A route with its placeholders substituted, plus optional query parameters.

    Instances are immutable; with_query_params() returns a new instance.
    Two compiled routes are equal when base route, substituted path and
    query parameters all match.
    """

    __slots__: ClassVar[tuple[str, ...]] = (
        "_base_route",
        "_major_parameters",
        "_path",
        "_query",
    )

    _base_route: Route
    _path: str
    _major_parameters: str
    _query: "tuple[QueryParam, ...]"

    def __init__(
        self,
        base_route: Route,
        path: str,
        major_parameters: str,
        query: "tuple[QueryParam, ...]" = (),
    ) -> None:
        self._base_route = base_route
        self._path = path
        self._major_parameters = major_parameters
        self._query = query

    def with_query_params(self, *params: str) -> "CompiledRoute":
        """Return a copy with key/value pairs appended to the query string.

        Values are percent-encoded, keys are used as given.

        Args:
            *params: Alternating keys and values, e.g. ``("page", "2")``.

        Raises:
            ArgumentCountError: If params is empty or has odd length.
        """
        if not params or len(params) % 2 != 0:
            msg = (
                "query parameters must be given as key/value pairs, "
                f"got {len(params)} argument(s)"
            )
            raise ArgumentCountError(msg)
        added = tuple(
            (params[i], _encode(params[i + 1])) for i in range(0, len(params), 2)
        )
        return CompiledRoute(
            self._base_route, self._path, self._major_parameters, self._query + added
        )

    @property
    def base_route(self) -> Route:
        return self._base_route

    @property
    def method(self) -> Method:
        return self._base_route.method

    @property
    def major_parameters(self) -> str:
        """Major parameters joined by ':', or "N/A" if there are none."""
        return self._major_parameters

    @property
    def query_params(self) -> "tuple[QueryParam, ...]":
        return self._query

    @property
    def path(self) -> str:
        """The substituted path without query string."""
        return self._path

    @property
    def compiled_route(self) -> str:
        """The substituted path followed by the query string, if any."""
        if not self._query:
            return self._path
        query = "&".join(f"{key}={value}" for key, value in self._query)
        return f"{self._path}?{query}"

    @property
    def bucket(self) -> str:
        """Rate-limit bucket key: method, template and major parameters."""
        return (
            f"{self.method.value} {self._base_route.route}:{self._major_parameters}"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompiledRoute):
            return NotImplemented
        return (
            self._base_route == other._base_route
            and self._path == other._path
            and self._query == other._query
        )

    def __hash__(self) -> int:
        return hash((self._base_route, self._path, self._query))

    def __repr__(self) -> str:
        return (
            f"CompiledRoute({self.method.value} /{self.compiled_route}, "
            f"major={self._major_parameters!r})"
        )
