"""Request execution against the Tixte API."""

import logging
import time
from typing import TYPE_CHECKING, ClassVar, Final

from ._constants import BASE_URL, DEFAULT_RATE_LIMIT_RETRY_DELAY, USER_AGENT
from ._exceptions import (
    ConfigurationError,
    Forbidden,
    HTTPError,
    NotFound,
    ParsingError,
    PaymentRequired,
    RateLimited,
    TixteServerError,
    Unauthorized,
)
from ._object import DataObject
from ._path import DataPath

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx

    from ._route import CompiledRoute

__all__ = ["Requester", "raise_for_status"]

logger = logging.getLogger(__name__)

_TOO_MANY_REQUESTS: Final = 429

_ERRORS: Final[dict[int, tuple[type[HTTPError], str]]] = {
    401: (Unauthorized, ""),
    402: (PaymentRequired, "Payment required: "),
    403: (Forbidden, ""),
    404: (NotFound, ""),
    429: (RateLimited, "We got rate-limited: "),
    500: (TixteServerError, "Internal Server Error: "),
}


def _error_field(response: "httpx.Response", name: str) -> str | None:
    try:
        body = DataObject.from_json(response.content)
        return DataPath.get_string(body, f"error?.{name}?", None)
    except ParsingError:
        return None


def raise_for_status(response: "httpx.Response") -> None:
    """Raise the HTTPError subclass matching an unsuccessful response.

    The message is read from ``error.message`` in the JSON body and falls
    back to the HTTP reason phrase when the body has none.

    Raises:
        HTTPError: If the response status is not 2xx.
    """
    if response.is_success:
        return

    message = _error_field(response, "message")
    if message is None:
        message = response.reason_phrase or f"HTTP {response.status_code}"
    code = _error_field(response, "code")

    error_class, prefix = _ERRORS.get(response.status_code, (HTTPError, ""))
    if error_class is HTTPError and code is not None:
        msg = f"{code}, {message}"
    else:
        msg = f"{prefix}{message}"
    raise error_class(msg, status_code=response.status_code, code=code)


class Requester:
    """Send compiled routes to the Tixte API.

    The Requester does not own its httpx.Client; whoever created the client
    is responsible for closing it.

    Args:
        http_client: The client used to send requests.
        api_key: Sent as the Authorization header by default.
        session_token: Sent instead of the API key for routes that need it.
        base_url: API prefix the compiled route is appended to.
        user_agent: Value of the User-Agent header.
        rate_limit_retry_delay: Seconds to wait before retrying a request
            that was answered with HTTP 429.
    """

    __slots__: ClassVar[tuple[str, ...]] = (
        "_api_key",
        "_base_url",
        "_client",
        "_retry_delay",
        "_session_token",
        "_user_agent",
    )

    _client: "httpx.Client"
    _api_key: str
    _session_token: str | None
    _base_url: str
    _user_agent: str
    _retry_delay: float

    def __init__(  # noqa: PLR0913
        self,
        http_client: "httpx.Client",
        api_key: str,
        *,
        session_token: str | None = None,
        base_url: str = BASE_URL,
        user_agent: str = USER_AGENT,
        rate_limit_retry_delay: float = DEFAULT_RATE_LIMIT_RETRY_DELAY,
    ) -> None:
        self._client = http_client
        self._api_key = api_key
        self._session_token = session_token
        self._base_url = base_url.rstrip("/")
        self._user_agent = user_agent
        self._retry_delay = rate_limit_retry_delay

    def url_for(self, compiled: "CompiledRoute") -> str:
        """Return the absolute URL of a compiled route."""
        return f"{self._base_url}/{compiled.compiled_route}"

    def request(
        self,
        compiled: "CompiledRoute",
        *,
        session_token_needed: bool = False,
        json: object = None,
        files: "Mapping[str, object] | None" = None,
        headers: "Mapping[str, str] | None" = None,
    ) -> bytes:
        """Send a request and return the raw response body.

        A response with HTTP 429 is retried once after the configured delay.

        Args:
            compiled: The route to call.
            session_token_needed: Authorize with the session token instead
                of the API key.
            json: Request body, serialized as JSON.
            files: Multipart file fields.
            headers: Extra request headers.

        Returns:
            The response body.

        Raises:
            ConfigurationError: If the session token is needed but was not
                configured.
            HTTPError: If the API answers with an unsuccessful status.
            httpx.TransportError: If the request could not be sent.
        """
        if session_token_needed:
            if self._session_token is None:
                msg = f"{compiled.base_route} requires a session token"
                raise ConfigurationError(msg)
            authorization = self._session_token
        else:
            authorization = self._api_key

        request_headers = {
            "Authorization": authorization,
            "User-Agent": self._user_agent,
        }
        if headers:
            request_headers.update(headers)

        url = self.url_for(compiled)
        method = compiled.method.value
        response = self._client.request(
            method, url, headers=request_headers, json=json, files=files
        )
        if response.status_code == _TOO_MANY_REQUESTS:
            logger.warning(
                "Rate limited on bucket %s, retrying in %.1fs",
                compiled.bucket,
                self._retry_delay,
            )
            time.sleep(self._retry_delay)
            response = self._client.request(
                method, url, headers=request_headers, json=json, files=files
            )

        raise_for_status(response)
        logger.debug(
            "Request successful: %s/%s (%d)",
            method,
            compiled.compiled_route,
            response.status_code,
        )
        return response.content
