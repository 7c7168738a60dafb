"""TixteClient: the high-level entry point to the Tixte API."""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

import httpx

from ._constants import (
    BASE_URL,
    DEFAULT_RATE_LIMIT_RETRY_DELAY,
    DEFAULT_TIMEOUT,
    MAX_LONG,
    UPLOAD_TYPE_PRIVATE,
    UPLOAD_TYPE_PUBLIC,
)
from ._entities import (
    Config,
    Domain,
    SelfUser,
    UploadedFile,
    UploadPage,
    UploadSize,
    UsableDomain,
    User,
)
from ._exceptions import ConfigurationError, PaymentRequired
from ._object import DataObject
from ._path import DataPath
from ._requester import Requester
from ._routes import ROUTES

if TYPE_CHECKING:
    from collections.abc import Sequence
    from os import PathLike
    from types import TracebackType

    from ._embed import Embed
    from ._route import CompiledRoute

__all__ = ["TixteClient"]

logger = logging.getLogger(__name__)


def _check_token(value: str, name: str) -> None:
    if not value or any(c.isspace() for c in value):
        msg = f"{name} may not be empty or contain whitespace"
        raise ConfigurationError(msg)


def _check_argument(value: str, name: str) -> None:
    if not value or any(c.isspace() for c in value):
        msg = f"{name} may not be empty or contain whitespace"
        raise ValueError(msg)


class TixteClient:
    """Client for the Tixte file-hosting API.

    The client owns the httpx.Client it creates and closes it in close() or
    when used as a context manager. A client passed in via http_client is
    left open.

    Args:
        api_key: The account's API key, sent with every request.
        session_token: The account's session token. Needed for account
            management such as adding domains or purging uploads.
        default_domain: Domain used by upload_file() when no domain is given.
        base_url: API prefix.
        timeout: Request timeout in seconds.
        http_client: A preconfigured httpx.Client to send requests with.
        rate_limit_retry_delay: Seconds to wait before retrying after HTTP 429.

    Raises:
        ConfigurationError: If api_key is missing, or any credential contains
            whitespace.

    Example:
        >>> with TixteClient("my-api-key", default_domain="me.tixte.co") as client:
        ...     client.get_self_user().username
    """

    __slots__: ClassVar[tuple[str, ...]] = (
        "_default_domain",
        "_http_client",
        "_owns_http_client",
        "_requester",
        "_session_token",
    )

    _default_domain: str | None
    _http_client: httpx.Client
    _owns_http_client: bool
    _requester: Requester
    _session_token: str | None

    def __init__(  # noqa: PLR0913
        self,
        api_key: str,
        *,
        session_token: str | None = None,
        default_domain: str | None = None,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.Client | None = None,
        rate_limit_retry_delay: float = DEFAULT_RATE_LIMIT_RETRY_DELAY,
    ) -> None:
        _check_token(api_key, "api_key")
        if session_token is None:
            logger.warning(
                "No session token configured; account management calls will fail"
            )
        else:
            _check_token(session_token, "session_token")
        if default_domain is None:
            logger.warning("No default domain configured; uploads must name a domain")
        else:
            _check_token(default_domain, "default_domain")

        self._session_token = session_token
        self._default_domain = default_domain
        self._owns_http_client = http_client is None
        self._http_client = (
            httpx.Client(timeout=timeout) if http_client is None else http_client
        )
        self._requester = Requester(
            self._http_client,
            api_key,
            session_token=session_token,
            base_url=base_url,
            rate_limit_retry_delay=rate_limit_retry_delay,
        )

    @property
    def session_token(self) -> str | None:
        return self._session_token

    @property
    def default_domain(self) -> str | None:
        return self._default_domain

    def _data(
        self,
        compiled: "CompiledRoute",
        *,
        session_token_needed: bool = False,
        json: object = None,
        files: "dict[str, object] | None" = None,
        headers: "dict[str, str] | None" = None,
    ) -> DataObject:
        body = self._requester.request(
            compiled,
            session_token_needed=session_token_needed,
            json=json,
            files=files,
            headers=headers,
        )
        return DataObject.from_json(body)

    # Users

    def get_self_user(self) -> SelfUser:
        """Fetch the authenticated user."""
        response = self._data(ROUTES.me.GET_SELF.compile())
        return SelfUser.from_data(DataPath.get_data_object(response, "data"))

    def get_user(self, user_data: str) -> User:
        """Fetch a user by id or username.

        Raises:
            ValueError: If user_data is empty or contains whitespace.
            NotFound: If no such user exists.
        """
        _check_argument(user_data, "user_data")
        response = self._data(ROUTES.users.GET_USER.compile(user_data))
        return User.from_data(DataPath.get_data_object(response, "data"))

    def get_api_key_by_session_token(self) -> str:
        """Look up the account's API key using the session token."""
        response = self._data(ROUTES.me.GET_KEYS.compile(), session_token_needed=True)
        return DataPath.get_string(response, "data.api_key")

    def get_experiment_count(self) -> int:
        response = self._data(ROUTES.experiments.GET_EXPERIMENTS.compile())
        return DataPath.get_int(response, "data")

    # Uploads

    def get_upload_size(self) -> UploadSize:
        """Fetch storage usage and limit."""
        response = self._data(ROUTES.me.GET_UPLOAD_SIZE.compile())
        return UploadSize.from_data(DataPath.get_data_object(response, "data"))

    def get_uploads(self, page: int | None = None) -> UploadPage:
        """Fetch a page of the user's uploads.

        Args:
            page: 0-based page number. None fetches the first page.

        Raises:
            ValueError: If page is negative.
        """
        compiled = ROUTES.me.GET_UPLOADS.compile()
        if page is not None:
            if page < 0:
                msg = f"page may not be negative, got {page}"
                raise ValueError(msg)
            compiled = compiled.with_query_params("page", str(page))
        response = self._data(compiled)
        return UploadPage.from_data(DataPath.get_data_object(response, "data"))

    def search_uploads(  # noqa: PLR0913
        self,
        query: str,
        *,
        sort_by: str,
        extensions: "Sequence[str] | None" = None,
        domains: "Sequence[str] | None" = None,
        min_size: int = 0,
        max_size: int = MAX_LONG,
    ) -> DataObject:
        """Search the user's uploads. Needs the session token.

        The search endpoint is experimental, so its response is returned as
        parsed JSON rather than as an entity.

        Args:
            query: Text to search for.
            sort_by: Sort key passed through to the API.
            extensions: Only match these file extensions. None matches any.
            domains: Only match uploads on these domains. None matches any.
            min_size: Smallest matching size in bytes.
            max_size: Largest matching size in bytes.

        Raises:
            ValueError: If sort_by is empty or a size bound is negative.
        """
        _check_argument(sort_by, "sort_by")
        for name, size in (("min_size", min_size), ("max_size", max_size)):
            if size < 0:
                msg = f"{name} may not be negative, got {size}"
                raise ValueError(msg)
        body = {
            "query": query,
            "extensions": None if extensions is None else list(extensions),
            "domains": None if domains is None else list(domains),
            "sort_by": sort_by,
            "size": {"min": min_size, "max": max_size},
        }
        return self._data(
            ROUTES.me.SEARCH_FILES.compile(), session_token_needed=True, json=body
        )

    def get_folders(self) -> DataObject:
        """Fetch the user's folders.

        The folders endpoint is experimental; the response is returned as
        parsed JSON.
        """
        return self._data(ROUTES.me.GET_FOLDERS.compile())

    def upload_file(
        self,
        path: "str | PathLike[str]",
        *,
        domain: str | None = None,
        private: bool = False,
    ) -> UploadedFile:
        """Upload a file.

        Args:
            path: The file to upload.
            domain: Domain to upload to. Defaults to the client's default
                domain.
            private: Upload as a private file.

        Returns:
            The links of the uploaded file.

        Raises:
            FileNotFoundError: If path does not point to a file.
            ConfigurationError: If neither domain nor a default domain is set.
            ValueError: If domain contains whitespace.
        """
        file_path = Path(path)
        if not file_path.is_file():
            msg = f"File {file_path.name} was not found"
            raise FileNotFoundError(msg)
        if domain is None:
            domain = self._default_domain
            if domain is None:
                msg = "no domain given and no default domain configured"
                raise ConfigurationError(msg)
        else:
            _check_argument(domain, "domain")

        upload_type = UPLOAD_TYPE_PRIVATE if private else UPLOAD_TYPE_PUBLIC
        response = self._data(
            ROUTES.files.UPLOAD_FILE.compile(),
            files={"file": (file_path.name, file_path.read_bytes())},
            headers={"domain": domain, "type": str(upload_type)},
        )
        return UploadedFile.from_data(DataPath.get_data_object(response, "data"))

    def delete_file(self, asset_id: str) -> str:
        """Delete an upload.

        Returns:
            The confirmation message from the API.
        """
        _check_argument(asset_id, "asset_id")
        response = self._data(ROUTES.me.DELETE_FILE.compile(asset_id))
        return DataPath.get_string(response, "data.message", "")

    def purge_files(self, password: str) -> None:
        """Delete every upload of the account. Needs the session token.

        Args:
            password: The account password.
        """
        _check_argument(password, "password")
        _ = self._data(
            ROUTES.me.PURGE_FILES.compile(),
            session_token_needed=True,
            json={"password": password, "purge": True},
        )

    # Domains

    def get_domains(self) -> list[Domain]:
        """Fetch the domains registered to the authenticated user."""
        response = self._data(ROUTES.me.GET_DOMAINS.compile())
        domains = DataPath.get_data_array(response, "data.domains")
        return [
            Domain.from_data(domains.get_data_object(i))
            for i in range(domains.length())
        ]

    def get_usable_domains(self) -> list[UsableDomain]:
        """Fetch every domain anyone can upload to."""
        response = self._data(ROUTES.domains.GET_DOMAINS.compile())
        domains = DataPath.get_data_array(response, "data.domains")
        return [
            UsableDomain.from_data(domains.get_data_object(i))
            for i in range(domains.length())
        ]

    def generate_domain(self) -> str:
        """Ask the API for a random, unclaimed subdomain name."""
        response = self._data(ROUTES.resources.GET_GENERATED_DOMAIN.compile())
        return DataPath.get_string(response, "data.name")

    def _add_domain(self, name: str, *, custom: bool) -> None:
        _check_argument(name, "name")
        _ = self._data(
            ROUTES.me.ADD_DOMAIN.compile(name),
            session_token_needed=True,
            json={"domain": name, "custom": custom},
        )

    def add_subdomain(self, name: str) -> None:
        """Register a subdomain of a Tixte domain. Needs the session token."""
        self._add_domain(name, custom=False)

    def add_custom_domain(self, name: str) -> None:
        """Register a domain the user owns. Needs the session token."""
        self._add_domain(name, custom=True)

    def delete_domain(self, name: str) -> str:
        """Delete one of the user's domains.

        Returns:
            The name of the deleted domain as reported by the API.
        """
        _check_argument(name, "name")
        response = self._data(ROUTES.me.DELETE_DOMAIN.compile(name))
        return DataPath.get_string(response, "data.domain")

    # Config

    def get_config(self) -> Config:
        """Fetch the page design of the user's upload pages."""
        response = self._data(ROUTES.me.GET_CONFIG.compile())
        return Config.from_data(DataPath.get_data_object(response, "data"))

    def _patch_config(self, body: object) -> None:
        _ = self._data(ROUTES.me.PATCH_CONFIG.compile(), json=body)

    def set_custom_css(self, css: str | None) -> None:
        """Set the custom CSS. None clears it."""
        self._patch_config({"custom_css": css or ""})

    def set_hide_branding(self, hide_branding: bool) -> None:  # noqa: FBT001
        """Hide the Tixte branding on upload pages.

        Raises:
            PaymentRequired: If the user has no Tixte subscription. No
                configuration request is sent in that case.
        """
        if not self.get_self_user().has_tixte_subscription:
            msg = "Payment required: this feature requires a turbo subscription"
            raise PaymentRequired(msg, status_code=402)
        self._patch_config({"hide_branding": hide_branding})

    def set_only_image(self, only_image: bool) -> None:  # noqa: FBT001
        """Show only the image on upload pages, without the embed."""
        self._patch_config({"only_image": only_image})

    def set_base_redirect(self, url: str) -> None:
        """Set where the bare domain redirects to."""
        _check_argument(url, "url")
        self._patch_config({"base_redirect": url})

    def set_embed(self, embed: "Embed") -> None:
        """Replace the embed shown for shared upload links."""
        self._patch_config({"embed": embed.to_data().to_dict()})

    # Lifecycle

    def close(self) -> None:
        """Close the HTTP client if this TixteClient created it."""
        if self._owns_http_client:
            self._http_client.close()

    def __enter__(self) -> "TixteClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: "TracebackType | None",
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"TixteClient(default_domain={self._default_domain!r})"
