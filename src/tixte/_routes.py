"""Registry of every Tixte API route used by this library."""

from dataclasses import dataclass, field
from typing import Final

from ._route import Route

__all__ = ["ROUTES", "Routes"]


@dataclass(frozen=True, slots=True)
class _Me:
    GET_SELF: Route = field(default_factory=lambda: Route.get("users/@me"))
    GET_UPLOAD_SIZE: Route = field(
        default_factory=lambda: Route.get("users/@me/uploads/size")
    )
    GET_UPLOADS: Route = field(default_factory=lambda: Route.get("users/@me/uploads"))
    DELETE_FILE: Route = field(
        default_factory=lambda: Route.delete("users/@me/uploads/{asset_id}")
    )
    PURGE_FILES: Route = field(
        default_factory=lambda: Route.delete("users/@me/uploads")
    )
    SEARCH_FILES: Route = field(
        default_factory=lambda: Route.post("users/@me/uploads/search")
    )
    GET_DOMAINS: Route = field(default_factory=lambda: Route.get("users/@me/domains"))
    ADD_DOMAIN: Route = field(
        default_factory=lambda: Route.patch("users/@me/domains/{domain}")
    )
    DELETE_DOMAIN: Route = field(
        default_factory=lambda: Route.delete("users/@me/domains/{domain}")
    )
    GET_KEYS: Route = field(default_factory=lambda: Route.get("users/@me/keys"))
    GET_CONFIG: Route = field(default_factory=lambda: Route.get("users/@me/config"))
    PATCH_CONFIG: Route = field(
        default_factory=lambda: Route.patch("users/@me/config")
    )
    GET_FOLDERS: Route = field(default_factory=lambda: Route.get("users/@me/folders"))


@dataclass(frozen=True, slots=True)
class _Users:
    GET_USER: Route = field(default_factory=lambda: Route.get("users/{user_data}"))


@dataclass(frozen=True, slots=True)
class _Domains:
    GET_DOMAINS: Route = field(default_factory=lambda: Route.get("domains"))


@dataclass(frozen=True, slots=True)
class _Resources:
    GET_GENERATED_DOMAIN: Route = field(
        default_factory=lambda: Route.get("resources/generate-domain")
    )


@dataclass(frozen=True, slots=True)
class _Files:
    UPLOAD_FILE: Route = field(default_factory=lambda: Route.post("upload"))


@dataclass(frozen=True, slots=True)
class _Experiments:
    GET_EXPERIMENTS: Route = field(default_factory=lambda: Route.get("experiments"))


@dataclass(frozen=True, slots=True)
class Routes:
    """Routes grouped by the resource they act on.

    Attributes:
        me: Routes acting on the authenticated user (``users/@me/...``).
        users: Public user lookups.
        domains: The global domain list.
        resources: Helper resources such as generated domain names.
        files: File uploads.
        experiments: Feature experiments.
    """

    me: _Me = field(default_factory=_Me)
    users: _Users = field(default_factory=_Users)
    domains: _Domains = field(default_factory=_Domains)
    resources: _Resources = field(default_factory=_Resources)
    files: _Files = field(default_factory=_Files)
    experiments: _Experiments = field(default_factory=_Experiments)


ROUTES: Final = Routes()
