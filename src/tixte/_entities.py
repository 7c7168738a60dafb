"""Snapshot entities returned by TixteClient.

Each entity is a frozen dataclass read from the ``data`` object of an API
response. They hold no reference to the client and never refresh themselves.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ._constants import (
    PREMIUM_TIER_TURBO,
    PREMIUM_TIER_TURBO_CHARGED,
    UPLOAD_TYPE_PRIVATE,
    UPLOAD_TYPE_PUBLIC,
)
from ._embed import Embed
from ._path import DataPath

if TYPE_CHECKING:
    from datetime import datetime

    from ._object import DataObject

__all__ = [
    "Config",
    "Domain",
    "SelfUser",
    "Upload",
    "UploadPage",
    "UploadSize",
    "UploadedFile",
    "UsableDomain",
    "User",
]


@dataclass(frozen=True, slots=True)
class User:
    """A Tixte user as seen by other users."""

    id: str
    username: str
    avatar: str | None
    flags: int

    @classmethod
    def from_data(cls, data: "DataObject") -> "User":
        return cls(
            id=data.get_string("id"),
            username=data.get_string("username"),
            avatar=data.get_string("avatar", None),
            flags=data.get_int("flags", 0),
        )


@dataclass(frozen=True, slots=True)
class SelfUser:
    """The account the client is authenticated as."""

    id: str
    username: str
    avatar: str | None
    email: str | None
    email_verified: bool
    phone: str | None
    mfa_enabled: bool
    flags: int
    premium_tier: int
    upload_region: str | None
    last_login: "datetime | None"

    @classmethod
    def from_data(cls, data: "DataObject") -> "SelfUser":
        return cls(
            id=data.get_string("id"),
            username=data.get_string("username"),
            avatar=data.get_string("avatar", None),
            email=data.get_string("email", None),
            email_verified=data.get_boolean("email_verified", False),
            phone=data.get_string("phone", None),
            mfa_enabled=data.get_boolean("mfa_enabled", False),
            flags=data.get_int("flags", 0),
            premium_tier=data.get_int("premium_tier", 0),
            upload_region=data.get_string("upload_region", None),
            last_login=data.get_datetime("last_login", None),
        )

    @property
    def has_tixte_subscription(self) -> bool:
        """Whether the user has any paid tier."""
        return self.premium_tier in (PREMIUM_TIER_TURBO, PREMIUM_TIER_TURBO_CHARGED)

    @property
    def has_turbo_subscription(self) -> bool:
        return self.premium_tier == PREMIUM_TIER_TURBO

    @property
    def has_turbo_charged_subscription(self) -> bool:
        return self.premium_tier == PREMIUM_TIER_TURBO_CHARGED


@dataclass(frozen=True, slots=True)
class UploadSize:
    """Storage usage in bytes."""

    used: int
    limit: int
    premium_tier: int

    @classmethod
    def from_data(cls, data: "DataObject") -> "UploadSize":
        return cls(
            used=data.get_long("used"),
            limit=data.get_long("limit"),
            premium_tier=data.get_int("premium_tier", 0),
        )

    @property
    def remaining(self) -> int:
        return self.limit - self.used


@dataclass(frozen=True, slots=True)
class Upload:
    """A file in the user's upload list."""

    asset_id: str
    name: str
    extension: str
    domain: str
    mimetype: str | None
    size: int
    type: int
    permission_level: int
    uploaded_at: "datetime | None"
    expiration: str | None

    @classmethod
    def from_data(cls, data: "DataObject") -> "Upload":
        return cls(
            asset_id=data.get_string("asset_id"),
            name=data.get_string("name"),
            extension=data.get_string("extension"),
            domain=data.get_string("domain"),
            mimetype=data.get_string("mimetype", None),
            size=data.get_long("size", 0),
            type=data.get_int("type", UPLOAD_TYPE_PUBLIC),
            permission_level=data.get_int("permission_level", 0),
            uploaded_at=data.get_datetime("uploaded_at", None),
            expiration=data.get_string("expiration", None),
        )

    @property
    def file_name(self) -> str:
        """Name and extension, e.g. ``"a1b2c3.png"``."""
        return f"{self.name}.{self.extension}"

    @property
    def is_public(self) -> bool:
        return self.type == UPLOAD_TYPE_PUBLIC

    @property
    def is_private(self) -> bool:
        return self.type == UPLOAD_TYPE_PRIVATE


@dataclass(frozen=True, slots=True)
class UploadPage:
    """One page of the user's uploads.

    Attributes:
        total: Number of uploads across all pages.
        results: Number of uploads on this page.
        uploads: The uploads on this page.
    """

    total: int
    results: int
    uploads: tuple[Upload, ...]

    @classmethod
    def from_data(cls, data: "DataObject") -> "UploadPage":
        uploads = DataPath.get_data_array(data, "uploads")
        return cls(
            total=data.get_int("total", 0),
            results=data.get_int("results", len(uploads)),
            uploads=tuple(
                Upload.from_data(uploads.get_data_object(i))
                for i in range(uploads.length())
            ),
        )


@dataclass(frozen=True, slots=True)
class UploadedFile:
    """Links returned after a successful upload."""

    url: str
    direct_url: str
    deletion_url: str | None

    @classmethod
    def from_data(cls, data: "DataObject") -> "UploadedFile":
        return cls(
            url=data.get_string("url"),
            direct_url=data.get_string("direct_url"),
            deletion_url=data.get_string("deletion_url", None),
        )


@dataclass(frozen=True, slots=True)
class Domain:
    """A domain registered to the authenticated user."""

    name: str
    owner: str
    uploads: int

    @classmethod
    def from_data(cls, data: "DataObject") -> "Domain":
        return cls(
            name=data.get_string("name"),
            owner=data.get_string("owner"),
            uploads=data.get_int("uploads", 0),
        )


@dataclass(frozen=True, slots=True)
class UsableDomain:
    """A domain anyone can upload to."""

    domain: str
    active: bool

    @classmethod
    def from_data(cls, data: "DataObject") -> "UsableDomain":
        return cls(
            domain=data.get_string("domain"),
            active=data.get_boolean("active", True),
        )


@dataclass(frozen=True, slots=True)
class Config:
    """Page design of the authenticated user's upload pages."""

    custom_css: str
    hide_branding: bool
    only_image: bool
    base_redirect: str | None
    embed: Embed | None

    @classmethod
    def from_data(cls, data: "DataObject") -> "Config":
        embed = DataPath.opt_object(data, "embed")
        return cls(
            custom_css=data.get_string("custom_css", ""),
            hide_branding=data.get_boolean("hide_branding", False),
            only_image=data.get_boolean("only_image", False),
            base_redirect=data.get_string("base_redirect", None),
            embed=Embed.from_data(embed) if embed is not None else None,
        )
