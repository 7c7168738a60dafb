"""Embeds shown when an upload link is shared, and a builder that validates them."""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Final

from ._constants import (
    AUTHOR_MAX_LENGTH,
    DEFAULT_EMBED_COLOR,
    DESCRIPTION_MAX_LENGTH,
    EMBED_MAX_LENGTH_BOT,
    EMBED_MAX_LENGTH_CLIENT,
    PROVIDER_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    URL_MAX_LENGTH,
)
from ._object import DataObject

__all__ = ["AccountType", "Embed", "EmbedEditor"]

logger = logging.getLogger(__name__)

_URL_PATTERN: Final = re.compile(r"\s*(https?|attachment)://\S+\s*", re.IGNORECASE)


class AccountType(Enum):
    """The kind of account an embed is rendered for. Decides the length limit."""

    BOT = "bot"
    CLIENT = "client"

    @property
    def max_length(self) -> int:
        if self is AccountType.BOT:
            return EMBED_MAX_LENGTH_BOT
        return EMBED_MAX_LENGTH_CLIENT


@dataclass(frozen=True, slots=True)
class Embed:
    """An immutable embed, as stored in the page configuration.

    Build one with EmbedEditor, which enforces the length limits.
    """

    title: str | None = None
    description: str | None = None
    author_name: str | None = None
    author_url: str | None = None
    provider_name: str | None = None
    provider_url: str | None = None
    color: str | None = None
    account_type: AccountType = AccountType.CLIENT

    @property
    def theme_color(self) -> str:
        """The color, or white if none was set."""
        return self.color if self.color is not None else DEFAULT_EMBED_COLOR

    @property
    def length(self) -> int:
        """Displayed characters: description, title and author name."""
        length = len(self.description.strip()) if self.description else 0
        if self.title is not None:
            length += len(self.title)
        if self.author_name is not None:
            length += len(self.author_name)
        return length

    @classmethod
    def from_data(cls, data: DataObject) -> "Embed":
        """Read an embed from its JSON representation."""
        return cls(
            title=data.get_string("title", None),
            description=data.get_string("description", None),
            author_name=data.get_string("author_name", None),
            author_url=data.get_string("author_url", None),
            provider_name=data.get_string("provider_name", None),
            provider_url=data.get_string("provider_url", None),
            color=data.get_string("theme_color", None),
        )

    def to_data(self) -> DataObject:
        """Return the JSON representation sent to the API."""
        return (
            DataObject.empty()
            .put("title", self.title)
            .put("description", self.description)
            .put("theme_color", self.theme_color)
            .put("author_name", self.author_name)
            .put("author_url", self.author_url)
            .put("provider_name", self.provider_name)
            .put("provider_url", self.provider_url)
        )


def _check_url(url: str | None) -> None:
    if url is None:
        return
    if len(url) > URL_MAX_LENGTH:
        msg = f"URL cannot be longer than {URL_MAX_LENGTH} characters"
        raise ValueError(msg)
    if _URL_PATTERN.fullmatch(url) is None:
        msg = f"URL must be a valid http(s) or attachment url: {url!r}"
        raise ValueError(msg)


class EmbedEditor:
    """Mutable builder for Embed.

    Every setter validates its input immediately and returns the editor, so
    calls can be chained. build() checks the overall length.

    Example:
        >>> embed = EmbedEditor().set_title("Screenshots").set_color("#5865f2").build()
        >>> embed.theme_color
        '#5865f2'
    """

    __slots__: ClassVar[tuple[str, ...]] = (
        "_author_name",
        "_author_url",
        "_color",
        "_description",
        "_provider_name",
        "_provider_url",
        "_title",
    )

    _title: str | None
    _description: str
    _author_name: str | None
    _author_url: str | None
    _provider_name: str | None
    _provider_url: str | None
    _color: str | None

    def __init__(self, source: "EmbedEditor | Embed | None" = None) -> None:
        _ = self.clear()
        self.copy_from(source)

    def build(self, account_type: AccountType = AccountType.CLIENT) -> Embed:
        """Create an Embed from the current fields.

        Raises:
            ValueError: If the editor is empty, or the embed is longer than
                the limit for account_type.
        """
        if self.is_empty():
            msg = "cannot build an empty embed"
            raise ValueError(msg)
        if len(self._description) > DESCRIPTION_MAX_LENGTH:
            msg = (
                f"description cannot be longer than {DESCRIPTION_MAX_LENGTH} characters"
            )
            raise ValueError(msg)
        if self.length() > account_type.max_length:
            msg = (
                f"cannot build an embed with more than {account_type.max_length} "
                f"characters for {account_type.value} accounts"
            )
            raise ValueError(msg)
        return Embed(
            title=self._title,
            description=self._description or None,
            author_name=self._author_name,
            author_url=self._author_url,
            provider_name=self._provider_name,
            provider_url=self._provider_url,
            color=self._color,
            account_type=account_type,
        )

    def clear(self) -> "EmbedEditor":
        """Reset every field."""
        self._title = None
        self._description = ""
        self._author_name = None
        self._author_url = None
        self._provider_name = None
        self._provider_url = None
        self._color = None
        return self

    def copy_from(self, source: "EmbedEditor | Embed | None") -> None:
        """Replace every field with the fields of another editor or embed."""
        if source is None:
            return
        if isinstance(source, EmbedEditor):
            _ = self.set_description(source._description)
            self._title = source._title
            self._author_name = source._author_name
            self._author_url = source._author_url
            self._provider_name = source._provider_name
            self._provider_url = source._provider_url
            self._color = source._color
        else:
            _ = self.set_description(source.description)
            self._title = source.title
            self._author_name = source.author_name
            self._author_url = source.author_url
            self._provider_name = source.provider_name
            self._provider_url = source.provider_url
            self._color = source.color

    def is_empty(self) -> bool:
        """Check whether no field is set. Empty editors cannot be built."""
        return (
            self._title is None
            and not self._description
            and self._author_name is None
            and self._author_url is None
            and self._provider_name is None
            and self._provider_url is None
            and self._color is None
        )

    def length(self) -> int:
        """Displayed characters: description, title and author name."""
        length = len(self._description.strip())
        if self._title is not None:
            length += len(self._title)
        if self._author_name is not None:
            length += len(self._author_name)
        return length

    def set_title(self, title: str | None) -> "EmbedEditor":
        """Set the title, or remove it with None.

        Raises:
            ValueError: If title is blank or longer than 256 characters.
        """
        if title is None:
            logger.debug("Removing embed title")
            self._title = None
            return self
        if not title.strip():
            msg = "title may not be blank"
            raise ValueError(msg)
        if len(title) > TITLE_MAX_LENGTH:
            msg = f"title cannot be longer than {TITLE_MAX_LENGTH} characters"
            raise ValueError(msg)
        self._title = title
        return self

    def set_description(self, description: str | None) -> "EmbedEditor":
        """Replace the description."""
        self._description = ""
        if description:
            _ = self.append_description(description)
        return self

    def append_description(self, text: str) -> "EmbedEditor":
        """Append text to the description.

        Raises:
            ValueError: If the result would exceed 4096 characters.
        """
        if len(self._description) + len(text) > DESCRIPTION_MAX_LENGTH:
            msg = (
                f"description cannot be longer than {DESCRIPTION_MAX_LENGTH} characters"
            )
            raise ValueError(msg)
        self._description += text
        return self

    def set_color(self, hex_color: str | None) -> "EmbedEditor":
        """Set the theme color, e.g. ``"#ff0000"``. None restores the default."""
        self._color = hex_color
        return self

    def set_author(self, name: str | None, url: str | None = None) -> "EmbedEditor":
        """Set the author name and optional URL. None removes both.

        Raises:
            ValueError: If name is longer than 256 characters or url is not
                a valid http(s) or attachment URL.
        """
        if name is None:
            logger.debug("Removing embed author")
            self._author_name = None
            self._author_url = None
            return self
        if len(name) > AUTHOR_MAX_LENGTH:
            msg = f"author name cannot be longer than {AUTHOR_MAX_LENGTH} characters"
            raise ValueError(msg)
        _check_url(url)
        self._author_name = name
        self._author_url = url
        return self

    def set_provider(self, name: str | None, url: str | None = None) -> "EmbedEditor":
        """Set the provider name and optional URL. None removes both.

        Raises:
            ValueError: If name is longer than 256 characters or url is not
                a valid http(s) or attachment URL.
        """
        if name is None:
            logger.debug("Removing embed provider")
            self._provider_name = None
            self._provider_url = None
            return self
        if len(name) > PROVIDER_MAX_LENGTH:
            msg = (
                f"provider name cannot be longer than {PROVIDER_MAX_LENGTH} characters"
            )
            raise ValueError(msg)
        _check_url(url)
        self._provider_name = name
        self._provider_url = url
        return self

    def __repr__(self) -> str:
        return (
            f"EmbedEditor(title={self._title!r}, length={self.length()}, "
            f"color={self._color!r})"
        )
