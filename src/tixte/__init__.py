"""A client library for the Tixte file-hosting API."""

import logging
from importlib.metadata import version

from ._array import DataArray
from ._client import TixteClient
from ._embed import AccountType, Embed, EmbedEditor
from ._entities import (
    Config,
    Domain,
    SelfUser,
    Upload,
    UploadedFile,
    UploadPage,
    UploadSize,
    UsableDomain,
    User,
)
from ._exceptions import (
    ArgumentCountError,
    ConfigurationError,
    Forbidden,
    HTTPError,
    InvalidTemplateError,
    JsonParseError,
    MissingOrWrongTypeError,
    NotFound,
    ParsingError,
    PathResolutionError,
    PaymentRequired,
    RateLimited,
    TixteError,
    TixteServerError,
    Unauthorized,
)
from ._json import DataType
from ._mixin import SerializableArray, SerializableData
from ._object import DataObject
from ._path import DataPath
from ._requester import Requester
from ._route import CompiledRoute, Method, Route
from ._routes import ROUTES, Routes

__version__ = version("tixte4py")

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ROUTES",
    "AccountType",
    "ArgumentCountError",
    "CompiledRoute",
    "Config",
    "ConfigurationError",
    "DataArray",
    "DataObject",
    "DataPath",
    "DataType",
    "Domain",
    "Embed",
    "EmbedEditor",
    "Forbidden",
    "HTTPError",
    "InvalidTemplateError",
    "JsonParseError",
    "Method",
    "MissingOrWrongTypeError",
    "NotFound",
    "ParsingError",
    "PathResolutionError",
    "PaymentRequired",
    "RateLimited",
    "Requester",
    "Route",
    "Routes",
    "SelfUser",
    "SerializableArray",
    "SerializableData",
    "TixteClient",
    "TixteError",
    "TixteServerError",
    "Unauthorized",
    "Upload",
    "UploadPage",
    "UploadSize",
    "UploadedFile",
    "UsableDomain",
    "User",
    "__version__",
]
