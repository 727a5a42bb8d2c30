from httpchain_pool.exceptions import (
    CycleDetectedError,
    DefinitionError,
    JsonDecodeError,
    KeyNotFoundError,
    LoaderError,
    NetworkError,
    PoolError,
    TransportInitError,
    UndefinedRequestError,
    UrlBuildError,
    ValueNotFoundError,
)
from httpchain_pool.extractor import Index, Key, ValuePath
from httpchain_pool.loader import load_definitions
from httpchain_pool.models import Argument, Const, Ref, RequestDefinition
from httpchain_pool.pool import ResponsePool, render_value
from httpchain_pool.settings import TransportSettings
from httpchain_pool.transport import HttpxTransport, Transport

__all__ = [
    "Argument",
    "Const",
    "CycleDetectedError",
    "DefinitionError",
    "HttpxTransport",
    "Index",
    "JsonDecodeError",
    "Key",
    "KeyNotFoundError",
    "LoaderError",
    "NetworkError",
    "PoolError",
    "Ref",
    "RequestDefinition",
    "ResponsePool",
    "Transport",
    "TransportInitError",
    "TransportSettings",
    "UndefinedRequestError",
    "UrlBuildError",
    "ValueNotFoundError",
    "ValuePath",
    "load_definitions",
    "render_value",
]
