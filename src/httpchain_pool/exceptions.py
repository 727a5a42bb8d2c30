"""Exception classes for httpchain-pool."""

from typing import Any


class PoolError(Exception):
    """Base exception for all httpchain-pool errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DefinitionError(PoolError):
    """An error validating request definitions."""


class LoaderError(PoolError):
    """An error reading request definitions from a file."""


class UndefinedRequestError(PoolError):
    """A name is neither defined nor seeded in the pool."""

    def __init__(self, name: str):
        super().__init__(f"Request '{name}' is not defined")
        self.name = name


class ValueNotFoundError(PoolError):
    """A name holds no resolved value."""

    def __init__(self, name: str):
        super().__init__(f"No value stored for '{name}'")
        self.name = name


class CycleDetectedError(PoolError):
    """A request depends on itself through its arguments."""

    def __init__(self, name: str, chain: list[str]):
        super().__init__(f"Circular reference detected: {' -> '.join([*chain, name])}")
        self.name = name
        self.chain = chain


class KeyNotFoundError(PoolError):
    """A value path selector has no match in the response."""

    def __init__(self, selector: Any, path: Any):
        super().__init__(f"Selector '{selector}' not found while applying value path '{path}'")
        self.selector = selector
        self.path = path


class UrlBuildError(PoolError):
    """An error building the request URL."""


class TransportInitError(PoolError):
    """An error configuring the HTTP transport."""


class NetworkError(PoolError):
    """An error making HTTP call."""


class JsonDecodeError(PoolError):
    """A response body is not valid JSON."""
