"""Lazy, memoized resolution of interdependent HTTP requests."""

import json
import logging
import threading
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType, TracebackType
from typing import Any, Self
from urllib.parse import quote

import httpx
from pydantic import JsonValue

from httpchain_pool.exceptions import (
    CycleDetectedError,
    DefinitionError,
    UndefinedRequestError,
    UrlBuildError,
    ValueNotFoundError,
)
from httpchain_pool.loader import load_definitions
from httpchain_pool.models import Const, Ref, RequestDefinition, validate_definitions
from httpchain_pool.settings import TransportSettings
from httpchain_pool.transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)


def render_value(value: JsonValue) -> str:
    """Render a JSON value for use in a URL.

    Strings are used as-is, everything else becomes compact JSON text.
    """
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def quote_segment(text: str) -> str:
    """Percent-encode text as exactly one URL path segment.

    ``/`` is escaped, and ``.``/``..`` are escaped so path normalization
    cannot drop them.
    """
    if text in (".", ".."):
        return "%2E" * len(text)
    return quote(text, safe="")


class ResponsePool:
    """Resolves named requests whose arguments refer to other requests.

    Two caches are kept: resolved values by request name, and decoded response
    bodies by the exact URL dispatched. Differently named requests that build
    the same URL share one network call.

    All state is guarded by one re-entrant lock, so concurrent ``resolve``
    calls are serialized and dependencies are always fetched one at a time.
    """

    def __init__(
        self,
        definitions: Mapping[str, RequestDefinition | Mapping[str, Any]],
        transport: Transport | None = None,
        settings: TransportSettings | None = None,
    ):
        self._definitions = MappingProxyType(validate_definitions(definitions))
        self._resolved: dict[str, JsonValue] = {}
        self._response_cache: dict[str, JsonValue] = {}
        self._resolving: list[str] = []
        self._lock = threading.RLock()
        self.transport: Transport = transport if transport is not None else HttpxTransport(settings)

    @classmethod
    def from_file(
        cls,
        path: Path | str,
        transport: Transport | None = None,
        settings: TransportSettings | None = None,
    ) -> Self:
        return cls(load_definitions(path), transport=transport, settings=settings)

    @property
    def definitions(self) -> Mapping[str, RequestDefinition]:
        return self._definitions

    @property
    def resolved(self) -> Mapping[str, JsonValue]:
        return MappingProxyType(self._resolved)

    @property
    def response_cache(self) -> Mapping[str, JsonValue]:
        return MappingProxyType(self._response_cache)

    def set_value(self, name: str, value: JsonValue) -> None:
        """Seed a value directly, e.g. an input not backed by a request."""
        with self._lock:
            self._resolved[name] = value
            logger.info(f"Seeded {name} = {value}")

    def get_value(self, name: str) -> JsonValue:
        """Get an already resolved or seeded value without resolving it.

        Raises:
            ValueNotFoundError: If the name holds no value
        """
        with self._lock:
            try:
                return self._resolved[name]
            except KeyError:
                raise ValueNotFoundError(name) from None

    def clear_resolved(self) -> None:
        with self._lock:
            self._resolved.clear()

    def clear_cache(self) -> None:
        with self._lock:
            self._response_cache.clear()

    def resolve(self, name: str) -> JsonValue:
        """Resolve a named request, resolving its dependencies first.

        Args:
            name: Request name, or the name of a seeded value

        Returns:
            The value extracted from the request's JSON response

        Raises:
            UndefinedRequestError: If the name is neither defined nor seeded
            CycleDetectedError: If the request depends on itself
            UrlBuildError: If the request URL cannot be built
            NetworkError: If the HTTP call fails
            JsonDecodeError: If the response is not JSON
            KeyNotFoundError: If the value path has no match in the response
        """
        with self._lock:
            if name in self._resolved:
                logger.info(f"Memo hit for {name}")
                return self._resolved[name]

            if name in self._resolving:
                raise CycleDetectedError(name, list(self._resolving))

            definition = self._definitions.get(name)
            if definition is None:
                raise UndefinedRequestError(name)

            self._resolving.append(name)
            try:
                value = self._fetch(definition)
            finally:
                self._resolving.pop()

            self._resolved[name] = value
            logger.info(f"Resolved {name} = {value}")
            return value

    def evaluate(self, argument: Const | Ref) -> str:
        """Render an argument to text, resolving it first if it is a reference."""
        match argument:
            case Const(value=value):
                return render_value(value)
            case Ref(name=name):
                return render_value(self.resolve(name))
            case _:
                raise DefinitionError(f"Invalid argument: expected Const or Ref, got {argument!r}")

    def build_url(self, definition: RequestDefinition) -> str:
        """Build the URL a definition dispatches to, resolving its arguments.

        Path arguments are evaluated in order and appended as ``/``-separated
        segments, then query arguments in key order.

        Raises:
            UrlBuildError: If the result is not a valid absolute URL
        """
        segments = [quote_segment(self.evaluate(argument)) for argument in definition.path]
        params = {key: self.evaluate(definition.params[key]) for key in sorted(definition.params)}

        try:
            url = httpx.URL(definition.url)
            if segments:
                template_path = url.raw_path.decode("ascii").partition("?")[0]
                url = url.copy_with(path="/".join([template_path.rstrip("/"), *segments]))
            url = url.copy_merge_params(params)
        except httpx.InvalidURL as e:
            raise UrlBuildError(f"Invalid URL '{definition.url}': {str(e)}") from e

        if not url.is_absolute_url:
            raise UrlBuildError(f"URL '{definition.url}' is not absolute")

        logger.debug(f"Built URL {url} from template {definition.url}")
        return str(url)

    def _fetch(self, definition: RequestDefinition) -> JsonValue:
        url = self.build_url(definition)

        if url in self._response_cache:
            logger.info(f"Response cache hit for {url}")
            body = self._response_cache[url]
        else:
            body = self.transport.perform(definition.method.value, url)
            self._response_cache[url] = body

        return definition.extractor.apply(body)

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()
