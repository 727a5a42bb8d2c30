import json
import logging
import ssl
from pathlib import Path
from typing import Protocol

import httpx
from pydantic import JsonValue, ValidationError

from httpchain_pool.exceptions import JsonDecodeError, NetworkError, TransportInitError
from httpchain_pool.settings import TransportSettings

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Issues HTTP calls on behalf of a pool."""

    def perform(self, method: str, url: str) -> JsonValue:
        """Send a request and return the decoded JSON body."""
        ...

    def close(self) -> None: ...


def build_ssl_context(settings: TransportSettings) -> ssl.SSLContext | bool:
    """Build SSL verification config for httpx from transport settings."""
    if settings.cert is None and isinstance(settings.verify, bool):
        return settings.verify

    cafile = str(settings.verify) if isinstance(settings.verify, Path) else None
    context = ssl.create_default_context(cafile=cafile)
    if settings.verify is False:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE

    match settings.cert:
        case None:
            pass
        case (cert_path, key_path):
            context.load_cert_chain(certfile=cert_path, keyfile=key_path)
        case cert_path:
            context.load_cert_chain(certfile=cert_path)

    return context


class HttpxTransport:
    """Transport over a single shared httpx client.

    The client keeps cookies between calls, so a response that sets a session
    cookie affects every request dispatched after it.
    """

    def __init__(
        self,
        settings: TransportSettings | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        try:
            self.settings = settings if settings is not None else TransportSettings()
            self._client = httpx.Client(
                verify=build_ssl_context(self.settings),
                proxy=self.settings.proxy,
                headers=self.settings.headers,
                follow_redirects=self.settings.follow_redirects,
                timeout=httpx.Timeout(None),
                transport=transport,
            )
        except ValidationError as e:
            raise TransportInitError(f"Invalid transport settings: {str(e)}") from e
        except (OSError, ValueError, ImportError, httpx.InvalidURL) as e:
            raise TransportInitError(f"Failed to configure HTTP client: {str(e)}") from e

    @property
    def cookies(self) -> httpx.Cookies:
        return self._client.cookies

    def perform(self, method: str, url: str) -> JsonValue:
        logger.info(f"{method} {url}")
        try:
            response = self._client.request(method, url)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise NetworkError(f"HTTP request timed out: {str(e)}") from e
        except httpx.ConnectError as e:
            raise NetworkError(f"HTTP connection error: {str(e)}") from e
        except httpx.HTTPStatusError as e:
            raise NetworkError(f"HTTP status {e.response.status_code} for {method} {url}") from e
        except httpx.HTTPError as e:
            raise NetworkError(f"HTTP request failed: {str(e)}") from e
        finally:
            if not self.settings.persist_cookies:
                self._client.cookies.clear()

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise JsonDecodeError(f"Response from {method} {url} is not valid JSON: {str(e)}") from e

    def close(self) -> None:
        self._client.close()
