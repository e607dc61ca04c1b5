"""Typed API client.

WebAPIClient turns a Resource into one HTTP request through the environment's
transport, optionally narrows the JSON response to a key path, and decodes the
result into the resource's value type. `fetch` can retry the whole cycle with a
fixed delay between attempts.
"""

import logging
import time
from datetime import timedelta
from typing import Callable, Optional, TypeVar, Union
from urllib.parse import urljoin, urlsplit

from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from ..config.config import Environment
from ..core.key_path import narrow
from ..core.resource import Resource
from .decoder import JSONDecoder
from .errors import DecodingError, KeyPathError, UnsupportedURLError, is_transient

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_RETRY_DELAY = 1.0

_SUPPORTED_SCHEMES = ("http", "https")


class WebAPIClient:
    """Client for a single API environment.

    The client holds no per-request state, so one instance can serve many
    resources (and many threads, if the transport allows it).

    Attributes:
        environment: The environment requests are sent to.
        decoder: The decoder used for every response.
    """

    def __init__(
        self,
        environment: Environment,
        decoder: Optional[JSONDecoder] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize the client.

        Args:
            environment: Base URL and transport to use.
            decoder: JSON decoder shared by all resources. Defaults to JSONDecoder().
            sleep: Called with the delay in seconds between retry attempts.
        """
        self.environment = environment
        self.decoder = decoder or JSONDecoder()
        self._sleep = sleep

    def _resolve_url(self, path: str) -> str:
        """Resolve a resource path against the base URL.

        Relative paths follow RFC 3986 joining, so a base URL that should act as
        a directory needs a trailing slash.

        Raises:
            UnsupportedURLError: If the result is not an absolute http(s) URL.
        """
        try:
            url = urljoin(self.environment.base_url, path)
            parts = urlsplit(url)
            parts.port  # raises ValueError on a malformed port
        except ValueError as e:
            raise UnsupportedURLError(path, str(e)) from e

        if parts.scheme not in _SUPPORTED_SCHEMES or not parts.hostname:
            raise UnsupportedURLError(url, "not an absolute http(s) URL")
        if any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in path + url):
            raise UnsupportedURLError(url, "contains whitespace or control characters")
        return url

    def _fetch_once(self, resource: Resource[T]) -> T:
        url = self._resolve_url(resource.path)
        method = resource.method.value

        logger.debug("Making %s request to %s", method, url)
        response = self.environment.transport.send(method, url, resource.headers, resource.body)

        data = response.content
        if resource.key_path:
            try:
                data, found = narrow(data, resource.key_path)
            except ValueError as e:
                raise DecodingError(
                    f"Response is not valid JSON: {e}", value_type=resource.value_type
                ) from e
            if not found:
                if resource.strict_key_path:
                    raise KeyPathError(resource.key_path)
                logger.debug(
                    "Key path %r not found in response from %s, decoding full body",
                    resource.key_path,
                    url,
                )

        return self.decoder.decode(resource.value_type, data)

    def fetch(
        self,
        resource: Resource[T],
        attempts: Optional[int] = None,
        delay: Union[float, timedelta] = DEFAULT_RETRY_DELAY,
        transient_only: bool = False,
    ) -> T:
        """Fetch a resource and decode the response.

        Without `attempts` this performs exactly one request. With `attempts`,
        a failed attempt is retried after `delay` until one succeeds or the
        attempts run out; the error from the last attempt is re-raised as is.
        The delay is the same between every pair of attempts.

        Args:
            resource: The resource to fetch.
            attempts: Total number of attempts, at least 1.
            delay: Pause between attempts, in seconds or as a timedelta.
            transient_only: Only retry errors flagged transient (transport
                failures). By default every error is retried.

        Returns:
            The decoded value.

        Raises:
            UnsupportedURLError: If the resource path doesn't resolve to a valid URL.
            TransportError: If the transport fails.
            DecodingError: If the response can't be decoded into the value type.
            KeyPathError: If a strict key path is missing from the response.
            ValueError: If attempts is less than 1 or delay is negative.
        """
        if attempts is None:
            return self._fetch_once(resource)
        if isinstance(attempts, bool) or not isinstance(attempts, int) or attempts < 1:
            raise ValueError(f"attempts must be a positive integer, got {attempts!r}")
        if isinstance(delay, timedelta):
            delay_s = delay.total_seconds()
        elif isinstance(delay, (int, float)) and not isinstance(delay, bool):
            delay_s = float(delay)
        else:
            raise ValueError(f"delay must be a number of seconds or a timedelta, got {delay!r}")
        if delay_s < 0:
            raise ValueError(f"delay must not be negative, got {delay!r}")

        retrying = Retrying(
            reraise=True,
            retry=retry_if_exception(is_transient) if transient_only else retry_if_exception_type(Exception),
            wait=wait_fixed(delay_s),
            stop=stop_after_attempt(attempts),
            sleep=self._sleep,
            before_sleep=before_sleep_log(logger, logging.WARNING),
        )
        return retrying(self._fetch_once, resource)
