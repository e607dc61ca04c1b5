"""Transport layer: the part that actually talks HTTP.

WebAPIClient never touches the network itself. It hands a fully built request to
a `Transport`, which returns the raw response or raises `TransportError`.
"""

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional, Protocol

import requests

from .errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


@dataclass(frozen=True)
class TransportResponse:
    """Raw response as returned by a transport. The status is not interpreted."""

    status: int
    content: bytes
    headers: Mapping[str, str] = field(default_factory=dict)


class Transport(Protocol):
    def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes],
    ) -> TransportResponse:
        ...


class RequestsTransport:
    """Transport backed by a `requests.Session`.

    The session provides connection pooling, TLS and redirects. Requests are
    prepared on their own, so session-level default headers are not merged in:
    the headers passed to `send` are the headers that go on the wire. Session
    cookies, session auth and .netrc credentials are not applied either.
    Environment settings are: proxies, verify and cert from the session and from
    variables such as HTTPS_PROXY and REQUESTS_CA_BUNDLE.

    Attributes:
        session: The underlying requests session.
        timeout: Timeout in seconds for each request.
    """

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = DEFAULT_TIMEOUT):
        self.session = session or requests.Session()
        self.timeout = timeout

    def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes],
    ) -> TransportResponse:
        """Send one request.

        Args:
            method: The HTTP method name.
            url: Absolute request URL.
            headers: Complete set of request headers.
            body: Optional raw body.

        Returns:
            The response status, body bytes and headers.

        Raises:
            TransportError: If requests fails to produce a response.
        """
        try:
            prepared = requests.Request(method, url, headers=dict(headers), data=body).prepare()
            settings = self.session.merge_environment_settings(prepared.url, {}, None, None, None)
            response = self.session.send(prepared, timeout=self.timeout, **settings)
        except requests.RequestException as e:
            logger.debug("Transport failure for %s %s: %s", method, url, e)
            raise TransportError(f"{method} {url} failed: {e}", method=method, url=url) from e

        return TransportResponse(
            status=response.status_code,
            content=response.content,
            headers=dict(response.headers),
        )

    def close(self) -> None:
        self.session.close()
