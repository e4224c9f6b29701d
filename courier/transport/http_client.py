"""Shared httpx transport used by every exchange."""

import asyncio
import threading
from typing import TYPE_CHECKING, Dict, Optional

import httpx

from courier.common.sanitizer import HeaderSanitizer
from courier.config import TransportConfig, get_config

if TYPE_CHECKING:
    from courier.exchange.builder import PreparedRequest


def _client_options(config: TransportConfig) -> dict:
    headers = dict(config.default_headers)
    if config.user_agent:
        headers.setdefault('User-Agent', config.user_agent)
    return {
        'timeout': httpx.Timeout(config.timeout, connect=config.connect_timeout or config.timeout),
        'follow_redirects': config.follow_redirects,
        'verify': config.verify_ssl,
        'http2': config.http2,
        'limits': httpx.Limits(max_connections=config.max_connections, max_keepalive_connections=config.max_keepalive_connections),
        'headers': headers,
    }


class HttpTransport:
    """Thread safe httpx clients sharing one configuration.

    The blocking client serves ``send``. Async clients serve ``send_async``, one
    per running event loop, since pooled connections cannot cross loops. Either
    kind may be injected, e.g. backed by httpx.MockTransport; an injected async
    client is used on every loop and its lifetime is the caller's concern.
    """

    def __init__(
        self,
        config: Optional[TransportConfig] = None,
        client: Optional[httpx.Client] = None,
        async_client: Optional[httpx.AsyncClient] = None,
        sanitizer: Optional[HeaderSanitizer] = None,
    ):
        self.config = config or TransportConfig()
        self.sanitizer = sanitizer or HeaderSanitizer()
        self._options = _client_options(self.config)
        self.client = client or httpx.Client(**self._options)
        self._injected_async_client = async_client
        self._async_clients: Dict[asyncio.AbstractEventLoop, httpx.AsyncClient] = {}
        self._lock = threading.Lock()

    def get_async_client(self) -> httpx.AsyncClient:
        """Async client bound to the running event loop, created on first use in that loop."""
        if self._injected_async_client is not None:
            return self._injected_async_client
        loop = asyncio.get_running_loop()
        with self._lock:
            # Clients of finished loops hold dead connections.
            for closed in [loop_key for loop_key in self._async_clients if loop_key.is_closed()]:
                del self._async_clients[closed]
            client = self._async_clients.get(loop)
            if client is None:
                client = httpx.AsyncClient(**self._options)
                self._async_clients[loop] = client
        return client

    def build_request(self, prepared: 'PreparedRequest') -> httpx.Request:
        """Build the outbound request, merging client defaults and timeouts."""
        return self.client.build_request(prepared.method, prepared.url, headers=prepared.headers, content=prepared.body.data)

    def send(self, request: httpx.Request) -> httpx.Response:
        return self.client.send(request)

    async def send_async(self, request: httpx.Request) -> httpx.Response:
        return await self.get_async_client().send(request)

    def close(self) -> None:
        self.client.close()

    async def aclose(self) -> None:
        """Close the async client of the running loop."""
        await self.get_async_client().aclose()
        with self._lock:
            self._async_clients.pop(asyncio.get_running_loop(), None)


_default_transport: Optional[HttpTransport] = None
_default_transport_lock = threading.Lock()


def get_default_transport() -> HttpTransport:
    """Process wide transport, built from configuration on first use."""
    global _default_transport
    if _default_transport is None:
        with _default_transport_lock:
            if _default_transport is None:
                config = get_config()
                _default_transport = HttpTransport(config.transport, sanitizer=HeaderSanitizer(config.redact_headers))
    return _default_transport


def set_default_transport(transport: Optional[HttpTransport]) -> None:
    """Replace the process wide transport. None rebuilds it from configuration on next use."""
    global _default_transport
    with _default_transport_lock:
        _default_transport = transport
