"""Request/response unit of work: prepare, dispatch, keep the response, decode it."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Type, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from courier.common.strlst import StrLst
from courier.config.log import get_logger
from courier.transport.http_client import HttpTransport, get_default_transport

from .builder import RequestBuilder
from .exceptions import ExchangeStateException, InvalidResponseBodyException, RequestFailedException, TransportDispatchException
from .models import JSON_MEDIA_TYPE

logger = get_logger(__name__)

T = TypeVar('T')


class Exchange(RequestBuilder):
    """One HTTP request/response exchange over a shared transport.

    Configure the request (url, content, headers, query), then call ``send()`` or
    ``await send_async()``. Every dispatch replaces ``response``; a failed
    dispatch leaves it empty. Instances are single owner objects and must not be
    configured concurrently.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        content: Any = None,
        *,
        method: str = 'POST',
        media_type: Optional[str] = JSON_MEDIA_TYPE,
        accept: Optional[str] = None,
        encoding: str = 'utf-8',
        is_form: bool = False,
        headers: Optional[Mapping[str, str]] = None,
        transport: Optional[HttpTransport] = None,
    ):
        super().__init__(url, content, method=method, media_type=media_type, accept=accept, encoding=encoding, is_form=is_form, headers=headers)
        self._transport = transport
        self.request: Optional[httpx.Request] = None
        self.response: Optional[httpx.Response] = None

    @classmethod
    def from_args(
        cls,
        url: str,
        content: Any,
        query: Optional[StrLst | Mapping[str, Any]] = None,
        method: str = 'POST',
        media_type: Optional[str] = JSON_MEDIA_TYPE,
        encoding: str = 'utf-8',
        is_form: bool = False,
        transport: Optional[HttpTransport] = None,
    ) -> 'Exchange':
        exchange = cls(url, content, method=method or 'POST', media_type=media_type, encoding=encoding or 'utf-8', is_form=is_form, transport=transport)
        if query is not None:
            exchange.add_query(query)
        return exchange

    @property
    def transport(self) -> HttpTransport:
        if self._transport is None:
            self._transport = get_default_transport()
        return self._transport

    @property
    def request_url(self) -> Optional[str]:
        """URL of the last prepared request, or the configured url before any dispatch."""
        return str(self.request.url) if self.request is not None else self.url

    def send(self) -> 'Exchange':
        """Prepare and dispatch the request, blocking until the response is read."""
        request = self._prepare_request()
        try:
            response = self.transport.send(request)
        except Exception as exc:
            cause = exc.__cause__ or exc
            raise TransportDispatchException(self.request_url, 'send', cause) from cause
        self._complete(response)
        return self

    async def send_async(self) -> 'Exchange':
        """Prepare and dispatch the request without blocking the event loop."""
        request = self._prepare_request()
        try:
            response = await self.transport.send_async(request)
        except Exception as exc:
            cause = exc.__cause__ or exc
            raise TransportDispatchException(self.request_url, 'send_async', cause) from cause
        self._complete(response)
        return self

    def check_success(self) -> 'Exchange':
        if self.response is None:
            raise ExchangeStateException('No response available, send the request first', self.request_url)
        if not self.response.is_success:
            raise RequestFailedException(self.request_url, self.response.status_code, self.response.reason_phrase)
        return self

    def decode_json(self, model: Type[T] | Any = Any) -> T:
        """Check the response status, then validate its JSON body as ``model``."""
        self.check_success()
        try:
            return TypeAdapter(model).validate_json(self.response.content)
        except ValidationError as exc:
            raise InvalidResponseBodyException(self.request_url, getattr(model, '__name__', repr(model))) from exc

    def read_body_as_text(self) -> str:
        return self.response.text if self.response is not None else ''

    def read_body_as_bytes(self) -> Optional[bytes]:
        return self.response.content if self.response is not None else None

    def _prepare_request(self) -> httpx.Request:
        self.response = None
        self.request = self.transport.build_request(self.prepare())
        logger.debug(
            'exchange dispatch',
            method=self.request.method,
            url=str(self.request.url),
            headers=self.transport.sanitizer.sanitize(self.request.headers.multi_items()),
            body_size=len(self.request.content),
        )
        return self.request

    def _complete(self, response: httpx.Response) -> None:
        self.response = response
        logger.debug('exchange completed', method=self.request.method, url=str(self.request.url), status_code=response.status_code)

    def __repr__(self) -> str:
        status = self.response.status_code if self.response is not None else None
        return f'Exchange(method={self.method!r}, url={self.url!r}, status={status!r})'
