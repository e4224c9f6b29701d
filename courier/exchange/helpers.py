"""One-shot helpers for standard requests that need no header manipulation."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Type, TypeVar

import orjson
from pydantic import BaseModel

from courier.common.strlst import StrLst
from courier.transport.http_client import HttpTransport

from .exceptions import InvalidArgumentException
from .exchange import Exchange
from .models import JSON_MEDIA_TYPE

T = TypeVar('T')

Query = Optional[StrLst | Mapping[str, Any]]


def send(
    url: str,
    content: Any,
    query: Query = None,
    method: str = 'POST',
    media_type: Optional[str] = JSON_MEDIA_TYPE,
    encoding: str = 'utf-8',
    is_form: bool = False,
    transport: Optional[HttpTransport] = None,
) -> Exchange:
    """Build an exchange from the arguments and send it, blocking until the response arrives.

    Transport faults are raised as TransportDispatchException. The response
    status is not checked; call ``check_success()`` or ``decode_json()`` on the
    returned exchange.
    """
    return Exchange.from_args(url, content, query, method, media_type, encoding, is_form, transport).send()


async def send_async(
    url: str,
    content: Any,
    query: Query = None,
    method: str = 'POST',
    media_type: Optional[str] = JSON_MEDIA_TYPE,
    encoding: str = 'utf-8',
    is_form: bool = False,
    transport: Optional[HttpTransport] = None,
) -> Exchange:
    """Non-blocking counterpart of ``send``."""
    return await Exchange.from_args(url, content, query, method, media_type, encoding, is_form, transport).send_async()


def talk(url: str, content: Any, model: Type[T] | Any = Any, query: Query = None, transport: Optional[HttpTransport] = None) -> T:
    """POST ``content`` as indented UTF-8 JSON and decode the JSON response as ``model``.

    Raises:
        InvalidArgumentException: url or content is missing
        TransportDispatchException: the transport failed
        RequestFailedException: the response status is not a success
        InvalidResponseBodyException: the response is not a valid ``model``
    """
    payload = _talk_payload(url, content)
    return send(url, payload, query, transport=transport).decode_json(model)


async def talk_async(url: str, content: Any, model: Type[T] | Any = Any, query: Query = None, transport: Optional[HttpTransport] = None) -> T:
    """Non-blocking counterpart of ``talk``, with the same errors."""
    payload = _talk_payload(url, content)
    exchange = await send_async(url, payload, query, transport=transport)
    return exchange.decode_json(model)


def _talk_payload(url: Optional[str], content: Any) -> str:
    if not url:
        raise InvalidArgumentException('url')
    if content is None:
        raise InvalidArgumentException('content')
    return orjson.dumps(content, default=_json_default, option=orjson.OPT_INDENT_2).decode('utf-8')


def _json_default(obj: Any) -> Any:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode='json')
    if isinstance(obj, StrLst):
        return obj.to_dict()
    raise TypeError(f'Object of type {type(obj).__name__} is not JSON serializable')
