"""Convenience layer over httpx: prepare, send and decode HTTP exchanges."""

from courier.common.strlst import StrLst
from courier.exchange import (
    Exchange,
    ExchangeException,
    ExchangeStateException,
    InvalidArgumentException,
    InvalidResponseBodyException,
    RequestBody,
    RequestFailedException,
    TransportDispatchException,
    send,
    send_async,
    talk,
    talk_async,
)
from courier.transport import HttpTransport, get_default_transport, set_default_transport

__version__ = '0.1.0'

__all__ = [
    'Exchange',
    'ExchangeException',
    'ExchangeStateException',
    'HttpTransport',
    'InvalidArgumentException',
    'InvalidResponseBodyException',
    'RequestBody',
    'RequestFailedException',
    'StrLst',
    'TransportDispatchException',
    'get_default_transport',
    'send',
    'send_async',
    'set_default_transport',
    'talk',
    'talk_async',
]
