from .builder import PreparedRequest, RequestBuilder
from .exceptions import (
    ExchangeException,
    ExchangeStateException,
    InvalidArgumentException,
    InvalidResponseBodyException,
    RequestFailedException,
    TransportDispatchException,
)
from .exchange import Exchange
from .helpers import send, send_async, talk, talk_async
from .models import FORM_MEDIA_TYPE, JSON_MEDIA_TYPE, RequestBody

__all__ = [
    'Exchange',
    'ExchangeException',
    'ExchangeStateException',
    'FORM_MEDIA_TYPE',
    'InvalidArgumentException',
    'InvalidResponseBodyException',
    'JSON_MEDIA_TYPE',
    'PreparedRequest',
    'RequestBody',
    'RequestBuilder',
    'RequestFailedException',
    'TransportDispatchException',
    'send',
    'send_async',
    'talk',
    'talk_async',
]
