"""Exchange domain exceptions."""

from typing import Optional


class ExchangeException(Exception):
    """Base exception for exchange operations."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.url = url


class InvalidArgumentException(ExchangeException, ValueError):
    """A required helper argument was missing. Raised before any network activity."""

    def __init__(self, argument: str):
        super().__init__(f'Invalid argument: {argument} is required')
        self.argument = argument


class ExchangeStateException(ExchangeException):
    """The exchange is not in a state that allows the operation."""

    pass


class TransportDispatchException(ExchangeException):
    """The transport raised a fault while sending the request."""

    def __init__(self, url: str, operation: str, cause: BaseException):
        super().__init__(f'{operation} failed for {url}: {cause}', url)
        self.operation = operation
        self.cause = cause


class RequestFailedException(ExchangeException):
    """A response was received but its status does not indicate success."""

    def __init__(self, url: str, status_code: int, reason: str):
        super().__init__(f'Url        : {url}\nStatus Code: {status_code}\nReason     : {reason}', url)
        self.status_code = status_code
        self.reason = reason


class InvalidResponseBodyException(ExchangeException):
    """The response body could not be decoded into the requested type."""

    def __init__(self, url: str, type_name: str):
        super().__init__(f'Url        : {url}\nClass      : {type_name}', url)
        self.type_name = type_name
