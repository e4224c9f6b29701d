from typing import List, Optional

import httpx
import pytest

from courier.transport import HttpTransport


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays one canned response."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.status_code = 200
        self.json = None
        self.content: bytes = b''
        self.headers: dict = {}
        self.error: Optional[Exception] = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.json is not None:
            return httpx.Response(self.status_code, json=self.json, headers=self.headers)
        return httpx.Response(self.status_code, content=self.content, headers=self.headers)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def handler():
    return RecordingHandler()


@pytest.fixture
def transport(handler):
    mock = httpx.MockTransport(handler)
    return HttpTransport(client=httpx.Client(transport=mock), async_client=httpx.AsyncClient(transport=mock))
