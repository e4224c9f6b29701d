"""Turns the declarative fields of an exchange into a transport ready request."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple
from urllib.parse import quote, urlencode

import httpx

from courier.common.strlst import StrLst

from .exceptions import ExchangeStateException
from .models import FORM_MEDIA_TYPE, JSON_MEDIA_TYPE, RequestBody


@dataclass(slots=True)
class PreparedRequest:
    """Everything the transport needs to build the outbound request."""

    method: str
    url: str
    headers: List[Tuple[str, str]] = field(default_factory=list)
    body: RequestBody = field(default_factory=RequestBody)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class RequestBuilder:
    """Mutable request state plus the preparation pipeline run before each dispatch.

    ``content`` may be None, bytes, str, a StrLst, or any object StrLst.from_object
    accepts. Assign ``body`` directly to bypass content preparation; in that case
    leave ``content`` unset and only set ``media_type``/``accept`` when the framing
    of the manual body should be replaced.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        content: Any = None,
        method: str = 'POST',
        media_type: Optional[str] = JSON_MEDIA_TYPE,
        accept: Optional[str] = None,
        encoding: str = 'utf-8',
        is_form: bool = False,
        headers: Optional[Mapping[str, str]] = None,
    ):
        self.url = url
        self.content = content
        self.method = method
        self.media_type = media_type
        self.accept = accept
        self.encoding = encoding
        self.is_form = is_form
        self.headers = httpx.Headers(headers)
        self.body: Optional[RequestBody] = None
        self._query: Optional[StrLst] = None

    @property
    def method(self) -> str:
        return self._method

    @method.setter
    def method(self, value: str) -> None:
        self._method = value.upper()

    @property
    def query(self) -> Optional[StrLst]:
        """Independent copy of the query accumulator."""
        return self._query.clone() if self._query is not None else None

    def add_query(self, key: StrLst | Mapping[str, Any] | str, value: Any = None) -> None:
        """Append one key/value pair, or every pair of a StrLst or mapping. Keys may repeat."""
        if self._query is None:
            self._query = StrLst()
        if isinstance(key, str):
            self._query.add(key, value)
        else:
            self._query.append(key)

    def clear_query(self) -> None:
        if self._query is not None:
            self._query.clear()

    def build_query_string(self) -> str:
        if not self._query:
            return ''
        return '&'.join(f"{quote(k, safe='')}={quote(v, safe='')}" for k, v in self._query.to_pairs())

    def reset_body(self) -> None:
        """Forget the prepared body so the next dispatch encodes ``content`` again."""
        self.body = None

    def prepare_content(self) -> None:
        if self.body is not None:
            return

        content = self.content
        media_type = None if _is_blank(self.media_type) else self.media_type
        if content is None:
            self.body = RequestBody.from_text('', self.encoding)
            return
        if isinstance(content, (bytes, bytearray, memoryview)):
            self.body = RequestBody(bytes(content))
            return
        if isinstance(content, str):
            self.body = RequestBody.from_text(content, self.encoding, media_type)
            return

        strlst = content if isinstance(content, StrLst) else StrLst.from_object(content)
        if self.is_form:
            self.body = RequestBody(urlencode(strlst.to_pairs()).encode('ascii'), FORM_MEDIA_TYPE)
            return
        self.body = RequestBody.from_text(strlst.to_json(), self.encoding, media_type or JSON_MEDIA_TYPE)

    def prepare_query_and_headers(self) -> PreparedRequest:
        """Frame the prepared body: final URL, Accept header and media type.

        The stored url is never modified; the query string is appended to a copy.
        """
        if _is_blank(self.url):
            raise ExchangeStateException('Request url is not set')

        url = self.url
        query_string = self.build_query_string()
        if query_string:
            url += ('&' if '?' in url else '?') + query_string

        headers = list(self.headers.multi_items())
        if not _is_blank(self.accept):
            headers.append(('Accept', self.accept))

        if not _is_blank(self.media_type):
            if self.body is None:
                raise ExchangeStateException('Cannot apply a media type without a request body', url)
            # Form bodies produced from content keep their urlencoded type.
            if not (self.is_form and self.body.media_type == FORM_MEDIA_TYPE):
                self.body = self.body.with_media_type(self.media_type)

        body = self.body if self.body is not None else RequestBody()
        if body.content_type and 'content-type' not in self.headers:
            headers.append(('Content-Type', body.content_type))

        return PreparedRequest(method=self.method, url=url, headers=headers, body=body)

    def prepare(self) -> PreparedRequest:
        self.prepare_content()
        return self.prepare_query_and_headers()
