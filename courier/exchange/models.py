from dataclasses import dataclass, replace
from typing import Optional

FORM_MEDIA_TYPE = 'application/x-www-form-urlencoded'
JSON_MEDIA_TYPE = 'application/json'


@dataclass(frozen=True, slots=True)
class RequestBody:
    """Encoded request body and its Content-Type metadata.

    Assigning one to ``Exchange.body`` bypasses content preparation entirely.
    """

    data: bytes = b''
    content_type: Optional[str] = None

    @property
    def media_type(self) -> Optional[str]:
        if self.content_type is None:
            return None
        return self.content_type.split(';', 1)[0].strip()

    def with_media_type(self, media_type: str) -> 'RequestBody':
        """Replace the media type, keeping content type parameters such as charset."""
        if self.content_type is None or ';' not in self.content_type:
            return replace(self, content_type=media_type)
        params = self.content_type.split(';', 1)[1]
        return replace(self, content_type=f'{media_type};{params}')

    @classmethod
    def from_text(cls, text: str, encoding: str = 'utf-8', media_type: Optional[str] = None) -> 'RequestBody':
        """Encode text. A charset parameter is only declared for non UTF-8 encodings."""
        content_type = media_type or 'text/plain'
        if not _is_utf8(encoding):
            content_type = f'{content_type}; charset={encoding}'
        return cls(text.encode(encoding), content_type)


def _is_utf8(encoding: str) -> bool:
    return encoding.lower().replace('-', '').replace('_', '') == 'utf8'
