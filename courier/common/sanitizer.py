from typing import Iterable, List, Optional, Tuple

REDACTED = '***REDACTED***'


class HeaderSanitizer:
    """Masks sensitive header values before prepared requests are logged."""

    def __init__(self, redact_headers: Optional[Iterable[str]] = None):
        base_sensitive = {'authorization', 'cookie', 'set-cookie', 'proxy-authorization'}
        additional = set(x.lower() for x in (redact_headers or []))
        self.sensitive_headers = base_sensitive | additional

    def sanitize(self, headers: Iterable[Tuple[str, str]]) -> List[Tuple[str, str]]:
        """Pure function for header sanitization. Order and duplicates are kept."""
        return [(name, REDACTED if name.lower() in self.sensitive_headers else value) for name, value in headers]
