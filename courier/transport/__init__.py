from .http_client import HttpTransport, get_default_transport, set_default_transport

__all__ = ['HttpTransport', 'get_default_transport', 'set_default_transport']
