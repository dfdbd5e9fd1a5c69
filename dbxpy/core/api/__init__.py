"""Low-level API: configuration, request model and transport."""
from .config import APIConfig, ProxyConfig, SSLConfig, TimeoutConfig
from .settings import ClientSettings
from .request import Request, RequestSpec, RequestBuilder
from .transport import Transport, RequestsTransport, Response, SessionFactory

__all__ = [
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'ClientSettings',
    'Request',
    'RequestSpec',
    'RequestBuilder',
    'Transport',
    'RequestsTransport',
    'Response',
    'SessionFactory',
]
