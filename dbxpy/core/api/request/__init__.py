"""Request model and builder."""
from .request import Request, RequestSpec, METHODS, SCHEMES
from .builder import RequestBuilder

__all__ = [
    'Request',
    'RequestSpec',
    'RequestBuilder',
    'METHODS',
    'SCHEMES',
]
