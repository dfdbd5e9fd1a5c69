"""HTTP transport layer."""
from .response import Response
from .session_factory import SessionFactory
from .transport import Transport, RequestsTransport, RequestsResponse, SUCCESS_CODES

__all__ = [
    'Response',
    'SessionFactory',
    'Transport',
    'RequestsTransport',
    'RequestsResponse',
    'SUCCESS_CODES',
]
