"""
HTTP transport.

Executes a Request and returns a Response, raising TransportError for
any status other than 200 and 206.
"""
import codecs
import time
from typing import BinaryIO, Dict, Iterator, Optional, Protocol, Union

import requests
from requests.utils import get_encoding_from_headers

from ...exceptions import TransportError
from ...logging import get_logger, mask_headers
from ...utils import BUFFER_SIZE, UTF8
from ..config import APIConfig
from ..request import Request
from .response import Response
from .session_factory import SessionFactory

SUCCESS_CODES = (200, 206)


class Transport(Protocol):
    """Protocol for objects able to execute a Request."""
    
    def execute(self, request: Request) -> Response:
        """
        Perform the HTTP call.
        
        Raises:
            TransportError: On a non-success status or connection failure
        """
        ...


def iter_stream(stream: BinaryIO, chunk_size: int = BUFFER_SIZE) -> Iterator[bytes]:
    """Yields blocks from stream until it reports end of data."""
    while True:
        block = stream.read(chunk_size)
        if not block:
            return
        yield block


class SizedStream:
    """
    Payload stream with a known length.
    
    requests sends an iterable exposing __len__ with a Content-Length
    header and no chunked framing. At most length bytes are read.
    """
    
    def __init__(self, stream: BinaryIO, length: int, chunk_size: int = BUFFER_SIZE):
        self._stream = stream
        self._length = length
        self._chunk_size = chunk_size
    
    def __len__(self) -> int:
        return self._length
    
    def __iter__(self) -> Iterator[bytes]:
        remaining = self._length
        while remaining > 0:
            block = self._stream.read(min(self._chunk_size, remaining))
            if not block:
                return
            remaining -= len(block)
            yield block


def declared_length(headers: Dict[str, str]) -> Optional[int]:
    """Returns the Content-Length header value, None if absent."""
    for name, value in headers.items():
        if name.lower() == 'content-length':
            return int(value)
    return None


def body_data(body, headers: Dict[str, str]) -> Union[None, bytes, SizedStream, Iterator[bytes]]:
    """
    Adapt a request body for requests.
    
    Streams with a declared Content-Length are sent as a SizedStream;
    streams without one are sent with chunked transfer encoding.
    """
    if body is None or isinstance(body, bytes):
        return body
    length = declared_length(headers)
    if length is None:
        return iter_stream(body)
    if length == 0:
        return b''
    return SizedStream(body, length)


def response_charset(response: requests.Response) -> Optional[str]:
    """
    Returns the charset named in the Content-Type header.
    
    None when the header names no charset or an unknown one; requests
    would otherwise report ISO-8859-1 for any text/* response.
    """
    content_type = response.headers.get('Content-Type') or ''
    if 'charset' not in content_type.lower():
        return None
    charset = get_encoding_from_headers(response.headers)
    try:
        codecs.lookup(charset)
    except (LookupError, TypeError):
        return None
    return charset


class RequestsResponse(Response):
    """Response backed by a streamed requests.Response."""
    
    def __init__(self, response: requests.Response):
        super().__init__(
            response.status_code,
            response.reason or '',
            response_charset(response)
        )
        self._response = response
    
    def iter_content(self, chunk_size: int = BUFFER_SIZE) -> Iterator[bytes]:
        return self._response.iter_content(chunk_size=chunk_size)
    
    def close(self) -> None:
        self._response.close()


class RequestsTransport:
    """
    Transport built on a requests.Session.
    
    Not safe for concurrent use; create one per sequential caller.
    """
    
    def __init__(
        self,
        config: Optional[APIConfig] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize transport.
        
        Args:
            config: API configuration (uses defaults if not provided)
            session: Optional externally managed session
        """
        self._config = config or APIConfig.default()
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger('dbxpy.transport')
    
    @property
    def session(self) -> requests.Session:
        """Get or create the HTTP session."""
        if self._session is None:
            self._session = SessionFactory.create_session(self._config)
        return self._session
    
    def execute(self, request: Request) -> Response:
        start = time.time()
        url = request.url
        headers = dict(request.header_items())
        body = request.body
        data = body_data(body, headers)
        
        self._logger.debug(
            f"Request: {request.method} {url} headers={mask_headers(headers)} "
            f"payload={body is not None}"
        )
        try:
            response = self.session.request(
                request.method,
                url,
                headers=headers,
                data=data,
                stream=True,
                **self._config.get_request_kwargs()
            )
        except requests.RequestException as e:
            self._logger.error(f"{request} failed: {e}")
            raise TransportError(f"{request} FAILED: {e}", request=str(request)) from e
        
        if response.status_code not in SUCCESS_CODES:
            try:
                error_body = response.content.decode(
                    response_charset(response) or UTF8, errors='replace'
                )
            finally:
                response.close()
            raise TransportError.from_status(
                str(request),
                response.status_code,
                response.reason or '',
                error_body
            )
        
        elapsed_ms = (time.time() - start) * 1000
        self._logger.debug(f"{request} executed in {elapsed_ms:.0f} ms")
        return RequestsResponse(response)
    
    def close(self) -> None:
        """Close session if we own it."""
        if self._owns_session and self._session is not None:
            self._session.close()
            self._session = None
    
    def __enter__(self) -> 'RequestsTransport':
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
