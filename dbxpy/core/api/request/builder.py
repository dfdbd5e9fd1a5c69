"""
Fluent request builder.

Every with_* call returns a new builder; a builder can be shared and
extended without affecting other requests built from it.
"""
from dataclasses import replace
from pathlib import Path
from typing import Any, BinaryIO, Optional, Union

from ...exceptions import InvalidArgument
from ...utils import UTF8, not_blank
from .request import METHODS, SCHEMES, Request, RequestSpec, stringify


class RequestBuilder:
    """
    Builds Request instances.
    
    Example:
        >>> text = (Request.with_method('GET')
        ...     .with_host('api.dropbox.com')
        ...     .with_path('/1/account/info')
        ...     .with_header('Authorization', header)
        ...     .with_parameter('locale', 'en')
        ...     .as_string(transport))
    """
    
    __slots__ = ('_spec',)
    
    def __init__(self, spec: RequestSpec):
        self._spec = spec
    
    @classmethod
    def for_method(cls, method: str) -> 'RequestBuilder':
        """Start a builder for the given HTTP method."""
        if method not in METHODS:
            raise InvalidArgument(f"Unsupported method: {method!r}")
        return cls(RequestSpec(method=method))
    
    @property
    def spec(self) -> RequestSpec:
        """Returns the staged configuration."""
        return self._spec
    
    def _with(self, **changes) -> 'RequestBuilder':
        return RequestBuilder(replace(self._spec, **changes))
    
    def with_scheme(self, scheme: str) -> 'RequestBuilder':
        """Specify the scheme, "http" or "https" (default)."""
        if scheme not in SCHEMES:
            raise InvalidArgument(f"Unsupported scheme: {scheme!r}")
        return self._with(scheme=scheme)
    
    def with_host(self, host: str) -> 'RequestBuilder':
        """Specify the host (server address). Mandatory."""
        return self._with(host=host)
    
    def with_port(self, port: int) -> 'RequestBuilder':
        """Specify the port. If not specified it is omitted from the URL."""
        if isinstance(port, bool) or not isinstance(port, int) or port <= 0:
            raise InvalidArgument(f"'port' must be a positive int: {port!r}")
        return self._with(port=port)
    
    def with_path(self, path: str) -> 'RequestBuilder':
        """Specify the path, which must be absolute (start with "/")."""
        if path is None or not path.startswith('/'):
            raise InvalidArgument(f"'path' must be absolute: {path}")
        return self._with(path=path)
    
    def with_parameter(self, name: str, value: Any) -> 'RequestBuilder':
        """
        Add a parameter.
        
        The value is converted to a string; a None value leaves the
        parameter out entirely.
        """
        not_blank('name', name)
        if value is None:
            return self
        return self._with(parameters={**self._spec.parameters, name: stringify(value)})
    
    def with_header(self, name: str, value: Optional[str]) -> 'RequestBuilder':
        """Add a header. A None value leaves the header out."""
        not_blank('name', name)
        if value is None:
            return self
        return self._with(headers={**self._spec.headers, name: str(value)})
    
    def with_payload(self, payload: Optional[BinaryIO]) -> 'RequestBuilder':
        """Specify the request body stream."""
        return self._with(payload=payload)
    
    def build(self) -> Request:
        """Freeze into a Request."""
        return Request.from_spec(self._spec)
    
    def to_url(self) -> str:
        """Returns the URL of the request without executing it."""
        return self.build().url
    
    def to_output_stream(self, transport, sink: BinaryIO) -> int:
        """
        Execute the request and stream the response body into sink.
        
        The sink is not closed.
        
        Returns:
            Number of bytes written
        """
        response = transport.execute(self.build())
        try:
            size = 0
            for block in response.iter_content():
                sink.write(block)
                size += len(block)
            return size
        finally:
            response.close()
    
    def as_string(self, transport) -> str:
        """Execute the request and return the decoded response body."""
        response = transport.execute(self.build())
        try:
            return response.read().decode(response.encoding or UTF8)
        finally:
            response.close()
    
    def to_file(self, transport, path: Union[str, Path]) -> int:
        """
        Execute the request and write the response body to a file.
        
        Returns:
            Number of bytes written (file size)
        """
        with open(path, 'wb') as sink:
            return self.to_output_stream(transport, sink)
    
    def __repr__(self) -> str:
        return f"RequestBuilder({self._spec!r})"
