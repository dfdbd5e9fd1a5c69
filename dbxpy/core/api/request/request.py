"""
Immutable HTTP request model.

A request is assembled from a RequestSpec (a staged set of optional
fields) and frozen into a Request once the host is known. Parameters
travel in the query string for GET requests and whenever an explicit
payload already occupies the body; otherwise a POST/PUT carries them
as an application/x-www-form-urlencoded body.
"""
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Dict, List, Optional, Tuple, Union
from urllib.parse import quote

from ...exceptions import InvalidArgument
from ...utils import UTF8, encode_form

METHODS = ('GET', 'POST', 'PUT')
SCHEMES = ('http', 'https')

FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'

_ILLEGAL_HOST_CHARS = set('/?#@ \t\r\n')


def stringify(value: Any) -> str:
    """Converts a parameter value to its wire form (booleans lowercase)."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def encode_pairs(pairs: Dict[str, str]) -> str:
    """Form-encodes name/value pairs joined with '&'."""
    return '&'.join(
        f"{encode_form(name)}={encode_form(value)}"
        for name, value in pairs.items()
    )


@dataclass(frozen=True)
class RequestSpec:
    """
    Staged configuration for a Request.
    
    Every field except the method is optional while staging; build-time
    validation happens in Request.from_spec().
    """
    method: str
    scheme: str = 'https'
    host: Optional[str] = None
    port: Optional[int] = None
    path: Optional[str] = None
    parameters: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    payload: Optional[BinaryIO] = None


@dataclass(frozen=True)
class Request:
    """
    Holds all data for one HTTP(S) REST request.
    
    Instances are consumed by a single transport call and never reused.
    """
    method: str
    host: str
    scheme: str = 'https'
    port: Optional[int] = None
    path: str = ''
    parameters: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    payload: Optional[BinaryIO] = None
    
    @staticmethod
    def with_method(method: str) -> 'RequestBuilder':
        """
        Start building a request.
        
        Args:
            method: "GET", "POST" or "PUT"
            
        Raises:
            InvalidArgument: If the method is not supported
        """
        from .builder import RequestBuilder
        return RequestBuilder.for_method(method)
    
    @classmethod
    def from_spec(cls, spec: RequestSpec) -> 'Request':
        """
        Freeze a staged spec into a Request.
        
        Raises:
            InvalidArgument: If the host is missing or malformed
        """
        if not spec.host or not spec.host.strip():
            raise InvalidArgument("'host' is required")
        if _ILLEGAL_HOST_CHARS.intersection(spec.host):
            raise InvalidArgument(f"Malformed URL, illegal host: '{spec.host}'")
        return cls(
            method=spec.method,
            host=spec.host,
            scheme=spec.scheme,
            port=spec.port,
            path=spec.path or '',
            parameters=dict(spec.parameters),
            headers=dict(spec.headers),
            payload=spec.payload
        )
    
    @property
    def parameters_as_payload(self) -> bool:
        """True if parameters are sent as a form encoded body."""
        return self.payload is None and self.method != 'GET'
    
    @property
    def url(self) -> str:
        """Returns the URL, including the query string when applicable."""
        netloc = self.host if self.port is None else f"{self.host}:{self.port}"
        url = f"{self.scheme}://{netloc}{quote(self.path, safe='/', encoding=UTF8)}"
        if self.parameters and not self.parameters_as_payload:
            url += '?' + encode_pairs(self.parameters)
        return url
    
    @property
    def body(self) -> Optional[Union[bytes, BinaryIO]]:
        """
        Returns the request body.
        
        This is either the explicit payload stream, the form encoded
        parameters, or None when there is nothing to send.
        """
        if not self.parameters_as_payload:
            return self.payload
        if not self.parameters:
            return None
        return encode_pairs(self.parameters).encode(UTF8)
    
    def header_items(self) -> List[Tuple[str, str]]:
        """Returns all headers, including the implicit form Content-Type."""
        items = list(self.headers.items())
        if self.parameters_as_payload and self.parameters:
            if not any(name.lower() == 'content-type' for name, _ in items):
                items.append(('Content-Type', FORM_CONTENT_TYPE))
        return items
    
    def __str__(self) -> str:
        return f"{self.method} {self.url}"
