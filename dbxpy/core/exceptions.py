"""
Custom exceptions for dbxpy.

Three families exist:
- contract violations (InvalidArgument), raised before any I/O
- transport failures (TransportError, ResponseFormatError)
- protocol-state errors (ProtocolStateError), always programmer errors
"""
from typing import Optional


class DropboxException(Exception):
    """Base exception for all dbxpy errors."""
    pass


class InvalidArgument(DropboxException, ValueError):
    """Raised when a caller violates an argument contract."""
    pass


class TransportError(DropboxException, IOError):
    """
    Raised when an HTTP call fails.
    
    Covers non-success status codes (anything but 200 and 206) as well
    as connection level failures, which carry no status code.
    """
    
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        status_message: Optional[str] = None,
        body: str = '',
        request: Optional[str] = None
    ) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            status_code: HTTP status code (if a response was received)
            status_message: HTTP reason phrase
            body: Error body text returned by the server
            request: Human readable "METHOD URL" of the failed request
        """
        self.status_code = status_code
        self.status_message = status_message
        self.body = body
        self.request = request
        super().__init__(message)
    
    @classmethod
    def from_status(
        cls,
        request: str,
        status_code: int,
        status_message: str,
        body: str = ''
    ) -> 'TransportError':
        """Create error for a non-success HTTP status."""
        message = f"{request} FAILED: {status_code} {status_message}"
        if body:
            message += f"\n{body}"
        return cls(
            message,
            status_code=status_code,
            status_message=status_message,
            body=body,
            request=request
        )


class ResponseFormatError(TransportError):
    """Raised when a response body cannot be decoded into the expected shape."""
    pass


class ProtocolStateError(DropboxException, RuntimeError):
    """Raised on an illegal authentication state transition."""
    pass
