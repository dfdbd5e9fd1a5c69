"""Response abstraction returned by transports."""
from abc import ABC, abstractmethod
from typing import Iterator, Optional

from ...utils import BUFFER_SIZE


class Response(ABC):
    """
    A successful (200 or 206) HTTP response.
    
    The body is exposed as an iterator of byte blocks so large downloads
    are never held in memory at once.
    """
    
    def __init__(self, status_code: int, reason: str = '', encoding: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason
        self.encoding = encoding
    
    @abstractmethod
    def iter_content(self, chunk_size: int = BUFFER_SIZE) -> Iterator[bytes]:
        """Iterate over the body in blocks of at most chunk_size bytes."""
        pass
    
    def read(self) -> bytes:
        """Read the whole body."""
        return b''.join(self.iter_content())
    
    def close(self) -> None:
        """Release the underlying connection."""
        pass
    
    def __enter__(self) -> 'Response':
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
