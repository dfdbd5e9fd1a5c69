"""
Bounded chunk stream.

Slices one source stream into consecutive chunks of at most chunk_size
bytes without buffering the whole payload.

Usage:
    >>> chunked = BoundedChunkStream(source, chunk_size)
    >>> while chunked.next_chunk():
    ...     consume(chunked)  # reads stop at the chunk boundary
    >>> # source has been closed by the stream itself
"""
import io
from typing import BinaryIO

from ..exceptions import InvalidArgument


class BoundedChunkStream(io.RawIOBase):
    """
    Exposes the next chunk_size bytes of a source per activation.
    
    close() is a no-op so a consumer treating each chunk as its own
    closeable resource cannot sever the source. The source is closed
    only once it is fully drained.
    """
    
    def __init__(self, source: BinaryIO, chunk_size: int):
        """
        Args:
            source: Underlying binary stream
            chunk_size: Maximum bytes per chunk
        """
        super().__init__()
        if chunk_size <= 0:
            raise InvalidArgument(f"Invalid chunk size: {chunk_size}")
        self._source = source
        self._chunk_size = chunk_size
        self._remaining = 0
        self._pending = b''
        self._exhausted = False
        self._bytes_read = 0
    
    @property
    def chunk_size(self) -> int:
        return self._chunk_size
    
    @property
    def exhausted(self) -> bool:
        """True once the source is drained (and closed)."""
        return self._exhausted
    
    @property
    def bytes_read(self) -> int:
        """Total bytes handed out across all chunks."""
        return self._bytes_read
    
    def next_chunk(self) -> bool:
        """
        Activate the next chunk.
        
        Returns:
            True if at least one more byte can be read; False once the
            source is drained, in which case it has been closed
        """
        if self._exhausted:
            return False
        if not self._pending:
            # One byte look-ahead so an exact multiple of chunk_size
            # does not produce a trailing empty chunk.
            self._pending = self._source.read(1)
            if not self._pending:
                self._close_source()
                return False
        self._remaining = self._chunk_size
        return True
    
    def readable(self) -> bool:
        return True
    
    def readinto(self, buffer) -> int:
        if self._remaining == 0 or self._exhausted:
            return 0
        view = memoryview(buffer).cast('B')
        wanted = min(len(view), self._remaining)
        if wanted == 0:
            return 0
        
        data = self._pending[:wanted]
        self._pending = self._pending[wanted:]
        if len(data) < wanted:
            data += self._source.read(wanted - len(data)) or b''
        if not data:
            self._close_source()
            return 0
        
        size = len(data)
        view[:size] = data
        self._remaining -= size
        self._bytes_read += size
        return size
    
    def close(self) -> None:
        # The source is closed by _close_source() only.
        pass
    
    def _close_source(self) -> None:
        try:
            self._source.close()
        finally:
            self._exhausted = True
            self._remaining = 0
