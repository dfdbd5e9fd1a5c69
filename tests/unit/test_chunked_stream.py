"""Tests for BoundedChunkStream."""
import io

import pytest

from dbxpy.core.exceptions import InvalidArgument
from dbxpy.core.upload import BoundedChunkStream


class TrackingSource(io.BytesIO):
    """BytesIO counting reads issued after close."""
    
    def __init__(self, data: bytes):
        super().__init__(data)
        self.close_calls = 0
        self.reads = 0
    
    def read(self, size=-1):
        self.reads += 1
        return super().read(size)
    
    def close(self):
        self.close_calls += 1
        super().close()


def drain_chunks(chunked: BoundedChunkStream):
    """Read every chunk fully, returning the list of chunk payloads."""
    chunks = []
    while chunked.next_chunk():
        chunks.append(chunked.read())
    return chunks


class TestBoundedChunkStream:
    """Test suite for BoundedChunkStream."""
    
    def test_splits_into_bounded_chunks(self):
        """Test 9 bytes with chunk size 4 gives 4, 4, 1."""
        chunked = BoundedChunkStream(io.BytesIO(b'abcdefghi'), 4)
        
        assert drain_chunks(chunked) == [b'abcd', b'efgh', b'i']
    
    def test_exact_multiple_has_no_trailing_chunk(self):
        """Test an exact multiple of the chunk size."""
        chunked = BoundedChunkStream(io.BytesIO(b'abcdefgh'), 4)
        
        assert drain_chunks(chunked) == [b'abcd', b'efgh']
    
    @pytest.mark.parametrize('length,chunk_size', [
        (1, 1), (1, 10), (10, 3), (64, 8), (100, 7), (4096, 1000)
    ])
    def test_chunk_count_and_concatenation(self, length, chunk_size):
        """Test ceil(L/C) chunks whose concatenation equals the source."""
        data = bytes(i % 251 for i in range(length))
        chunked = BoundedChunkStream(io.BytesIO(data), chunk_size)
        
        chunks = drain_chunks(chunked)
        
        assert len(chunks) == -(-length // chunk_size)
        assert all(len(chunk) <= chunk_size for chunk in chunks)
        assert b''.join(chunks) == data
        assert chunked.bytes_read == length
    
    def test_empty_source(self):
        """Test an empty source yields no chunk and is closed."""
        source = TrackingSource(b'')
        chunked = BoundedChunkStream(source, 4)
        
        assert chunked.next_chunk() is False
        assert chunked.exhausted is True
        assert source.close_calls == 1
    
    def test_read_before_activation(self):
        """Test reading before next_chunk() returns nothing."""
        chunked = BoundedChunkStream(io.BytesIO(b'abc'), 4)
        
        assert chunked.read() == b''
    
    def test_small_reads_stop_at_boundary(self):
        """Test reads with a small buffer stop at the chunk boundary."""
        chunked = BoundedChunkStream(io.BytesIO(b'abcdef'), 4)
        chunked.next_chunk()
        
        assert chunked.read(3) == b'abc'
        assert chunked.read(3) == b'd'
        assert chunked.read(3) == b''
    
    def test_source_closed_once_exhausted(self):
        """Test the source is closed exactly once after draining."""
        source = TrackingSource(b'abcdef')
        chunked = BoundedChunkStream(source, 4)
        
        drain_chunks(chunked)
        
        assert source.close_calls == 1
        assert chunked.exhausted is True
    
    def test_next_chunk_idempotently_false(self):
        """Test next_chunk() keeps returning False without touching the source."""
        source = TrackingSource(b'ab')
        chunked = BoundedChunkStream(source, 4)
        drain_chunks(chunked)
        reads = source.reads
        
        assert chunked.next_chunk() is False
        assert chunked.next_chunk() is False
        assert chunked.read() == b''
        assert source.reads == reads
    
    def test_close_is_noop(self):
        """Test close() does not close the source."""
        source = TrackingSource(b'abcdefgh')
        chunked = BoundedChunkStream(source, 4)
        chunked.next_chunk()
        chunked.read()
        
        chunked.close()
        
        assert source.close_calls == 0
        assert chunked.next_chunk() is True
        assert chunked.read() == b'efgh'
    
    def test_unread_bytes_carry_over(self):
        """Test a partially read chunk leaves its rest for the next one."""
        chunked = BoundedChunkStream(io.BytesIO(b'abcdefgh'), 4)
        chunked.next_chunk()
        assert chunked.read(2) == b'ab'
        
        assert chunked.next_chunk() is True
        assert chunked.read() == b'cdef'
    
    def test_invalid_chunk_size(self):
        """Test a non-positive chunk size is rejected."""
        with pytest.raises(InvalidArgument):
            BoundedChunkStream(io.BytesIO(b'abc'), 0)
    
    def test_is_readable(self):
        """Test the stream reports itself readable."""
        chunked = BoundedChunkStream(io.BytesIO(b''), 1)
        
        assert chunked.readable() is True
        assert chunked.chunk_size == 1
