"""
Upload coordinator.

Orchestrates simple and chunked uploads using injected services.
"""
import io
import time
from typing import BinaryIO, Callable, Optional

from ..api.endpoints import RequestFactory, check_path
from ..exceptions import InvalidArgument
from ..logging import get_logger
from ..models import Entry
from .chunked_stream import BoundedChunkStream
from .models import ChunkState, UploadConfig, UploadProgress, UploadStrategy
from .services import ChunkUploader, FileUploader

logger = get_logger('dbxpy.upload')


class UploadCoordinator:
    """
    Coordinates the upload process.
    
    The chunked protocol is strictly sequential: each chunk PUT carries
    the upload_id and offset returned for the previous one, and the
    server's offset is adopted as-is. Any failure aborts the upload;
    nothing is retried or rolled back.
    """
    
    def __init__(
        self,
        requests: RequestFactory,
        transport,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None,
        chunk_uploader: Optional[ChunkUploader] = None,
        file_uploader: Optional[FileUploader] = None
    ):
        """
        Initialize upload coordinator.
        
        Args:
            requests: Factory for signed requests
            transport: Transport executing requests
            progress_callback: Optional callback invoked after each chunk
            chunk_uploader: Chunk service (created if not provided)
            file_uploader: Single request service (created if not provided)
        """
        self._chunks = chunk_uploader or ChunkUploader(requests, transport)
        self._files = file_uploader or FileUploader(requests, transport)
        self._progress_callback = progress_callback
    
    def upload(self, source: BinaryIO, length: Optional[int], config: UploadConfig) -> Entry:
        """
        Upload source according to config.
        
        Args:
            source: Binary stream to upload
            length: Number of bytes in source (required for the simple
                strategy, informational for the chunked one)
            config: Upload configuration
            
        Returns:
            Metadata of the stored file
        """
        check_path(config.path)
        if config.strategy is UploadStrategy.SIMPLE:
            if length is None:
                raise InvalidArgument("A length is required for a simple upload")
            return self._files.put(source, length, config.path, config.options)
        return self._upload_chunked(source, length, config)
    
    def _upload_chunked(self, source: BinaryIO, length: Optional[int], config: UploadConfig) -> Entry:
        start = time.time()
        chunked = BoundedChunkStream(source, config.chunk_size)
        state = ChunkState()
        chunks = 0
        
        logger.info(f"Starting chunked upload to '{config.path}' ({config.chunk_size} byte chunks)")
        while chunked.next_chunk():
            state = self._chunks.upload_chunk(chunked, state)
            chunks += 1
            if self._progress_callback:
                self._progress_callback(UploadProgress(
                    chunks=chunks,
                    bytes_sent=chunked.bytes_read,
                    offset=state.offset,
                    upload_id=state.upload_id,
                    total_bytes=length
                ))
        
        if state.is_first:
            # Empty source: a single empty chunk opens the upload session.
            state = self._chunks.upload_chunk(io.BytesIO(b''), state)
            chunks += 1
        
        entry = self._chunks.commit(state, config.path, config.options)
        elapsed = time.time() - start
        logger.info(
            f"Chunked upload finished: {config.path} "
            f"({chunks} chunks, {chunked.bytes_read} bytes, {elapsed:.2f}s)"
        )
        return entry
