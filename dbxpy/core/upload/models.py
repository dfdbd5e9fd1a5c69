"""
Data models for upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from ..exceptions import InvalidArgument
from ..utils import as_int, as_string, not_none

MB = 1024 * 1024

DEFAULT_CHUNK_SIZE = 4 * MB
MAX_CHUNK_SIZE = 150 * MB

# Single request (files_put) ceiling enforced by the service
MAX_SIMPLE_UPLOAD_SIZE = 150 * MB


class UploadStrategy(Enum):
    """How a payload is transferred."""
    SIMPLE = 'simple'     # one PUT to /files_put
    CHUNKED = 'chunked'   # PUTs to /chunked_upload, then a commit


@dataclass(frozen=True)
class UploadOptions:
    """
    Options sent with the final (or only) upload request.
    
    Attributes:
        parent_rev: Revision of the file being edited; may be empty,
            never None
        overwrite: Overwrite an existing file instead of renaming
    """
    parent_rev: str = ''
    overwrite: bool = False
    
    def __post_init__(self):
        not_none('parent_rev', self.parent_rev)


@dataclass(frozen=True)
class UploadConfig:
    """
    Configuration for one upload.
    
    Attributes:
        path: Target path (absolute, below the configured root)
        strategy: Simple or chunked transfer
        options: parent_rev / overwrite options
        chunk_size: Chunk size in bytes (chunked strategy only)
    """
    path: str
    strategy: UploadStrategy = UploadStrategy.SIMPLE
    options: UploadOptions = field(default_factory=UploadOptions)
    chunk_size: int = DEFAULT_CHUNK_SIZE
    
    def __post_init__(self):
        if self.chunk_size <= 0 or self.chunk_size > MAX_CHUNK_SIZE:
            raise InvalidArgument(f"Invalid chunk size: {self.chunk_size}")
    
    @staticmethod
    def chunk_size_from_mb(chunk_size_mb: int) -> int:
        """Convert a chunk size in whole MB (1..150) to bytes."""
        if chunk_size_mb <= 0 or chunk_size_mb > MAX_CHUNK_SIZE // MB:
            raise InvalidArgument(f"Invalid chunk size: {chunk_size_mb}")
        return chunk_size_mb * MB


@dataclass(frozen=True)
class ChunkState:
    """
    Resumable chunked-upload position.
    
    Attributes:
        upload_id: Server side upload session, None before the first chunk
        offset: Position as reported by the server
    """
    upload_id: Optional[str] = None
    offset: int = 0
    
    @property
    def is_first(self) -> bool:
        return self.upload_id is None
    
    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> 'ChunkState':
        """
        Adopt the state echoed by the server.
        
        Response looks like:
            {"upload_id": "v0k84B0AT9fYkfMUp0sBTA", "offset": 31337,
             "expires": "Tue, 19 Jul 2011 21:55:38 +0000"}
        """
        return cls(
            upload_id=as_string(data, 'upload_id'),
            offset=as_int(data, 'offset')
        )


@dataclass(frozen=True)
class UploadProgress:
    """
    Progress reported after each chunk.
    
    Attributes:
        chunks: Chunks uploaded so far
        bytes_sent: Bytes read from the source so far
        offset: Server reported offset
        upload_id: Server side upload session
        total_bytes: Declared payload length, if known
    """
    chunks: int
    bytes_sent: int
    offset: int
    upload_id: Optional[str]
    total_bytes: Optional[int] = None
    
    @property
    def percentage(self) -> float:
        """Returns upload progress as percentage."""
        if not self.total_bytes:
            return 0.0
        return min(100.0, (self.offset / self.total_bytes) * 100)
