"""
Per-call service builders.

Builders are immutable: each with_* returns a new instance, so a
configured builder can be reused as a template.
"""
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Union

from ..api.endpoints import check_path
from ..exceptions import InvalidArgument
from ..models import Entry
from ..upload import (
    DEFAULT_CHUNK_SIZE,
    UploadConfig,
    UploadCoordinator,
    UploadOptions,
    UploadProgress,
    UploadStrategy,
)
from ..utils import not_none, parse_json_object


DEFAULT_FILE_LIMIT = 25000


@dataclass(frozen=True)
class FileDownload:
    """
    Builder for the /files (GET) service.
    
    Example:
        >>> client.files_get('/report.pdf').with_range(0, 63).to_file('head.bin')
    """
    service: 'FileService' = field(repr=False)
    path: str
    rev: Optional[str] = None
    range_first: Optional[int] = None
    range_last: Optional[int] = None
    
    def __post_init__(self):
        check_path(self.path)
    
    def with_rev(self, rev: str) -> 'FileDownload':
        """Revision to retrieve; the latest if not specified."""
        return replace(self, rev=rev)
    
    def with_range(self, first: int, last: int) -> 'FileDownload':
        """
        Byte range to retrieve (zero based, both bounds inclusive).
        
        Raises:
            InvalidArgument: If first < 0 or first >= last
        """
        if first < 0:
            raise InvalidArgument(f"'first' < 0: {first}")
        if first >= last:
            raise InvalidArgument(f"'first' >= 'last': {first} >= {last}")
        return replace(self, range_first=first, range_last=last)
    
    def to_output_stream(self, sink: BinaryIO) -> int:
        """
        Download into sink.
        
        Returns:
            The bytes written to the output stream
        """
        builder = (
            self.service.requests.content('GET', self.service.requests.rooted('files', self.path))
            .with_parameter('rev', self.rev)
        )
        if self.range_last is not None:
            builder = builder.with_header('Range', f"bytes={self.range_first}-{self.range_last}")
        return builder.to_output_stream(self.service.transport, sink)
    
    def to_file(self, target: Union[str, Path]) -> int:
        """
        Download into a local file.
        
        Returns:
            The bytes written to the file (file size)
        """
        with open(target, 'wb') as sink:
            return self.to_output_stream(sink)


@dataclass(frozen=True)
class FileUpload:
    """
    Builder for /files_put and /chunked_upload.
    
    The upload strategy is chosen when the builder is created; chunk
    size only applies to the chunked strategy.
    """
    service: 'FileService' = field(repr=False)
    path: str
    strategy: UploadStrategy = UploadStrategy.SIMPLE
    options: UploadOptions = field(default_factory=UploadOptions)
    chunk_size: int = DEFAULT_CHUNK_SIZE
    progress_callback: Optional[Callable[[UploadProgress], None]] = field(default=None, repr=False)
    
    def __post_init__(self):
        check_path(self.path)
    
    def with_parent_rev(self, parent_rev: str) -> 'FileUpload':
        """Revision of the file being edited. May be empty, never None."""
        not_none('parent_rev', parent_rev)
        return replace(self, options=replace(self.options, parent_rev=parent_rev))
    
    def with_overwrite(self) -> 'FileUpload':
        """Overwrite an existing file instead of creating a renamed copy."""
        return replace(self, options=replace(self.options, overwrite=True))
    
    def with_chunk_size(self, chunk_size_mb: int) -> 'FileUpload':
        """
        Chunk size in MB (1..150, default 4).
        
        Raises:
            InvalidArgument: If the size is out of range or the upload
                is not chunked
        """
        if self.strategy is not UploadStrategy.CHUNKED:
            raise InvalidArgument("Chunk size only applies to chunked uploads")
        return replace(self, chunk_size=UploadConfig.chunk_size_from_mb(chunk_size_mb))
    
    def with_progress(self, callback: Callable[[UploadProgress], None]) -> 'FileUpload':
        """Callback invoked after each uploaded chunk."""
        return replace(self, progress_callback=callback)
    
    def from_input_stream(self, source: BinaryIO, length: Optional[int] = None) -> Entry:
        """
        Upload the data from source.
        
        Args:
            source: Binary stream
            length: Exact byte count; required for simple uploads
        """
        config = UploadConfig(
            path=self.path,
            strategy=self.strategy,
            options=self.options,
            chunk_size=self.chunk_size
        )
        coordinator = UploadCoordinator(
            self.service.requests,
            self.service.transport,
            progress_callback=self.progress_callback
        )
        return coordinator.upload(source, length, config)
    
    def from_file(self, source: Union[str, Path]) -> Entry:
        """Upload a local file."""
        source = Path(source)
        with open(source, 'rb') as stream:
            return self.from_input_stream(stream, source.stat().st_size)


@dataclass(frozen=True)
class MetadataQuery:
    """Builder for the /metadata service."""
    service: 'FileService' = field(repr=False)
    path: str
    file_limit: int = DEFAULT_FILE_LIMIT
    folder_hash: Optional[str] = None
    include_children: bool = False
    rev: Optional[str] = None
    
    def __post_init__(self):
        check_path(self.path)
    
    def with_rev(self, rev: str) -> 'MetadataQuery':
        return replace(self, rev=rev)
    
    def with_file_limit(self, file_limit: int) -> 'MetadataQuery':
        return replace(self, file_limit=file_limit)
    
    def with_hash(self, folder_hash: str) -> 'MetadataQuery':
        return replace(self, folder_hash=folder_hash)
    
    def with_list(self) -> 'MetadataQuery':
        """Return the children when the path is a folder."""
        return replace(self, include_children=True)
    
    def as_json(self) -> str:
        """Call the service and return the raw JSON text."""
        return (
            self.service.requests.api('GET', self.service.requests.rooted('metadata', self.path))
            .with_parameter('file_limit', self.file_limit)
            .with_parameter('hash', self.folder_hash)
            .with_parameter('list', self.include_children)
            .with_parameter('rev', self.rev)
            .as_string(self.service.transport)
        )
    
    def as_entry(self) -> Entry:
        """Call the service and return the decoded Entry."""
        return Entry.from_dict(parse_json_object(self.as_json()))
