"""
File and metadata services.

Thin wrappers formatting a path and decoding the JSON response into
value objects.
"""
from typing import BinaryIO, List, Optional

from ..api.endpoints import RequestFactory, check_path
from ..exceptions import ResponseFormatError
from ..logging import get_logger
from ..models import DeltaPage, Entry
from ..upload import UploadStrategy
from ..utils import as_string, parse_json, parse_json_object
from .builders import FileDownload, FileUpload, MetadataQuery
from .models import ThumbFormat, ThumbSize

DEFAULT_REVISION_LIMIT = 10


class FileService:
    """Signed file operations of one client."""
    
    def __init__(self, requests: RequestFactory, transport):
        self.requests = requests
        self.transport = transport
        self._logger = get_logger('dbxpy.files')
    
    def files_get(self, path: str) -> FileDownload:
        return FileDownload(self, path)
    
    def files_put(self, path: str) -> FileUpload:
        return FileUpload(self, path, strategy=UploadStrategy.SIMPLE)
    
    def chunked_upload(self, path: str) -> FileUpload:
        return FileUpload(self, path, strategy=UploadStrategy.CHUNKED)
    
    def metadata(self, path: str) -> MetadataQuery:
        return MetadataQuery(self, path)
    
    def delta(self, cursor: Optional[str] = None) -> DeltaPage:
        """
        Fetch one page of changes.
        
        Args:
            cursor: None on the first call, then DeltaPage.cursor of the
                previous page
        """
        response = (
            self.requests.api('POST', '/delta')
            .with_parameter('cursor', cursor)
            .as_string(self.transport)
        )
        return DeltaPage.from_dict(parse_json_object(response))
    
    def revisions(self, path: str, limit: int = DEFAULT_REVISION_LIMIT) -> List[Entry]:
        """
        Metadata of previous revisions of a file (newest first).
        
        The service answers 406 when a file has more revisions than
        limit (max 1000).
        """
        response = (
            self.requests.api('GET', self.requests.rooted('revisions', path))
            .with_parameter('rev_limit', limit)
            .as_string(self.transport)
        )
        items = parse_json(response)
        if not isinstance(items, list):
            raise ResponseFormatError("JSON array of revisions expected")
        return [entry for entry in (Entry.from_dict(item) for item in items) if entry is not None]
    
    def media(self, path: str) -> Optional[str]:
        """Returns a direct, expiring link for streaming a file."""
        response = (
            self.requests.api('POST', self.requests.rooted('media', path))
            .as_string(self.transport)
        )
        return as_string(parse_json_object(response), 'url')
    
    def thumbnail(
        self,
        path: str,
        sink: BinaryIO,
        size: ThumbSize = ThumbSize.S,
        fmt: ThumbFormat = ThumbFormat.JPEG
    ) -> int:
        """
        Write a thumbnail of an image into sink.
        
        Supported extensions: jpg, jpeg, png, tiff, tif, gif and bmp.
        Images over 20MB are not converted.
        
        Returns:
            Bytes written
        """
        return (
            self.requests.content('GET', self.requests.rooted('thumbnails', path))
            .with_parameter('size', size.value)
            .with_parameter('format', fmt.value)
            .to_output_stream(self.transport, sink)
        )
    
    def copy(self, from_path: str, to_path: str) -> Entry:
        return self._fileops('copy', from_path, to_path)
    
    def move(self, from_path: str, to_path: str) -> Entry:
        return self._fileops('move', from_path, to_path)
    
    def delete(self, path: str) -> Entry:
        """Delete a file or folder; a missing path fails with 404."""
        return self._fileops('delete', path)
    
    def create_folder(self, path: str) -> Entry:
        return self._fileops('create_folder', path)
    
    def _fileops(self, action: str, path: str, to_path: Optional[str] = None) -> Entry:
        check_path(path)
        if to_path is not None:
            check_path(to_path)
        self._logger.debug(f"fileops/{action}: {path}" + (f" -> {to_path}" if to_path else ''))
        response = (
            self.requests.api('POST', f'/fileops/{action}')
            .with_parameter('root', self.requests.config.root)
            .with_parameter('path' if to_path is None else 'from_path', path)
            .with_parameter('to_path', to_path)
            .as_string(self.transport)
        )
        return Entry.from_dict(parse_json_object(response))
