"""
Single request file upload.

Handles uploads that fit in one /files_put request.
"""
from typing import BinaryIO

from ...api.endpoints import RequestFactory
from ...logging import get_logger
from ...models import Entry
from ...utils import parse_json_object
from ..models import UploadOptions

FILES_PUT_ACTION = 'files_put'


class FileUploader:
    """Uploads a payload with one PUT request."""
    
    def __init__(self, requests: RequestFactory, transport):
        self._requests = requests
        self._transport = transport
        self._logger = get_logger('dbxpy.upload.file')
    
    def put(self, payload: BinaryIO, length: int, path: str, options: UploadOptions) -> Entry:
        """
        Upload payload to path.
        
        Args:
            payload: Source stream
            length: Exact number of bytes the stream will yield
            path: Target path
            options: parent_rev / overwrite
            
        Raises:
            TransportError: If the request fails
        """
        self._logger.debug(f"Uploading {length} bytes to '{path}'")
        response = (
            self._requests.content('PUT', self._requests.rooted(FILES_PUT_ACTION, path))
            .with_header('Content-Length', str(length))
            .with_parameter('overwrite', options.overwrite)
            .with_parameter('parent_rev', options.parent_rev)
            .with_payload(payload)
            .as_string(self._transport)
        )
        return Entry.from_dict(parse_json_object(response))
