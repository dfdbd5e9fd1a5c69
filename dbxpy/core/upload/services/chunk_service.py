"""
Chunk upload service.

Handles the individual requests of the chunked upload protocol.
"""
import time
from typing import BinaryIO

from ...api.endpoints import RequestFactory
from ...logging import get_logger
from ...models import Entry
from ...utils import parse_json_object
from ..models import ChunkState, UploadOptions

CHUNKED_UPLOAD_PATH = '/chunked_upload'
COMMIT_ACTION = 'commit_chunked_upload'


class ChunkUploader:
    """
    Sends chunk PUTs and the final commit.
    
    Responsibilities:
    - PUT one chunk with the current upload_id / offset
    - Adopt the state echoed by the server
    - Commit the upload session into a file entry
    """
    
    def __init__(self, requests: RequestFactory, transport):
        """
        Initialize chunk uploader.
        
        Args:
            requests: Factory for signed requests
            transport: Transport executing requests
        """
        self._requests = requests
        self._transport = transport
        self._logger = get_logger('dbxpy.upload.chunk')
    
    def upload_chunk(self, payload: BinaryIO, state: ChunkState) -> ChunkState:
        """
        Upload a single chunk.
        
        Args:
            payload: Stream positioned at the chunk (read until exhausted)
            state: Current state; upload_id is omitted on the first chunk
            
        Returns:
            State reported by the server. Its offset is authoritative,
            even when it differs from the bytes actually sent.
            
        Raises:
            TransportError: If the request fails
        """
        start = time.time()
        response = (
            self._requests.content('PUT', CHUNKED_UPLOAD_PATH)
            .with_parameter('upload_id', state.upload_id)
            .with_parameter('offset', state.offset)
            .with_payload(payload)
            .as_string(self._transport)
        )
        new_state = ChunkState.from_response(parse_json_object(response))
        elapsed = time.time() - start
        self._logger.debug(
            f"Chunk at offset {state.offset} accepted in {elapsed:.2f}s, "
            f"server offset now {new_state.offset} (upload_id={new_state.upload_id})"
        )
        return new_state
    
    def commit(self, state: ChunkState, path: str, options: UploadOptions) -> Entry:
        """
        Commit the upload session to path.
        
        Raises:
            TransportError: If the request fails
        """
        self._logger.debug(f"Committing upload {state.upload_id} to '{path}'")
        response = (
            self._requests.content('POST', self._requests.rooted(COMMIT_ACTION, path))
            .with_parameter('upload_id', state.upload_id)
            .with_parameter('parent_rev', options.parent_rev)
            .with_parameter('overwrite', options.overwrite)
            .as_string(self._transport)
        )
        return Entry.from_dict(parse_json_object(response))
