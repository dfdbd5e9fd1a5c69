"""
Upload module.

Simple (single request) and chunked (resumable, bounded memory) uploads.
"""
from .chunked_stream import BoundedChunkStream
from .coordinator import UploadCoordinator
from .models import (
    ChunkState,
    UploadConfig,
    UploadOptions,
    UploadProgress,
    UploadStrategy,
    DEFAULT_CHUNK_SIZE,
    MAX_CHUNK_SIZE,
    MAX_SIMPLE_UPLOAD_SIZE,
)
from .services import ChunkUploader, FileUploader

__all__ = [
    'BoundedChunkStream',
    'UploadCoordinator',
    'ChunkState',
    'UploadConfig',
    'UploadOptions',
    'UploadProgress',
    'UploadStrategy',
    'ChunkUploader',
    'FileUploader',
    'DEFAULT_CHUNK_SIZE',
    'MAX_CHUNK_SIZE',
    'MAX_SIMPLE_UPLOAD_SIZE',
]
