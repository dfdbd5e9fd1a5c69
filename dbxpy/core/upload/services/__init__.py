"""Upload services."""
from .chunk_service import ChunkUploader
from .file_service import FileUploader

__all__ = [
    'ChunkUploader',
    'FileUploader',
]
