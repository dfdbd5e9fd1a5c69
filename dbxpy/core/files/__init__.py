"""File, metadata and file-operation services."""
from .builders import FileDownload, FileUpload, MetadataQuery
from .models import ThumbFormat, ThumbSize
from .service import FileService

__all__ = [
    'FileService',
    'FileDownload',
    'FileUpload',
    'MetadataQuery',
    'ThumbFormat',
    'ThumbSize',
]
