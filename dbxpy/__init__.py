"""
dbxpy - Python client for the Dropbox REST API (v1).

Usage:
    >>> from dbxpy import DropboxClient, Credentials
    >>> 
    >>> with DropboxClient(Credentials(app_key, app_secret), token) as dropbox:
    ...     entry = dropbox.chunked_upload('/big.iso').from_file('big.iso')
    ...     print(entry.rev)
"""
import logging
from .client import DropboxClient

# Configuration
from .core.api import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    ClientSettings,
    Request,
    RequestBuilder,
    RequestsTransport,
    Transport,
)

# Authentication
from .core.auth import Credentials, PlaintextSigner

# Models
from .core.models import Entry, Account, DeltaEntry, DeltaPage
from .core.files import ThumbFormat, ThumbSize
from .core.upload import BoundedChunkStream, ChunkState, UploadOptions, UploadProgress, UploadStrategy

# Errors
from .core.exceptions import (
    DropboxException,
    InvalidArgument,
    TransportError,
    ResponseFormatError,
    ProtocolStateError,
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for dbxpy modules.
    
    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'dbxpy',
        'dbxpy.client',
        'dbxpy.auth',
        'dbxpy.transport',
        'dbxpy.files',
        'dbxpy.settings',
        'dbxpy.upload',
        'dbxpy.upload.chunk',
        'dbxpy.upload.file',
    ]
    
    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'DropboxClient',
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'ClientSettings',
    'Request',
    'RequestBuilder',
    'RequestsTransport',
    'Transport',
    'Credentials',
    'PlaintextSigner',
    'Entry',
    'Account',
    'DeltaEntry',
    'DeltaPage',
    'ThumbFormat',
    'ThumbSize',
    'BoundedChunkStream',
    'ChunkState',
    'UploadOptions',
    'UploadProgress',
    'UploadStrategy',
    'DropboxException',
    'InvalidArgument',
    'TransportError',
    'ResponseFormatError',
    'ProtocolStateError',
    'setup_logging',
]
