"""File and folder metadata."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from ..exceptions import ResponseFormatError
from ..utils import as_bool, as_datetime, as_int, as_string


@dataclass(frozen=True)
class Entry:
    """
    Metadata of a file or folder.
    
    Attributes:
        bytes: Size of the file in bytes
        hash: Folder hash; changes when an immediate child changes
        icon: Name of the icon to display for this entry
        is_dir: True for folders
        modified: Last modified date
        client_mtime: Modification time set by the uploading client
            (display only, not set for folders)
        path: Path from the root
        root: Name of the root, "dropbox" or "app_folder"
        size: Human readable, localized size description
        mime_type: MIME type of a file
        rev: Unique ID of this revision
        revision: Legacy numeric revision, prefer rev
        thumb_exists: Whether a thumbnail is available
        is_deleted: Deleted but still listed in metadata
        contents: Immediate children of a folder
    """
    path: Optional[str] = None
    bytes: int = 0
    hash: Optional[str] = None
    icon: Optional[str] = None
    is_dir: bool = False
    modified: Optional[datetime] = None
    client_mtime: Optional[str] = None
    root: Optional[str] = None
    size: Optional[str] = None
    mime_type: Optional[str] = None
    rev: Optional[str] = None
    revision: int = 0
    thumb_exists: bool = False
    is_deleted: bool = False
    contents: Tuple['Entry', ...] = field(default_factory=tuple)
    
    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['Entry']:
        """
        Create from a decoded JSON object.
        
        Example input:
            {"bytes": 0, "modified": "Sat, 12 Jan 2008 23:10:10 +0000",
             "path": "/Public", "is_dir": true, "size": "0 bytes",
             "root": "dropbox", "contents": [...], "icon": "folder_public"}
        
        Returns:
            Entry, or None when data is None
        """
        if data is None:
            return None
        if not isinstance(data, dict):
            raise ResponseFormatError(f"Entry must be a JSON object, got {type(data).__name__}")
        
        children = data.get('contents') or []
        if not isinstance(children, list):
            raise ResponseFormatError("'contents' is not a JSON array")
        
        return cls(
            path=as_string(data, 'path'),
            bytes=as_int(data, 'bytes'),
            hash=as_string(data, 'hash'),
            icon=as_string(data, 'icon'),
            is_dir=as_bool(data, 'is_dir'),
            modified=as_datetime(data, 'modified'),
            client_mtime=as_string(data, 'client_mtime'),
            root=as_string(data, 'root'),
            size=as_string(data, 'size'),
            mime_type=as_string(data, 'mime_type'),
            rev=as_string(data, 'rev'),
            revision=as_int(data, 'revision'),
            thumb_exists=as_bool(data, 'thumb_exists'),
            is_deleted=as_bool(data, 'is_deleted'),
            contents=tuple(cls.from_dict(child) for child in children)
        )
    
    @property
    def file_name(self) -> str:
        """The part of the path after the last slash."""
        path = self.path or ''
        return path[path.rfind('/') + 1:]
    
    @property
    def parent_path(self) -> str:
        """Path of the parent folder, with a trailing slash."""
        path = self.path or ''
        if path == '/':
            return ''
        return path[:path.rfind('/') + 1]
    
    def __str__(self) -> str:
        kind = 'dir' if self.is_dir else 'file'
        return f"{self.path} ({kind}, {self.bytes} bytes, rev={self.rev})"
