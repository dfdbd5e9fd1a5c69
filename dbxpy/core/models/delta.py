"""Delta (change feed) pages."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..exceptions import ResponseFormatError
from ..utils import as_bool, as_string
from .entry import Entry


@dataclass(frozen=True)
class DeltaEntry:
    """
    A single change instruction.
    
    A None metadata means the path (and its children) was deleted.
    """
    lower_cased_path: str
    metadata: Optional[Entry] = None
    
    @classmethod
    def from_list(cls, data: List[Any]) -> 'DeltaEntry':
        """Create from the [path, metadata] pair used on the wire."""
        if not isinstance(data, list) or len(data) != 2 or not isinstance(data[0], str):
            raise ResponseFormatError(f"Invalid delta entry: {data!r}")
        return cls(lower_cased_path=data[0], metadata=Entry.from_dict(data[1]))


@dataclass(frozen=True)
class DeltaPage:
    """
    One page of delta entries.
    
    Attributes:
        cursor: Pass to the next delta() call to continue
        reset: Clear local state before applying the entries
        has_more: More entries can be fetched immediately
        entries: Changes to apply, in order
    """
    cursor: Optional[str]
    reset: bool = False
    has_more: bool = False
    entries: Tuple[DeltaEntry, ...] = field(default_factory=tuple)
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DeltaPage':
        entries = data.get('entries') or []
        if not isinstance(entries, list):
            raise ResponseFormatError("'entries' is not a JSON array")
        return cls(
            cursor=as_string(data, 'cursor'),
            reset=as_bool(data, 'reset'),
            has_more=as_bool(data, 'has_more'),
            entries=tuple(DeltaEntry.from_list(item) for item in entries)
        )
