"""Account information."""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..exceptions import ResponseFormatError
from ..utils import as_int, as_string


@dataclass(frozen=True)
class Account:
    """
    Information about a user's account.
    
    Attributes:
        uid: Account ID
        display_name: The user's "real" name
        country: ISO country code
        referral_link: URL the user can give to get referral credit
        quota: Total quota in bytes
        quota_normal: Bytes used excluding shared files
        quota_shared: Bytes used by shared files
    """
    uid: int
    display_name: Optional[str] = None
    country: Optional[str] = None
    referral_link: Optional[str] = None
    quota: int = 0
    quota_normal: int = 0
    quota_shared: int = 0
    
    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['Account']:
        """
        Create from a decoded JSON object like:
            {"country": "", "display_name": "John Q. User",
             "quota_info": {"shared": 37378890, "quota": 62277025792,
                            "normal": 263758550},
             "uid": 174}
        """
        if data is None:
            return None
        quota_info = data.get('quota_info') or {}
        if not isinstance(quota_info, dict):
            raise ResponseFormatError("'quota_info' is not a JSON object")
        uid = data.get('uid')
        if isinstance(uid, str) and uid.isdigit():
            data = {**data, 'uid': int(uid)}
        return cls(
            uid=as_int(data, 'uid'),
            display_name=as_string(data, 'display_name'),
            country=as_string(data, 'country'),
            referral_link=as_string(data, 'referral_link'),
            quota=as_int(quota_info, 'quota'),
            quota_normal=as_int(quota_info, 'normal'),
            quota_shared=as_int(quota_info, 'shared')
        )
    
    @property
    def quota_used(self) -> int:
        """Bytes used, shared files included."""
        return self.quota_normal + self.quota_shared
    
    @property
    def quota_free(self) -> int:
        """Free bytes."""
        return max(0, self.quota - self.quota_used)
    
    @property
    def used_percent(self) -> float:
        """Storage usage percentage."""
        if self.quota == 0:
            return 0.0
        return (self.quota_used / self.quota) * 100
