"""Value objects decoded from service responses."""
from .entry import Entry
from .account import Account
from .delta import DeltaEntry, DeltaPage

__all__ = [
    'Entry',
    'Account',
    'DeltaEntry',
    'DeltaPage',
]
