"""
Single-entry cache cell with pluggable expiry and refresh-on-read.
"""
from .core import Clock, ExpiryUnit, add_offset, system_clock
from .errors import CacheEntryError, IllegalStateError, InvalidArgumentError
from .policies import (
    ExpiryPolicy,
    NeverExpirePolicy,
    TimeWindowPolicy,
    policy_from_dict,
    policy_from_settings,
)
from .entry import CacheEntry, ValueSupplier
from .snapshot import EntrySnapshot, PolicySnapshot

__all__ = [
    # Time
    "Clock",
    "ExpiryUnit",
    "add_offset",
    "system_clock",
    # Errors
    "CacheEntryError",
    "IllegalStateError",
    "InvalidArgumentError",
    # Policies
    "ExpiryPolicy",
    "NeverExpirePolicy",
    "TimeWindowPolicy",
    "policy_from_dict",
    "policy_from_settings",
    # Entry
    "CacheEntry",
    "ValueSupplier",
    # Persistence
    "EntrySnapshot",
    "PolicySnapshot",
]
