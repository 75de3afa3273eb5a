"""
Exceptions raised by cache entries and expiry policies.
"""


class CacheEntryError(Exception):
    """Base class for cache entry errors."""
    pass


class InvalidArgumentError(CacheEntryError, ValueError):
    """Raised when a key, supplier or policy description is missing or invalid."""
    pass


class IllegalStateError(CacheEntryError, RuntimeError):
    """Raised when writing a value directly into a supplier-owned entry."""
    pass
