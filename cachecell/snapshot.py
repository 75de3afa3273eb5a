"""
Pydantic models for persisting the state of a cache entry.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel


class PolicySnapshot(BaseModel):
    """Serialized expiry policy"""
    type: str = "never"
    amount: Optional[int] = None
    unit: Optional[str] = None
    created_at: Optional[str] = None  # ISO timestamp
    expires_at: Optional[str] = None  # ISO timestamp


class EntrySnapshot(BaseModel):
    """
    Serialized key/value/policy state of a cache entry.

    Suppliers are code, not data, and are never part of a snapshot.
    """
    key: Any
    value: Any = None
    policy: PolicySnapshot = PolicySnapshot()

    def policy_dict(self) -> Dict[str, Any]:
        """Policy in the form accepted by `policy_from_dict`."""
        return self.policy.model_dump(exclude_none=True)
