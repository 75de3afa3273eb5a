"""
Expiry policies deciding when a cached value is stale.

A policy answers two questions only: is the value expired right now, and how
to re-arm itself after a refresh. Entries consult the policy lazily on read.
"""
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Optional

from .core import Clock, ExpiryUnit, add_offset, system_clock
from .errors import InvalidArgumentError

logger = logging.getLogger("cachecell.policies")


class ExpiryPolicy(ABC):
    """Strategy deciding whether a cached value is stale."""

    @abstractmethod
    def is_expired(self) -> bool:
        """True when the cached value must no longer be served."""

    @abstractmethod
    def restart(self) -> None:
        """Reset to a freshly non-expired state."""

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a plain dictionary for persistence.

        Policies that cannot be persisted keep this default.

        Raises:
            InvalidArgumentError: Always, unless overridden
        """
        raise InvalidArgumentError(
            f"{type(self).__name__} does not support persistence"
        )


class NeverExpirePolicy(ExpiryPolicy):
    """Policy for values that stay valid forever."""

    def is_expired(self) -> bool:
        return False

    def restart(self) -> None:
        pass

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "never"}

    def __repr__(self) -> str:
        return "NeverExpirePolicy()"


class TimeWindowPolicy(ExpiryPolicy):
    """
    Expires a value once a configured time window has elapsed.

    The policy starts unconfigured and reports itself as expired until
    `configure()` is called. After that, each `restart()` opens a new window
    of the same length starting at the current clock reading.

    Usage:
        policy = TimeWindowPolicy(30, ExpiryUnit.MINUTE)
        policy.is_expired()   # False for the next 30 minutes
        policy.restart()      # window starts again from now
    """

    def __init__(
        self,
        amount: Optional[int] = None,
        unit: Optional[ExpiryUnit] = None,
        clock: Clock = system_clock,
    ):
        """
        Args:
            amount: Window length in `unit`s; the policy is armed only when
                both amount and unit are given
            unit: Unit of the window length
            clock: Zero-argument callable returning the current time
        """
        self._clock = clock
        self.created_at: datetime = clock()
        self.expires_at: Optional[datetime] = None
        self.amount: Optional[int] = None
        self.unit: Optional[ExpiryUnit] = None

        if amount is not None and unit is not None:
            self.configure(amount, unit)

    @property
    def is_configured(self) -> bool:
        return self.expires_at is not None

    def configure(self, amount: int, unit: ExpiryUnit) -> "TimeWindowPolicy":
        """
        Set the window length and arm the policy from the current time.

        Zero or negative amounts produce a window that is already expired.
        """
        self.amount = int(amount)
        self.unit = ExpiryUnit.parse(unit)
        self.created_at = self._clock()
        self.expires_at = add_offset(self.created_at, self.amount, self.unit)
        logger.debug(
            f"Armed {self.amount} {self.unit.value} window, "
            f"expires at {self.expires_at.isoformat()}"
        )
        return self

    def is_expired(self) -> bool:
        if self.expires_at is None:
            return True
        return self._clock() >= self.expires_at

    def restart(self) -> None:
        if self.amount is None or self.unit is None:
            # Nothing to re-arm with; stays unconfigured
            self.created_at = self._clock()
            return
        self.configure(self.amount, self.unit)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "time_window",
            "amount": self.amount,
            "unit": self.unit.value if self.unit else None,
            "created_at": self.created_at.isoformat(),
            "expires_at": self.expires_at.isoformat() if self.expires_at else None,
        }

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        clock: Clock = system_clock,
    ) -> "TimeWindowPolicy":
        """Restore a policy with its stored timestamps, without re-arming."""
        policy = cls(clock=clock)
        if data.get("amount") is not None:
            policy.amount = int(data["amount"])
        if data.get("unit"):
            policy.unit = ExpiryUnit.parse(data["unit"])
        if data.get("created_at"):
            policy.created_at = _parse_timestamp(data["created_at"])
        if data.get("expires_at"):
            policy.expires_at = _parse_timestamp(data["expires_at"])
        return policy

    def __repr__(self) -> str:
        if not self.is_configured:
            return "TimeWindowPolicy(unconfigured)"
        return f"TimeWindowPolicy({self.amount} {self.unit.value}, expires_at={self.expires_at.isoformat()})"


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def policy_from_dict(
    data: Optional[Dict[str, Any]],
    clock: Clock = system_clock,
) -> ExpiryPolicy:
    """
    Rebuild a policy from its `to_dict()` form.

    Args:
        data: Policy dictionary; None yields a NeverExpirePolicy
        clock: Clock for restored time-window policies

    Raises:
        InvalidArgumentError: If the policy type is unknown
    """
    if not data:
        return NeverExpirePolicy()

    policy_type = data.get("type")
    if policy_type == "never":
        return NeverExpirePolicy()
    if policy_type == "time_window":
        return TimeWindowPolicy.from_dict(data, clock=clock)
    raise InvalidArgumentError(f"Unknown expiry policy type: {policy_type!r}")


def policy_from_settings(settings=None, clock: Clock = system_clock) -> ExpiryPolicy:
    """
    Build the default policy described by the application settings.

    Returns a NeverExpirePolicy when no default expiry amount is configured.
    """
    if settings is None:
        from config.settings import settings

    amount = settings.cache_default_expiry_amount
    if amount is None:
        return NeverExpirePolicy()

    try:
        unit = ExpiryUnit.parse(settings.cache_default_expiry_unit)
    except ValueError as e:
        raise InvalidArgumentError(
            f"Invalid cache_default_expiry_unit: {settings.cache_default_expiry_unit!r}"
        ) from e
    return TimeWindowPolicy(amount, unit, clock=clock)
