"""
Single-key cache entry with lazy, supplier-driven refresh.
"""
import logging
from typing import Callable, Generic, Optional, TypeVar

from .core import Clock, system_clock
from .errors import IllegalStateError, InvalidArgumentError
from .policies import ExpiryPolicy, NeverExpirePolicy, policy_from_dict
from .snapshot import EntrySnapshot, PolicySnapshot

logger = logging.getLogger("cachecell.entry")

K = TypeVar("K")
V = TypeVar("V")

ValueSupplier = Callable[[], V]


def _validate_key(key) -> None:
    if key is None:
        raise InvalidArgumentError("key must not be None")
    if isinstance(key, str) and not key:
        raise InvalidArgumentError("key must not be empty")


class CacheEntry(Generic[K, V]):
    """
    A key bound to a value, an expiry policy and an optional supplier.

    Reading through `get()` is refresh-on-read: when the policy reports the
    value as expired and a supplier is bound, the supplier is called, its
    result replaces the value and the policy is restarted. `get()` is
    therefore not a pure accessor for supplier-bound entries.

    An entry with a supplier is supplier-owned: `set_value()` raises
    IllegalStateError until the supplier is unbound. The second positional
    argument is always the value: pass suppliers as `supplier=` or use
    `with_supplier()`, otherwise a callable is cached as a plain value.

    Entries do no locking. Share one across threads only behind an external
    lock.

    Usage:
        entry = CacheEntry("rates", supplier=fetch_rates,
                           policy=TimeWindowPolicy(5, ExpiryUnit.MINUTE))
        entry.get()  # cached for 5 minutes, then fetched again
    """

    def __init__(
        self,
        key: K,
        value: Optional[V] = None,
        policy: Optional[ExpiryPolicy] = None,
        supplier: Optional[ValueSupplier] = None,
    ):
        """
        Args:
            key: Identity of the entry, must not be None or empty
            value: Initial value, ignored when a supplier is given
            policy: Expiry policy, NeverExpirePolicy when omitted
            supplier: Zero-argument callable producing fresh values; called
                immediately to populate the entry

        Raises:
            InvalidArgumentError: If the key is None or empty
        """
        _validate_key(key)
        self._key: K = key
        self._value: Optional[V] = value
        self._policy: ExpiryPolicy = policy if policy is not None else NeverExpirePolicy()
        self._supplier: Optional[ValueSupplier] = None

        if supplier is not None:
            self.set_supplier(supplier)

    @classmethod
    def with_value(
        cls,
        key: K,
        value: Optional[V],
        policy: Optional[ExpiryPolicy] = None,
    ) -> "CacheEntry[K, V]":
        """Create a writable entry holding `value`."""
        return cls(key, value=value, policy=policy)

    @classmethod
    def with_supplier(
        cls,
        key: K,
        supplier: ValueSupplier,
        policy: Optional[ExpiryPolicy] = None,
    ) -> "CacheEntry[K, V]":
        """
        Create a supplier-owned entry, populated by calling `supplier` once.

        Raises:
            InvalidArgumentError: If the key or the supplier is None
        """
        _validate_key(key)
        if supplier is None:
            raise InvalidArgumentError("supplier must not be None")
        return cls(key, policy=policy, supplier=supplier)

    # ------------------------------------------------------------------
    # Value
    # ------------------------------------------------------------------

    def get(self) -> Optional[V]:
        """
        Return the current value, refreshing it first if it has expired.

        Returns:
            The cached value while the policy is not expired, a freshly
            supplied value if expired and a supplier is bound, otherwise None
        """
        if not self._policy.is_expired():
            return self._value

        if self._supplier is None:
            logger.debug(f"Entry {self._key!r} expired, no supplier bound")
            return None

        logger.debug(f"Entry {self._key!r} expired, refreshing from supplier")
        self._value = self._supplier()
        self._policy.restart()
        return self._value

    def set_value(self, value: Optional[V]) -> None:
        """
        Overwrite the value regardless of expiry state.

        Raises:
            IllegalStateError: If a supplier is bound to the entry
        """
        if self._supplier is not None:
            raise IllegalStateError(
                f"Entry {self._key!r} is supplier-owned; unbind the supplier before writing"
            )
        self._value = value

    @property
    def value(self) -> Optional[V]:
        return self.get()

    @value.setter
    def value(self, value: Optional[V]) -> None:
        self.set_value(value)

    # ------------------------------------------------------------------
    # Supplier
    # ------------------------------------------------------------------

    def get_supplier(self) -> Optional[ValueSupplier]:
        return self._supplier

    def set_supplier(self, supplier: Optional[ValueSupplier]) -> None:
        """
        Bind a new supplier and pull a value from it right away.

        The policy is not restarted. Passing None unbinds the current
        supplier and makes the entry writable again.
        """
        if supplier is None:
            self._supplier = None
            logger.debug(f"Entry {self._key!r} supplier unbound")
            return

        value = supplier()
        self._supplier = supplier
        self._value = value
        logger.debug(f"Entry {self._key!r} bound to supplier {supplier!r}")

    @property
    def supplier(self) -> Optional[ValueSupplier]:
        return self._supplier

    @supplier.setter
    def supplier(self, supplier: Optional[ValueSupplier]) -> None:
        self.set_supplier(supplier)

    @property
    def has_supplier(self) -> bool:
        return self._supplier is not None

    # ------------------------------------------------------------------
    # Policy
    # ------------------------------------------------------------------

    def get_policy(self) -> ExpiryPolicy:
        return self._policy

    def set_policy(self, policy: Optional[ExpiryPolicy]) -> None:
        self._policy = policy if policy is not None else NeverExpirePolicy()

    @property
    def policy(self) -> ExpiryPolicy:
        return self._policy

    @policy.setter
    def policy(self, policy: Optional[ExpiryPolicy]) -> None:
        self.set_policy(policy)

    def is_expired(self) -> bool:
        """Ask the policy without triggering a refresh."""
        return self._policy.is_expired()

    # ------------------------------------------------------------------
    # Key
    # ------------------------------------------------------------------

    def get_key(self) -> K:
        return self._key

    def set_key(self, key: K) -> None:
        """
        Rename the entry.

        Raises:
            InvalidArgumentError: If the key is None or empty
        """
        _validate_key(key)
        self._key = key

    @property
    def key(self) -> K:
        return self._key

    @key.setter
    def key(self, key: K) -> None:
        self.set_key(key)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def snapshot(self) -> EntrySnapshot:
        """
        Capture key, raw value and policy state.

        Reads the stored value directly, so taking a snapshot never
        triggers a refresh.

        Raises:
            InvalidArgumentError: If the policy does not support persistence
        """
        to_dict = getattr(self._policy, "to_dict", None)
        if to_dict is None:
            raise InvalidArgumentError(
                f"{type(self._policy).__name__} does not support persistence"
            )
        return EntrySnapshot(
            key=self._key,
            value=self._value,
            policy=PolicySnapshot(**to_dict()),
        )

    @classmethod
    def from_snapshot(
        cls,
        snapshot: EntrySnapshot,
        clock: Clock = system_clock,
    ) -> "CacheEntry":
        """
        Rebuild a writable entry from a snapshot.

        Bind a supplier afterwards with `set_supplier()` if needed; doing so
        pulls a fresh value immediately.
        """
        policy = policy_from_dict(snapshot.policy_dict(), clock=clock)
        return cls(snapshot.key, value=snapshot.value, policy=policy)

    def __repr__(self) -> str:
        return (
            f"CacheEntry(key={self._key!r}, policy={self._policy!r}, "
            f"supplier={'bound' if self._supplier is not None else 'none'})"
        )
