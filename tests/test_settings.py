"""
Tests for settings-driven default policies.
"""
import pytest

from cachecell import (
    ExpiryUnit,
    InvalidArgumentError,
    NeverExpirePolicy,
    TimeWindowPolicy,
    policy_from_settings,
)
from config.settings import Settings


def test_unset_amount_gives_never_expire():
    policy = policy_from_settings(Settings(cache_default_expiry_amount=None))
    assert isinstance(policy, NeverExpirePolicy)


def test_configured_amount_gives_time_window(clock):
    settings = Settings(cache_default_expiry_amount=15, cache_default_expiry_unit="MINUTE")
    policy = policy_from_settings(settings, clock=clock)

    assert isinstance(policy, TimeWindowPolicy)
    assert policy.unit == ExpiryUnit.MINUTE
    clock.advance(minutes=15)
    assert policy.is_expired() is True


def test_settings_read_from_environment(monkeypatch, clock):
    monkeypatch.setenv("CACHE_DEFAULT_EXPIRY_AMOUNT", "2")
    monkeypatch.setenv("CACHE_DEFAULT_EXPIRY_UNIT", "hour")
    policy = policy_from_settings(Settings(), clock=clock)

    assert policy.amount == 2
    assert policy.unit == ExpiryUnit.HOUR


def test_invalid_unit_rejected():
    settings = Settings(cache_default_expiry_amount=1, cache_default_expiry_unit="fortnight")
    with pytest.raises(InvalidArgumentError):
        policy_from_settings(settings)
