"""
Settings shared by every test module, including the app-local tests.py files.
"""
from decimal import Decimal

import pytest
from django.core.cache import cache


@pytest.fixture(autouse=True)
def override_settings(settings):
    """
    Override Django settings for the test environment.
    This fixture runs for every test and ensures that settings are
    optimized for testing.
    """
    settings.PASSWORD_HASHERS = [
        "django.contrib.auth.hashers.MD5PasswordHasher",
    ]
    settings.SPIN_WHEEL_DIL_COST = 10
    settings.DAILY_BONUS_DIL = 5
    settings.DAILY_BONUS_CASH = Decimal("10.00")
    settings.MINIMUM_WITHDRAWAL_AMOUNT = Decimal("100.00")
    settings.PLACEMENT_DIL_REWARDS = {1: 50, 2: 30, 3: 20}
    # Throttle counters live in the cache; start every test from zero.
    cache.clear()
    yield
    cache.clear()
