"""
This file contains shared fixtures for the test suite.
Fixtures defined here are available to all tests in the project.
"""

import random
from datetime import timedelta
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

from rewards.models import RewardKind, SpinWheelReward
from tournaments.models import Tournament
from wallet.services import LedgerService
from wallet.storage import DjangoLedgerStore

User = get_user_model()


@pytest.fixture
def api_client():
    """A pytest fixture that provides an instance of DRF's APIClient."""
    return APIClient()


@pytest.fixture
def user_factory(db):
    """A pytest fixture (factory) to create a user."""

    def _create_user(**kwargs):
        defaults = {
            "username": f"user_{User.objects.count() + 1}",
            "password": "password",
        }
        defaults.update(kwargs)
        defaults.setdefault("email", f"{defaults['username']}@example.com")
        return User.objects.create_user(**defaults)

    return _create_user


@pytest.fixture
def default_user(user_factory):
    """A fixture to get a standard user instance."""
    return user_factory(username="testuser")


@pytest.fixture
def admin_user(user_factory):
    """A fixture to create an admin user."""
    return user_factory(
        username="adminuser",
        role=User.Role.ADMIN,
        is_superuser=True,
    )


@pytest.fixture
def store(db):
    return DjangoLedgerStore()


@pytest.fixture
def ledger(store):
    """A ledger with a seeded random source so spins are reproducible."""
    return LedgerService(store=store, rng=random.Random(1234))


@pytest.fixture
def funded_user_factory(user_factory, ledger):
    """Creates a user whose balance comes from a real deposit."""

    def _create(balance="100.00", dil=0, **kwargs):
        user = user_factory(**kwargs)
        if Decimal(balance) > 0:
            ledger.add_funds(user.pk, Decimal(balance))
        if dil:
            User.objects.filter(pk=user.pk).update(dil_balance=dil)
        user.refresh_from_db()
        return user

    return _create


@pytest.fixture
def tournament_factory(db):
    def _create(**kwargs):
        defaults = {
            "title": "PUBG Mobile Clash",
            "game": Tournament.Game.PUBG,
            "game_mode": Tournament.GameMode.SQUAD,
            "map": "Erangel",
            "prize_pool": Decimal("10000.00"),
            "entry_fee": Decimal("50.00"),
            "first_prize": Decimal("5000.00"),
            "second_prize": Decimal("3000.00"),
            "third_prize": Decimal("2000.00"),
            "max_players": 100,
            "start_time": timezone.now() + timedelta(hours=2),
        }
        defaults.update(kwargs)
        return Tournament.objects.create(**defaults)

    return _create


@pytest.fixture
def spin_rewards(db):
    """A three-slice wheel: cash, DIL and a medal."""
    return [
        SpinWheelReward.objects.create(
            kind=RewardKind.CASH, value=Decimal("25.00"), probability=Decimal("0.50000"), label="25 Cash"
        ),
        SpinWheelReward.objects.create(
            kind=RewardKind.DIL, value=Decimal("15"), probability=Decimal("0.30000"), label="15 DIL"
        ),
        SpinWheelReward.objects.create(
            kind=RewardKind.MEDAL, value=Decimal("1"), probability=Decimal("0.20000"), label="Medal"
        ),
    ]


@pytest.fixture
def authenticated_client(api_client, default_user):
    """A pytest fixture for an authenticated client with a standard user."""
    api_client.force_authenticate(user=default_user)
    return api_client


@pytest.fixture
def authenticated_admin_client(api_client, admin_user):
    """A pytest fixture for an authenticated client with an admin user."""
    api_client.force_authenticate(user=admin_user)
    return api_client


@pytest.fixture
def ledger_sum():
    """Returns a helper summing every cash ledger entry of a user."""

    def _sum(user):
        return sum((tx.amount for tx in user.transactions.all()), Decimal("0.00"))

    return _sum
