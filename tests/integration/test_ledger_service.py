"""
Tests for wallet.services.LedgerService against the relational store.
These cover every ledger operation, the balance/ledger conservation
property, and rollback of partially applied units.
"""
from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import IntegrityError, OperationalError

from common.exceptions import (
    AlreadyClaimedToday,
    AlreadyRegistered,
    Conflict,
    InsufficientBalance,
    InsufficientDil,
    InvalidAmount,
    InvalidStatusTransition,
    NoRewardsConfigured,
    RegistrationClosed,
    ResultAlreadySettled,
    StorageUnavailable,
    TournamentFull,
    TournamentNotFound,
    UserNotFound,
)
from rewards.models import RewardKind, SpinHistory
from tournaments.models import Registration, Tournament
from wallet.models import DailyBonus, Transaction
from wallet.services import LedgerService


class FixedRandom:
    """Random source that always rolls the same value."""

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


@pytest.mark.django_db
class TestAddFundsAndWithdraw:
    def test_add_funds_credits_balance_and_records_deposit(self, ledger, user_factory):
        user = user_factory()

        updated = ledger.add_funds(user.pk, "250.50")

        user.refresh_from_db()
        assert updated.balance == Decimal("250.50")
        assert user.balance == Decimal("250.50")
        deposit = Transaction.objects.get(user=user)
        assert deposit.type == Transaction.TransactionType.DEPOSIT
        assert deposit.amount == Decimal("250.50")

    @pytest.mark.parametrize("amount", ["0", "-5.00", "abc", "1.005", 10.5, None, True])
    def test_add_funds_rejects_invalid_amounts(self, ledger, user_factory, amount):
        user = user_factory()

        with pytest.raises(InvalidAmount):
            ledger.add_funds(user.pk, amount)

        assert not Transaction.objects.filter(user=user).exists()

    def test_add_funds_unknown_user(self, ledger):
        with pytest.raises(UserNotFound):
            ledger.add_funds(999999, "10.00")

    def test_repeated_cents_do_not_drift(self, ledger, user_factory):
        user = user_factory()
        for _ in range(100):
            ledger.add_funds(user.pk, "0.10")

        user.refresh_from_db()
        assert user.balance == Decimal("10.00")

    def test_withdraw_debits_balance(self, ledger, funded_user_factory, ledger_sum):
        user = funded_user_factory(balance="500.00")

        ledger.withdraw(user.pk, "150.00")

        user.refresh_from_db()
        assert user.balance == Decimal("350.00")
        withdrawal = Transaction.objects.get(user=user, type=Transaction.TransactionType.WITHDRAW)
        assert withdrawal.amount == Decimal("-150.00")
        assert user.balance == ledger_sum(user)

    def test_withdraw_below_minimum(self, ledger, funded_user_factory):
        user = funded_user_factory(balance="500.00")

        with pytest.raises(InvalidAmount):
            ledger.withdraw(user.pk, "99.99")

    def test_withdraw_more_than_balance(self, ledger, funded_user_factory):
        user = funded_user_factory(balance="120.00")

        with pytest.raises(InsufficientBalance):
            ledger.withdraw(user.pk, "200.00")

        user.refresh_from_db()
        assert user.balance == Decimal("120.00")
        assert not Transaction.objects.filter(type=Transaction.TransactionType.WITHDRAW).exists()


@pytest.mark.django_db
class TestChargeEntryFee:
    def test_join_then_duplicate_join(self, ledger, funded_user_factory, tournament_factory):
        user = funded_user_factory(balance="100.00")
        tournament = tournament_factory(entry_fee=Decimal("50.00"), max_players=1)

        registration = ledger.charge_entry_fee(user.pk, tournament.pk)

        user.refresh_from_db()
        tournament.refresh_from_db()
        assert registration.user_id == user.pk
        assert user.balance == Decimal("50.00")
        assert tournament.current_players == 1
        fees = Transaction.objects.filter(user=user, type=Transaction.TransactionType.ENTRY_FEE)
        assert [fee.amount for fee in fees] == [Decimal("-50.00")]

        with pytest.raises(AlreadyRegistered):
            ledger.charge_entry_fee(user.pk, tournament.pk)

        user.refresh_from_db()
        assert user.balance == Decimal("50.00")
        assert fees.count() == 1

    def test_precondition_order(self, ledger, funded_user_factory, tournament_factory):
        poor_user = funded_user_factory(balance="10.00")
        tournament = tournament_factory(entry_fee=Decimal("50.00"), max_players=1)

        with pytest.raises(TournamentNotFound):
            ledger.charge_entry_fee(poor_user.pk, 999999)

        # Full is reported before insufficient balance.
        rich_user = funded_user_factory(balance="100.00")
        ledger.charge_entry_fee(rich_user.pk, tournament.pk)
        with pytest.raises(TournamentFull):
            ledger.charge_entry_fee(poor_user.pk, tournament.pk)

        # Already registered is reported before full.
        with pytest.raises(AlreadyRegistered):
            ledger.charge_entry_fee(rich_user.pk, tournament.pk)

    def test_insufficient_balance(self, ledger, funded_user_factory, tournament_factory):
        user = funded_user_factory(balance="49.99")
        tournament = tournament_factory(entry_fee=Decimal("50.00"))

        with pytest.raises(InsufficientBalance):
            ledger.charge_entry_fee(user.pk, tournament.pk)

        user.refresh_from_db()
        tournament.refresh_from_db()
        assert user.balance == Decimal("49.99")
        assert tournament.current_players == 0
        assert not Registration.objects.exists()

    def test_capacity_is_never_exceeded(self, ledger, funded_user_factory, tournament_factory):
        tournament = tournament_factory(max_players=2)
        users = [funded_user_factory(balance="100.00") for _ in range(4)]

        outcomes = []
        for user in users:
            try:
                ledger.charge_entry_fee(user.pk, tournament.pk)
                outcomes.append("joined")
            except TournamentFull:
                outcomes.append("full")

        tournament.refresh_from_db()
        assert outcomes == ["joined", "joined", "full", "full"]
        assert tournament.current_players == 2
        assert Registration.objects.filter(tournament=tournament).count() == 2

    def test_free_tournament_writes_no_transaction(self, ledger, user_factory, tournament_factory):
        user = user_factory()
        tournament = tournament_factory(entry_fee=Decimal("0.00"))

        ledger.charge_entry_fee(user.pk, tournament.pk)

        tournament.refresh_from_db()
        assert tournament.current_players == 1
        assert not Transaction.objects.filter(user=user).exists()

    def test_closed_tournament(self, ledger, funded_user_factory, tournament_factory):
        user = funded_user_factory(balance="100.00")
        tournament = tournament_factory(status=Tournament.Status.COMPLETED)

        with pytest.raises(RegistrationClosed):
            ledger.charge_entry_fee(user.pk, tournament.pk)

    def test_failed_increment_rolls_back_the_whole_unit(
        self, ledger, store, funded_user_factory, tournament_factory
    ):
        user = funded_user_factory(balance="100.00")
        tournament = tournament_factory()

        with patch.object(store, "increment_tournament_players", return_value=False):
            with pytest.raises(TournamentFull):
                ledger.charge_entry_fee(user.pk, tournament.pk)

        user.refresh_from_db()
        assert user.balance == Decimal("100.00")
        assert not Registration.objects.exists()
        assert not Transaction.objects.filter(type=Transaction.TransactionType.ENTRY_FEE).exists()


@pytest.mark.django_db
class TestSettleResult:
    @pytest.fixture
    def registration(self, ledger, funded_user_factory, tournament_factory):
        user = funded_user_factory(balance="100.00")
        tournament = tournament_factory(status=Tournament.Status.LIVE)
        return ledger.charge_entry_fee(user.pk, tournament.pk)

    def test_first_place_pays_prize(self, ledger, registration, ledger_sum):
        user = registration.user
        user.refresh_from_db()
        before = (user.balance, user.total_earnings, user.tournaments_won, user.games_played)

        settled = ledger.settle_result(registration.pk, position=1, kills=12)

        user.refresh_from_db()
        assert user.balance == before[0] + Decimal("5000.00")
        assert user.total_earnings == before[1] + Decimal("5000.00")
        assert user.tournaments_won == before[2] + 1
        assert user.games_played == before[3] + 1
        assert user.dil_balance == 50
        assert user.total_dil_earned == 50
        prize = Transaction.objects.get(user=user, type=Transaction.TransactionType.PRIZE_MONEY)
        assert prize.amount == Decimal("5000.00")
        assert prize.description == "Prize money for PUBG Mobile Clash (Position: 1)"
        assert settled.position == 1
        assert settled.kills == 12
        assert settled.earnings == Decimal("5000.00")
        assert settled.is_settled
        assert user.balance == ledger_sum(user)

    def test_second_settlement_is_rejected(self, ledger, registration):
        ledger.settle_result(registration.pk, position=1, kills=12)

        with pytest.raises(ResultAlreadySettled) as exc_info:
            ledger.settle_result(registration.pk, position=1, kills=12)

        assert isinstance(exc_info.value, Conflict)
        user = registration.user
        user.refresh_from_db()
        assert Transaction.objects.filter(type=Transaction.TransactionType.PRIZE_MONEY).count() == 1
        assert user.tournaments_won == 1

    def test_unplaced_position_pays_nothing(self, ledger, registration):
        settled = ledger.settle_result(registration.pk, position=7, kills=3)

        user = registration.user
        user.refresh_from_db()
        assert settled.earnings == Decimal("0.00")
        assert settled.is_settled
        assert user.games_played == 0
        assert user.dil_balance == 0
        assert not Transaction.objects.filter(type=Transaction.TransactionType.PRIZE_MONEY).exists()

    def test_missing_position_pays_nothing(self, ledger, registration):
        settled = ledger.settle_result(registration.pk, position=None, kills=0)

        assert settled.position is None
        assert settled.earnings == Decimal("0.00")

    def test_cancelled_tournament(self, ledger, registration):
        Tournament.objects.filter(pk=registration.tournament_id).update(
            status=Tournament.Status.CANCELLED
        )

        with pytest.raises(InvalidStatusTransition):
            ledger.settle_result(registration.pk, position=1, kills=1)

    def test_negative_kills(self, ledger, registration):
        with pytest.raises(InvalidAmount):
            ledger.settle_result(registration.pk, position=1, kills=-1)


@pytest.mark.django_db
class TestSpinWheel:
    def test_insufficient_dil_changes_nothing(self, ledger, funded_user_factory, spin_rewards):
        user = funded_user_factory(balance="100.00", dil=5)

        with pytest.raises(InsufficientDil):
            ledger.spin_wheel(user.pk, dil_cost=10)

        user.refresh_from_db()
        assert user.dil_balance == 5
        assert user.balance == Decimal("100.00")
        assert not SpinHistory.objects.exists()

    def test_cash_reward(self, store, funded_user_factory, spin_rewards, ledger_sum):
        user = funded_user_factory(balance="0", dil=30)
        ledger = LedgerService(store=store, rng=FixedRandom(0.1))

        history = ledger.spin_wheel(user.pk, dil_cost=10)

        user.refresh_from_db()
        assert history.reward == spin_rewards[0]
        assert history.reward_kind == RewardKind.CASH
        assert history.dil_spent == 10
        assert user.dil_balance == 20
        assert user.balance == Decimal("25.00")
        reward_tx = Transaction.objects.get(user=user)
        assert reward_tx.type == Transaction.TransactionType.SPIN_REWARD
        assert user.balance == ledger_sum(user)

    def test_dil_reward(self, store, funded_user_factory, spin_rewards):
        user = funded_user_factory(balance="0", dil=10)
        ledger = LedgerService(store=store, rng=FixedRandom(0.6))

        history = ledger.spin_wheel(user.pk)

        user.refresh_from_db()
        assert history.reward == spin_rewards[1]
        assert user.dil_balance == 15
        assert user.total_dil_earned == 15
        assert not Transaction.objects.filter(user=user).exists()

    def test_medal_reward(self, store, funded_user_factory, spin_rewards):
        user = funded_user_factory(balance="0", dil=10)
        ledger = LedgerService(store=store, rng=FixedRandom(0.95))

        history = ledger.spin_wheel(user.pk)

        user.refresh_from_db()
        assert history.reward == spin_rewards[2]
        assert user.medals == 1
        assert user.dil_balance == 0

    def test_same_roll_same_reward(self, store, funded_user_factory, spin_rewards):
        user = funded_user_factory(balance="0", dil=100)
        rewards = [
            LedgerService(store=store, rng=FixedRandom(0.42)).spin_wheel(user.pk).reward
            for _ in range(3)
        ]
        assert rewards == [spin_rewards[0]] * 3

    def test_no_rewards_configured(self, ledger, funded_user_factory):
        user = funded_user_factory(balance="0", dil=50)

        with pytest.raises(NoRewardsConfigured):
            ledger.spin_wheel(user.pk)

        user.refresh_from_db()
        assert user.dil_balance == 50

    def test_inactive_rewards_are_skipped(self, ledger, funded_user_factory, spin_rewards):
        for reward in spin_rewards:
            reward.is_active = False
            reward.save()
        user = funded_user_factory(balance="0", dil=50)

        with pytest.raises(NoRewardsConfigured):
            ledger.spin_wheel(user.pk)

    def test_invalid_cost(self, ledger, funded_user_factory, spin_rewards):
        user = funded_user_factory(balance="0", dil=50)

        with pytest.raises(InvalidAmount):
            ledger.spin_wheel(user.pk, dil_cost=0)


@pytest.mark.django_db
class TestDailyBonus:
    def test_claim_once_per_day(self, ledger, user_factory, ledger_sum):
        user = user_factory()
        day = date(2024, 5, 1)

        bonus = ledger.claim_daily_bonus(user.pk, day=day)

        user.refresh_from_db()
        assert bonus.day == day
        assert user.dil_balance == 5
        assert user.balance == Decimal("10.00")

        with pytest.raises(AlreadyClaimedToday):
            ledger.claim_daily_bonus(user.pk, day=day)

        user.refresh_from_db()
        assert user.dil_balance == 5
        assert user.balance == Decimal("10.00")
        assert DailyBonus.objects.filter(user=user).count() == 1
        assert user.balance == ledger_sum(user)

    def test_next_day_can_claim_again(self, ledger, user_factory):
        user = user_factory()

        ledger.claim_daily_bonus(user.pk, day=date(2024, 5, 1))
        ledger.claim_daily_bonus(user.pk, day=date(2024, 5, 2))

        user.refresh_from_db()
        assert user.dil_balance == 10
        assert user.total_dil_earned == 10

    def test_lost_race_on_unique_row(self, ledger, store, user_factory):
        user = user_factory()

        with patch.object(store, "get_daily_bonus", return_value=None):
            ledger.claim_daily_bonus(user.pk, day=date(2024, 5, 1))
            with pytest.raises(AlreadyClaimedToday):
                ledger.claim_daily_bonus(user.pk, day=date(2024, 5, 1))

        user.refresh_from_db()
        assert user.dil_balance == 5

    def test_cash_free_bonus_writes_no_transaction(self, ledger, user_factory, settings):
        settings.DAILY_BONUS_CASH = Decimal("0.00")
        user = user_factory()

        ledger.claim_daily_bonus(user.pk, day=date(2024, 5, 1))

        assert not Transaction.objects.filter(user=user).exists()


@pytest.mark.django_db
class TestLedgerIntegrity:
    def test_balance_equals_ledger_after_mixed_operations(
        self, store, funded_user_factory, tournament_factory, spin_rewards, ledger_sum
    ):
        ledger = LedgerService(store=store, rng=FixedRandom(0.1))
        user = funded_user_factory(balance="300.00", dil=20)
        tournament = tournament_factory(entry_fee=Decimal("75.25"), status=Tournament.Status.LIVE)

        registration = ledger.charge_entry_fee(user.pk, tournament.pk)
        ledger.settle_result(registration.pk, position=2, kills=4)
        ledger.withdraw(user.pk, "100.10")
        ledger.spin_wheel(user.pk)
        ledger.claim_daily_bonus(user.pk, day=date(2024, 5, 1))
        ledger.add_funds(user.pk, "0.35")

        user.refresh_from_db()
        assert user.balance == Decimal("3160.00")
        assert user.balance == ledger_sum(user)

    def test_transactions_are_returned_in_commit_order(self, ledger, funded_user_factory):
        user = funded_user_factory(balance="200.00")
        ledger.withdraw(user.pk, "100.00")
        ledger.add_funds(user.pk, "5.00")

        types = [tx.type for tx in ledger.get_user_transactions(user.pk)]

        assert types == ["deposit", "withdraw", "deposit"]

    def test_storage_failure_is_retryable(self, ledger, store, funded_user_factory):
        user = funded_user_factory(balance="100.00")

        with patch.object(store, "get_user", side_effect=OperationalError("lock timeout")):
            with pytest.raises(StorageUnavailable) as exc_info:
                ledger.add_funds(user.pk, "10.00")

        assert exc_info.value.retryable
        user.refresh_from_db()
        assert user.balance == Decimal("100.00")

    def test_integrity_error_rolls_back_as_conflict(self, ledger, store, funded_user_factory):
        user = funded_user_factory(balance="100.00")

        with patch.object(store, "create_transaction", side_effect=IntegrityError("duplicate")):
            with pytest.raises(Conflict) as exc_info:
                ledger.add_funds(user.pk, "10.00")

        assert exc_info.value.retryable
        user.refresh_from_db()
        assert user.balance == Decimal("100.00")
        assert Transaction.objects.filter(user=user).count() == 1
