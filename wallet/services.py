import logging
import random
from decimal import Decimal

from django.conf import settings
from django.utils import timezone

from common.exceptions import (
    AlreadyClaimedToday,
    AlreadyRegistered,
    InsufficientBalance,
    InsufficientDil,
    InvalidAmount,
    InvalidStatusTransition,
    RegistrationNotFound,
    ResultAlreadySettled,
    TournamentFull,
    TournamentNotFound,
    UserNotFound,
)
from common.money import quantize, to_dil, to_money
from rewards.draw import draw_reward
from rewards.models import RewardKind
from tournaments.lifecycle import check_join_preconditions
from tournaments.models import Tournament

from .models import Transaction
from .storage import DjangoLedgerStore, DuplicateRecord

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


class LedgerService:
    """
    The only code path allowed to move a user's cash balance or DIL, and the
    only producer of Transaction and SpinHistory rows.

    Every public method is a single ``store.atomic()`` unit. When a unit
    touches both a tournament and a user, the tournament row is locked first.
    """

    def __init__(self, store=None, rng=None):
        self.store = store if store is not None else DjangoLedgerStore()
        self.rng = rng if rng is not None else random.Random()

    def _locked_user(self, user_id):
        user = self.store.get_user(user_id, for_update=True)
        if user is None:
            raise UserNotFound()
        return user

    def _credit(self, user, amount, type, description, tournament_id=None):
        user.balance = quantize(user.balance + amount)
        self.store.update_user_balance(user.pk, user.balance)
        return self.store.create_transaction(
            user_id=user.pk,
            type=type,
            amount=amount,
            description=description,
            tournament_id=tournament_id,
        )

    def _debit(self, user, amount, type, description, tournament_id=None):
        if user.balance < amount:
            raise InsufficientBalance()
        user.balance = quantize(user.balance - amount)
        self.store.update_user_balance(user.pk, user.balance)
        return self.store.create_transaction(
            user_id=user.pk,
            type=type,
            amount=-amount,
            description=description,
            tournament_id=tournament_id,
        )

    def _credit_dil(self, user, dil):
        self.store.update_user_dil_balance(user.pk, dil)
        self.store.update_user_stats(user.pk, total_dil_earned=dil)
        user.dil_balance += dil
        user.total_dil_earned += dil

    def add_funds(self, user_id, amount):
        amount = to_money(amount)
        with self.store.atomic():
            user = self._locked_user(user_id)
            self._credit(user, amount, Transaction.TransactionType.DEPOSIT, "Added money to wallet")
        logger.info("Deposited %s for user %s", amount, user_id)
        return user

    def withdraw(self, user_id, amount):
        amount = to_money(amount)
        minimum = settings.MINIMUM_WITHDRAWAL_AMOUNT
        if amount < minimum:
            raise InvalidAmount(f"The minimum withdrawal is {minimum}.")
        with self.store.atomic():
            user = self._locked_user(user_id)
            self._debit(user, amount, Transaction.TransactionType.WITHDRAW, "Withdrawal request")
        logger.info("Withdrew %s for user %s", amount, user_id)
        return user

    def charge_entry_fee(self, user_id, tournament_id):
        """
        Registers the user for the tournament and takes the entry fee.
        A free tournament registers the player without a ledger entry.
        """
        with self.store.atomic():
            user, tournament = check_join_preconditions(self.store, user_id, tournament_id)
            try:
                registration = self.store.create_registration(user.pk, tournament.pk)
            except DuplicateRecord as exc:
                raise AlreadyRegistered() from exc

            if tournament.entry_fee > 0:
                self._debit(
                    user,
                    tournament.entry_fee,
                    Transaction.TransactionType.ENTRY_FEE,
                    f"Entry fee for {tournament.title}",
                    tournament_id=tournament.pk,
                )

            if not self.store.increment_tournament_players(tournament.pk):
                raise TournamentFull()

        logger.info(
            "User %s joined tournament %s for %s", user_id, tournament_id, tournament.entry_fee
        )
        return registration

    def settle_result(self, registration_id, position, kills):
        """
        Records a registration's final placing and pays out its prize.

        A registration moves from unsettled to settled exactly once; a second
        submission raises ResultAlreadySettled and pays nothing.
        """
        if position is not None and (isinstance(position, bool) or position < 1):
            raise InvalidAmount("Position must be a positive integer.")
        if isinstance(kills, bool) or kills is None or kills < 0:
            raise InvalidAmount("Kills must be zero or more.")

        with self.store.atomic():
            registration = self.store.get_registration_by_id(registration_id)
            if registration is None:
                raise RegistrationNotFound()
            tournament = self.store.get_tournament(registration.tournament_id, for_update=True)
            if tournament is None:
                raise TournamentNotFound()
            registration = self.store.get_registration_by_id(registration_id, for_update=True)
            if registration.is_settled:
                raise ResultAlreadySettled()
            if tournament.status == Tournament.Status.CANCELLED:
                raise InvalidStatusTransition("Results cannot be settled for a cancelled tournament.")

            user = self._locked_user(registration.user_id)
            prize = tournament.prize_for_position(position)

            if prize > 0:
                self._credit(
                    user,
                    prize,
                    Transaction.TransactionType.PRIZE_MONEY,
                    f"Prize money for {tournament.title} (Position: {position})",
                    tournament_id=tournament.pk,
                )
                self.store.update_user_stats(
                    user.pk,
                    total_earnings=prize,
                    tournaments_won=1 if position <= 3 else 0,
                    games_played=1,
                )

            dil_reward = settings.PLACEMENT_DIL_REWARDS.get(position, 0)
            if dil_reward:
                self._credit_dil(user, dil_reward)

            registration = self.store.update_registration_result(
                registration.pk, position, kills, prize
            )

        logger.info(
            "Settled registration %s: position %s, prize %s, %s DIL",
            registration_id,
            position,
            prize,
            dil_reward,
        )
        return registration

    def spin_wheel(self, user_id, dil_cost=None):
        with self.store.atomic():
            user = self._locked_user(user_id)
            dil_cost = to_dil(settings.SPIN_WHEEL_DIL_COST if dil_cost is None else dil_cost)
            if user.dil_balance < dil_cost:
                raise InsufficientDil(
                    f"Not enough DIL: a spin costs {dil_cost}, you have {user.dil_balance}."
                )
            draw = draw_reward(self.store.get_spin_wheel_rewards(), self.rng)

            self.store.update_user_dil_balance(user.pk, -dil_cost)
            user.dil_balance -= dil_cost
            self._grant_reward(user, draw.reward)

            history = self.store.create_spin_history(
                user_id=user.pk, reward=draw.reward, dil_spent=dil_cost, roll=draw.roll
            )

        logger.info(
            "User %s spun for %s DIL and won %s %s",
            user_id,
            dil_cost,
            draw.reward.value,
            draw.reward.kind,
        )
        return history

    def _grant_reward(self, user, reward):
        handlers = {
            RewardKind.CASH: self._grant_cash,
            RewardKind.DIL: self._grant_dil,
            RewardKind.MEDAL: self._grant_medal,
        }
        handlers[RewardKind(reward.kind)](user, reward)

    def _grant_cash(self, user, reward):
        self._credit(
            user,
            quantize(reward.value),
            Transaction.TransactionType.SPIN_REWARD,
            f"Spin wheel reward: {reward}",
        )

    def _grant_dil(self, user, reward):
        self._credit_dil(user, int(reward.value))

    def _grant_medal(self, user, reward):
        medals = int(reward.value)
        self.store.update_user_stats(user.pk, medals=medals)
        user.medals += medals

    def claim_daily_bonus(self, user_id, day=None):
        day = day or timezone.localdate()
        dil_amount = settings.DAILY_BONUS_DIL
        cash_amount = quantize(settings.DAILY_BONUS_CASH)

        with self.store.atomic():
            user = self._locked_user(user_id)
            if self.store.get_daily_bonus(user.pk, day) is not None:
                raise AlreadyClaimedToday()
            try:
                bonus = self.store.create_daily_bonus(
                    user_id=user.pk, day=day, dil_amount=dil_amount, cash_amount=cash_amount
                )
            except DuplicateRecord as exc:
                raise AlreadyClaimedToday() from exc

            if dil_amount:
                self._credit_dil(user, dil_amount)
            if cash_amount > 0:
                self._credit(
                    user,
                    cash_amount,
                    Transaction.TransactionType.BONUS,
                    f"Daily bonus for {day.isoformat()}",
                )

        logger.info("User %s claimed the daily bonus for %s", user_id, day)
        return bonus

    def refund_entry_fee(self, registration, tournament):
        """
        Returns a registration's entry fee. Runs inside the caller's unit,
        which must already hold the tournament lock.
        """
        if tournament.entry_fee <= 0:
            return None
        user = self._locked_user(registration.user_id)
        refund = self._credit(
            user,
            tournament.entry_fee,
            Transaction.TransactionType.REFUND,
            f"Refund for cancelled tournament {tournament.title}",
            tournament_id=tournament.pk,
        )
        logger.info("Refunded %s to user %s", tournament.entry_fee, user.pk)
        return refund

    def get_user_transactions(self, user_id):
        return self.store.get_user_transactions(user_id)
