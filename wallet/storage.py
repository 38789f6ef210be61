"""
Persistence interface for the ledger.

``LedgerStore`` is the contract the ledger and tournament services depend on.
``DjangoLedgerStore`` implements it on the Django ORM. A store is built
explicitly and handed to ``LedgerService``; there is no shared module-level
instance.
"""
import abc
import logging
from contextlib import contextmanager

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from common.exceptions import Conflict, StorageUnavailable

logger = logging.getLogger(__name__)


class DuplicateRecord(Conflict):
    """A unique constraint rejected an insert."""

    default_message = "The record already exists."


class LedgerStore(abc.ABC):
    @abc.abstractmethod
    def atomic(self):
        """Context manager wrapping one all-or-nothing unit of work."""

    # Users
    @abc.abstractmethod
    def get_user(self, user_id, for_update=False): ...

    @abc.abstractmethod
    def update_user_balance(self, user_id, new_balance): ...

    @abc.abstractmethod
    def update_user_dil_balance(self, user_id, delta): ...

    @abc.abstractmethod
    def update_user_stats(self, user_id, **stats): ...

    # Tournaments
    @abc.abstractmethod
    def get_tournament(self, tournament_id, for_update=False): ...

    @abc.abstractmethod
    def increment_tournament_players(self, tournament_id) -> bool: ...

    @abc.abstractmethod
    def update_tournament_status(self, tournament_id, status): ...

    @abc.abstractmethod
    def get_tournament_registrations(self, tournament_id): ...

    # Registrations
    @abc.abstractmethod
    def get_registration(self, user_id, tournament_id): ...

    @abc.abstractmethod
    def get_registration_by_id(self, registration_id, for_update=False): ...

    @abc.abstractmethod
    def create_registration(self, user_id, tournament_id): ...

    @abc.abstractmethod
    def update_registration_result(self, registration_id, position, kills, earnings): ...

    # Ledger
    @abc.abstractmethod
    def create_transaction(self, user_id, type, amount, description, tournament_id=None): ...

    @abc.abstractmethod
    def get_user_transactions(self, user_id): ...

    # Spin wheel
    @abc.abstractmethod
    def get_spin_wheel_rewards(self): ...

    @abc.abstractmethod
    def create_spin_history(self, user_id, reward, dil_spent, roll): ...

    # Daily bonus
    @abc.abstractmethod
    def get_daily_bonus(self, user_id, day): ...

    @abc.abstractmethod
    def create_daily_bonus(self, user_id, day, dil_amount, cash_amount): ...


class DjangoLedgerStore(LedgerStore):
    """
    Relational store backed by the Django ORM.

    Row locks come from ``select_for_update``; the database's lock and
    statement timeouts (see ``DB_LOCK_TIMEOUT_MS``) bound every wait, and the
    resulting ``OperationalError`` surfaces as ``StorageUnavailable``.
    """

    def __init__(self, using="default"):
        self.using = using

    @contextmanager
    def atomic(self):
        try:
            with transaction.atomic(using=self.using):
                yield self
        except IntegrityError as exc:
            logger.warning("Integrity error in ledger unit: %s", exc)
            raise Conflict() from exc
        except DatabaseError as exc:
            logger.error("Database error in ledger unit: %s", exc)
            raise StorageUnavailable() from exc

    def _users(self):
        from users.models import User

        return User.objects.using(self.using)

    def _tournaments(self):
        from tournaments.models import Tournament

        return Tournament.objects.using(self.using)

    def _registrations(self):
        from tournaments.models import Registration

        return Registration.objects.using(self.using)

    def _lock(self, queryset, for_update):
        return queryset.select_for_update() if for_update else queryset

    def get_user(self, user_id, for_update=False):
        return self._lock(self._users(), for_update).filter(pk=user_id).first()

    def update_user_balance(self, user_id, new_balance):
        self._users().filter(pk=user_id).update(balance=new_balance)

    def update_user_dil_balance(self, user_id, delta):
        self._users().filter(pk=user_id).update(dil_balance=F("dil_balance") + delta)

    def update_user_stats(self, user_id, **stats):
        """
        Adds each keyword's value to the counter of the same name, e.g.
        ``update_user_stats(1, games_played=1, total_earnings=prize)``.
        """
        if stats:
            changes = {field: F(field) + value for field, value in stats.items()}
            self._users().filter(pk=user_id).update(**changes)

    def get_tournament(self, tournament_id, for_update=False):
        return self._lock(self._tournaments(), for_update).filter(pk=tournament_id).first()

    def increment_tournament_players(self, tournament_id) -> bool:
        updated = (
            self._tournaments()
            .filter(pk=tournament_id, current_players__lt=F("max_players"))
            .update(current_players=F("current_players") + 1)
        )
        return updated == 1

    def update_tournament_status(self, tournament_id, status):
        self._tournaments().filter(pk=tournament_id).update(status=status)

    def get_tournament_registrations(self, tournament_id):
        return list(self._registrations().filter(tournament_id=tournament_id).order_by("user_id"))

    def get_registration(self, user_id, tournament_id):
        return self._registrations().filter(user_id=user_id, tournament_id=tournament_id).first()

    def get_registration_by_id(self, registration_id, for_update=False):
        return self._lock(self._registrations(), for_update).filter(pk=registration_id).first()

    def create_registration(self, user_id, tournament_id):
        try:
            with transaction.atomic(using=self.using):
                return self._registrations().create(user_id=user_id, tournament_id=tournament_id)
        except IntegrityError as exc:
            raise DuplicateRecord() from exc

    def update_registration_result(self, registration_id, position, kills, earnings):
        self._registrations().filter(pk=registration_id).update(
            position=position, kills=kills, earnings=earnings, settled_at=timezone.now()
        )
        return self.get_registration_by_id(registration_id)

    def create_transaction(self, user_id, type, amount, description, tournament_id=None):
        from .models import Transaction

        return Transaction.objects.using(self.using).create(
            user_id=user_id,
            type=type,
            amount=amount,
            description=description,
            tournament_id=tournament_id,
        )

    def get_user_transactions(self, user_id):
        from .models import Transaction

        return list(Transaction.objects.using(self.using).filter(user_id=user_id).order_by("id"))

    def get_spin_wheel_rewards(self):
        from rewards.models import SpinWheelReward

        return list(
            SpinWheelReward.objects.using(self.using).filter(is_active=True).order_by("id")
        )

    def create_spin_history(self, user_id, reward, dil_spent, roll):
        from rewards.models import SpinHistory

        return SpinHistory.objects.using(self.using).create(
            user_id=user_id,
            reward=reward,
            reward_kind=reward.kind,
            reward_value=reward.value,
            dil_spent=dil_spent,
            roll=str(roll),
        )

    def get_daily_bonus(self, user_id, day):
        from .models import DailyBonus

        return DailyBonus.objects.using(self.using).filter(user_id=user_id, day=day).first()

    def create_daily_bonus(self, user_id, day, dil_amount, cash_amount):
        from .models import DailyBonus

        try:
            with transaction.atomic(using=self.using):
                return DailyBonus.objects.using(self.using).create(
                    user_id=user_id, day=day, dil_amount=dil_amount, cash_amount=cash_amount
                )
        except IntegrityError as exc:
            raise DuplicateRecord() from exc
