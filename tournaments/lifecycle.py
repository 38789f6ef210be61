"""
Capacity and status gating for tournaments.

These helpers run inside an open ``LedgerStore.atomic()`` unit; they lock the
rows they inspect so the checks still hold when the caller acts on them.
"""
from common.exceptions import (
    AlreadyRegistered,
    InsufficientBalance,
    InvalidStatusTransition,
    RegistrationClosed,
    TournamentFull,
    TournamentNotFound,
    UserNotFound,
)

from .models import Tournament

ALLOWED_TRANSITIONS = {
    Tournament.Status.UPCOMING: {Tournament.Status.LIVE, Tournament.Status.CANCELLED},
    Tournament.Status.LIVE: {Tournament.Status.COMPLETED, Tournament.Status.CANCELLED},
    Tournament.Status.COMPLETED: set(),
    Tournament.Status.CANCELLED: set(),
}


def check_join_preconditions(store, user_id, tournament_id):
    """
    Checks that ``user_id`` may join ``tournament_id`` and returns the locked
    ``(user, tournament)`` pair.

    The first failing condition wins, in this order: the tournament exists,
    the user exists, registration is still open, the user is not registered
    yet, there is a free spot, and the balance covers the entry fee. The
    tournament row is locked before the user row.
    """
    tournament = store.get_tournament(tournament_id, for_update=True)
    if tournament is None:
        raise TournamentNotFound()

    user = store.get_user(user_id, for_update=True)
    if user is None:
        raise UserNotFound()

    if tournament.is_closed:
        raise RegistrationClosed()

    if store.get_registration(user_id, tournament_id) is not None:
        raise AlreadyRegistered()

    if tournament.is_full:
        raise TournamentFull()

    if user.balance < tournament.entry_fee:
        raise InsufficientBalance(
            f"Insufficient balance: {tournament.entry_fee} is needed to join, "
            f"you have {user.balance}."
        )

    return user, tournament


def ensure_transition_allowed(current, new):
    if new not in ALLOWED_TRANSITIONS.get(current, set()):
        raise InvalidStatusTransition(
            f"Cannot move a tournament from '{current}' to '{new}'."
        )
