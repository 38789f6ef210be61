import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework.exceptions import ValidationError

from common.exceptions import RegistrationNotFound, TournamentNotFound
from wallet.services import LedgerService

from .lifecycle import ensure_transition_allowed
from .models import Registration, Tournament

logger = logging.getLogger(__name__)


def create_tournament(**data) -> Tournament:
    """
    Creates a tournament after model-level validation of its prize table and
    capacity.
    """
    tournament = Tournament(**data)
    try:
        tournament.full_clean()
    except DjangoValidationError as exc:
        raise ValidationError(exc.message_dict if hasattr(exc, "error_dict") else exc.messages)
    tournament.save()
    logger.info("Created tournament %s (%s)", tournament.pk, tournament.title)
    return tournament


def change_tournament_status(tournament_id, status, ledger=None) -> Tournament:
    """
    Moves a tournament to ``status``. Cancelling refunds every registered
    player's entry fee in the same atomic unit as the status change.
    """
    ledger = ledger or LedgerService()
    store = ledger.store
    with store.atomic():
        tournament = store.get_tournament(tournament_id, for_update=True)
        if tournament is None:
            raise TournamentNotFound()
        ensure_transition_allowed(tournament.status, status)

        if status == Tournament.Status.CANCELLED:
            for registration in store.get_tournament_registrations(tournament.pk):
                ledger.refund_entry_fee(registration, tournament)

        store.update_tournament_status(tournament.pk, status)
        tournament.status = status

    logger.info("Tournament %s moved to %s", tournament_id, status)
    return tournament


def settle_tournament_result(tournament_id, user_id, position, kills, ledger=None) -> Registration:
    """Finds the player's registration and settles it through the ledger."""
    ledger = ledger or LedgerService()
    registration = ledger.store.get_registration(user_id, tournament_id)
    if registration is None:
        if ledger.store.get_tournament(tournament_id) is None:
            raise TournamentNotFound()
        raise RegistrationNotFound()
    return ledger.settle_result(registration.pk, position, kills)


def get_user_registrations(user):
    return (
        Registration.objects.filter(user=user)
        .select_related("tournament")
        .order_by("-registered_at", "-id")
    )
