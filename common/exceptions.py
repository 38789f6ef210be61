import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ApplicationError(Exception):
    """
    Base class for every business-rule failure raised by the service layer.

    Each subclass carries a stable ``code`` so API clients can branch on the
    kind of failure instead of parsing the message.
    """

    code = "application_error"
    default_message = "The request could not be completed."
    status_code = status.HTTP_400_BAD_REQUEST
    retryable = False

    def __init__(self, message=None, status_code=None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class NotFound(ApplicationError):
    code = "not_found"
    default_message = "The requested object was not found."
    status_code = status.HTTP_404_NOT_FOUND


class UserNotFound(NotFound):
    default_message = "User not found."


class TournamentNotFound(NotFound):
    default_message = "Tournament not found."


class RegistrationNotFound(NotFound):
    default_message = "Registration not found."


class InvalidAmount(ApplicationError):
    code = "invalid_amount"
    default_message = "Invalid amount."


class InsufficientBalance(ApplicationError):
    code = "insufficient_balance"
    default_message = "Insufficient balance."


class InsufficientDil(ApplicationError):
    code = "insufficient_dil"
    default_message = "Not enough DIL to spin the wheel."


class AlreadyRegistered(ApplicationError):
    code = "already_registered"
    default_message = "Already registered for this tournament."


class TournamentFull(ApplicationError):
    code = "tournament_full"
    default_message = "Tournament is full."


class RegistrationClosed(ApplicationError):
    code = "registration_closed"
    default_message = "Registration for this tournament is closed."


class AlreadyClaimedToday(ApplicationError):
    code = "already_claimed_today"
    default_message = "Daily bonus already claimed today."


class NoRewardsConfigured(ApplicationError):
    code = "no_rewards_configured"
    default_message = "The spin wheel has no rewards configured."


class Conflict(ApplicationError):
    """A concurrent update was detected; the caller should retry."""

    code = "conflict"
    default_message = "The request conflicted with a concurrent update. Please retry."
    status_code = status.HTTP_409_CONFLICT
    retryable = True


class ResultAlreadySettled(Conflict):
    default_message = "The result for this registration has already been settled."
    retryable = False


class InvalidStatusTransition(Conflict):
    default_message = "This tournament status change is not allowed."
    retryable = False


class StorageUnavailable(ApplicationError):
    code = "storage_unavailable"
    default_message = "The service is temporarily unavailable. Please retry."
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    retryable = True


def handle_application_error(exc, context):
    view = context.get("view") if context else None
    view_name = type(view).__name__ if view is not None else None
    if isinstance(exc, StorageUnavailable):
        logger.error("Storage unavailable in %s: %s", view_name, exc.__cause__ or exc)
    else:
        logger.warning("Rejected %s in %s: %s", exc.code, view_name, exc.message)

    data = {
        "detail": exc.message,
        "code": exc.code,
        "status_code": exc.status_code,
    }
    if exc.retryable:
        data["retryable"] = True
    return Response(data, status=exc.status_code)


def custom_exception_handler(exc, context):
    if isinstance(exc, ApplicationError):
        return handle_application_error(exc, context)

    response = exception_handler(exc, context)

    if response is not None:
        if isinstance(response.data, dict):
            response.data["status_code"] = response.status_code
        return response

    logger.exception("Unhandled error while serving a request", exc_info=exc)
    return Response(
        {"detail": "An unexpected error occurred."},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
