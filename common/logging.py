import logging

from .middleware import get_current_request_id


class RequestIDFilter(logging.Filter):
    """
    Stamps each log record with the id of the request that produced it,
    or "-" outside of a request (management commands, shell).
    """

    def filter(self, record):
        record.request_id = get_current_request_id() or "-"
        return True
