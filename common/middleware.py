import uuid
from threading import local

_thread_locals = local()

REQUEST_ID_HEADER = "HTTP_X_REQUEST_ID"


def get_current_request_id():
    """Returns the request_id for the current request."""
    return getattr(_thread_locals, "request_id", None)


class RequestIDMiddleware:
    """
    Assigns every request an id, reusing a well-formed X-Request-ID sent by an
    upstream proxy. The id lives in thread-local storage for the lifetime of
    the request so ledger log lines can be tied back to it.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request_id = self._incoming_request_id(request) or str(uuid.uuid4())
        _thread_locals.request_id = request_id
        request.request_id = request_id
        try:
            response = self.get_response(request)
        finally:
            _thread_locals.request_id = None
        response["X-Request-ID"] = request_id
        return response

    @staticmethod
    def _incoming_request_id(request):
        value = request.META.get(REQUEST_ID_HEADER, "")
        try:
            return str(uuid.UUID(value))
        except ValueError:
            return None
