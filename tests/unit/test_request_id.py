import logging
import uuid

from django.http import HttpResponse
from django.test import RequestFactory

from common.logging import RequestIDFilter
from common.middleware import RequestIDMiddleware, get_current_request_id


def test_reuses_well_formed_upstream_id():
    incoming = str(uuid.uuid4())
    seen = {}

    def view(request):
        seen["id"] = get_current_request_id()
        return HttpResponse()

    request = RequestFactory().get("/", HTTP_X_REQUEST_ID=incoming)
    response = RequestIDMiddleware(view)(request)

    assert seen["id"] == incoming
    assert response["X-Request-ID"] == incoming
    assert get_current_request_id() is None


def test_replaces_garbage_id():
    request = RequestFactory().get("/", HTTP_X_REQUEST_ID="'; drop table")
    response = RequestIDMiddleware(lambda r: HttpResponse())(request)

    assert str(uuid.UUID(response["X-Request-ID"])) == response["X-Request-ID"]


def test_filter_outside_request():
    record = logging.LogRecord("wallet", logging.INFO, __file__, 1, "msg", None, None)

    assert RequestIDFilter().filter(record) is True
    assert record.request_id == "-"
