"""Tests for the Google Slides backend against a mocked service."""

from unittest.mock import MagicMock, Mock

import pytest
from google.auth.exceptions import TransportError
from googleapiclient.errors import HttpError

from slide_calendar.backends.google_slides import GoogleSlidesBackend
from slide_calendar.errors import BackendError, LayoutNotFoundError

LAYOUTS = {
    "layouts": [
        {"objectId": "L-title", "layoutProperties": {"name": "TITLE", "displayName": "Title slide"}},
        {"objectId": "L-blank", "layoutProperties": {"name": "BLANK", "displayName": "Blank"}},
    ]
}


def http_error(status=400, message="Invalid requests[0].createShape"):
    resp = Mock(status=status, reason="Bad Request")
    content = ('{"error": {"code": %d, "message": "%s"}}' % (status, message)).encode("utf-8")
    return HttpError(resp, content)


def make_backend():
    service = MagicMock()
    presentations = service.presentations.return_value
    presentations.get.return_value.execute.return_value = LAYOUTS
    presentations.batchUpdate.return_value.execute.return_value = {
        "replies": [{"createSlide": {"objectId": "page-1"}}]
    }
    return GoogleSlidesBackend(service, "pres-1"), presentations


class TestLayouts:
    def test_resolve_by_name_or_display_name(self):
        backend, _ = make_backend()
        assert backend.resolve_layout("Blank") == "L-blank"
        assert backend.resolve_layout("title") == "L-title"
        assert backend.resolve_layout("title slide") == "L-title"

    def test_layouts_fetched_once(self):
        backend, presentations = make_backend()
        backend.resolve_layout("Blank")
        backend.resolve_layout("BLANK")
        presentations.get.assert_called_once()
        assert presentations.get.call_args.kwargs["presentationId"] == "pres-1"

    def test_unknown_layout(self):
        backend, _ = make_backend()
        with pytest.raises(LayoutNotFoundError, match="Calendar"):
            backend.resolve_layout("Calendar")

    def test_layouts_http_error(self):
        backend, presentations = make_backend()
        presentations.get.return_value.execute.side_effect = http_error(404, "Requested entity was not found.")
        with pytest.raises(BackendError, match="Could not read layouts"):
            backend.resolve_layout("Blank")

    def test_layouts_transport_error(self):
        backend, presentations = make_backend()
        presentations.get.return_value.execute.side_effect = TransportError("connection reset")
        with pytest.raises(BackendError, match="connection reset"):
            backend.resolve_layout("Blank")


class TestPages:
    def test_new_page(self):
        backend, presentations = make_backend()
        assert backend.new_page("Blank") == "page-1"

        body = presentations.batchUpdate.call_args.kwargs["body"]
        (request,) = body["requests"]
        assert request["createSlide"]["slideLayoutReference"] == {"layoutId": "L-blank"}
        assert request["createSlide"]["objectId"]

    def test_new_page_http_error(self):
        backend, presentations = make_backend()
        presentations.batchUpdate.return_value.execute.side_effect = http_error(429, "Quota exceeded")
        with pytest.raises(BackendError, match="Quota exceeded"):
            backend.new_page("Blank")

    def test_new_page_timeout(self):
        backend, presentations = make_backend()
        presentations.batchUpdate.return_value.execute.side_effect = TimeoutError("The read operation timed out")
        with pytest.raises(BackendError, match="timed out"):
            backend.new_page("Blank")


class TestSubmitBatch:
    def test_sends_requests_in_one_call(self):
        backend, presentations = make_backend()
        presentations.batchUpdate.return_value.execute.return_value = {"replies": [{}, {}]}
        requests = [
            {"insertText": {"objectId": "a", "text": "01"}},
            {"insertText": {"objectId": "b", "text": "02"}},
        ]

        result = backend.submit_batch(requests)

        assert result.ok
        assert result.replies == [{}, {}]
        presentations.batchUpdate.assert_called_once_with(
            presentationId="pres-1", body={"requests": requests}
        )

    def test_empty_batch_is_not_sent(self):
        backend, presentations = make_backend()
        assert backend.submit_batch([]).ok
        presentations.batchUpdate.assert_not_called()

    def test_http_error_is_reported(self):
        backend, presentations = make_backend()
        presentations.batchUpdate.return_value.execute.side_effect = http_error()

        result = backend.submit_batch([{"insertText": {"objectId": "a", "text": "01"}}])

        assert not result.ok
        assert "Invalid requests[0].createShape" in result.error

    @pytest.mark.parametrize("error", [
        TimeoutError("The read operation timed out"),
        ConnectionResetError("Connection reset by peer"),
        TransportError("Unable to find the server"),
    ])
    def test_network_error_is_reported(self, error):
        backend, presentations = make_backend()
        presentations.batchUpdate.return_value.execute.side_effect = error

        result = backend.submit_batch([{"insertText": {"objectId": "a", "text": "01"}}])

        assert not result.ok
        assert str(error) in result.error


class TestCredentials:
    def test_missing_credentials_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            GoogleSlidesBackend.from_service_account_file(tmp_path / "key.json", "pres-1")

    def test_unique_ids(self):
        backend, _ = make_backend()
        assert backend.new_unique_id() != backend.new_unique_id()
