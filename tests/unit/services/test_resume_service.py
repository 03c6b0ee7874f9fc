"""Unit tests for ResumeService."""

import pytest
import requests

from cvchat.constants.error_constants import ErrorConstants
from cvchat.error_handling.exceptions import BackendResponseError, PreviewLoadError
from cvchat.services.api_client import BackendClient
from cvchat.services.resume_service import ResumeService


@pytest.fixture
def service(settings, http_session):
    return ResumeService(BackendClient(settings, session=http_session))


class TestResumeService:
    """Test cases for preview, PDF and saved resume retrieval."""

    def test_preview_returns_html(self, service, http_session, make_response):
        # Arrange
        http_session.request.return_value = make_response(
            body={"success": True, "result": "<html><body>CV</body></html>"}
        )

        # Act
        html = service.get_preview("s-1", {"basicInfo": {"name": "Ada"}})

        # Assert
        assert html == "<html><body>CV</body></html>"
        assert http_session.request.call_args.kwargs["json"] == {
            "sessionId": "s-1",
            "jsonData": {"basicInfo": {"name": "Ada"}},
        }

    def test_preview_failure_uses_default_message(self, service, http_session, make_response):
        http_session.request.return_value = make_response(body={"success": False})

        with pytest.raises(BackendResponseError) as exc_info:
            service.get_preview("s-1", {})
        assert exc_info.value.message == ErrorConstants.MSG_PREVIEW_FAILED

    def test_pdf_path_is_joined_onto_content_url(self, service, http_session, make_response):
        # Arrange
        http_session.request.return_value = make_response(
            body={"success": True, "result": "/resumes/s-1.pdf"}
        )

        # Act
        url = service.generate_pdf("s-1", {})

        # Assert
        assert url == "http://cdn.test/resumes/s-1.pdf"
        assert http_session.request.call_args.args[1].endswith("/chat/resume/pdf")

    def test_pdf_object_result_is_rejected(self, service, http_session, make_response):
        http_session.request.return_value = make_response(
            body={"success": True, "result": {"resumePath": "/resumes/s-1.pdf"}}
        )

        with pytest.raises(BackendResponseError) as exc_info:
            service.generate_pdf("s-1", {})
        assert exc_info.value.message == ErrorConstants.MSG_INVALID_RESPONSE

    def test_fetch_resume_html(self, service, http_session, make_response):
        # Arrange
        http_session.get.return_value = make_response(text="<html>saved</html>")

        # Act
        html = service.fetch_resume_html("resumes/s-1.html")

        # Assert
        assert html == "<html>saved</html>"
        assert http_session.get.call_args.args[0] == "http://cdn.test/resumes/s-1.html"

    def test_fetch_failure_becomes_preview_load_error(self, service, http_session):
        http_session.get.side_effect = requests.ConnectionError("offline")

        with pytest.raises(PreviewLoadError) as exc_info:
            service.fetch_resume_html("/resumes/s-1.html")
        assert exc_info.value.message == ErrorConstants.MSG_PREVIEW_LOAD_FAILED
