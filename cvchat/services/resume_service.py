"""Resume preview and PDF generation endpoints."""

import logging
from typing import Any, Dict, Optional

from cvchat.constants.error_constants import ErrorConstants
from cvchat.error_handling.exceptions import (
    BackendResponseError,
    NetworkError,
    PreviewLoadError,
)
from cvchat.services.api_client import BackendClient

PREVIEW_ENDPOINT = "/chat/resume/preview"
PDF_ENDPOINT = "/chat/resume/pdf"


class ResumeService:
    """Turns sanitized form data into preview HTML or a downloadable PDF."""

    def __init__(self, client: BackendClient, logger: Optional[logging.Logger] = None):
        self.client = client
        self.logger = logger or logging.getLogger(__name__)

    def _post_resume(
        self, endpoint: str, session_id: str, json_data: Dict[str, Any], error: str
    ) -> Any:
        body = self.client.post(
            endpoint, {"sessionId": session_id, "jsonData": json_data}, error
        )
        if not isinstance(body, dict) or not body.get("success"):
            raise BackendResponseError(
                BackendClient.server_message(body) or error, endpoint=endpoint
            )
        return body.get("result")

    def get_preview(self, session_id: str, json_data: Dict[str, Any]) -> str:
        """Return the resume HTML generated from ``json_data``."""
        result = self._post_resume(
            PREVIEW_ENDPOINT, session_id, json_data, ErrorConstants.MSG_PREVIEW_FAILED
        )
        if not isinstance(result, str):
            raise BackendResponseError(
                ErrorConstants.MSG_INVALID_RESPONSE, endpoint=PREVIEW_ENDPOINT
            )
        return result

    def generate_pdf(self, session_id: str, json_data: Dict[str, Any]) -> str:
        """Generate the PDF and return the absolute URL of the file."""
        result = self._post_resume(
            PDF_ENDPOINT, session_id, json_data, ErrorConstants.MSG_PDF_FAILED
        )
        # The file path is the whole result; object shapes are not accepted.
        if not isinstance(result, str) or not result.strip():
            raise BackendResponseError(
                ErrorConstants.MSG_INVALID_RESPONSE, endpoint=PDF_ENDPOINT
            )
        url = self.client.settings.asset_url(result)
        self.logger.info("Resume PDF generated", extra={"session_id": session_id, "url": url})
        return url

    def fetch_resume_html(self, resume_path: str) -> str:
        """Download previously generated resume HTML from the content server."""
        url = self.client.settings.asset_url(resume_path)
        try:
            return self.client.fetch_text(url)
        except NetworkError as e:
            raise PreviewLoadError(
                ErrorConstants.MSG_PREVIEW_LOAD_FAILED,
                resume_path=resume_path,
                original_exception=e,
            ) from e
