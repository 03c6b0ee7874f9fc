"""Conversation exchange with the backend."""

import logging
from typing import Optional

from pydantic import ValidationError

from cvchat.constants.error_constants import ErrorConstants
from cvchat.error_handling.exceptions import BackendResponseError
from cvchat.models.chat_models import ChatRequest, ChatResponse
from cvchat.services.api_client import BackendClient

CHAT_ENDPOINT = "/chat"
FORM_ENDPOINT = "/form"


class ChatService:
    """Sends chat and form messages within a backend session."""

    def __init__(self, client: BackendClient, logger: Optional[logging.Logger] = None):
        self.client = client
        self.logger = logger or logging.getLogger(__name__)

    def send_message(
        self,
        message: str,
        session_id: Optional[str] = None,
        is_chat: bool = True,
        is_submit: bool = False,
        is_preview: bool = False,
        template_id: Optional[str] = None,
    ) -> ChatResponse:
        """Post a message to ``/chat`` (or ``/form`` when ``is_chat`` is False).

        Returns:
            The validated success envelope.

        Raises:
            BackendResponseError: the backend refused the message; the error
                message is the server's, or "Failed to send message".
            NetworkError: the backend could not be reached.
        """
        request = ChatRequest(
            message=message,
            session_id=session_id,
            is_submit=is_submit,
            is_preview=is_preview,
            template_id=template_id,
        )
        endpoint = CHAT_ENDPOINT if is_chat else FORM_ENDPOINT

        body = self.client.post(
            endpoint, request.to_payload(), ErrorConstants.MSG_SEND_MESSAGE_FAILED
        )

        if not isinstance(body, dict) or not body.get("success"):
            raise BackendResponseError(
                BackendClient.server_message(body) or ErrorConstants.MSG_SEND_MESSAGE_FAILED,
                endpoint=endpoint,
            )

        try:
            response = ChatResponse.model_validate(body)
        except ValidationError as e:
            raise BackendResponseError(
                ErrorConstants.MSG_INVALID_RESPONSE,
                endpoint=endpoint,
                original_exception=e,
            ) from e

        self.logger.info(
            "Message exchanged",
            extra={
                "endpoint": endpoint,
                "session_id": response.result.session_id or session_id,
                "has_form_spec": response.result.form_json_spec is not None,
            },
        )
        return response
