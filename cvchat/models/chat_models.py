"""Wire models for the chat/form endpoints and the local chat transcript."""

import time
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from cvchat.constants.ui_constants import UIConstants


class ChatRequest(BaseModel):
    """Body of `POST /chat` and `POST /form`."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    session_id: Optional[str] = Field(None, alias="sessionId")
    is_submit: bool = Field(False, alias="isSubmit")
    is_preview: bool = Field(False, alias="isPreview")
    template_id: Optional[str] = Field(None, alias="templateId")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ChatResult(BaseModel):
    """The `result` object of a chat/form response."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    chat_message: Optional[str] = Field(None, alias="chatMessage")
    path: Optional[str] = None
    session_id: Optional[str] = Field(None, alias="sessionId")
    form_json_spec: Optional[Dict[str, Any]] = Field(None, alias="formJSONSpec")
    resume_path: Optional[str] = Field(None, alias="resumePath")
    is_chat: Optional[bool] = Field(None, alias="isChat")
    message: Optional[str] = None
    messages: Optional[List[Any]] = None
    timestamp: Optional[str] = None
    error: Optional[str] = None


class ChatResponse(BaseModel):
    """Success envelope returned by the chat/form endpoints."""

    model_config = ConfigDict(extra="allow")

    success: bool
    result: ChatResult = Field(default_factory=ChatResult)
    message: Optional[str] = None


class ChatMessage(BaseModel):
    """One entry of the chat transcript."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    text: str
    is_user: bool = Field(alias="isUser")
    timestamp: datetime = Field(default_factory=datetime.now)
    is_json: Optional[bool] = Field(None, alias="isJson")
    json_path: Optional[str] = Field(None, alias="jsonPath")
    resume_path: Optional[str] = Field(None, alias="resumePath")

    @classmethod
    def create(cls, text: str, is_user: bool, **kwargs) -> "ChatMessage":
        """Build a message whose id is derived from the current time."""
        now = datetime.now()
        return cls(
            id=str(int(time.time() * 1000)),
            text=text,
            is_user=is_user,
            timestamp=now,
            **kwargs,
        )

    @property
    def is_resume_ready(self) -> bool:
        return bool(self.is_json) and UIConstants.RESUME_READY_SENTINEL in self.text

    def to_storage(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
