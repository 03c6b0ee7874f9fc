"""Session-scoped context shared by the chat, form and preview screens.

One :class:`SessionContext` exists per browser session. It owns the current
template, backend session id, transcript, form specification and form data,
and it is the only place that writes them to local persistence.
"""

import json
import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from cvchat.config.settings import AppConfig, get_config
from cvchat.constants.error_constants import ErrorConstants
from cvchat.constants.ui_constants import UIConstants
from cvchat.core import form_data
from cvchat.core.request_tracker import RequestScope, RequestTracker, StaleResponseError
from cvchat.core.role_catalog import lookup_role_spec
from cvchat.error_handling.exceptions import (
    BackendResponseError,
    CvChatError,
    FormSpecificationError,
    InvalidTransitionError,
    SessionPreconditionError,
    StorageError,
)
from cvchat.models.chat_models import ChatMessage, ChatResponse
from cvchat.models.form_models import FormSpecification
from cvchat.services.chat_service import ChatService
from cvchat.services.resume_service import ResumeService
from cvchat.services.storage import (
    KeyValueStore,
    form_key,
    form_spec_key,
    messages_key,
    namespaced_keys,
    profession_key,
    session_key,
)


class ScreenMode(str, Enum):
    """Mode of the form screen."""

    AWAITING_SPECIFICATION = "awaiting_specification"
    EDITING = "editing"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"


_ALLOWED_TRANSITIONS = {
    ScreenMode.AWAITING_SPECIFICATION: {ScreenMode.EDITING},
    ScreenMode.EDITING: {ScreenMode.SUBMITTING},
    ScreenMode.SUBMITTING: {ScreenMode.SUBMITTED, ScreenMode.EDITING},
    ScreenMode.SUBMITTED: {ScreenMode.EDITING, ScreenMode.SUBMITTING},
}


class AppScreen(str, Enum):
    """Top-level screens of the front end."""

    TEMPLATE_SELECTION = "template_selection"
    PROFESSION_PROMPT = "profession_prompt"
    WORKSPACE = "workspace"


class SessionContext:
    """Single owner of session state and its persistence side effects."""

    def __init__(
        self,
        chat_service: ChatService,
        resume_service: ResumeService,
        store: KeyValueStore,
        settings: Optional[AppConfig] = None,
        tracker: Optional[RequestTracker] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.chat_service = chat_service
        self.resume_service = resume_service
        self.store = store
        self.settings = settings or get_config()
        self.tracker = tracker or RequestTracker()
        self.logger = logger or logging.getLogger(__name__)

        self.template_id: Optional[str] = None
        self.screen = AppScreen.TEMPLATE_SELECTION
        self._reset_session_state()

    def _reset_session_state(self) -> None:
        self.session_id: Optional[str] = None
        self.profession: Optional[str] = None
        self.messages: List[ChatMessage] = []
        self.form_spec: Optional[FormSpecification] = None
        self.form_data: Optional[Dict[str, Any]] = None
        self.mode = ScreenMode.AWAITING_SPECIFICATION
        self.resume_path: Optional[str] = None
        self.preview_html: Optional[str] = None

    # -- persistence -------------------------------------------------------

    def _persist(self, key: str, value: Any) -> None:
        """Write ``value`` under ``key``; failures are logged, never raised."""
        try:
            self.store.set(key, value)
        except StorageError as e:
            self.logger.error("Failed to persist %s: %s", key, e.message)

    def _persist_messages(self) -> None:
        if self.template_id:
            self._persist(
                messages_key(self.template_id), [m.to_storage() for m in self.messages]
            )

    def _persist_form(self) -> None:
        if self.template_id and self.form_data is not None:
            self._persist(form_key(self.template_id), self.form_data)

    def _read(self, key: str) -> Any:
        try:
            return self.store.get(key)
        except StorageError as e:
            self.logger.error("Failed to read %s: %s", key, e.message)
            return None

    def restore(self) -> bool:
        """Load persisted state for the current template.

        Returns:
            True when a saved backend session was found.
        """
        self._reset_session_state()
        if not self.template_id:
            return False
        t = self.template_id

        self.session_id = self._read(session_key(t))
        self.profession = self._read(profession_key(t))

        for raw in self._read(messages_key(t)) or []:
            try:
                self.messages.append(ChatMessage.model_validate(raw))
            except ValidationError:
                self.logger.warning("Dropping unreadable stored message for template %s", t)

        raw_spec = self._read(form_spec_key(t))
        if raw_spec is not None:
            try:
                spec = FormSpecification.parse(raw_spec)
            except FormSpecificationError as e:
                self.logger.warning("Ignoring stored form specification: %s", e.message)
            else:
                prior = self._read(form_key(t))
                if prior is not None and not form_data.conforms_to(spec, prior):
                    self.logger.warning("Stored form data does not match its specification")
                    prior = None
                self.form_spec = spec
                self.form_data = form_data.initialize(spec, prior)
                self.mode = ScreenMode.EDITING

        for message in reversed(self.messages):
            if message.is_resume_ready and message.resume_path:
                self.resume_path = message.resume_path
                break

        self.screen = AppScreen.WORKSPACE if self.session_id else AppScreen.PROFESSION_PROMPT
        self.logger.info(
            "Restored template %s (session %s)", t, "found" if self.session_id else "none"
        )
        return bool(self.session_id)

    # -- navigation --------------------------------------------------------

    def select_template(self, template_id: str) -> bool:
        """Switch to ``template_id`` and restore whatever was saved for it."""
        if self.template_id != template_id:
            self.tracker.invalidate()
        self.template_id = str(template_id)
        return self.restore()

    def leave_workspace(self) -> None:
        """Go back to template selection without clearing saved data."""
        self.tracker.invalidate()
        self.template_id = None
        self._reset_session_state()
        self.screen = AppScreen.TEMPLATE_SELECTION

    def restart(self) -> None:
        """Discard everything saved for the current template."""
        self.tracker.invalidate()
        if self.template_id:
            try:
                self.store.remove_many(namespaced_keys(self.template_id))
            except StorageError as e:
                self.logger.error("Failed to clear saved session: %s", e.message)
            self.logger.info("Restarted session for template %s", self.template_id)
        self.template_id = None
        self._reset_session_state()
        self.screen = AppScreen.TEMPLATE_SELECTION

    # -- mode machine ------------------------------------------------------

    def transition(self, requested: ScreenMode) -> None:
        if requested not in _ALLOWED_TRANSITIONS[self.mode]:
            raise InvalidTransitionError(self.mode, requested)
        self.logger.debug("Form mode %s -> %s", self.mode.value, requested.value)
        self.mode = requested

    @property
    def is_awaiting_reply(self) -> bool:
        return self.tracker.in_flight(RequestScope.CHAT) or self.tracker.in_flight(
            RequestScope.BOOTSTRAP
        )

    # -- transcript --------------------------------------------------------

    def _append_message(self, text: str, is_user: bool, **kwargs) -> ChatMessage:
        message = ChatMessage.create(text, is_user, **kwargs)
        taken = {m.id for m in self.messages}
        while message.id in taken:
            message = message.model_copy(update={"id": str(int(message.id) + 1)})
        self.messages.append(message)
        self._persist_messages()
        return message

    # -- form specification ------------------------------------------------

    def adopt_specification(self, raw_spec: Any) -> FormSpecification:
        """Take a specification from the backend and rebuild form data for it.

        An identical specification leaves existing form data alone.
        """
        spec = FormSpecification.parse(raw_spec)
        if spec == self.form_spec and self.form_data is not None:
            return spec

        self.form_spec = spec
        self.form_data = form_data.initialize(spec)
        if self.template_id:
            self._persist(form_spec_key(self.template_id), spec.to_wire())
        self._persist_form()
        if self.mode in (ScreenMode.AWAITING_SPECIFICATION, ScreenMode.SUBMITTED):
            self.transition(ScreenMode.EDITING)
        return spec

    # -- backend operations ------------------------------------------------

    def _require_template(self) -> str:
        if not self.template_id:
            raise SessionPreconditionError(
                ErrorConstants.MSG_TEMPLATE_REQUIRED, missing_data="template_id"
            )
        return self.template_id

    def _require_session(self) -> Tuple[str, str]:
        if not self.session_id or not self.template_id:
            raise SessionPreconditionError(
                ErrorConstants.MSG_SESSION_NOT_INITIALIZED, missing_data="session_id"
            )
        return self.session_id, self.template_id

    def bootstrap(self, profession: str) -> Optional[ChatResponse]:
        """Start a backend session for ``profession``.

        Returns None when the response arrived after the session was
        restarted or switched.
        """
        profession = (profession or "").strip()
        if not profession:
            raise SessionPreconditionError(
                ErrorConstants.MSG_PROFESSION_REQUIRED, missing_data="profession"
            )
        template_id = self._require_template()

        try:
            response = self.tracker.run(
                RequestScope.BOOTSTRAP,
                lambda: self.chat_service.send_message(
                    profession, is_chat=True, template_id=template_id
                ),
            )
        except StaleResponseError:
            return None

        if not response.result.session_id:
            raise BackendResponseError(
                ErrorConstants.MSG_INVALID_RESPONSE, endpoint="/chat"
            )

        spec = None
        if response.result.form_json_spec:
            try:
                spec = FormSpecification.parse(response.result.form_json_spec)
            except FormSpecificationError as e:
                self.logger.error("Ignoring unusable form specification: %s", e.message)
        if spec is None:
            self.logger.info("No usable form specification returned, using built-in one")
            spec = lookup_role_spec(profession)

        self.session_id = response.result.session_id
        self.profession = profession
        self._persist(session_key(template_id), self.session_id)
        self._persist(profession_key(template_id), profession)
        self.adopt_specification(spec)

        self.messages = []
        self._append_message(
            UIConstants.GREETING_TEMPLATE.format(profession=profession), is_user=False
        )
        self.screen = AppScreen.WORKSPACE
        self.logger.info(
            "Session started", extra={"session_id": self.session_id, "template_id": template_id}
        )
        return response

    def send_chat(self, text: str) -> Optional[ChatMessage]:
        """Send a chat message and append the reply (or an error entry).

        Returns the bot message appended, or None when nothing was sent.
        """
        if not text or not text.strip():
            return None

        self._append_message(text, is_user=True)
        if not self.session_id or not self.template_id:
            return None
        session_id, template_id = self.session_id, self.template_id

        try:
            response = self.tracker.run(
                RequestScope.CHAT,
                lambda: self.chat_service.send_message(
                    text, session_id=session_id, is_chat=True, template_id=template_id
                ),
            )
        except StaleResponseError:
            return None
        except CvChatError as e:
            self.logger.error("Error sending chat message: %s", e.message)
            return self._append_message(ErrorConstants.MSG_CHAT_ERROR_REPLY, is_user=False)

        result = response.result
        reply = self._append_message(
            result.chat_message or "",
            is_user=False,
            is_json=result.form_json_spec is not None,
            json_path=result.path,
            resume_path=result.resume_path,
        )
        if result.form_json_spec:
            try:
                self.adopt_specification(result.form_json_spec)
            except FormSpecificationError as e:
                self.logger.error("Ignoring unusable form specification: %s", e.message)
        if result.resume_path:
            self.resume_path = result.resume_path
        return reply

    def sanitized_form_data(self) -> Dict[str, Any]:
        if self.form_spec is None or self.form_data is None:
            raise SessionPreconditionError(
                ErrorConstants.MSG_SESSION_NOT_INITIALIZED, missing_data="form_data"
            )
        return form_data.sanitize_for_submit(self.form_spec, self.form_data)

    def submit_form(self) -> Optional[str]:
        """Submit the form and return the generated resume path."""
        session_id, template_id = self._require_session()
        payload = self.sanitized_form_data()

        self.transition(ScreenMode.SUBMITTING)
        try:
            response = self.tracker.run(
                RequestScope.FORM,
                lambda: self.chat_service.send_message(
                    json.dumps(payload),
                    session_id=session_id,
                    is_chat=False,
                    is_submit=True,
                    template_id=template_id,
                ),
            )
        except StaleResponseError:
            return None
        except CvChatError:
            self.transition(ScreenMode.EDITING)
            raise

        self.resume_path = response.result.resume_path
        self._append_message(
            UIConstants.RESUME_READY_SENTINEL,
            is_user=False,
            is_json=True,
            json_path=self.resume_path,
            resume_path=self.resume_path,
        )
        self._persist_form()
        self.transition(ScreenMode.SUBMITTED)
        return self.resume_path

    def request_preview(self) -> Optional[str]:
        """Ask the backend for preview HTML of the current form data."""
        session_id, _ = self._require_session()
        payload = self.sanitized_form_data()
        try:
            html = self.tracker.run(
                RequestScope.PREVIEW,
                lambda: self.resume_service.get_preview(session_id, payload),
            )
        except StaleResponseError:
            return None
        self.preview_html = html
        return html

    def export_pdf(self) -> Optional[str]:
        """Generate the PDF and return its absolute URL."""
        session_id, _ = self._require_session()
        payload = self.sanitized_form_data()
        try:
            return self.tracker.run(
                RequestScope.PDF,
                lambda: self.resume_service.generate_pdf(session_id, payload),
            )
        except StaleResponseError:
            return None

    def download_url(self, path: Optional[str] = None) -> Optional[str]:
        path = path or self.resume_path
        return self.settings.asset_url(path) if path else None

    # -- form edits --------------------------------------------------------

    def _edit(self, operation, *args) -> Dict[str, Any]:
        if self.form_spec is None or self.form_data is None:
            raise SessionPreconditionError(
                UIConstants.AWAITING_SPEC_HINT, missing_data="form_spec"
            )
        updated = operation(self.form_spec, self.form_data, *args)
        self.form_data = updated
        if self.mode == ScreenMode.SUBMITTED:
            self.transition(ScreenMode.EDITING)
        self._persist_form()
        return updated

    def set_field(self, path, value: str) -> Dict[str, Any]:
        return self._edit(form_data.set_field, path, value)

    def toggle_suggestion(self, section: str, value: str) -> Dict[str, Any]:
        return self._edit(form_data.toggle_suggestion, section, value)

    def add_entry(self, section: str) -> Dict[str, Any]:
        return self._edit(
            form_data.add_entry, section, self.settings.form.max_entries_per_section
        )

    def remove_entry(self, section: str, index: int) -> Dict[str, Any]:
        return self._edit(form_data.remove_entry, section, index)
