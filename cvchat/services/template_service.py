"""Template catalog client."""

import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from cvchat.constants.error_constants import ErrorConstants
from cvchat.error_handling.exceptions import BackendResponseError
from cvchat.models.template_models import INITIAL_TEMPLATE, ResumeTemplate, TemplateUpdate
from cvchat.services.api_client import BackendClient
from cvchat.services.storage import KeyValueStore, session_key

TEMPLATES_ENDPOINT = "/templates"


def _as_template(data: Any, endpoint: str) -> ResumeTemplate:
    try:
        return ResumeTemplate.model_validate(data)
    except ValidationError as e:
        raise BackendResponseError(
            ErrorConstants.MSG_INVALID_RESPONSE, endpoint=endpoint, original_exception=e
        ) from e


def find_resumable_template(
    templates: Iterable[ResumeTemplate], store: KeyValueStore
) -> Optional[ResumeTemplate]:
    """Return the first template that already has a saved session."""
    for template in templates:
        if store.get(session_key(template.id)):
            return template
    return None


class TemplateService:
    """Lists, creates, edits and seeds resume templates.

    Template endpoints answer with bare JSON (no ``success`` envelope), and
    failures carry a fixed message per operation.
    """

    def __init__(self, client: BackendClient, logger: Optional[logging.Logger] = None):
        self.client = client
        self.logger = logger or logging.getLogger(__name__)

    def _call(self, method: str, endpoint: str, error: str, payload=None) -> Any:
        return self.client.request(
            method,
            endpoint,
            error,
            payload=payload,
            check_envelope=False,
            use_server_message=False,
        )

    def list_templates(self) -> List[ResumeTemplate]:
        body = self._call("GET", TEMPLATES_ENDPOINT, ErrorConstants.MSG_FETCH_TEMPLATES_FAILED)
        if isinstance(body, dict):
            body = body.get("templates", body.get("result"))
        if not isinstance(body, list):
            raise BackendResponseError(
                ErrorConstants.MSG_FETCH_TEMPLATES_FAILED, endpoint=TEMPLATES_ENDPOINT
            )
        templates = [_as_template(item, TEMPLATES_ENDPOINT) for item in body]
        self.logger.info("Fetched %d templates", len(templates))
        return templates

    def create_template(self, data: Union[ResumeTemplate, Dict[str, Any]]) -> Any:
        payload = data.model_dump(mode="json") if isinstance(data, ResumeTemplate) else dict(data)
        payload.pop("id", None)
        return self._call(
            "POST", TEMPLATES_ENDPOINT, ErrorConstants.MSG_CREATE_TEMPLATE_FAILED, payload
        )

    def edit_template(
        self, template_id: str, data: Union[TemplateUpdate, Dict[str, Any]]
    ) -> Any:
        """Partially update a template; only the given fields are sent."""
        update = data if isinstance(data, TemplateUpdate) else TemplateUpdate(**data)
        return self._call(
            "PUT",
            f"{TEMPLATES_ENDPOINT}/{template_id}",
            ErrorConstants.MSG_UPDATE_TEMPLATE_FAILED,
            update.to_payload(),
        )

    def seed_initial_template(self) -> Any:
        payload = INITIAL_TEMPLATE.model_dump(mode="json")
        result = self._call(
            "POST",
            f"{TEMPLATES_ENDPOINT}/seed",
            ErrorConstants.MSG_SEED_TEMPLATE_FAILED,
            payload,
        )
        self.logger.info("Seeded initial template '%s'", INITIAL_TEMPLATE.name)
        return result
