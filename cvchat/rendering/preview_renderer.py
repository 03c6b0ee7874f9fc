"""Resume preview renderer.

Wraps resume HTML in the pagination/editing shell, and interprets the events
the shell posts back to its host (page break changes, section reordering,
print requests).
"""

import json
import logging
import re
import webbrowser
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from cvchat.constants.error_constants import ErrorConstants
from cvchat.constants.storage_constants import StorageConstants
from cvchat.error_handling.exceptions import SessionPreconditionError, StorageError
from cvchat.models.preview_models import LIFECYCLE_EVENTS, PreviewEvent, PreviewEventType
from cvchat.services.resume_service import ResumeService
from cvchat.services.storage import KeyValueStore

TEMPLATE_DIR = Path(__file__).parent / "templates"
SHELL_TEMPLATE = "preview_shell.html.j2"
SAMPLE_TEMPLATE = "sample_resume.html.j2"
EVENT_CHANNEL = "cvchat-preview"

_BODY_PATTERN = re.compile(r"<body[^>]*>([\s\S]*)</body>", re.IGNORECASE)

SAMPLE_RESUME = {
    "name": "Alex Morgan",
    "contact": [
        "alex.morgan@example.com",
        "(555) 010-2030",
        "Austin, TX",
        "linkedin.com/in/alexmorgan",
    ],
    "summary": (
        "Software engineer with six years of experience building web and mobile "
        "products. Enjoys turning vague requirements into reliable, well-tested features."
    ),
    "experience": [
        {
            "title": "Senior Software Engineer",
            "company": "Northwind Labs",
            "dates": "2021 - Present",
            "bullets": [
                "Led the rewrite of the customer dashboard, cutting page load time by 45%.",
                "Introduced contract tests between services and the mobile client.",
                "Mentored four engineers through their first production launches.",
            ],
        },
        {
            "title": "Software Engineer",
            "company": "Blue Harbor Software",
            "dates": "2018 - 2021",
            "bullets": [
                "Built booking and payment flows used by 200k monthly users.",
                "Automated release packaging, removing a day of manual work per release.",
            ],
        },
    ],
    "education": [
        {
            "degree": "B.Sc. Computer Science",
            "institution": "University of Texas",
            "dates": "2014 - 2018",
        }
    ],
    "skills": ["Python", "TypeScript", "React", "PostgreSQL", "Docker", "CI/CD"],
}


def extract_body(html: str) -> str:
    """Return the inner HTML of ``<body>``, or the whole document when there is none."""
    match = _BODY_PATTERN.search(html)
    if match and match.group(1):
        return match.group(1)
    return html


def parse_event(raw: Any) -> PreviewEvent:
    """Interpret one message posted by the preview shell.

    Lifecycle events arrive as bare strings; the others are JSON objects with
    a ``type`` key. Anything unrecognised becomes an ``UNKNOWN`` event.
    """
    if isinstance(raw, str):
        text = raw.strip()
        for event_type in LIFECYCLE_EVENTS:
            if text == event_type.value:
                return PreviewEvent(type=event_type, raw=raw)
        try:
            data = json.loads(text)
        except ValueError:
            return PreviewEvent(type=PreviewEventType.UNKNOWN, raw=raw)
    else:
        data = raw

    if not isinstance(data, dict):
        return PreviewEvent(type=PreviewEventType.UNKNOWN, raw=raw)

    try:
        event_type = PreviewEventType(data.get("type"))
    except ValueError:
        event_type = PreviewEventType.UNKNOWN
    if event_type in LIFECYCLE_EVENTS:
        # Lifecycle events are only ever sent as plain strings.
        event_type = PreviewEventType.UNKNOWN

    content = data.get("content")
    message = data.get("message")
    return PreviewEvent(
        type=event_type,
        content=content if isinstance(content, str) else None,
        message=message if isinstance(message, str) else None,
        payload=data,
        raw=raw,
    )


class PreviewRenderer:
    """Builds preview documents and relays shell events to the backend."""

    def __init__(
        self,
        resume_service: ResumeService,
        store: KeyValueStore,
        opener: Optional[Callable[[str], Any]] = webbrowser.open,
        logger: Optional[logging.Logger] = None,
    ):
        self.resume_service = resume_service
        self.store = store
        self.opener = opener
        self.logger = logger or logging.getLogger(__name__)
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=select_autoescape(["html", "xml", "j2"]),
        )

    def sample_content(self) -> str:
        return self.env.get_template(SAMPLE_TEMPLATE).render(**SAMPLE_RESUME)

    def wrap(self, content: str, editable: bool = True, title: str = "Resume Preview") -> str:
        return self.env.get_template(SHELL_TEMPLATE).render(
            content=content,
            editable=editable,
            title=title,
            channel=EVENT_CHANNEL,
        )

    def render(
        self,
        html_content: Optional[str] = None,
        resume_path: Optional[str] = None,
        editable: bool = True,
    ) -> str:
        """Build the preview document.

        Literal HTML wins over a path; with neither, the built-in sample
        resume is shown.

        Raises:
            PreviewLoadError: ``resume_path`` could not be fetched.
        """
        if html_content:
            content = html_content
        elif resume_path:
            content = extract_body(self.resume_service.fetch_resume_html(resume_path))
        else:
            content = self.sample_content()
        return self.wrap(content, editable=editable)

    def handle_event(
        self, raw: Any, session_id: Optional[str], form_data: Optional[Dict[str, Any]]
    ) -> Optional[str]:
        """Act on a shell event.

        Returns:
            The PDF URL opened for print/export events, otherwise None.
        """
        event = parse_event(raw)

        if event.type in LIFECYCLE_EVENTS:
            self.logger.info("Preview event: %s", event.type.value)
            return None

        if event.type == PreviewEventType.CONTENT_MOVED:
            if event.content:
                try:
                    self.store.set(StorageConstants.LAST_RESUME_STATE_KEY, event.payload)
                except StorageError as e:
                    self.logger.error("Error saving resume state: %s", e.message)
            return None

        if event.is_export:
            if not session_id:
                raise SessionPreconditionError(
                    ErrorConstants.MSG_SESSION_NOT_INITIALIZED, missing_data="session_id"
                )
            url = self.resume_service.generate_pdf(session_id, form_data or {})
            self.logger.info("Generated PDF %s", url)
            if self.opener is not None:
                self.opener(url)
            return url

        self.logger.debug("Ignoring unrecognised preview message: %r", event.raw)
        return None
