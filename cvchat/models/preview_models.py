"""Events emitted by the preview shell script."""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel


class PreviewEventType(str, Enum):
    """Kinds of messages the preview shell posts to its host."""

    LOADED = "loaded"
    PAGE_BREAK_ADDED = "pageBreakAdded"
    PAGES_MERGED = "pagesMerged"
    BREAK_MOVED = "breakMoved"
    GET_HTML_CONTENT = "getHtmlContent"
    PRINT = "print"
    CONTENT_MOVED = "contentMoved"
    UNKNOWN = "unknown"


# Events that arrive as bare strings rather than JSON objects
LIFECYCLE_EVENTS = frozenset(
    {
        PreviewEventType.LOADED,
        PreviewEventType.PAGE_BREAK_ADDED,
        PreviewEventType.PAGES_MERGED,
        PreviewEventType.BREAK_MOVED,
    }
)

EXPORT_EVENTS = frozenset({PreviewEventType.GET_HTML_CONTENT, PreviewEventType.PRINT})


class PreviewEvent(BaseModel):
    """A parsed preview shell message."""

    type: PreviewEventType
    content: Optional[str] = None
    message: Optional[str] = None
    payload: Dict[str, Any] = {}
    raw: Any = None

    @property
    def is_export(self) -> bool:
        return self.type in EXPORT_EVENTS
