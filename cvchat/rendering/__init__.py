"""Resume preview rendering."""

from cvchat.rendering.preview_renderer import PreviewRenderer, extract_body, parse_event

__all__ = ["PreviewRenderer", "extract_body", "parse_event"]
