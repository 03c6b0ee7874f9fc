"""cvchat: conversational resume builder client."""

__version__ = "0.1.0"
