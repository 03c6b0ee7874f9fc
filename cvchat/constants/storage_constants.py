"""Local persistence key layout."""

from typing import Final, List


class StorageConstants:
    """Key prefixes for values persisted per template id."""

    SESSION_PREFIX: Final[str] = "session"
    MESSAGES_PREFIX: Final[str] = "messages"
    PROFESSION_PREFIX: Final[str] = "profession"
    FORM_PREFIX: Final[str] = "form"
    FORM_SPEC_PREFIX: Final[str] = "formSpec"

    NAMESPACED_PREFIXES: Final[List[str]] = [
        SESSION_PREFIX,
        MESSAGES_PREFIX,
        PROFESSION_PREFIX,
        FORM_PREFIX,
        FORM_SPEC_PREFIX,
    ]

    # Not namespaced: last reordered preview content
    LAST_RESUME_STATE_KEY: Final[str] = "lastResumeState"
