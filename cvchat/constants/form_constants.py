"""Form data model constants."""

from typing import Final


class FormConstants:
    """Constants shared by the form specification and form data model."""

    BASIC_INFO_KEY: Final[str] = "basicInfo"
    SECTIONS_KEY: Final[str] = "sections"
    REQUIRED_WRAPPER_KEY: Final[str] = "required"

    MAX_ENTRIES_PER_SECTION: Final[int] = 10
