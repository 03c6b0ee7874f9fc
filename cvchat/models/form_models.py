"""Form specification models.

The backend declares which resume sections a profession needs. Each section
is one of three kinds, told apart by which list it carries:

- ``fields``: fixed-fields section, entries are objects with those keys;
- ``suggestions``: suggestion-tag section, entries are selected strings;
- neither: free-text list, entries are plain strings.

The kind is resolved once, at parse time, into an explicit ``kind`` tag so the
form data model can dispatch on it.
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from cvchat.constants.form_constants import FormConstants
from cvchat.error_handling.exceptions import FormPathError, FormSpecificationError


class SectionKind(str, Enum):
    """Discriminator for form section variants."""

    FIXED_FIELDS = "fixed_fields"
    SUGGESTIONS = "suggestions"
    FREE_TEXT = "free_text"


class _SectionBase(BaseModel):
    model_config = ConfigDict(extra="ignore")

    required: bool = False


class FixedFieldsSection(_SectionBase):
    """Section whose entries are objects with a fixed set of string fields."""

    kind: Literal["fixed_fields"] = SectionKind.FIXED_FIELDS.value
    fields: List[str]

    def blank_entry(self) -> Dict[str, str]:
        return {name: "" for name in self.fields}


class SuggestionSection(_SectionBase):
    """Section whose value is a set of selected suggestion strings."""

    kind: Literal["suggestions"] = SectionKind.SUGGESTIONS.value
    suggestions: List[str]


class FreeTextListSection(_SectionBase):
    """Section whose entries are plain strings."""

    kind: Literal["free_text"] = SectionKind.FREE_TEXT.value


SectionConfig = Annotated[
    Union[FixedFieldsSection, SuggestionSection, FreeTextListSection],
    Field(discriminator="kind"),
]


def tag_section(raw: Any) -> Any:
    """Attach the ``kind`` tag to a raw section config.

    ``fields`` takes precedence over ``suggestions`` when both are present.
    """
    if not isinstance(raw, dict) or "kind" in raw:
        return raw
    if raw.get("fields") is not None:
        kind = SectionKind.FIXED_FIELDS
    elif raw.get("suggestions") is not None:
        kind = SectionKind.SUGGESTIONS
    else:
        kind = SectionKind.FREE_TEXT
    return {**raw, "kind": kind.value}


class FormSpecification(BaseModel):
    """Server-provided description of the resume form."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    basic_info: Dict[str, bool] = Field(default_factory=dict, alias="basicInfo")
    sections: Dict[str, SectionConfig] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _unwrap_and_tag(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        wrapped = data.get(FormConstants.REQUIRED_WRAPPER_KEY)
        if isinstance(wrapped, dict) and (
            FormConstants.BASIC_INFO_KEY in wrapped
            or FormConstants.SECTIONS_KEY in wrapped
        ):
            data = wrapped
        sections = data.get(FormConstants.SECTIONS_KEY) or {}
        if isinstance(sections, dict):
            data = {
                **data,
                FormConstants.SECTIONS_KEY: {
                    name: tag_section(config) for name, config in sections.items()
                },
            }
        return data

    @classmethod
    def parse(cls, raw: Any) -> "FormSpecification":
        """Build a specification from the backend's JSON value."""
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, dict):
            raise FormSpecificationError(
                f"Form specification must be an object, got {type(raw).__name__}"
            )
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise FormSpecificationError(
                f"Invalid form specification: {e}", original_exception=e
            ) from e

    def section(self, name: str) -> Union[FixedFieldsSection, SuggestionSection, FreeTextListSection]:
        try:
            return self.sections[name]
        except KeyError:
            raise FormPathError(f"Unknown section '{name}'", section=name) from None

    def required_sections(self) -> List[str]:
        return [name for name, config in self.sections.items() if config.required]

    def to_wire(self) -> Dict[str, Any]:
        """Serialize back to the backend's shape (without kind tags)."""
        sections: Dict[str, Any] = {}
        for name, config in self.sections.items():
            entry: Dict[str, Any] = {"required": config.required}
            if config.kind == SectionKind.FIXED_FIELDS:
                entry["fields"] = list(config.fields)
            elif config.kind == SectionKind.SUGGESTIONS:
                entry["suggestions"] = list(config.suggestions)
            sections[name] = entry
        return {
            FormConstants.BASIC_INFO_KEY: dict(self.basic_info),
            FormConstants.SECTIONS_KEY: sections,
        }
