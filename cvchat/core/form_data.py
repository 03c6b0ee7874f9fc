"""Form data model.

Form data is a plain JSON-compatible dict derived from a
:class:`~cvchat.models.form_models.FormSpecification`::

    {
        "basicInfo": {"name": "", "email": ""},
        "workExperience": [{"companyName": "", "jobTitle": ""}],
        "technicalSkills": ["Python"],
        "hobbies": ["Chess"],
    }

Every function here is pure: it returns a new dict and leaves its input
untouched. Edits the model refuses raise a :class:`FormEditError` subclass,
so a rejected edit never produces a partially updated structure.
"""

import copy
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from cvchat.constants.form_constants import FormConstants
from cvchat.error_handling.exceptions import (
    EntryLimitReachedError,
    FormPathError,
    LastEntryRemovalError,
)
from cvchat.models.form_models import FormSpecification, SectionKind

FormData = Dict[str, Any]
FieldPath = Union[Tuple[str, str], Tuple[str, int], Tuple[str, int, str]]

BASIC_INFO = FormConstants.BASIC_INFO_KEY


def camel_to_title(name: str) -> str:
    """Turn a camelCase key into a display label ("workExperience" -> "Work Experience")."""
    spaced = re.sub(r"([a-z])([A-Z])", r"\1 \2", name)
    return spaced[:1].upper() + spaced[1:]


def section_tabs(spec: FormSpecification) -> List[str]:
    """Tabs shown by the form screen: basic info, then every required section."""
    return [BASIC_INFO, *spec.required_sections()]


def blank_entry(spec: FormSpecification, section: str) -> Union[Dict[str, str], str]:
    """An empty entry shaped for ``section``."""
    config = spec.section(section)
    if config.kind == SectionKind.FIXED_FIELDS:
        return config.blank_entry()
    if config.kind == SectionKind.FREE_TEXT:
        return ""
    raise FormPathError(
        f"Section '{section}' holds suggestions; toggle them instead of adding entries",
        section=section,
    )


def initialize(spec: FormSpecification, prior_data: Optional[FormData] = None) -> FormData:
    """Build the editable structure for ``spec``.

    Args:
        spec: The form specification.
        prior_data: Previously saved form data. Returned unchanged when given.

    Returns:
        Form data whose keys are ``basicInfo`` plus every declared section.
        Fixed-fields sections start with one blank entry; suggestion and
        free-text sections start empty.
    """
    if prior_data is not None:
        return prior_data

    data: FormData = {BASIC_INFO: {name: "" for name in spec.basic_info}}
    for name, config in spec.sections.items():
        if config.kind == SectionKind.FIXED_FIELDS:
            data[name] = [config.blank_entry()]
        else:
            data[name] = []
    return data


def _entries(data: FormData, section: str) -> List[Any]:
    entries = data.get(section)
    if not isinstance(entries, list):
        raise FormPathError(f"Form data has no list for section '{section}'", section=section)
    return entries


def _check_index(entries: Sequence[Any], section: str, index: int) -> None:
    if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(entries):
        raise FormPathError(
            f"Entry {index!r} does not exist in section '{section}'", section=section
        )


def set_field(spec: FormSpecification, data: FormData, path: FieldPath, value: str) -> FormData:
    """Return a copy of ``data`` with the value at ``path`` replaced.

    Paths:
        ``("basicInfo", field)`` for basic info,
        ``(section, index, field)`` for fixed-fields sections,
        ``(section, index)`` for free-text-list sections.
    """
    if not path:
        raise FormPathError("Empty field path")

    head = path[0]
    if head == BASIC_INFO:
        if len(path) != 2 or path[1] not in spec.basic_info:
            raise FormPathError(f"Unknown basic info path {path!r}", section=BASIC_INFO)
        updated = dict(data)
        updated[BASIC_INFO] = {**data.get(BASIC_INFO, {}), path[1]: value}
        return updated

    config = spec.section(head)
    entries = _entries(data, head)

    if config.kind == SectionKind.FIXED_FIELDS:
        if len(path) != 3:
            raise FormPathError(
                f"Section '{head}' needs a (section, index, field) path", section=head
            )
        _, index, field_name = path
        _check_index(entries, head, index)
        if field_name not in config.fields:
            raise FormPathError(
                f"Section '{head}' has no field '{field_name}'", section=head
            )
        new_entries = list(entries)
        new_entries[index] = {**entries[index], field_name: value}
    elif config.kind == SectionKind.FREE_TEXT:
        if len(path) != 2:
            raise FormPathError(
                f"Section '{head}' needs a (section, index) path", section=head
            )
        index = path[1]
        _check_index(entries, head, index)
        new_entries = list(entries)
        new_entries[index] = value
    else:
        raise FormPathError(
            f"Section '{head}' holds suggestions; use toggle_suggestion", section=head
        )

    updated = dict(data)
    updated[head] = new_entries
    return updated


def toggle_suggestion(spec: FormSpecification, data: FormData, section: str, value: str) -> FormData:
    """Select ``value`` if it is not selected, otherwise deselect it."""
    config = spec.section(section)
    if config.kind != SectionKind.SUGGESTIONS:
        raise FormPathError(f"Section '{section}' has no suggestions", section=section)

    selected = _entries(data, section)
    if value in selected:
        new_selected = [item for item in selected if item != value]
    else:
        new_selected = [*selected, value]

    updated = dict(data)
    updated[section] = new_selected
    return updated


def add_entry(
    spec: FormSpecification,
    data: FormData,
    section: str,
    max_entries: int = FormConstants.MAX_ENTRIES_PER_SECTION,
) -> FormData:
    """Append a blank entry to ``section``.

    Raises:
        EntryLimitReachedError: the section already holds ``max_entries``.
        FormPathError: the section is a suggestion section.
    """
    entry = blank_entry(spec, section)
    entries = _entries(data, section)
    if len(entries) >= max_entries:
        raise EntryLimitReachedError(
            f"Section '{section}' already holds {max_entries} entries",
            section=section,
            limit=max_entries,
        )

    updated = dict(data)
    updated[section] = [*entries, entry]
    return updated


def remove_entry(spec: FormSpecification, data: FormData, section: str, index: int) -> FormData:
    """Remove the entry at ``index``.

    Raises:
        LastEntryRemovalError: it is the only entry of a fixed-fields section.
        FormPathError: bad index, or a suggestion section.
    """
    config = spec.section(section)
    if config.kind == SectionKind.SUGGESTIONS:
        raise FormPathError(
            f"Section '{section}' holds suggestions; use toggle_suggestion", section=section
        )

    entries = _entries(data, section)
    _check_index(entries, section, index)
    if config.kind == SectionKind.FIXED_FIELDS and len(entries) <= 1:
        raise LastEntryRemovalError(
            f"Section '{section}' must keep at least one entry", section=section
        )

    updated = dict(data)
    updated[section] = [entry for i, entry in enumerate(entries) if i != index]
    return updated


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def sanitize_for_submit(spec: FormSpecification, data: FormData) -> FormData:
    """Drop placeholder entries before the data goes to the backend.

    The backend composes the final document differently for an empty list
    than for a list of blank entries, so blank entries must not be sent.
    """
    cleaned = copy.deepcopy(data)
    for name, config in spec.sections.items():
        entries = cleaned.get(name)
        if not isinstance(entries, list):
            continue
        if config.kind == SectionKind.FIXED_FIELDS:
            cleaned[name] = [
                entry
                for entry in entries
                if isinstance(entry, dict)
                and not all(_is_blank(entry.get(field_name)) for field_name in config.fields)
            ]
        else:
            cleaned[name] = [entry for entry in entries if not _is_blank(entry)]
    return cleaned


def conforms_to(spec: FormSpecification, data: FormData) -> bool:
    """Whether ``data`` has exactly the keys and entry shapes ``spec`` declares."""
    expected_keys = {BASIC_INFO, *spec.sections}
    if set(data) != expected_keys:
        return False
    if not isinstance(data[BASIC_INFO], dict) or set(data[BASIC_INFO]) != set(spec.basic_info):
        return False
    for name, config in spec.sections.items():
        entries = data[name]
        if not isinstance(entries, list):
            return False
        if config.kind == SectionKind.FIXED_FIELDS:
            if not all(isinstance(e, dict) and set(e) == set(config.fields) for e in entries):
                return False
        elif not all(isinstance(e, str) for e in entries):
            return False
    return True
