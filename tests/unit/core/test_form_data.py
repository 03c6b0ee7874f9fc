"""Unit tests for the form data model.

These tests cover initialization from a form specification, the pure edit
operations and submit-time sanitization.
"""

import pytest

from cvchat.core import form_data
from cvchat.core.form_data import BASIC_INFO
from cvchat.error_handling.exceptions import (
    EntryLimitReachedError,
    FormPathError,
    LastEntryRemovalError,
)
from cvchat.models.form_models import FormSpecification


@pytest.fixture
def spec(developer_spec):
    return FormSpecification.parse(developer_spec)


@pytest.fixture
def data(spec):
    return form_data.initialize(spec)


class TestInitialize:
    """Test building form data from a specification."""

    def test_keys_match_basic_info_and_sections(self, spec, data):
        """Test that every declared section gets a key, required or not."""
        # Assert
        assert set(data) == {BASIC_INFO, "workExperience", "technicalSkills", "hobbies"}

    def test_entries_are_shaped_per_section_kind(self, data):
        """Test the initial value of each section kind."""
        # Assert
        assert data[BASIC_INFO] == {"name": "", "email": ""}
        assert data["workExperience"] == [{"companyName": "", "jobTitle": ""}]
        assert data["technicalSkills"] == []
        assert data["hobbies"] == []

    def test_prior_data_is_returned_unchanged(self, spec):
        """Test that restored data wins over a fresh structure."""
        # Arrange
        prior = {BASIC_INFO: {"name": "Ada"}, "custom": ["kept"]}

        # Act
        result = form_data.initialize(spec, prior)

        # Assert
        assert result is prior

    def test_suggestion_scenario(self):
        """Test initialize and toggle on a single suggestion section."""
        # Arrange
        spec = FormSpecification.parse(
            {
                "basicInfo": {"name": True},
                "sections": {"skills": {"required": True, "suggestions": ["A", "B"]}},
            }
        )

        # Act
        data = form_data.initialize(spec)
        selected = form_data.toggle_suggestion(spec, data, "skills", "A")
        cleared = form_data.toggle_suggestion(spec, selected, "skills", "A")

        # Assert
        assert data == {BASIC_INFO: {"name": ""}, "skills": []}
        assert selected == {BASIC_INFO: {"name": ""}, "skills": ["A"]}
        assert cleared == {BASIC_INFO: {"name": ""}, "skills": []}


class TestSetField:
    """Test single-field updates."""

    def test_set_basic_info_field(self, spec, data):
        # Act
        updated = form_data.set_field(spec, data, (BASIC_INFO, "name"), "Ada")

        # Assert
        assert updated[BASIC_INFO]["name"] == "Ada"
        assert data[BASIC_INFO]["name"] == ""

    def test_set_fixed_field_changes_only_that_field(self, spec, data):
        # Act
        updated = form_data.set_field(
            spec, data, ("workExperience", 0, "jobTitle"), "Engineer"
        )

        # Assert
        assert updated["workExperience"] == [{"companyName": "", "jobTitle": "Engineer"}]
        assert updated[BASIC_INFO] is data[BASIC_INFO]
        assert data["workExperience"][0]["jobTitle"] == ""

    def test_set_free_text_entry(self, spec, data):
        # Arrange
        data = form_data.add_entry(spec, data, "hobbies")

        # Act
        updated = form_data.set_field(spec, data, ("hobbies", 0), "Chess")

        # Assert
        assert updated["hobbies"] == ["Chess"]

    @pytest.mark.parametrize(
        "path",
        [
            (BASIC_INFO, "unknown"),
            ("workExperience", 5, "jobTitle"),
            ("workExperience", 0, "salary"),
            ("workExperience", 0),
            ("hobbies", 0),
            ("technicalSkills", 0),
            ("missingSection", 0),
        ],
    )
    def test_invalid_paths_raise(self, spec, data, path):
        """Test that paths not matching the section kind are refused."""
        with pytest.raises(FormPathError):
            form_data.set_field(spec, data, path, "x")


class TestToggleSuggestion:
    def test_toggle_twice_restores_selection(self, spec, data):
        # Act
        once = form_data.toggle_suggestion(spec, data, "technicalSkills", "Python")
        twice = form_data.toggle_suggestion(spec, once, "technicalSkills", "Python")

        # Assert
        assert once["technicalSkills"] == ["Python"]
        assert twice["technicalSkills"] == data["technicalSkills"]

    def test_toggle_never_duplicates(self, spec, data):
        # Act
        result = form_data.toggle_suggestion(spec, data, "technicalSkills", "SQL")
        result = form_data.toggle_suggestion(spec, result, "technicalSkills", "Python")

        # Assert
        assert result["technicalSkills"] == ["SQL", "Python"]

    def test_toggle_on_fixed_section_raises(self, spec, data):
        with pytest.raises(FormPathError):
            form_data.toggle_suggestion(spec, data, "workExperience", "Python")


class TestAddAndRemoveEntry:
    """Test entry-count rules for add and remove."""

    def test_add_appends_blank_entry(self, spec, data):
        # Act
        updated = form_data.add_entry(spec, data, "workExperience")

        # Assert
        assert len(updated["workExperience"]) == 2
        assert updated["workExperience"][1] == {"companyName": "", "jobTitle": ""}
        assert len(data["workExperience"]) == 1

    def test_add_then_remove_restores_section(self, spec, data):
        # Arrange
        data = form_data.add_entry(spec, data, "workExperience")
        data = form_data.set_field(spec, data, ("workExperience", 1, "jobTitle"), "Lead")
        before = data["workExperience"]

        # Act
        added = form_data.add_entry(spec, data, "workExperience")
        removed = form_data.remove_entry(spec, added, "workExperience", 2)

        # Assert
        assert removed["workExperience"] == before

    def test_eleventh_add_is_refused(self, spec, data):
        """Test that a section stops growing at the entry limit."""
        # Arrange
        for _ in range(9):
            data = form_data.add_entry(spec, data, "workExperience")
        assert len(data["workExperience"]) == 10

        # Act & Assert
        with pytest.raises(EntryLimitReachedError) as exc_info:
            form_data.add_entry(spec, data, "workExperience")
        assert len(data["workExperience"]) == 10
        assert exc_info.value.section == "workExperience"
        assert exc_info.value.context.additional_data["limit"] == 10

    def test_custom_limit(self, spec, data):
        with pytest.raises(EntryLimitReachedError):
            form_data.add_entry(spec, data, "workExperience", max_entries=1)

    def test_add_to_suggestion_section_raises(self, spec, data):
        with pytest.raises(FormPathError):
            form_data.add_entry(spec, data, "technicalSkills")

    def test_removing_last_fixed_entry_is_refused(self, spec, data):
        # Act & Assert
        with pytest.raises(LastEntryRemovalError):
            form_data.remove_entry(spec, data, "workExperience", 0)
        assert data["workExperience"] == [{"companyName": "", "jobTitle": ""}]

    def test_free_text_section_may_become_empty(self, spec, data):
        # Arrange
        data = form_data.add_entry(spec, data, "hobbies")

        # Act
        updated = form_data.remove_entry(spec, data, "hobbies", 0)

        # Assert
        assert updated["hobbies"] == []

    def test_remove_out_of_range_raises(self, spec, data):
        with pytest.raises(FormPathError):
            form_data.remove_entry(spec, data, "hobbies", 3)


class TestSanitizeForSubmit:
    """Test removal of placeholder entries."""

    def test_all_blank_section_becomes_empty_list(self, spec, data):
        # Arrange
        data = form_data.add_entry(spec, data, "workExperience")
        data = form_data.set_field(spec, data, ("workExperience", 1, "jobTitle"), "   ")

        # Act
        cleaned = form_data.sanitize_for_submit(spec, data)

        # Assert
        assert cleaned["workExperience"] == []

    def test_keeps_only_non_blank_entries(self, spec, data):
        # Arrange
        data = form_data.add_entry(spec, data, "workExperience")
        data = form_data.add_entry(spec, data, "workExperience")
        data = form_data.set_field(spec, data, ("workExperience", 1, "companyName"), "Acme")

        # Act
        cleaned = form_data.sanitize_for_submit(spec, data)

        # Assert
        assert cleaned["workExperience"] == [{"companyName": "Acme", "jobTitle": ""}]
        assert len(data["workExperience"]) == 3

    def test_blank_free_text_entries_are_dropped(self, spec, data):
        # Arrange
        data = form_data.add_entry(spec, data, "hobbies")
        data = form_data.add_entry(spec, data, "hobbies")
        data = form_data.set_field(spec, data, ("hobbies", 1), "Chess")

        # Act
        cleaned = form_data.sanitize_for_submit(spec, data)

        # Assert
        assert cleaned["hobbies"] == ["Chess"]


class TestHelpers:
    def test_conforms_to_detects_shape_mismatch(self, spec, data):
        # Arrange
        broken = {**data, "workExperience": ["not an object"]}

        # Assert
        assert form_data.conforms_to(spec, data)
        assert not form_data.conforms_to(spec, broken)
        assert not form_data.conforms_to(spec, {BASIC_INFO: {}})

    def test_section_tabs_lists_required_sections_only(self, spec):
        assert form_data.section_tabs(spec) == [
            BASIC_INFO,
            "workExperience",
            "technicalSkills",
        ]

    @pytest.mark.parametrize(
        "name,label",
        [
            ("workExperience", "Work Experience"),
            ("basicInfo", "Basic Info"),
            ("gpa", "Gpa"),
        ],
    )
    def test_camel_to_title(self, name, label):
        assert form_data.camel_to_title(name) == label
