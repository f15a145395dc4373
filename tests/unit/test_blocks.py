"""Unit tests for the block model (content records and their invariants)."""

import pytest

from vita.contexts.editing.blocks import (
    CONTENT_TYPES,
    Block,
    BlockType,
    CertificationItem,
    Direction,
    EducationItem,
    ExperienceContent,
    ExperienceItem,
    ProjectItem,
    SkillsContent,
    SummaryContent,
    content_from_dict,
    default_content,
    ensure_covers_all_types,
    parse_block_type,
    parse_direction,
)
from vita.contexts.editing.exceptions import ValidationError


@pytest.mark.unit
def test_block_types_declared_in_default_order():
    """BlockType declaration order is the default document order."""
    assert [t.value for t in BlockType] == [
        "summary",
        "skills",
        "experience",
        "education",
        "project",
        "certification",
    ]


@pytest.mark.unit
def test_parse_block_type_accepts_enum_and_tag():
    assert parse_block_type("skills") is BlockType.SKILLS
    assert parse_block_type(BlockType.PROJECT) is BlockType.PROJECT


@pytest.mark.unit
def test_parse_block_type_rejects_unknown_tag():
    with pytest.raises(ValidationError, match="Unknown block type 'awards'"):
        parse_block_type("awards")


@pytest.mark.unit
def test_parse_direction():
    assert parse_direction("up") is Direction.UP
    with pytest.raises(ValidationError):
        parse_direction("sideways")


@pytest.mark.unit
def test_dispatch_table_check_reports_missing_types():
    partial = {BlockType.SUMMARY: object()}
    with pytest.raises(TypeError, match="missing"):
        ensure_covers_all_types(partial, "PARTIAL")


@pytest.mark.unit
def test_every_type_has_empty_default_content():
    for block_type in BlockType:
        content = default_content(block_type)
        assert type(content) is CONTENT_TYPES[block_type]
        assert content.is_empty()


class TestContentItems:
    """Tests for list-block items."""

    @pytest.mark.unit
    def test_current_clears_end_date_on_construction(self):
        item = ExperienceItem(job_title="Engineer", end_date="2022-01", current=True)
        assert item.current is True
        assert item.end_date == ""

    @pytest.mark.unit
    def test_setting_current_clears_end_date_in_same_update(self):
        item = ExperienceItem(job_title="Engineer", start_date="2020-01", end_date="2022-01")
        updated = item.with_fields({"current": True})
        assert updated.current is True
        assert updated.end_date == ""
        # original record untouched
        assert item.end_date == "2022-01"

    @pytest.mark.unit
    def test_end_date_cannot_be_set_while_current(self):
        item = ExperienceItem(current=True)
        updated = item.with_fields({"endDate": "2023-05"})
        assert updated.current is True
        assert updated.end_date == ""

    @pytest.mark.unit
    def test_no_expiration_clears_expiration_date(self):
        cert = CertificationItem(name="CKA", expiration_date="2026-01")
        updated = cert.with_fields({"noExpiration": True})
        assert updated.no_expiration is True
        assert updated.expiration_date == ""

    @pytest.mark.unit
    def test_wire_keys_and_attribute_names_both_resolve(self):
        item = ExperienceItem().with_fields({"jobTitle": "A", "company": "B"})
        assert item.get("jobTitle") == "A"
        assert item.get("job_title") == "A"

    @pytest.mark.unit
    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError, match="Unknown field 'salary'"):
            ExperienceItem().with_fields({"salary": "lots"})

    @pytest.mark.unit
    def test_flag_must_be_boolean(self):
        with pytest.raises(ValidationError, match="current must be true or false"):
            ExperienceItem().with_fields({"current": "yes"})

    @pytest.mark.unit
    def test_text_fields_reject_non_strings(self):
        with pytest.raises(ValidationError, match="gpa"):
            EducationItem(gpa=3.8)

    @pytest.mark.unit
    def test_to_dict_uses_wire_keys(self):
        cert = CertificationItem(name="CKA", credential_id="X1", credential_url="https://x")
        data = cert.to_dict()
        assert data["credentialID"] == "X1"
        assert data["credentialURL"] == "https://x"
        assert data["noExpiration"] is False
        assert "credential_id" not in data

    @pytest.mark.unit
    def test_from_dict_coerces_loose_values(self):
        item = ProjectItem.from_dict(
            {"title": "Tool", "current": "true", "startDate": None, "link": 42, "extra": "ignored"}
        )
        assert item.title == "Tool"
        assert item.current is True
        assert item.start_date == ""
        assert item.link == "42"


class TestBlockContent:
    """Tests for per-type content records."""

    @pytest.mark.unit
    def test_summary_whitespace_is_empty(self):
        assert SummaryContent(text="   \n").is_empty()
        assert not SummaryContent(text="Hi").is_empty()

    @pytest.mark.unit
    def test_skills_deduplicated_in_order(self):
        content = SkillsContent(skills=("React", "SQL", "React"))
        assert content.skills == ("React", "SQL")

    @pytest.mark.unit
    def test_item_list_rejects_foreign_items(self):
        with pytest.raises(ValidationError):
            ExperienceContent(items=(ProjectItem(title="x"),))

    @pytest.mark.unit
    def test_content_from_dict_defaults_for_missing_content(self):
        assert content_from_dict(BlockType.SUMMARY, None) == SummaryContent()
        assert content_from_dict("experience", "garbage") == ExperienceContent()

    @pytest.mark.unit
    def test_content_from_dict_skips_blank_skills(self):
        content = content_from_dict(BlockType.SKILLS, {"skills": ["Go", "", None, " Rust "]})
        assert content.skills == ("Go", "Rust")


@pytest.mark.unit
def test_block_record_shape():
    block = Block(BlockType.SUMMARY, SummaryContent(text="Hello"), order=3)
    assert block.to_record() == {"type": "summary", "content": {"text": "Hello"}, "order": 3}
