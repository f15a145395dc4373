"""Unit tests for EditingSession: selection, saving and loading."""

import pytest

from vita.contexts.editing.blocks import BlockType
from vita.contexts.editing.exceptions import NotFoundError, ServiceError, ValidationError
from vita.contexts.editing.session import EditingSession, default_blocks
from vita.contexts.persistence.adapter import YamlDocumentRepository


class FailingRepository(YamlDocumentRepository):
    """Repository whose writes always fail."""

    def create(self, title, blocks, template_id="classic"):
        raise ServiceError("disk full", service="storage")


@pytest.mark.unit
def test_default_blocks_are_all_types_in_order():
    blocks = default_blocks()
    assert [b.block_type for b in blocks] == list(BlockType)
    assert [b.order for b in blocks] == list(range(len(BlockType)))
    assert all(b.is_empty() for b in blocks)


@pytest.mark.unit
def test_new_session_is_unsaved():
    session = EditingSession.new("Resume")
    assert session.document_id is None
    assert session.title == "Resume"
    assert session.store.types == tuple(BlockType)
    assert session.expanded is None


@pytest.mark.unit
def test_editor_instances_are_cached(fake_assist):
    session = EditingSession.new("Resume", assist=fake_assist)
    editor = session.editor("summary")
    assert session.editor(BlockType.SUMMARY) is editor
    assert editor.assist is fake_assist
    assert editor.guard is session.guard


class TestSelection:
    @pytest.mark.unit
    def test_expand_requires_present_block(self):
        session = EditingSession.new("Resume")
        session.remove_block("project")
        with pytest.raises(NotFoundError):
            session.expand("project")

    @pytest.mark.unit
    def test_removing_expanded_block_selects_next(self):
        session = EditingSession.new("Resume")
        session.expand("skills")
        session.remove_block("skills")
        assert session.expanded is BlockType.EXPERIENCE

    @pytest.mark.unit
    def test_removing_last_expanded_block_selects_previous(self):
        session = EditingSession.new("Resume")
        session.expand("certification")
        session.remove_block("certification")
        assert session.expanded is BlockType.PROJECT

    @pytest.mark.unit
    def test_removing_only_block_clears_selection(self):
        session = EditingSession.new("Resume")
        for block_type in ("skills", "experience", "education", "project", "certification"):
            session.remove_block(block_type)
        session.expand("summary")
        session.remove_block("summary")
        assert session.expanded is None

    @pytest.mark.unit
    def test_removing_other_block_keeps_selection(self):
        session = EditingSession.new("Resume")
        session.expand("education")
        session.remove_block("summary")
        assert session.expanded is BlockType.EDUCATION

    @pytest.mark.unit
    def test_expand_and_collapse(self):
        session = EditingSession.new("Resume")
        session.expand("skills")
        session.expand("education")
        assert session.expanded is BlockType.EDUCATION
        session.collapse()
        assert session.expanded is None

    @pytest.mark.unit
    def test_toggle_block(self):
        session = EditingSession.new("Resume")
        assert session.toggle_block("summary") is False
        assert session.toggle_block("summary") is True
        assert session.store.types[-1] is BlockType.SUMMARY


class TestSaveAndLoad:
    @pytest.mark.unit
    def test_first_save_creates_then_updates(self, sample_session, repository):
        document_id = sample_session.save()
        assert sample_session.document_id == document_id

        sample_session.title = "Renamed"
        assert sample_session.save() == document_id

        assert [s.id for s in repository.list_all()] == [document_id]
        assert repository.get(document_id).title == "Renamed"

    @pytest.mark.unit
    def test_failed_first_save_leaves_document_unsaved(self, tmp_path):
        session = EditingSession.new("Resume", repository=FailingRepository(tmp_path))
        with pytest.raises(ServiceError):
            session.save()
        assert session.document_id is None

    @pytest.mark.unit
    def test_save_without_repository(self):
        with pytest.raises(ServiceError, match="No document repository"):
            EditingSession.new("Resume").save()

    @pytest.mark.unit
    def test_load_restores_order_and_content(self, sample_session, repository):
        sample_session.move_block("certification", "up")
        document_id = sample_session.save()

        loaded = EditingSession.load(repository, document_id)

        assert loaded.title == "Senior Engineer Resume"
        assert loaded.store.blocks == sample_session.store.blocks
        assert loaded.editor("skills").skills == ("Python", "SQL", "Kubernetes")

    @pytest.mark.unit
    def test_load_with_colliding_orders_uses_stored_sequence(self, repository):
        records = [
            {"type": "skills", "order": 0, "content": {"skills": ["Go"]}},
            {"type": "summary", "order": 0, "content": {"text": "Hi"}},
        ]
        document_id = repository.create("Imported", records)

        loaded = EditingSession.load(repository, document_id)

        assert loaded.store.types == (BlockType.SKILLS, BlockType.SUMMARY)
        assert [b.order for b in loaded.store.blocks] == [0, 1]

    @pytest.mark.unit
    def test_load_unknown_document(self, repository):
        with pytest.raises(NotFoundError):
            EditingSession.load(repository, "missing")


class TestValidate:
    @pytest.mark.unit
    def test_filled_document_has_no_missing_fields(self, sample_session):
        assert sample_session.validate() == []

    @pytest.mark.unit
    def test_reports_title_and_item_fields(self):
        session = EditingSession.new("  ")
        session.editor("experience").add_item(company="Acme")
        missing = session.validate()
        assert missing[0] == "title"
        assert "experience[0].jobTitle" in missing


@pytest.mark.unit
def test_unbalanced_interpolation_text_saves(repository):
    session = EditingSession.new("Resume", repository=repository)
    session.editor("summary").set_text("Cut costs by ${")
    session.editor("skills").add_skill("${oops")
    document_id = session.save()

    loaded = EditingSession.load(repository, document_id)
    assert loaded.editor("summary").text == "Cut costs by ${"
    assert loaded.editor("skills").skills == ("${oops",)


@pytest.mark.unit
def test_save_with_unknown_template_is_rejected(repository):
    session = EditingSession.new("Resume", repository=repository)
    session.template_id = "modern"
    with pytest.raises(ValidationError, match="modern"):
        session.save()
    assert session.document_id is None
    assert repository.list_all() == []
