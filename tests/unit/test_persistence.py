"""Unit tests for the YAML document repository."""

import pytest

from vita.contexts.editing.blocks import Block, BlockType, SummaryContent
from vita.contexts.editing.exceptions import NotFoundError, ServiceError, ValidationError
from vita.contexts.persistence.adapter import COPY_SUFFIX, YamlDocumentRepository

SUMMARY_RECORD = {"type": "summary", "order": 0, "content": {"text": "Hello"}}


@pytest.mark.unit
def test_create_then_get(repository):
    document_id = repository.create("  Backend Resume ", [SUMMARY_RECORD])

    stored = repository.get(document_id)
    assert stored.id == document_id
    assert stored.title == "Backend Resume"
    assert stored.template_id == "classic"
    assert stored.blocks == [SUMMARY_RECORD]
    assert stored.created_at == stored.updated_at
    assert (repository.root / f"{document_id}.yaml").exists()


@pytest.mark.unit
def test_create_accepts_blocks(repository):
    block = Block(BlockType.SUMMARY, SummaryContent(text="Hi"), order=0)
    document_id = repository.create("Resume", [block])
    assert repository.get(document_id).blocks == [block.to_record()]


@pytest.mark.unit
@pytest.mark.parametrize("title", ["", "   ", None])
def test_create_rejects_blank_title(repository, title):
    with pytest.raises(ValidationError):
        repository.create(title, [])
    assert repository.list_all() == []


@pytest.mark.unit
def test_update_replaces_given_fields_only(repository):
    document_id = repository.create("Resume", [SUMMARY_RECORD])
    before = repository.get(document_id)

    updated = repository.update(document_id, title="Renamed")

    assert updated.title == "Renamed"
    assert updated.blocks == [SUMMARY_RECORD]
    assert updated.created_at == before.created_at
    assert updated.updated_at > before.updated_at
    assert repository.get(document_id).title == "Renamed"


@pytest.mark.unit
def test_update_without_fields_is_rejected(repository):
    document_id = repository.create("Resume", [])
    with pytest.raises(ValidationError, match="Nothing to update"):
        repository.update(document_id)


@pytest.mark.unit
def test_update_blank_title_leaves_document_unchanged(repository):
    document_id = repository.create("Resume", [])
    with pytest.raises(ValidationError):
        repository.update(document_id, title="  ")
    assert repository.get(document_id).title == "Resume"


@pytest.mark.unit
@pytest.mark.parametrize("document_id", ["missing", "../escape", "", None])
def test_unknown_ids_raise_not_found(repository, document_id):
    with pytest.raises(NotFoundError):
        repository.get(document_id)
    with pytest.raises(NotFoundError):
        repository.delete(document_id)


@pytest.mark.unit
def test_update_unknown_id(repository):
    with pytest.raises(NotFoundError):
        repository.update("missing", title="x")


@pytest.mark.unit
def test_duplicate_copies_blocks_under_new_title(repository):
    document_id = repository.create("Resume", [SUMMARY_RECORD], template_id="classic")

    copy_id = repository.duplicate(document_id)

    assert copy_id != document_id
    copy = repository.get(copy_id)
    assert copy.title == f"Resume{COPY_SUFFIX}"
    assert copy.blocks == [SUMMARY_RECORD]


@pytest.mark.unit
def test_delete(repository):
    document_id = repository.create("Resume", [])
    repository.delete(document_id)
    with pytest.raises(NotFoundError):
        repository.get(document_id)


@pytest.mark.unit
def test_list_all_newest_first(repository):
    first = repository.create("First", [])
    second = repository.create("Second", [SUMMARY_RECORD])
    repository.update(first, title="First (edited)")

    summaries = repository.list_all()

    assert [s.id for s in summaries] == [first, second]
    assert summaries[1].block_count == 1


@pytest.mark.unit
def test_list_all_on_missing_root(tmp_path):
    assert YamlDocumentRepository(tmp_path / "nowhere").list_all() == []


@pytest.mark.unit
def test_list_all_skips_unreadable_files(repository):
    document_id = repository.create("Good", [])
    (repository.root / "broken.yaml").write_text("title: [unclosed\n")
    (repository.root / "notadoc.yaml").write_text("- just\n- a list\n")

    assert [s.id for s in repository.list_all()] == [document_id]


@pytest.mark.unit
def test_corrupt_document_raises_service_error(repository):
    (repository.root).mkdir(parents=True, exist_ok=True)
    (repository.root / "broken.yaml").write_text("title: [unclosed\n")
    with pytest.raises(ServiceError) as excinfo:
        repository.get("broken")
    assert excinfo.value.service == "storage"


@pytest.mark.unit
def test_interpolation_syntax_is_stored_literally(repository):
    record = {"type": "summary", "order": 0, "content": {"text": "Saved ${salary} with $HOME"}}
    document_id = repository.create("Literal ${title}", [record])

    stored = repository.get(document_id)
    assert stored.title == "Literal ${title}"
    assert stored.blocks[0]["content"]["text"] == "Saved ${salary} with $HOME"


@pytest.mark.unit
def test_no_temp_files_left_behind(repository):
    document_id = repository.create("Resume", [SUMMARY_RECORD])
    repository.update(document_id, blocks=[])
    assert list(repository.root.glob("*.tmp")) == []


@pytest.mark.unit
@pytest.mark.parametrize("text", ["Cut costs by ${", "${oops", "a \\${x} b", "yes", "null", "1e5"])
def test_any_text_round_trips(repository, text):
    record = {"type": "summary", "order": 0, "content": {"text": text}}
    document_id = repository.create(text, [record])

    stored = repository.get(document_id)
    assert stored.title == text
    assert stored.blocks[0]["content"]["text"] == text


@pytest.mark.unit
def test_unknown_template_rejected_on_create(repository):
    with pytest.raises(ValidationError, match="Unknown template 'modern'"):
        repository.create("Resume", [], template_id="modern")
    assert repository.list_all() == []


@pytest.mark.unit
def test_unknown_template_rejected_on_update(repository):
    document_id = repository.create("Resume", [])
    with pytest.raises(ValidationError, match="available: classic"):
        repository.update(document_id, template_id="modern")
    assert repository.get(document_id).template_id == "classic"
