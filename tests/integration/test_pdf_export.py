"""
Integration tests for the PDF export pipeline.

These render a real document, rasterize it with Pillow, write the PDF with
reportlab and read it back with pdfplumber/PyPDF2.
"""

import pytest
from reportlab.lib.pagesizes import A4, letter

from vita.contexts.editing.session import EditingSession
from vita.contexts.rendering.config import load_export_config
from vita.contexts.rendering.exceptions import RenderError
from vita.contexts.rendering.exporter import export_document, export_pdf
from vita.contexts.templating.renderer import render_document
from vita.utils.pdf_processing import image_placements, page_count, page_sizes


@pytest.fixture
def filled(fill_document):
    return fill_document(EditingSession.new("Senior Engineer Resume"))


@pytest.mark.integration
def test_export_writes_single_a4_page(filled, classic_layout, tmp_path):
    rendered = render_document(filled.snapshot(), layout=classic_layout)
    output = tmp_path / "resume.pdf"

    result = export_pdf(rendered, output)

    assert output.exists()
    assert result.pdf_path == output
    assert result.page_count == 1
    assert page_count(output) == 1

    (width, height), = page_sizes(output)
    assert width == pytest.approx(A4[0], abs=0.5)
    assert height == pytest.approx(A4[1], abs=0.5)


@pytest.mark.integration
def test_image_is_top_aligned_and_centred(filled, classic_layout, tmp_path):
    rendered = render_document(filled.snapshot(), layout=classic_layout)
    output = tmp_path / "resume.pdf"

    result = export_pdf(rendered, output)

    placements = image_placements(output)
    assert len(placements) == 1
    placed = placements[0]
    assert placed.top == pytest.approx(0, abs=0.5)
    assert placed.width == pytest.approx(result.fit.width, abs=0.5)
    assert placed.x0 == pytest.approx((A4[0] - placed.width) / 2, abs=0.5)
    assert result.image_size[0] == 794 * 2


@pytest.mark.integration
def test_letter_format(filled, classic_layout, tmp_path):
    config = load_export_config(overrides={"page": {"format": "letter"}})
    rendered = render_document(filled.snapshot(), layout=classic_layout)

    result = export_pdf(rendered, tmp_path / "letter.pdf", config=config)

    (width, height), = page_sizes(result.pdf_path)
    assert (width, height) == pytest.approx(letter, abs=0.5)


@pytest.mark.integration
def test_failed_export_leaves_no_file(filled, classic_layout, tmp_path):
    config = load_export_config(overrides={"raster": {"scale": 1}})
    rendered = render_document(filled.snapshot(), layout=classic_layout)
    output = tmp_path / "out" / "resume.pdf"

    with pytest.raises(RenderError):
        export_pdf(rendered, output, config=config)

    assert not output.exists()
    assert list(tmp_path.rglob("*.tmp")) == []


@pytest.mark.integration
def test_failed_export_keeps_previous_file(filled, classic_layout, tmp_path):
    output = tmp_path / "resume.pdf"
    output.write_bytes(b"previous")
    config = load_export_config(overrides={"page": {"format": "tabloid"}})
    rendered = render_document(filled.snapshot(), layout=classic_layout)

    with pytest.raises(RenderError):
        export_pdf(rendered, output, config=config)

    assert output.read_bytes() == b"previous"


@pytest.mark.integration
def test_export_document_names_file_after_title(filled, classic_layout, tmp_path):
    result = export_document(
        filled.snapshot(),
        output_dir=tmp_path / "exports",
        layout=classic_layout,
        log_dir=tmp_path / "logs",
    )

    assert result.pdf_path == tmp_path / "exports" / "Senior_Engineer_Resume.pdf"
    assert result.pdf_path.exists()
    assert (tmp_path / "logs" / "render.log").exists()


@pytest.mark.integration
def test_unsaved_session_can_export(filled, classic_layout, tmp_path):
    assert filled.document_id is None
    result = filled.export_pdf(output_dir=tmp_path, layout=classic_layout, log_dir=tmp_path / "logs")
    assert result.page_count == 1


@pytest.mark.integration
def test_stored_unknown_template_fails_as_render_error(filled, repository, tmp_path):
    document_id = repository.create("Imported", [b.to_record() for b in filled.store.blocks])
    path = repository.root / f"{document_id}.yaml"
    path.write_text(path.read_text(encoding="utf-8").replace("template_id: classic", "template_id: modern"))

    session = EditingSession.load(repository, document_id)
    assert session.template_id == "modern"

    with pytest.raises(RenderError) as excinfo:
        session.export_pdf(output_dir=tmp_path / "exports", log_dir=tmp_path / "logs")

    assert excinfo.value.stage == "layout"
    assert isinstance(excinfo.value.original_error, FileNotFoundError)
    assert not (tmp_path / "exports").exists()
    assert (tmp_path / "logs" / "render.log").exists()
