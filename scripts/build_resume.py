#!/usr/bin/env python3
"""
Resume Builder CLI

Create, edit, preview and export block-based resume documents stored under
VITA_DOCUMENTS_PATH.

Commands:
    new             - Create a document with all six blocks
    list            - List stored documents, newest first
    show            - Show a document's blocks and missing required fields
    add-block       - Add a block (summary, skills, experience, ...)
    remove-block    - Remove a block
    move-block      - Move a block up or down
    set-summary     - Replace the summary text
    add-skill       - Append skills
    add-item        - Append an item to a list block
    improve         - Rewrite the summary, skills or an item description with AI
    suggest-skills  - Add AI-suggested skills for a job description
    duplicate       - Copy a document
    delete          - Delete a document
    preview         - Print a text preview or write an HTML preview
    export          - Export a document to PDF
    export-profile  - Dump the user profile as dated JSON

Examples:\n

    build_resume.py new "Senior Engineer"

    build_resume.py add-item <id> experience --set jobTitle="Staff Engineer" --set company=Acme

    build_resume.py export <id> --output-dir outs/exports
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vita.contexts.assist.service import LLMImprovementService
from vita.contexts.editing.blocks import BlockType
from vita.contexts.editing.editors import ListSectionEditor
from vita.contexts.editing.exceptions import ResumeBuilderError, ValidationError
from vita.contexts.editing.logger import setup_editing_logger
from vita.contexts.editing.session import EditingSession
from vita.contexts.persistence import YamlDocumentRepository, export_profile_json
from vita.contexts.persistence.logger import setup_persistence_logger
from vita.contexts.rendering import RenderError
from vita.contexts.templating import render_html, render_text
from vita.contexts.templating.logger import setup_templating_logger
from vita.contexts.templating.registries import load_profile
from vita.utils.timestamp import format_timestamp, now

load_dotenv()
DOCUMENTS_PATH = Path(os.getenv("VITA_DOCUMENTS_PATH", "outs/documents"))
EXPORTS_PATH = Path(os.getenv("VITA_EXPORTS_PATH", "outs/exports"))
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
PROFILE_PATH = os.getenv("VITA_PROFILE_PATH")

BLOCK_TYPES = ", ".join(t.value for t in BlockType)

app = typer.Typer(
    help="Build block-based resumes: edit sections, preview, and export to PDF",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _repository(log: bool = False) -> YamlDocumentRepository:
    if log:
        setup_persistence_logger(LOGS_PATH / f"store_{now()}", DOCUMENTS_PATH)
    return YamlDocumentRepository(DOCUMENTS_PATH)


def _fail(error: Exception) -> None:
    typer.secho(f"Error: {error}\n", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _open(document_id: str, with_assist: bool = False) -> EditingSession:
    setup_editing_logger(LOGS_PATH / f"edit_{now()}", document_id)
    assist = LLMImprovementService() if with_assist else None
    try:
        return EditingSession.load(_repository(), document_id, assist=assist)
    except ResumeBuilderError as e:
        _fail(e)


def _save(session: EditingSession) -> None:
    try:
        session.save()
    except ResumeBuilderError as e:
        _fail(e)
    typer.secho(f"✓ Saved '{session.title}'", fg=typer.colors.GREEN)


def _print_order(session: EditingSession) -> None:
    for block in session.store.blocks:
        marker = "" if not block.is_empty() else "  (empty)"
        typer.echo(f"  {block.order}. {block.block_type.value}{marker}")


@app.command("new")
def new_command(
    title: Annotated[str, typer.Argument(help="Document title (also the PDF filename)")],
    template: Annotated[
        str, typer.Option("--template", "-t", help="Template id")
    ] = "classic",
):
    """
    Create a document with every block present and empty.

    Examples:\n

        $ build_resume.py new "Senior Engineer"
    """
    setup_editing_logger(LOGS_PATH / f"edit_{now()}", title)
    session = EditingSession.new(title, repository=_repository())
    session.template_id = template
    _save(session)
    typer.echo(f"  Id: {session.document_id}")


@app.command("list")
def list_command(
    relative: Annotated[
        bool, typer.Option("--relative", "-r", help="Show relative update times")
    ] = False,
):
    """List stored documents, most recently updated first."""
    try:
        summaries = _repository(log=True).list_all()
    except ResumeBuilderError as e:
        _fail(e)

    if not summaries:
        typer.secho(f"No documents in {DOCUMENTS_PATH}", fg=typer.colors.YELLOW)
        raise typer.Exit()

    typer.secho(f"\n{len(summaries)} document(s)", fg=typer.colors.BLUE, bold=True)
    for summary in summaries:
        updated = format_timestamp(summary.updated_at, relative=relative)
        typer.echo(f"  {summary.id}  {updated:<20} {summary.block_count} blocks  {summary.title}")


@app.command("show")
def show_command(
    document_id: Annotated[str, typer.Argument(help="Document id")],
):
    """Show block order and required fields still blank."""
    session = _open(document_id)
    typer.secho(f"\n{session.title}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"  Template: {session.template_id}")
    _print_order(session)

    missing = session.validate()
    if missing:
        typer.secho(f"\n{len(missing)} required field(s) blank:", fg=typer.colors.YELLOW)
        for entry in missing:
            typer.echo(f"  - {entry}")


@app.command("add-block")
def add_block_command(
    document_id: Annotated[str, typer.Argument(help="Document id")],
    block_type: Annotated[str, typer.Argument(help=f"One of: {BLOCK_TYPES}")],
):
    """Append a block with empty content."""
    session = _open(document_id)
    try:
        session.add_block(block_type)
    except ResumeBuilderError as e:
        _fail(e)
    _save(session)
    _print_order(session)


@app.command("remove-block")
def remove_block_command(
    document_id: Annotated[str, typer.Argument(help="Document id")],
    block_type: Annotated[str, typer.Argument(help=f"One of: {BLOCK_TYPES}")],
):
    """Remove a block and its content."""
    session = _open(document_id)
    try:
        session.remove_block(block_type)
    except ResumeBuilderError as e:
        _fail(e)
    _save(session)
    _print_order(session)


@app.command("move-block")
def move_block_command(
    document_id: Annotated[str, typer.Argument(help="Document id")],
    block_type: Annotated[str, typer.Argument(help=f"One of: {BLOCK_TYPES}")],
    direction: Annotated[str, typer.Argument(help="up or down")],
):
    """Swap a block with its neighbour."""
    session = _open(document_id)
    try:
        moved = session.move_block(block_type, direction)
    except ResumeBuilderError as e:
        _fail(e)

    if not moved:
        typer.secho(f"{block_type} is already at the {'top' if direction == 'up' else 'bottom'}", fg=typer.colors.YELLOW)
        raise typer.Exit()
    _save(session)
    _print_order(session)


@app.command("set-summary")
def set_summary_command(
    document_id: Annotated[str, typer.Argument(help="Document id")],
    text: Annotated[str, typer.Argument(help="Summary text")],
):
    """Replace the professional summary."""
    session = _open(document_id)
    try:
        session.editor("summary").set_text(text)
    except ResumeBuilderError as e:
        _fail(e)
    _save(session)


@app.command("add-skill")
def add_skill_command(
    document_id: Annotated[str, typer.Argument(help="Document id")],
    skills: Annotated[List[str], typer.Argument(help="Skills to append")],
):
    """Append skills (duplicates are ignored)."""
    session = _open(document_id)
    try:
        editor = session.editor("skills")
        added = [skill for skill in skills if editor.add_skill(skill)]
    except ResumeBuilderError as e:
        _fail(e)
    _save(session)
    typer.echo(f"  Added: {', '.join(added) or 'nothing new'}")


@app.command("add-item")
def add_item_command(
    document_id: Annotated[str, typer.Argument(help="Document id")],
    block_type: Annotated[str, typer.Argument(help="experience, education, project or certification")],
    fields: Annotated[
        Optional[List[str]],
        typer.Option("--set", "-s", help="Field assignment, e.g. jobTitle=Engineer (repeatable)"),
    ] = None,
):
    """
    Append an item to a list block.

    Boolean fields (current, noExpiration) accept true/false.

    Examples:\n

        $ build_resume.py add-item <id> education --set degree="BSc Physics" --set current=true
    """
    session = _open(document_id)
    try:
        editor = session.editor(block_type)
        if not isinstance(editor, ListSectionEditor):
            raise ValidationError(f"{block_type} has no items; use set-summary or add-skill")

        changes = {}
        for assignment in fields or []:
            key, sep, value = assignment.partition("=")
            if not sep:
                raise ValidationError(f"Expected field=value, got '{assignment}'")
            if value.lower() in ("true", "false"):
                value = value.lower() == "true"
            changes[key.strip()] = value
        index = editor.add_item(**changes)
    except ResumeBuilderError as e:
        _fail(e)

    _save(session)
    typer.echo(f"  {block_type}[{index}]: {editor.item_label(index)}")


@app.command("improve")
def improve_command(
    document_id: Annotated[str, typer.Argument(help="Document id")],
    block_type: Annotated[str, typer.Argument(help=f"One of: {BLOCK_TYPES}")],
    item: Annotated[
        Optional[int], typer.Option("--item", "-i", help="Item index for list blocks")
    ] = None,
    target_role: Annotated[
        Optional[str], typer.Option("--role", "-r", help="Role to tailor the text to")
    ] = None,
):
    """
    Rewrite text with the configured LLM provider (LLM_PROVIDER).

    Examples:\n

        $ build_resume.py improve <id> summary --role "Data Engineer"

        $ build_resume.py improve <id> experience --item 0
    """
    session = _open(document_id, with_assist=True)
    try:
        editor = session.editor(block_type)
        if isinstance(editor, ListSectionEditor):
            if item is None:
                raise ValidationError(f"Pass --item to choose which {block_type} entry to improve")
            result = editor.improve_with_ai(item, target_role=target_role)
        else:
            result = editor.improve_with_ai(target_role=target_role)
    except ResumeBuilderError as e:
        _fail(e)

    _save(session)
    if isinstance(result, list):
        typer.echo(f"  Added skills: {', '.join(result) or 'none'}")
    else:
        typer.echo(f"\n{result}\n")


@app.command("suggest-skills")
def suggest_skills_command(
    document_id: Annotated[str, typer.Argument(help="Document id")],
    job_description: Annotated[
        Optional[str], typer.Option("--job", "-j", help="Job description text")
    ] = None,
    job_file: Annotated[
        Optional[Path],
        typer.Option("--job-file", "-f", help="File containing the job description", exists=True, dir_okay=False),
    ] = None,
    target_role: Annotated[
        Optional[str], typer.Option("--role", "-r", help="Role to tailor the skills to")
    ] = None,
):
    """Add skills an LLM suggests for a job description."""
    if job_file is not None:
        job_description = job_file.read_text(encoding="utf-8")

    session = _open(document_id, with_assist=True)
    try:
        added = session.editor("skills").suggest_skills(job_description or "", target_role=target_role)
    except ResumeBuilderError as e:
        _fail(e)

    _save(session)
    typer.echo(f"  Added skills: {', '.join(added) or 'none'}")


@app.command("duplicate")
def duplicate_command(
    document_id: Annotated[str, typer.Argument(help="Document id")],
):
    """Copy a document under '<title> (Copy)'."""
    try:
        new_id = _repository(log=True).duplicate(document_id)
    except ResumeBuilderError as e:
        _fail(e)
    typer.secho(f"✓ Duplicated to {new_id}", fg=typer.colors.GREEN)


@app.command("delete")
def delete_command(
    document_id: Annotated[str, typer.Argument(help="Document id")],
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
):
    """Delete a stored document."""
    repository = _repository(log=True)
    try:
        title = repository.get(document_id).title
        if not yes and not typer.confirm(f"Delete '{title}'?"):
            raise typer.Exit(code=1)
        repository.delete(document_id)
    except ResumeBuilderError as e:
        _fail(e)
    typer.secho(f"✓ Deleted '{title}'", fg=typer.colors.GREEN)


@app.command("preview")
def preview_command(
    document_id: Annotated[str, typer.Argument(help="Document id")],
    html: Annotated[
        Optional[Path], typer.Option("--html", help="Write an HTML preview to this path")
    ] = None,
):
    """Print a plain-text preview, or write an HTML one."""
    session = _open(document_id)
    setup_templating_logger(LOGS_PATH / f"preview_{now()}", session.template_id)
    try:
        rendered = session.render()
    except (FileNotFoundError, ValueError) as e:
        _fail(e)
    if html is None:
        typer.echo(render_text(rendered))
        return

    html.parent.mkdir(parents=True, exist_ok=True)
    html.write_text(render_html(rendered), encoding="utf-8")
    typer.secho(f"✓ HTML preview: {html}", fg=typer.colors.GREEN)


@app.command("export")
def export_command(
    document_id: Annotated[str, typer.Argument(help="Document id")],
    output_dir: Annotated[
        Optional[Path], typer.Option("--output-dir", "-o", help="Directory for the PDF")
    ] = None,
):
    """
    Export a document to a one-page PDF named after its title.

    Examples:\n

        $ build_resume.py export <id>

        $ build_resume.py export <id> -o ~/Desktop
    """
    session = _open(document_id)
    typer.secho(f"\nExporting: {session.title}", fg=typer.colors.BLUE, bold=True)
    try:
        result = session.export_pdf(output_dir=output_dir or EXPORTS_PATH)
    except RenderError as e:
        typer.secho("✗ Export failed", fg=typer.colors.RED, bold=True)
        _fail(e)

    typer.secho("✓ Export succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  PDF: {result.pdf_path}")
    typer.echo(f"  Scale: {result.fit.scale:.0%}")


@app.command("export-profile")
def export_profile_command(
    profile_path: Annotated[
        Optional[Path],
        typer.Option("--profile", "-p", help="Profile YAML (default: VITA_PROFILE_PATH)"),
    ] = None,
    output_dir: Annotated[
        Optional[Path], typer.Option("--output-dir", "-o", help="Directory for the JSON file")
    ] = None,
):
    """Write the user profile to autofill-profile-<date>.json."""
    if profile_path is None:
        if not PROFILE_PATH:
            _fail(ValidationError("No profile given: pass --profile or set VITA_PROFILE_PATH"))
        profile_path = Path(PROFILE_PATH)
    if not profile_path.exists():
        _fail(ValidationError(f"Profile not found: {profile_path}"))

    try:
        output = export_profile_json(load_profile(profile_path), output_dir or EXPORTS_PATH)
    except (ResumeBuilderError, ValueError) as e:
        _fail(e)
    typer.secho(f"✓ Profile exported: {output}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
