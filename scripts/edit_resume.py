#!/usr/bin/env python3
"""
Resume Editor CLI

Edits the locally mirrored resume, previews it, exports it to PDF and publishes
it to the remote store. Every edit is written back to local storage immediately.

Commands:
    show     - Print the rendered resume outline and save status
    form     - List the editable fields of a tab with their paths
    set      - Set a field by path
    add      - Append an entry to a list by path
    remove   - Remove an entry from a list by path and index
    skill    - Add, remove or clear skills
    bullet   - Add or remove experience bullets
    tech     - Add or remove project tech tags
    theme    - Switch theme (classic, modern) and dark mode
    preview  - Write the rendered HTML surface to a file
    export   - Export the resume to a paginated A4 PDF
    publish  - Save the resume to the remote store and print its public link
    open     - Load a published resume from a public link
    import   - Replace the resume with a YAML or JSON file
    reset    - Replace the resume with the starter resume

Examples:\n

    edit_resume.py set profile.name "Ada Lovelace"

    edit_resume.py add experience

    edit_resume.py set experience.1.bullets.0 "Designed the first algorithm"

    edit_resume.py skill add "Python"

    edit_resume.py theme modern --dark

    edit_resume.py export --output-dir out/

    edit_resume.py open https://resumes.example.com/p/abc123
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf
from typing_extensions import Annotated

from resume_maker.contexts.editing import Document, DocumentFormatError, DocumentPathError, read
from resume_maker.contexts.editing.form import SECTION_FACTORIES, Tab, fields_for_tab
from resume_maker.contexts.editing.session import EditorSession
from resume_maker.contexts.persistence import (
    LocalStore,
    RemoteSaveError,
    RemoteStore,
    SaveInProgressError,
)
from resume_maker.contexts.rendering import ExportError
from resume_maker.contexts.templating import TemplateRenderError, UnknownThemeError
from resume_maker.utils.logger import configure_console

load_dotenv()
PROJECT_ROOT = Path(os.getenv("PROJECT_ROOT", "."))

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}

# Errors reported to the user as a red message and exit code 1
USER_ERRORS = (
    DocumentPathError,
    DocumentFormatError,
    UnknownThemeError,
    TemplateRenderError,
    RemoteSaveError,
    SaveInProgressError,
    ExportError,
)


def display_path(path: Path) -> str:
    """Return path relative to PROJECT_ROOT for cleaner display."""
    try:
        return str(Path(path).resolve().relative_to(PROJECT_ROOT.resolve()))
    except ValueError:
        return str(path)


def fail(message: str) -> None:
    typer.secho(f"Error: {message}\n", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


app = typer.Typer(
    help="Edit, preview, export and publish your resume",
    add_completion=False,
    invoke_without_command=True,
)
skill_app = typer.Typer(help="Add, remove or clear skills", add_completion=False)
bullet_app = typer.Typer(help="Add or remove experience bullets", add_completion=False)
tech_app = typer.Typer(help="Add or remove project tech tags", add_completion=False)
app.add_typer(skill_app, name="skill")
app.add_typer(bullet_app, name="bullet")
app.add_typer(tech_app, name="tech")


@app.callback()
def main(
    ctx: typer.Context,
    store: Annotated[
        Optional[Path],
        typer.Option(
            "--store",
            envvar="RESUME_MAKER_STORE_PATH",
            help="Local storage file (default: ~/.resume_maker/local_storage.json)",
        ),
    ] = None,
    api_url: Annotated[
        Optional[str],
        typer.Option(
            "--api-url",
            envvar="RESUME_MAKER_API_URL",
            help="Origin of the resume publish API",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show info-level log messages"),
    ] = False,
):
    """Show help by default when no command is provided."""
    configure_console("INFO" if verbose else "WARNING")
    ctx.obj = {"store": store, "api_url": api_url}

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def open_session(ctx: typer.Context, location: Optional[str] = None) -> EditorSession:
    """Start a session from the options given to the root command."""
    options = ctx.find_root().obj or {}
    remote_store = RemoteStore(base_url=options.get("api_url"))
    ctx.call_on_close(remote_store.close)
    return EditorSession.start(
        LocalStore(options.get("store")), remote_store=remote_store, location=location
    )


def echo_done(message: str) -> None:
    typer.secho(f"✓ {message}", fg=typer.colors.GREEN)


@app.command("show")
def show_command(ctx: typer.Context):
    """Print the rendered resume outline and the remote save status."""
    session = open_session(ctx)
    meta = session.document.meta

    typer.secho(
        f"\nTheme: {meta.theme.value}{' (dark)' if meta.dark else ''}",
        fg=typer.colors.BLUE,
        bold=True,
    )
    typer.echo("")
    typer.echo(session.render().outline())
    typer.echo("")

    status = session.save_status
    typer.echo(f"Save status: {status.state.value}")
    link = session.public_link()
    if link:
        typer.echo(f"Public link: {link}")


@app.command("form")
def form_command(
    ctx: typer.Context,
    tab: Annotated[
        Tab,
        typer.Argument(help="Editor tab (profile, experience, projects)"),
    ] = Tab.PROFILE,
):
    """
    List the editable fields of a tab with the paths used by 'set'.

    Examples:\n

        $ edit_resume.py form experience
    """
    session = open_session(ctx)
    session.select_tab(tab)

    bindings = fields_for_tab(session.document, session.active_tab)
    if not bindings:
        typer.echo(f"No editable fields on the {tab.value} tab.")
        return

    for binding in bindings:
        typer.secho(f"{str(binding.path):<32}", fg=typer.colors.CYAN, nl=False)
        typer.echo(f" {binding.label}: {binding.value}")


@app.command("set")
def set_command(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Field path (e.g., profile.name, experience.0.end)")],
    value: Annotated[str, typer.Argument(help="New value")],
):
    """
    Set a text or boolean field.

    Examples:\n

        $ edit_resume.py set profile.title "Staff Engineer"

        $ edit_resume.py set meta.dark true
    """
    session = open_session(ctx)

    try:
        new_value = value
        if isinstance(read(session.document, path), bool):
            lowered = value.strip().lower()
            if lowered not in TRUE_VALUES | FALSE_VALUES:
                fail(f"Expected true or false for {path}, got '{value}'")
            new_value = lowered in TRUE_VALUES
        session.update(path, new_value)
    except USER_ERRORS as e:
        fail(str(e))

    echo_done(f"{path} updated")


@app.command("add")
def add_command(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="List path (experience, education, projects, skills, ...)")],
    value: Annotated[
        Optional[str],
        typer.Option("--value", help="Text for a new entry in a list of strings"),
    ] = None,
):
    """
    Append an entry to a list.

    Sections (experience, education, projects) get an empty entry; lists of
    strings get --value, or an empty string.
    """
    session = open_session(ctx)

    factory = SECTION_FACTORIES.get(path)
    if factory is None:
        text = value or ""
        factory = lambda: text  # noqa: E731

    try:
        session.add_item(path, factory)
    except USER_ERRORS as e:
        fail(str(e))

    echo_done(f"Added entry to {path}")


@app.command("remove")
def remove_command(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="List path")],
    index: Annotated[int, typer.Argument(help="Zero-based index of the entry to remove")],
):
    """Remove an entry from a list."""
    session = open_session(ctx)

    try:
        session.remove_item(path, index)
    except USER_ERRORS as e:
        fail(str(e))

    echo_done(f"Removed {path}.{index}")


# Skills


@skill_app.command("add")
def skill_add_command(
    ctx: typer.Context, text: Annotated[str, typer.Argument(help="Skill to add")]
):
    """Add a skill (surrounding whitespace is trimmed; blank input is ignored)."""
    session = open_session(ctx)
    if session.add_skill(text):
        echo_done(f"Added skill '{text.strip()}'")
    else:
        typer.secho("Nothing to add.", fg=typer.colors.YELLOW)


@skill_app.command("remove")
def skill_remove_command(
    ctx: typer.Context, index: Annotated[int, typer.Argument(help="Zero-based skill index")]
):
    """Remove a skill by index."""
    session = open_session(ctx)
    try:
        session.remove_skill(index)
    except USER_ERRORS as e:
        fail(str(e))
    echo_done(f"Removed skill {index}")


@skill_app.command("clear")
def skill_clear_command(ctx: typer.Context):
    """Remove all skills."""
    session = open_session(ctx)
    session.clear_skills()
    echo_done("Cleared skills")


# Bullets


@bullet_app.command("add")
def bullet_add_command(
    ctx: typer.Context,
    experience_index: Annotated[int, typer.Argument(help="Zero-based experience index")],
):
    """Add an empty bullet to an experience entry."""
    session = open_session(ctx)
    try:
        session.add_bullet(experience_index)
    except USER_ERRORS as e:
        fail(str(e))
    bullets = session.document.experience[experience_index].bullets
    echo_done(f"Added bullet experience.{experience_index}.bullets.{len(bullets) - 1}")


@bullet_app.command("remove")
def bullet_remove_command(
    ctx: typer.Context,
    experience_index: Annotated[int, typer.Argument(help="Zero-based experience index")],
    bullet_index: Annotated[int, typer.Argument(help="Zero-based bullet index")],
):
    """Remove a bullet from an experience entry."""
    session = open_session(ctx)
    try:
        session.remove_bullet(experience_index, bullet_index)
    except USER_ERRORS as e:
        fail(str(e))
    echo_done(f"Removed bullet {bullet_index} of experience {experience_index}")


# Tech tags


@tech_app.command("add")
def tech_add_command(
    ctx: typer.Context,
    project_index: Annotated[int, typer.Argument(help="Zero-based project index")],
    text: Annotated[str, typer.Argument(help="Tech tag to add")],
):
    """Add a tech tag to a project (trimmed; blank input is ignored)."""
    session = open_session(ctx)
    try:
        added = session.add_tech(project_index, text)
    except USER_ERRORS as e:
        fail(str(e))
    if added:
        echo_done(f"Added '{text.strip()}' to project {project_index}")
    else:
        typer.secho("Nothing to add.", fg=typer.colors.YELLOW)


@tech_app.command("remove")
def tech_remove_command(
    ctx: typer.Context,
    project_index: Annotated[int, typer.Argument(help="Zero-based project index")],
    tech_index: Annotated[int, typer.Argument(help="Zero-based tag index")],
):
    """Remove a tech tag from a project."""
    session = open_session(ctx)
    try:
        session.remove_tech(project_index, tech_index)
    except USER_ERRORS as e:
        fail(str(e))
    echo_done(f"Removed tag {tech_index} of project {project_index}")


# Presentation


@app.command("theme")
def theme_command(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Theme name (classic, modern)")],
    dark: Annotated[
        Optional[bool],
        typer.Option("--dark/--light", help="Switch dark mode on or off"),
    ] = None,
):
    """Switch the resume theme and, optionally, dark mode."""
    session = open_session(ctx)
    try:
        session.set_theme(name)
        if dark is not None:
            session.set_dark(dark)
    except USER_ERRORS as e:
        fail(str(e))

    meta = session.document.meta
    echo_done(f"Theme set to {meta.theme.value}{' (dark)' if meta.dark else ''}")


@app.command("preview")
def preview_command(
    ctx: typer.Context,
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="HTML file to write the surface to"),
    ] = Path("resume_preview.html"),
):
    """Write the rendered resume surface to an HTML file."""
    session = open_session(ctx)
    session.select_tab(Tab.PREVIEW)

    try:
        surface = session.surface()
    except USER_ERRORS as e:
        fail(str(e))

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(surface.html, encoding="utf-8")
    echo_done(f"Preview written to {display_path(output)}")


@app.command("export")
def export_command(
    ctx: typer.Context,
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Directory for the PDF (default: dated results dir)"),
    ] = None,
    scale: Annotated[
        float,
        typer.Option("--scale", help="Raster scale (device pixels per CSS pixel)", min=1, max=4),
    ] = 2,
):
    """
    Export the resume to a paginated A4 PDF.

    Examples:\n

        $ edit_resume.py export

        $ edit_resume.py export --output-dir out/ --scale 3
    """
    session = open_session(ctx)

    typer.secho(
        f"\nExporting: {session.document.profile.name or 'unnamed resume'}",
        fg=typer.colors.BLUE,
        bold=True,
    )

    try:
        result = session.export(output_dir=output_dir, scale=scale)
    except USER_ERRORS as e:
        fail(str(e))

    typer.secho("✓ Export succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Pages: {result.page_count}")
    typer.echo(f"  PDF: {display_path(result.pdf_path)}")
    typer.echo("")


@app.command("publish")
def publish_command(ctx: typer.Context):
    """Save the resume to the remote store and print its public link."""
    session = open_session(ctx)
    updating = session.save_status.id is not None

    try:
        saved = session.publish()
    except USER_ERRORS as e:
        fail(str(e))

    echo_done("Updated published resume" if updating else "Published resume")
    typer.echo(f"  Public link: {session.remote_store.public_link(saved.slug)}")


@app.command("open")
def open_command(
    ctx: typer.Context,
    location: Annotated[str, typer.Argument(help="Public link or path (/p/{slug})")],
):
    """Load a published resume into local storage."""
    session = open_session(ctx, location=location)

    if session.active_tab is not Tab.PREVIEW:
        fail(f"Could not load a public resume from '{location}'")

    echo_done(f"Loaded {session.document.profile.name or 'resume'} from {session.public_link()}")


@app.command("import")
def import_command(
    ctx: typer.Context,
    file: Annotated[
        Path,
        typer.Argument(help="YAML or JSON resume file", exists=True, dir_okay=False),
    ],
):
    """Replace the resume with the contents of a YAML or JSON file."""
    session = open_session(ctx)

    try:
        data = OmegaConf.to_container(OmegaConf.load(file), resolve=True)
        session.load_document(Document.from_dict(data))
    except USER_ERRORS as e:
        fail(str(e))
    except Exception as e:
        fail(f"Could not read {display_path(file)}: {e}")

    echo_done(f"Imported {display_path(file)}")


@app.command("reset")
def reset_command(
    ctx: typer.Context,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
):
    """Replace the resume with the starter resume."""
    if not yes and not typer.confirm("Discard the current resume?", default=False):
        raise typer.Exit(code=1)

    session = open_session(ctx)
    session.reset()
    echo_done("Resume reset to the starter resume")


if __name__ == "__main__":
    app()
