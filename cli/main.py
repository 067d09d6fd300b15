"""CLI entry point for versecraft.

Usage:
  versecraft generate -i "David and Goliath"     generate a full bundle
  versecraft enhance -i "Ruth's loyalty"          enhance a story idea
  versecraft regenerate ID titles -m "shorter"    regenerate one artifact
  versecraft history | show ID | delete ID        browse saved creations
  versecraft backup FILE                          copy the history database
  versecraft key set|remove|status                manage the API key
"""

import asyncio
import logging
import os
import sys

# Ensure UTF-8 output on Windows to avoid encoding errors with Rich
if sys.platform == "win32":
    os.environ.setdefault("PYTHONIOENCODING", "utf-8")

import click

from cli.theme import (
    get_console,
    app_header,
    command_panel,
    success_panel,
    notice_panel,
    bundle_panels,
    history_table,
)
from config.exceptions import VerseCraftError
from config.logging_config import setup_logging
from config.settings import Settings
from models.database import HistoryStore
from models.enums import ArtifactKind, CreationType
from workflow.callbacks import RichStatusCallback
from workflow.controller import GenerationController, resolve_api_key
from workflow.state import ActionResult

console = get_console()

_KIND_CHOICES = [kind.value for kind in ArtifactKind]
_TYPE_CHOICES = [t.value for t in CreationType]


def _init_logging(verbose: bool):
    """Configure logging based on verbosity. Console output stays quiet unless verbose."""
    level = logging.DEBUG if verbose else logging.INFO
    settings = Settings()
    setup_logging(level=level, log_dir=settings.log_dir, console_enabled=verbose)


def _open_store(settings: Settings) -> HistoryStore:
    try:
        return HistoryStore(settings.history_db_path)
    except VerseCraftError as e:
        console.print(f"[error]{e}[/]")
        sys.exit(1)


def _build_controller(status: RichStatusCallback) -> GenerationController:
    settings = Settings()
    store = _open_store(settings)
    return GenerationController(store, settings=settings, on_status=status)


def _run_action(controller_factory, action) -> tuple[GenerationController, ActionResult]:
    """Run one controller action under a spinner and print its notices."""
    status = RichStatusCallback(console=console)
    controller = controller_factory(status)
    try:
        with status:
            result = asyncio.run(action(controller))
    except KeyboardInterrupt:
        console.print("\n[warning]Interrupted[/]")
        sys.exit(130)

    if result.warning:
        console.print(notice_panel(result.warning, "warning"))
    if result.error:
        console.print(notice_panel(result.error, "error"))
    if not result.ok:
        sys.exit(1)
    return controller, result


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """versecraft: AI-assisted biblical stories and prayers for video channels.

    \b
    Generate the narrative plus its publishing metadata (titles,
    description, tags, call to action, thumbnail prompt) in one go,
    then regenerate any single piece with a modification instruction.
    """
    _init_logging(verbose)


# ---------------------------------------------------------------------------
# generate command
# ---------------------------------------------------------------------------

@cli.command()
@click.option("--idea", "-i", required=True, help="Main idea for the story or prayer")
@click.option("--type", "-t", "creation_type", default=CreationType.STORY.value,
              type=click.Choice(_TYPE_CHOICES), help="Creation type (default: story)")
@click.option("--chars", "-c", default=None, type=int, help="Target character count")
@click.option("--language", "-l", default=None, help="Output language (default: pt-BR)")
@click.option("--name", "-n", default="", help="Name shown in the history")
@click.option("--title-hint", default="", help="Extra guidance for titles")
@click.option("--description-hint", default="", help="Extra guidance for the description")
@click.option("--thumbnail-hint", default="", help="Extra guidance for the thumbnail prompt")
@click.option("--enhance", "-e", is_flag=True, help="Enhance the idea before generating (stories only)")
def generate(idea, creation_type, chars, language, name, title_hint, description_hint, thumbnail_hint, enhance):
    """Generate content, titles, description, tags, CTA and thumbnail prompt.

    Examples:
      versecraft generate -i "The prodigal son returns" -c 2000
      versecraft generate -i "Gratitude in hard times" -t prayer -l en
    """
    console.print(app_header())
    console.print()

    def factory(status):
        controller = _build_controller(status)
        changes = dict(
            name=name,
            creation_type=CreationType(creation_type),
            main_prompt=idea,
            title_prompt=title_hint,
            description_prompt=description_hint,
            thumbnail_prompt=thumbnail_hint,
        )
        if chars is not None:
            changes["character_count"] = chars
        if language:
            changes["language"] = language
        controller.update_inputs(**changes)
        inputs = controller.state.inputs
        console.print(command_panel("Generate all", {
            "Type": inputs.creation_type.value,
            "Idea": inputs.main_prompt,
            "Target": f"{inputs.character_count} chars",
            "Language": inputs.language,
        }))
        console.print()
        return controller

    async def action(controller: GenerationController) -> ActionResult:
        if enhance:
            enhanced = await controller.enhance_idea()
            if not enhanced.ok:
                return enhanced
        return await controller.generate_all()

    controller, result = _run_action(factory, action)
    for panel in bundle_panels(result.value):
        console.print(panel)
    console.print(f"\nSaved as [creation.id]{controller.state.current_creation_id}[/]")


# ---------------------------------------------------------------------------
# enhance command
# ---------------------------------------------------------------------------

@cli.command()
@click.option("--idea", "-i", required=True, help="Idea to enhance")
@click.option("--language", "-l", default=None, help="Output language (default: pt-BR)")
def enhance(idea, language):
    """Turn a short story idea into a richer premise."""
    console.print(app_header())
    console.print()

    def factory(status):
        controller = _build_controller(status)
        controller.update_inputs(main_prompt=idea, creation_type=CreationType.STORY)
        if language:
            controller.update_inputs(language=language)
        return controller

    _, result = _run_action(factory, lambda controller: controller.enhance_idea())
    console.print(success_panel("Enhanced idea", result.value))


# ---------------------------------------------------------------------------
# regenerate command
# ---------------------------------------------------------------------------

@cli.command()
@click.argument("creation_id")
@click.argument("field", type=click.Choice(_KIND_CHOICES))
@click.option("--modification", "-m", default="", help="How the new version should differ")
def regenerate(creation_id, field, modification):
    """Regenerate one artifact of a saved creation.

    Examples:
      versecraft regenerate creation-1a2b3c4d5e6f titles -m "more dramatic"
      versecraft regenerate creation-1a2b3c4d5e6f content
    """
    console.print(app_header())
    console.print()
    kind = ArtifactKind(field)

    def factory(status):
        controller = _build_controller(status)
        if controller.load_creation(creation_id) is None:
            console.print(f"[error]No creation with ID {creation_id}[/]")
            sys.exit(1)
        console.print(command_panel("Regenerate", {
            "Creation": creation_id,
            "Field": kind.value,
            "Modification": modification or "(none)",
        }))
        console.print()
        return controller

    _, result = _run_action(factory, lambda controller: controller.regenerate(kind, modification))
    value = result.value
    body = "\n".join(f"  • {v}" for v in value) if isinstance(value, list) else value
    console.print(success_panel(kind.value.capitalize(), body))


# ---------------------------------------------------------------------------
# history / show / delete
# ---------------------------------------------------------------------------

@cli.command()
def history():
    """List saved creations, newest first."""
    settings = Settings()
    store = _open_store(settings)

    console.print(app_header())
    console.print()

    creations = store.list_creations()
    if not creations:
        console.print("[warning]No saved creations yet. Use [info]versecraft generate[/] to create one.[/]")
        return
    console.print(history_table(creations))


@cli.command()
@click.argument("creation_id")
def show(creation_id):
    """Show every artifact of a saved creation."""
    settings = Settings()
    store = _open_store(settings)

    creation = store.get(creation_id)
    if creation is None:
        console.print(f"[error]No creation with ID {creation_id}[/]")
        sys.exit(1)

    console.print(app_header(creation.params.name or creation.id))
    console.print()
    params = creation.params
    console.print(command_panel("Parameters", {
        "Type": params.creation_type.value,
        "Idea": params.main_prompt,
        "Target": f"{params.character_count} chars",
        "Language": params.language,
    }))
    for panel in bundle_panels(creation.bundle):
        console.print(panel)


@cli.command()
@click.argument("creation_id")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
def delete(creation_id, force):
    """Delete a saved creation."""
    settings = Settings()
    store = _open_store(settings)

    if store.get(creation_id) is None:
        console.print(f"[error]No creation with ID {creation_id}[/]")
        sys.exit(1)
    if not force and not click.confirm(f"Delete {creation_id}?", default=False):
        console.print("[muted]Cancelled[/]")
        return

    store.delete(creation_id)
    console.print(f"[success]Deleted {creation_id}[/]")


@cli.command()
@click.argument("target", type=click.Path(dir_okay=False))
def backup(target):
    """Copy the history database to TARGET."""
    settings = Settings()
    store = _open_store(settings)
    try:
        path = store.backup(target)
    except OSError as e:
        console.print(f"[error]Backup failed: {e}[/]")
        sys.exit(1)
    console.print(f"[success]History backed up to {path}[/]")


# ---------------------------------------------------------------------------
# key commands
# ---------------------------------------------------------------------------

@cli.group()
def key():
    """Manage the API key saved in the local store."""


@key.command(name="set")
@click.option("--api-key", prompt=True, hide_input=True, help="Anthropic API key")
def key_set(api_key):
    """Save the API key locally."""
    settings = Settings()
    store = _open_store(settings)
    try:
        store.save_api_key(api_key)
    except VerseCraftError as e:
        console.print(f"[error]{e.message}[/]")
        sys.exit(1)
    console.print("[success]API key saved[/]")


@key.command(name="remove")
def key_remove():
    """Remove the locally saved API key."""
    settings = Settings()
    _open_store(settings).delete_api_key()
    console.print("[success]API key removed[/]")


@key.command(name="status")
def key_status():
    """Show where the API key comes from."""
    settings = Settings()
    store = _open_store(settings)
    if settings.anthropic_api_key:
        console.print("[success]API key configured via environment[/]")
    elif resolve_api_key(settings, store):
        console.print("[success]API key saved in local store[/]")
    else:
        console.print("[warning]No API key configured. Run [info]versecraft key set[/].[/]")


def main():
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
