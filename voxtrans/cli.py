"""
Command-line interface for VoxTrans.

Provides commands for:
- Translating a phrase (offline phrasebook first, MyMemory fallback)
- Listing the language catalog
- Inspecting the phrasebook tables
- Showing the active configuration

Usage:
    voxtrans translate "bom dia" --source pt-BR --target en-US
    voxtrans translate "onde fica o museu?" --offline
    voxtrans languages
    voxtrans phrases --source pt-BR --target en-US
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from voxtrans import __version__
from voxtrans.config import APP_NAME, Settings
from voxtrans.connectivity import ConnectivityObserver
from voxtrans.languages import get_language, list_languages
from voxtrans.models import FailureReason, TranslationResult
from voxtrans.pipeline import create_orchestrator
from voxtrans.session import TranslationSession
from voxtrans.translate.dictionary import get_default_phrasebook, load_phrasebook_csv

app = typer.Typer(
    name="voxtrans",
    help="VoxTrans: offline-first phrase translation with an online fallback",
    add_completion=False,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"{APP_NAME} v{__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )


def _load_settings() -> Settings:
    try:
        return Settings.from_env()
    except ValueError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1)


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """VoxTrans: speak or type a phrase, get a translation."""
    pass


@app.command()
def translate(
    text: str = typer.Argument(..., help="Phrase to translate"),
    source_lang: Optional[str] = typer.Option(
        None, "--source", "-s",
        help="Source language tag (default from VOXTRANS_DEFAULT_SOURCE)",
    ),
    target_lang: Optional[str] = typer.Option(
        None, "--target", "-l",
        help="Target language tag (default from VOXTRANS_DEFAULT_TARGET)",
    ),
    phrasebook_file: Optional[Path] = typer.Option(
        None, "--phrasebook", "-p",
        help="Extra phrasebook CSV (source_lang,target_lang,source,target)",
    ),
    offline: bool = typer.Option(
        False, "--offline",
        help="Behave as if the network were unreachable",
    ),
    no_online: bool = typer.Option(
        False, "--no-online",
        help="Never consult the online service",
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout",
        help="Give up on the online service after this many seconds",
    ),
    copy: bool = typer.Option(
        False, "--copy", "-c",
        help="Copy the translation to the clipboard",
    ),
    speak: bool = typer.Option(
        False, "--speak",
        help="Read the translation aloud",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Debug logging and tracebacks",
    ),
):
    """Translate a phrase."""
    _configure_logging(verbose)
    settings = _load_settings()
    if no_online:
        settings.online_fallback = False

    source_lang = source_lang or settings.default_source
    target_lang = target_lang or settings.default_target

    dictionary = get_default_phrasebook()
    if phrasebook_file:
        if not phrasebook_file.exists():
            console.print(f"[red]Error:[/] Phrasebook not found: {escape(str(phrasebook_file))}")
            raise typer.Exit(1)
        extra = load_phrasebook_csv(phrasebook_file)
        dictionary = dictionary.merge(extra)
        console.print(f"[dim]Loaded {len(extra)} phrases from {escape(str(phrasebook_file))}[/]")

    connectivity = ConnectivityObserver(initial=not (offline or settings.start_offline))
    orchestrator = create_orchestrator(
        settings=settings,
        dictionary=dictionary,
        connectivity=connectivity,
        timeout=timeout,
    )

    playback = clipboard = None
    try:
        if speak:
            from voxtrans.capabilities import Pyttsx3Playback
            playback = Pyttsx3Playback()
        if copy:
            from voxtrans.capabilities import PyperclipClipboard
            clipboard = PyperclipClipboard()
    except ImportError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1)

    session = TranslationSession(
        orchestrator, source_lang, target_lang,
        playback=playback, clipboard=clipboard,
    )

    try:
        outcome = asyncio.run(session.translate(text))
    except Exception as e:
        if verbose:
            console.print_exception()
        else:
            console.print(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1)

    if isinstance(outcome, TranslationResult):
        console.print(f"[green]Translation:[/] {escape(outcome.translated_text)}")
        console.print(f"[dim]{outcome.method.badge}[/]")
        if copy and session.copy():
            console.print("[dim]Copied to clipboard[/]")
        if speak and session.speak():
            playback.wait()
        return

    if outcome.reason is FailureReason.EMPTY_INPUT:
        return
    if outcome.reason is FailureReason.OFFLINE_AND_UNREACHABLE:
        console.print(f"[yellow]{escape(outcome.message)}[/]")
    else:
        console.print(f"[red]{escape(outcome.message)}[/]")
    if verbose and outcome.detail:
        console.print(f"[dim]{escape(outcome.detail)}[/]")
    raise typer.Exit(1)


@app.command()
def languages():
    """List the supported languages in display order."""
    table = Table(title="Supported Languages")
    table.add_column("Code", style="cyan")
    table.add_column("Language")
    table.add_column("Flag")

    for entry in list_languages():
        table.add_row(entry.code, entry.name, entry.flag)

    console.print(table)


@app.command()
def phrases(
    source_lang: Optional[str] = typer.Option(
        None, "--source", "-s",
        help="Only show tables for this source language",
    ),
    target_lang: Optional[str] = typer.Option(
        None, "--target", "-l",
        help="Only show tables for this target language",
    ),
    phrasebook_file: Optional[Path] = typer.Option(
        None, "--phrasebook", "-p",
        help="Extra phrasebook CSV to include",
    ),
):
    """Show the offline phrasebook tables and their sizes."""
    dictionary = get_default_phrasebook()
    if phrasebook_file:
        if not phrasebook_file.exists():
            console.print(f"[red]Error:[/] Phrasebook not found: {escape(str(phrasebook_file))}")
            raise typer.Exit(1)
        dictionary = dictionary.merge(load_phrasebook_csv(phrasebook_file))

    table = Table(title="Offline Phrasebook")
    table.add_column("Source", style="cyan")
    table.add_column("Target", style="cyan")
    table.add_column("Phrases", justify="right")

    for src, tgt in dictionary.pairs():
        if source_lang and src.split("-")[0] != source_lang.split("-")[0].lower():
            continue
        if target_lang and tgt.split("-")[0] != target_lang.split("-")[0].lower():
            continue
        table.add_row(escape(src), escape(tgt), str(dictionary.table_size(src, tgt)))

    console.print(table)
    console.print(f"[dim]{len(dictionary)} phrases total[/]")


@app.command()
def info():
    """Show version and active configuration."""
    settings = _load_settings()
    console.print(f"[bold]{APP_NAME} v{__version__}[/]\n")

    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in settings.to_dict().items():
        table.add_row(key, escape(str(value)))
    console.print(table)

    for label, code in (("Source", settings.default_source), ("Target", settings.default_target)):
        entry = get_language(code)
        if entry is None:
            console.print(f"[yellow]⚠ {label} language {escape(repr(code))} is not in the catalog[/]")
        else:
            console.print(f"{label}: {entry.label} ({entry.code})")


if __name__ == "__main__":
    app()
