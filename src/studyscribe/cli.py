"""CLI entry point for studyscribe."""

from __future__ import annotations

import json
import logging
import mimetypes
import os
import subprocess
import sys
from pathlib import Path
from typing import NoReturn

import click

from studyscribe.config import GEMINI_OPENAI_HOST, OLLAMA_DEFAULT_HOST, Config, ensure_config_file
from studyscribe.errors import StudyscribeError, UpstreamUnavailable


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _fail(exc: StudyscribeError) -> NoReturn:
    click.echo(f"Error: {exc}", err=True)
    if isinstance(exc, UpstreamUnavailable) and exc.details:
        click.echo(f"  {exc.details}", err=True)
    raise SystemExit(1)


def _open_store(config: Config):
    from studyscribe.store import JsonSessionStore

    return JsonSessionStore(config.storage.resolved_dir)


@click.group()
@click.option("--store-dir", default=None, help="Directory holding session files.")
@click.option("--backend", type=click.Choice(["openai", "ollama"]), default=None, help="Remote summarizer backend.")
@click.option("--model", default=None, help="Remote summarizer model name.")
@click.option("-v", "--verbose", is_flag=True, help="Log pipeline progress to stderr.")
@click.pass_context
def cli(
    ctx: click.Context,
    store_dir: str | None,
    backend: str | None,
    model: str | None,
    verbose: bool,
) -> None:
    """Incremental transcript summaries for live study sessions."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    config = Config.load()

    # Apply CLI overrides
    if store_dir:
        config.storage.dir = store_dir
    if backend:
        config.summarization.backend = backend
        if backend == "ollama" and config.summarization.host == GEMINI_OPENAI_HOST:
            config.summarization.host = os.environ.get("OLLAMA_HOST", OLLAMA_DEFAULT_HOST)
    if model:
        config.summarization.model = model

    ctx.obj["config"] = config


@cli.command()
@click.argument("session_id")
@click.pass_context
def new(ctx: click.Context, session_id: str) -> None:
    """Create an empty session."""
    store = _open_store(ctx.obj["config"])
    try:
        store.create(session_id)
    except StudyscribeError as exc:
        _fail(exc)
    click.echo(f"Session {session_id} ready in {store.directory}")


@cli.command()
@click.argument("session_id")
@click.argument("file", type=click.Path(exists=True, dir_okay=False), required=False)
@click.option("--text", default=None, help="Transcript fragment (otherwise FILE or stdin).")
@click.option("--lang", default=None, help="Language code of the fragment, e.g. en-US.")
@click.pass_context
def submit(ctx: click.Context, session_id: str, file: str | None, text: str | None, lang: str | None) -> None:
    """Append a transcript fragment to a session and print the new summary."""
    config = ctx.obj["config"]
    if text is None:
        text = Path(file).read_text() if file else sys.stdin.read()

    from studyscribe.output.markdown import format_summary
    from studyscribe.pipeline import SummaryOrchestrator
    from studyscribe.progress import Spinner

    orchestrator = SummaryOrchestrator.from_config(config, _open_store(config))
    try:
        with Spinner(f"Summarizing with {config.summarization.model}"):
            result = orchestrator.submit_transcript(session_id, text, lang)
    except StudyscribeError as exc:
        _fail(exc)

    click.echo(format_summary(result.text))


@cli.command()
@click.argument("session_id")
@click.option("--format", "output_format", type=click.Choice(["markdown", "json"]), default="markdown")
@click.pass_context
def show(ctx: click.Context, session_id: str, output_format: str) -> None:
    """Show a session's summary, status and transcript."""
    config = ctx.obj["config"]

    from studyscribe.output.markdown import format_session
    from studyscribe.pipeline import SummaryOrchestrator

    orchestrator = SummaryOrchestrator.from_config(config, _open_store(config))
    try:
        view = orchestrator.get_summary(session_id)
    except StudyscribeError as exc:
        _fail(exc)

    if output_format == "json":
        click.echo(json.dumps(view.to_dict(), indent=2, ensure_ascii=False))
    else:
        click.echo(format_session(view))


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--mime-type", default=None, help="Audio MIME type (guessed from the file name if omitted).")
@click.option("--format", "output_format", type=click.Choice(["markdown", "json"]), default="markdown")
@click.pass_context
def transcribe(ctx: click.Context, file: str, mime_type: str | None, output_format: str) -> None:
    """Transcribe an audio file and summarize it in one shot."""
    config = ctx.obj["config"]
    mime_type = mime_type or mimetypes.guess_type(file)[0]

    from studyscribe.output.markdown import format_summary, format_transcript
    from studyscribe.pipeline import transcribe_and_summarize_audio
    from studyscribe.progress import Spinner

    try:
        with Spinner("Transcribing and summarizing"):
            result = transcribe_and_summarize_audio(config, Path(file).read_bytes(), mime_type)
    except StudyscribeError as exc:
        _fail(exc)

    if output_format == "json":
        click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        click.echo(format_transcript(result.transcript))
        click.echo(format_summary(result.summary))


@cli.command("config")
def config_cmd() -> None:
    """Open the configuration file in your editor."""
    path = ensure_config_file()
    editor = os.environ.get("EDITOR", "nano")
    click.echo(f"Opening {path} with {editor}...")
    subprocess.run([editor, str(path)])
