"""CLI entry point for srtcorrect."""

import logging
from pathlib import Path

import click

from .analyze import PROVIDERS, SubtitleAnalyzer
from .config import API_KEY_NAMES, Config
from .credentials import DotenvCredentialStore
from .errors import SrtCorrectError
from .models import PotentialError
from .review import run_analysis
from .session import CorrectionSession
from .srt import read_srt, srt_time_to_seconds, write_srt


def _credentials(config: Config, provider: str) -> DotenvCredentialStore:
    return DotenvCredentialStore(
        config.credentials_path,
        API_KEY_NAMES[provider],
        fallback=config.api_key(provider),
    )


def _analyze(
    config: Config,
    input_path: str,
    llm: str,
    model: str | None,
    language: str | None,
) -> CorrectionSession:
    """Load a file and run one analysis pass, echoing progress."""
    try:
        raw = read_srt(input_path)
    except OSError as e:
        raise click.ClickException(f"Failed to read the SRT file: {e}")

    session = CorrectionSession()
    analyzer = SubtitleAnalyzer(
        provider=llm,
        model=model or config.model(llm),
        base_url=config.base_url(llm),
        language=language or config.language,
    )
    credentials = _credentials(config, llm) if analyzer.requires_credential else None

    try:
        session.load_document(raw, Path(input_path).name)
        click.echo(f"Loaded {len(session.subtitles)} subtitles from {input_path}")
        click.echo(f"Analyzing ({llm}, {analyzer.model})...")
        outcome = run_analysis(session, analyzer, credentials)
    except SrtCorrectError as e:
        raise click.ClickException(str(e))

    if outcome.errors_found:
        click.secho(outcome.message, fg="yellow")
    else:
        click.secho(outcome.message, fg="green")
    return session


def _describe(session: CorrectionSession, error: PotentialError) -> None:
    entry = session.entry(error.subtitle_id)
    seconds = srt_time_to_seconds(entry.start_time)
    click.echo()
    click.secho(
        f"#{entry.id}  {entry.start_time} --> {entry.end_time}  ({seconds:.1f}s)",
        bold=True,
    )
    click.echo(entry.text)
    click.echo(f"  Word: {click.style(error.original_word, fg='red')}  ({error.reason})")
    for i, suggestion in enumerate(error.suggestions, 1):
        click.echo(f"  [{i}] {suggestion}")


def _review_error(session: CorrectionSession, error: PotentialError) -> bool:
    """Resolve one flagged error interactively. Returns False to stop."""
    session.select_error(error.id)
    _describe(session, error)

    numbers = [str(i) for i in range(1, len(error.suggestions) + 1)]
    choice = click.prompt(
        "  Apply, (e)dit, (i)gnore, (s)kip, (q)uit",
        type=click.Choice(numbers + ["e", "i", "s", "q"]),
        show_choices=False,
        default="s",
    )

    if choice in numbers:
        if not session.contains_flagged_word():
            click.echo(f"  '{error.original_word}' is no longer in the text, nothing applied")
            session.cancel_edit()
        else:
            session.apply_suggestion(error.suggestions[int(choice) - 1])
            entry = session.save_edit()
            click.echo(f"  Saved: {entry.text}")
    elif choice == "e":
        text = click.prompt("  New text", default=session.edit_buffer)
        session.update_edit_buffer(text.replace("\\n", "\n"))
        session.save_edit()
    elif choice == "i":
        session.ignore_error()
    else:
        session.cancel_edit()
        return choice != "q"
    return True


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool) -> None:
    """Find and fix spelling errors in SRT subtitles with an LLM."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


llm_option = click.option(
    "--llm",
    type=click.Choice(PROVIDERS),
    default="openai",
    help="LLM provider for analysis",
)
model_option = click.option("--model", default=None, help="Model name (default depends on --llm)")
language_option = click.option(
    "--language",
    default=None,
    help="Language code for error reasons (default: SRTCORRECT_LANGUAGE or ko)",
)


@main.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@llm_option
@model_option
@language_option
def check(input_path: str, llm: str, model: str | None, language: str | None) -> None:
    """List suspected spelling errors without changing anything."""
    config = Config.from_env()
    session = _analyze(config, input_path, llm, model, language)

    for error in session.errors.values():
        suggestions = ", ".join(error.suggestions) or "-"
        click.echo(
            f"#{error.subtitle_id}: {error.original_word} ({error.reason}) -> {suggestions}"
        )


@main.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@llm_option
@model_option
@language_option
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Output SRT file path (default: corrected_<input name>)",
)
def review(
    input_path: str,
    llm: str,
    model: str | None,
    language: str | None,
    output: str | None,
) -> None:
    """Review flagged errors one by one and export the corrected file.

    \b
    Examples:
      srtcorrect review lecture.srt
      srtcorrect review lecture.srt --llm deepseek -o fixed.srt
    """
    config = Config.from_env()
    session = _analyze(config, input_path, llm, model, language)

    for error in list(session.errors.values()):
        if error.id not in session.errors:
            continue
        if not _review_error(session, error):
            break

    if output is None:
        output = str(Path(input_path).with_name(session.export_filename))

    write_srt(session.subtitles, output)
    remaining = len(session.errors)
    click.echo()
    click.echo(f"Saved to {output}")
    if remaining:
        click.echo(f"  {remaining} flagged error(s) left unresolved")
    click.secho("Done!", fg="green", bold=True)


@main.group()
def key() -> None:
    """Manage the stored API key."""


@key.command("set")
@click.option("--llm", type=click.Choice(list(API_KEY_NAMES)), default="openai")
@click.password_option("--value", prompt="API key", confirmation_prompt=False)
def key_set(llm: str, value: str) -> None:
    """Store an API key."""
    store = _credentials(Config.from_env(), llm)
    try:
        store.save(value)
    except ValueError as e:
        raise click.ClickException(str(e))
    click.echo(f"Saved {store.name} to {store.path}")


@key.command("remove")
@click.option("--llm", type=click.Choice(list(API_KEY_NAMES)), default="openai")
def key_remove(llm: str) -> None:
    """Remove a stored API key."""
    store = _credentials(Config.from_env(), llm)
    store.remove()
    click.echo(f"Removed {store.name} from {store.path}")


@key.command("status")
@click.option("--llm", type=click.Choice(list(API_KEY_NAMES)), default="openai")
def key_status(llm: str) -> None:
    """Show whether an API key is available."""
    store = _credentials(Config.from_env(), llm)
    if store.has():
        click.secho(f"{store.name} is configured", fg="green")
    else:
        click.secho(f"{store.name} is not configured", fg="red")


if __name__ == "__main__":
    main()
