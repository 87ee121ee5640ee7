"""CLI entry point for api-intent-agent."""

import logging
from pathlib import Path

import click

from api_intent_agent.config import get_settings
from api_intent_agent.errors import IntentError
from api_intent_agent.intent.prompt import build_prompt
from api_intent_agent.intent.resolver import IntentResolver
from api_intent_agent.intent.selector import CandidateSelector
from api_intent_agent.parser.openapi import SchemaIndex, load_index


def _load(schema_path: Path) -> SchemaIndex:
    try:
        return load_index(schema_path)
    except IntentError as e:
        raise click.ClickException(str(e)) from e


def _selector() -> CandidateSelector:
    settings = get_settings()
    return CandidateSelector(
        stop_words=settings.stop_words,
        min_keyword_length=settings.min_keyword_length,
        strip_punctuation=settings.strip_punctuation,
    )


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """API Intent Agent: map plain-language requests to API endpoints."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("schema_path", type=click.Path(path_type=Path))
def endpoints(schema_path: Path):
    """List every endpoint in the API description."""
    index = _load(schema_path)
    for ep in index:
        click.echo(f"{ep.method:<7} {ep.path}  {ep.description}".rstrip())
    click.echo(f"{len(index)} endpoints.")


@main.command()
@click.argument("schema_path", type=click.Path(path_type=Path))
@click.argument("text")
def candidates(schema_path: Path, text: str):
    """Show the keywords and shortlisted endpoints for TEXT, without calling the model."""
    index = _load(schema_path)
    try:
        analyzed = _selector().select(text, index)
    except IntentError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Keywords: {', '.join(sorted(analyzed.keywords)) or '(none)'}")
    for ep in analyzed.candidates:
        click.echo(f"  {ep.method:<7} {ep.path}")
    click.echo(f"{len(analyzed.candidates)} candidates.")


@main.command()
@click.argument("schema_path", type=click.Path(path_type=Path))
@click.argument("text")
def prompt(schema_path: Path, text: str):
    """Print the prompt that would be sent to the model for TEXT."""
    index = _load(schema_path)
    try:
        analyzed = _selector().select(text, index)
    except IntentError as e:
        raise click.ClickException(str(e)) from e
    click.echo(build_prompt(text, analyzed))


@main.command()
@click.argument("schema_path", type=click.Path(path_type=Path))
@click.argument("text")
@click.option("--model", default=None, help="LLM model to use.")
@click.option("--max-tokens", type=int, default=None, help="Upper bound on reply length.")
@click.option("--timeout", type=float, default=None, help="Seconds to wait for the model.")
@click.option("--api-key", default=None, envvar="API_INTENT_API_KEY", help="Completion service API key.")
def infer(schema_path: Path, text: str, model: str | None, max_tokens: int | None,
          timeout: float | None, api_key: str | None):
    """Ask the model which endpoint best serves TEXT and print the match as JSON."""
    try:
        resolver = IntentResolver.from_schema_file(
            schema_path,
            api_key=api_key,
            model=model,
            max_tokens=max_tokens,
            timeout=timeout,
        )
        match = resolver.infer_intent(text)
    except IntentError as e:
        raise click.ClickException(str(e)) from e
    click.echo(match.model_dump_json(indent=2))
