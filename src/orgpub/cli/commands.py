"""CLI command implementations"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Annotated, Optional

import typer

from orgpub.config import Settings, load_config
from orgpub.core.lexer import tokenize
from orgpub.core.metadata import extract_metadata
from orgpub.core.pipeline import parse_org, render_file
from orgpub.logging import configure_logging, get_logger


logger = get_logger("cli")

LogFileOption = Annotated[Optional[Path], typer.Option("--log-file", help="Also write log records to this file")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None, log_file: Path = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    try:
        configure_logging(verbose=settings.verbose, log_file=log_file)
    except OSError as e:
        _fail(f"Cannot open log file {log_file}", e)
    return settings


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8-sig")
    except OSError as e:
        _fail(f"Cannot read {path}", e)


def render_cmd(
    path: Annotated[Path, typer.Argument(help="Org file to render")],
    out: Annotated[Optional[Path], typer.Option("--out", "-o", help="Write HTML here instead of stdout")] = None,
    metadata_out: Annotated[Optional[Path], typer.Option("--metadata-out", help="Write metadata JSON here")] = None,
    sanitize: Annotated[Optional[bool], typer.Option("--sanitize/--no-sanitize", help="Sanitize rendered HTML")] = None,
    highlight: Annotated[Optional[bool], typer.Option("--highlight/--no-highlight", help="Highlight source blocks")] = None,
    toc_depth: Annotated[Optional[int], typer.Option("--toc-depth", help="Deepest heading level in the TOC")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    log_file: LogFileOption = None,
    ):
    """Render one Org file to an HTML fragment."""
    settings = _settings(overrides={
        "sanitize": sanitize, "code_highlight": highlight,
        "toc_depth": toc_depth, "verbose": verbose or None,
    }, log_file=log_file)

    try:
        result = render_file(
            path, settings.render_options(),
            settings.words_per_minute, settings.excerpt_length,
        )
    except OSError as e:
        _fail(f"Cannot read {path}", e)
    except Exception as e:
        _fail(f"Render failed for {path}", e)

    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(result.html, encoding="utf-8")
        logger.info("%s -> %s", path, out)
    else:
        typer.echo(result.html, nl=False)

    if metadata_out:
        metadata_out.parent.mkdir(parents=True, exist_ok=True)
        metadata_out.write_text(
            json.dumps(result.metadata.to_json_dict(), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )


def inspect_cmd(
    path: Annotated[Path, typer.Argument(help="Org file to inspect")],
    tokens: Annotated[bool, typer.Option("--tokens", help="Print the body token stream instead of the AST")] = False,
    log_file: LogFileOption = None,
    ):
    """Print the parsed metadata and AST (or body tokens) as JSON."""
    settings = _settings(log_file=log_file)
    text = _read(path)

    if tokens:
        # Front-matter is not lexed; token line numbers still index the file.
        lines = text.split("\n")
        _, start = extract_metadata(lines)
        payload = [
            {**asdict(t), "kind": t.kind.value}
            for t in tokenize("\n".join(lines[start:]), line_offset=start)
        ]
    else:
        document = parse_org(text, settings.words_per_minute, settings.excerpt_length)
        payload = {
            "metadata": document.metadata.to_json_dict(),
            "children": [c.model_dump(mode="json", exclude_defaults=True) for c in document.children],
        }
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
