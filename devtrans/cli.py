"""
Command-line interface for devtrans.

Provides commands for:
- Translating snippets (inline text or files)
- Detecting the language of a snippet
- Inspecting the dictionary
- Running the structural smoke scenarios
- System information

Usage:
    devtrans translate --text 'const msg = "fetch user";' --language js
    devtrans translate --input app.py --output app.es.py
    devtrans dictionary --search fetch
    devtrans validate
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

import typer
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from devtrans import __version__
from devtrans.config import APP_NAME, dictionary_path, log_level
from devtrans.detect import SUPPORTED_LANGUAGES, resolve_language
from devtrans.dictionary import (
    DictionaryCache,
    EmptyTermSource,
    StaticTermSource,
    lookup,
    source_from_path,
)
from devtrans.errors import DevTransError
from devtrans.models import TranslationResult
from devtrans.pipeline import PipelineConfig, TranslationPipeline

app = typer.Typer(
    name="devtrans",
    help="DevTrans: translate the text inside code without touching the code",
    add_completion=False,
)
console = Console()

_SYNTAX_LEXERS = {"js": "javascript", "ts": "typescript", "jsx": "tsx", "python": "python", "plain": "text"}


def version_callback(value: bool):
    if value:
        console.print(f"{APP_NAME} v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Enable debug logging",
    ),
):
    """DevTrans: structural code translation."""
    logging.basicConfig(level=log_level(verbose), format="%(name)s: %(message)s")


def _read_code(input_text: Optional[str], input_file: Optional[Path]) -> str:
    if input_text is None and input_file is None:
        console.print("[red]Error:[/] Provide either --text or --input", style="bold")
        raise typer.Exit(1)
    if input_file is not None:
        if not input_file.exists():
            console.print(f"[red]Error:[/] File not found: {input_file}")
            raise typer.Exit(1)
        return input_file.read_text(encoding="utf-8")
    return input_text or ""


def _build_pipeline(
    dictionary: Optional[Path],
    no_defaults: bool = False,
    no_dictionary: bool = False,
) -> TranslationPipeline:
    if no_dictionary:
        source = EmptyTermSource()
    else:
        source = source_from_path(dictionary_path(dictionary))
    return TranslationPipeline(config=PipelineConfig(use_defaults=not no_defaults), source=source)


@app.command()
def translate(
    input_text: Optional[str] = typer.Option(
        None, "--text", "-t",
        help="Code snippet to translate",
    ),
    input_file: Optional[Path] = typer.Option(
        None, "--input", "-i",
        help="Source file to translate",
    ),
    output_file: Optional[Path] = typer.Option(
        None, "--output", "-o",
        help="Write the translated code here",
    ),
    language: Optional[str] = typer.Option(
        None, "--language", "-l",
        help="Language hint (js, ts, jsx, python, plain, ...). Detected if omitted",
    ),
    dictionary: Optional[Path] = typer.Option(
        None, "--dictionary", "-d",
        help="Term file (.json, .csv, .db)",
    ),
    no_defaults: bool = typer.Option(
        False, "--no-defaults",
        help="Do not merge the built-in vocabulary",
    ),
    no_dictionary: bool = typer.Option(
        False, "--no-dictionary",
        help="Skip the term file and use only the built-in vocabulary",
    ),
    as_json: bool = typer.Option(
        False, "--json",
        help="Print the full result as JSON",
    ),
    show_segments: bool = typer.Option(
        False, "--segments", "-s",
        help="Show a table of rewritten segments",
    ),
):
    """Translate the strings, comments and UI text of a snippet."""
    code = _read_code(input_text, input_file)
    pipeline = _build_pipeline(dictionary, no_defaults, no_dictionary)

    try:
        result = pipeline.translate(code, language)
    except DevTransError as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(result.to_json())
    elif output_file is None:
        console.print(Syntax(result.code, _SYNTAX_LEXERS.get(result.language, "text")))
        _print_summary(result)

    if show_segments and not as_json:
        _print_segments(result)

    if output_file is not None:
        output_file.write_text(result.code, encoding="utf-8")
        console.print(f"[green]Saved to:[/] {output_file}")


def _print_summary(result: TranslationResult) -> None:
    mode = "[yellow]plain fallback[/]" if result.used_fallback else "[green]structural[/]"
    console.print(
        f"[dim]{result.language} · {mode} · "
        f"{result.string_replacements} string(s), {result.comment_replacements} comment(s)[/]"
    )


def _print_segments(result: TranslationResult) -> None:
    table = Table(title=f"Segments ({len(result.segments)})")
    table.add_column("Kind", style="dim")
    table.add_column("Range")
    table.add_column("Original", style="cyan")
    table.add_column("Translated", style="green")
    for segment in result.segments:
        table.add_row(
            segment.kind.value,
            f"{segment.start}-{segment.end}",
            Text(segment.original),
            Text(segment.translated),
        )
    console.print(table)


@app.command()
def detect(
    input_text: Optional[str] = typer.Option(None, "--text", "-t", help="Code snippet"),
    input_file: Optional[Path] = typer.Option(None, "--input", "-i", help="Source file"),
):
    """Print the language a snippet resolves to."""
    code = _read_code(input_text, input_file)
    typer.echo(resolve_language(code) if code.strip() else "plain")


@app.command()
def dictionary(
    dictionary_file: Optional[Path] = typer.Option(
        None, "--dictionary", "-d",
        help="Term file (.json, .csv, .db)",
    ),
    search: Optional[str] = typer.Option(
        None, "--search", "-s",
        help="Look up a single term",
    ),
):
    """List dictionary entries or look one up."""
    source = source_from_path(dictionary_path(dictionary_file))
    try:
        entries = DictionaryCache(source).get()
    except DevTransError as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1)

    if search:
        entry = lookup(entries, search)
        if entry:
            console.print(f"[green]{entry.key}[/] → [cyan]{entry.translation}[/]")
        else:
            console.print(f"[yellow]Term not found:[/] {search}")
        return

    table = Table(title=f"Dictionary: {source.name} ({len(entries)} entries)")
    table.add_column("Key", style="cyan")
    table.add_column("Translation", style="green")
    for entry in entries:
        table.add_row(entry.key, entry.translation)
    console.print(table)


# ============================================================================
# Smoke scenarios
# ============================================================================

VALIDATION_TERMS = [
    {"term": "fetch", "translation": "obtener", "aliases": []},
    {"term": "user", "translation": "usuario", "aliases": []},
    {"term": "welcome", "translation": "bienvenido", "aliases": []},
    {"term": "state", "translation": "estado", "aliases": []},
    {"term": "component", "translation": "componente", "aliases": []},
    {"term": "function", "translation": "función", "aliases": []},
    {"term": "data", "translation": "datos", "aliases": []},
]

Check = Callable[[TranslationResult], bool]

VALIDATION_SCENARIOS: list[tuple[str, str, Optional[str], Check]] = [
    (
        "JS string literals",
        'const msg = "fetch user";',
        "js",
        lambda r: r.code == 'const msg = "obtener usuario";' and r.string_replacements == 1,
    ),
    (
        "TS template literal keeps expressions",
        "const greeting = `welcome ${user.name}`;",
        "ts",
        lambda r: "`bienvenido ${user.name}`" in r.code,
    ),
    (
        "JSX text and comments keep indentation",
        "export const UserCard = () => {\n"
        "  // fetch user data\n"
        "  return (\n"
        "    <div className=\"card\">\n"
        "      <p>welcome user</p>\n"
        "    </div>\n"
        "  );\n"
        "};",
        "jsx",
        lambda r: "// obtener usuario datos" in r.code
        and "<p>bienvenido usuario</p>" in r.code
        and "    <div" in r.code,
    ),
    (
        "Python strings and comments",
        "def get_user():\n"
        "    # fetch user from db\n"
        "    message = \"welcome user\"\n"
        "    return message",
        "python",
        lambda r: "    # obtener usuario from db" in r.code and '"bienvenido usuario"' in r.code,
    ),
    (
        "Go falls back to plain text",
        "func FetchUser() {\n"
        "    // fetch user data\n"
        "    message := \"welcome user\"\n"
        "}",
        "go",
        lambda r: r.used_fallback and "obtener" in r.code and "bienvenido" in r.code,
    ),
    (
        "JSX auto-detection",
        "<UserComponent>\n    <h1>welcome user</h1>\n  </UserComponent>",
        None,
        lambda r: r.language == "jsx" and "bienvenido usuario" in r.code,
    ),
    (
        "Independent comment counters",
        '// fetch user data\nconst name = "function";',
        "js",
        lambda r: r.comment_replacements == 1 and r.string_replacements == 1,
    ),
]


@app.command()
def validate(
    dictionary_file: Optional[Path] = typer.Option(
        None, "--dictionary", "-d",
        help="Term file to validate against (defaults to the built-in test terms)",
    ),
):
    """Run the structural translation smoke scenarios."""
    if dictionary_file is not None:
        source = source_from_path(dictionary_file)
    else:
        source = StaticTermSource(VALIDATION_TERMS)
    pipeline = TranslationPipeline(source=source)

    table = Table(title="Structural translation checks")
    table.add_column("Scenario")
    table.add_column("Language", style="dim")
    table.add_column("Result")

    failures = 0
    for name, code, language, check in VALIDATION_SCENARIOS:
        try:
            result = pipeline.translate(code, language)
            passed = check(result)
            resolved = result.language
        except DevTransError as e:
            console.print(f"[red]Error:[/] {e}")
            raise typer.Exit(1)
        if not passed:
            failures += 1
        table.add_row(name, resolved, "[green]PASS[/]" if passed else "[red]FAIL[/]")

    console.print(table)
    if failures:
        console.print(f"[red]{failures} scenario(s) failed[/]")
        raise typer.Exit(1)
    console.print("[green]All scenarios passed[/]")


@app.command()
def info():
    """Show version, supported languages and the dictionary source."""
    path = dictionary_path()
    table = Table(title=f"{APP_NAME} v{__version__}", show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("Languages", ", ".join(SUPPORTED_LANGUAGES))
    table.add_row("Dictionary", f"{path}" + ("" if path.exists() else " [red](missing)[/]"))
    table.add_row("Structural grammar", "tree-sitter tsx")
    console.print(table)


if __name__ == "__main__":
    app()
