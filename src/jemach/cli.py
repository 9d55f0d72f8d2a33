"""jemach command-line interface.

Thin typer commands over the Julia analysis engine, the config
validator and the tmux helpers. Exit code 0 on success, 1 on
validation failure or operational error.
"""

import json
import logging
from pathlib import Path

import typer
from rich.table import Table

from jemach import __version__
from jemach.cli_utils import (
    EXIT_ERROR,
    EXIT_SUCCESS,
    _error,
    _read_source_file,
    _setup_logging,
    _success,
    _warning,
    console,
)
from jemach.config.validator import format_validation_report, validate_config_file
from jemach.core.exceptions import TmuxError
from jemach.julia import detect_blocks, find_enclosing_block, format_code, validate_syntax
from jemach.julia.types import Block
from jemach.tmux import (
    find_julia_panes,
    get_or_create_julia_pane,
    is_tmux_available,
    require_tmux_session,
    send_to_pane,
    setup_julia_workspace,
)

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="jemach",
    help="Julia development utilities: block detection, validation, formatting and tmux REPL control",
    no_args_is_help=True,
)

_LAYOUTS = ("horizontal", "vertical", "grid")


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"jemach {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Julia development utilities."""
    _setup_logging(verbose, quiet)


def _require_session() -> None:
    """Exit with an error unless running inside tmux."""
    try:
        require_tmux_session()
    except TmuxError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_ERROR) from e


@app.command("validate-config")
def validate_config_command(
    file: str = typer.Argument(..., help="Configuration file to validate (JSON or YAML)"),
) -> None:
    """Validate a jemach configuration file."""
    config_path = Path(file)
    report = validate_config_file(config_path)
    text, has_errors = format_validation_report(report, config_path)
    console.print(text)
    raise typer.Exit(code=EXIT_ERROR if has_errors else EXIT_SUCCESS)


@app.command("setup-tmux")
def setup_tmux_command(
    session: str = typer.Option(
        "julia-dev",
        "--session",
        "-s",
        help="Session name",
    ),
    layout: str = typer.Option(
        "horizontal",
        "--layout",
        "-l",
        help="Split layout: horizontal, vertical or grid",
    ),
) -> None:
    """Set up a tmux workspace for Julia development."""
    if layout not in _LAYOUTS:
        _error(f"Invalid --layout: {layout}. Use one of: {', '.join(_LAYOUTS)}")
        raise typer.Exit(code=EXIT_ERROR)

    if not is_tmux_available():
        _error("tmux is not available")
        raise typer.Exit(code=EXIT_ERROR)

    console.print("Setting up Julia tmux workspace...")
    if not setup_julia_workspace(session_name=session, split_layout=layout):  # type: ignore[arg-type]
        _error("Failed to set up workspace")
        raise typer.Exit(code=EXIT_ERROR)

    _success(f"Workspace setup complete (session: {session})")


@app.command("list-julia-panes")
def list_julia_panes_command(
    name_filter: str = typer.Option(
        "julia",
        "--filter",
        "-f",
        help="Substring matched against pane command or title",
    ),
) -> None:
    """List tmux panes running Julia."""
    _require_session()

    panes = find_julia_panes(name_filter)
    if not panes:
        console.print("No Julia panes found")
        return

    table = Table(title="Julia panes")
    table.add_column("Pane", style="cyan")
    table.add_column("Command")
    table.add_column("Size", style="dim")
    table.add_column("Active", style="dim")
    for pane in panes:
        table.add_row(
            pane.id,
            pane.current_command,
            f"{pane.width}x{pane.height}",
            "*" if pane.active else "",
        )
    console.print(table)


@app.command("validate-julia")
def validate_julia_command(
    file: str = typer.Argument(..., help="Julia file to validate"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Check that block keywords and `end` markers balance."""
    code = _read_source_file(file)
    report = validate_syntax(code)

    if as_json:
        typer.echo(json.dumps(report.to_dict(), indent=2))
    elif report.valid:
        _success("Julia syntax is valid")
    else:
        console.print("[red]✗[/red] Julia syntax errors:")
        for issue in report.errors:
            console.print(f"  Line {issue.line + 1}: {issue.message}")

    raise typer.Exit(code=EXIT_SUCCESS if report.valid else EXIT_ERROR)


@app.command("format-julia")
def format_julia_command(
    file: str = typer.Argument(..., help="Julia file to format"),
    indent: int = typer.Option(4, "--indent", "-i", min=0, help="Indentation size"),
    output: str | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file (defaults to the input file)",
    ),
    check: bool = typer.Option(
        False,
        "--check",
        help="Only report whether the file would change",
    ),
) -> None:
    """Re-indent Julia code by block depth."""
    code = _read_source_file(file)
    formatted = format_code(code, indent_size=indent)

    if not validate_syntax(code).valid:
        _warning(f"{file} has unbalanced blocks; indentation may be off")

    if check:
        if formatted != code:
            console.print(f"[yellow]Would reformat[/yellow] {file}")
            raise typer.Exit(code=EXIT_ERROR)
        _success(f"{file} is already formatted")
        return

    output_file = output or file
    try:
        Path(output_file).write_text(formatted, encoding="utf-8")
    except OSError as e:
        _error(f"Cannot write {output_file}: {e}")
        raise typer.Exit(code=EXIT_ERROR) from e
    _success(f"Formatted {file} -> {output_file}")


def _block_summary(block: Block) -> str:
    return f"{block.kind.value}: lines {block.start_line + 1}-{block.end_line + 1}"


@app.command("detect-blocks")
def detect_blocks_command(
    file: str = typer.Argument(..., help="Julia file to analyze"),
    line: int | None = typer.Option(
        None,
        "--line",
        "-l",
        min=1,
        help="Report only the block enclosing this 1-based line",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print blocks as JSON"),
) -> None:
    """Detect Julia code blocks in a file."""
    lines = _read_source_file(file).split("\n")

    if line is not None:
        block = find_enclosing_block(lines, line - 1)
        if block is None:
            if as_json:
                typer.echo("null")
            else:
                console.print(f"No enclosing block at line {line}")
            raise typer.Exit(code=EXIT_ERROR)
        if as_json:
            typer.echo(json.dumps(block.to_dict(), indent=2))
        else:
            console.print(_block_summary(block))
        return

    blocks = detect_blocks(lines)
    if as_json:
        typer.echo(json.dumps([b.to_dict() for b in blocks], indent=2))
        return
    if not blocks:
        console.print("No code blocks found")
        return
    console.print(f"Found {len(blocks)} code blocks:")
    for block in blocks:
        console.print(f"  {_block_summary(block)}")


@app.command("send-to-julia")
def send_to_julia_command(
    code: str = typer.Argument(..., help="Code to send"),
    pane: str | None = typer.Option(
        None,
        "--pane",
        "-p",
        help="Target pane id (auto-detect if not specified)",
    ),
) -> None:
    """Send code to a Julia tmux pane."""
    _require_session()

    pane_id = pane or get_or_create_julia_pane()
    if pane_id is None:
        _error("Could not find or create Julia pane")
        raise typer.Exit(code=EXIT_ERROR)

    if not send_to_pane(pane_id, code):
        _error("Failed to send code")
        raise typer.Exit(code=EXIT_ERROR)
    _success(f"Code sent to pane {pane_id}")


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
