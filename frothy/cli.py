"""Command-line entry point: run Frothy files and commands, or start a REPL."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from frothy import __version__
from frothy.debug_utils.pprint import DEFAULT_OPTIONS, PLAIN_OPTIONS, pprint_stack
from frothy.errors import FrothyError, FrothyUnbalancedBlock
from frothy.interpreter import Interpreter
from frothy.reader import lexer

logger = logging.getLogger(__name__)

PROMPT = "froth> "
CONTINUATION_PROMPT = "  ...> "


def format_error(exc: FrothyError, source_name: str) -> str:
    """Render an error as `error[Kind] at name:line:col: message`."""
    position = exc.position
    if position is None:
        return f"error[{exc.kind}] in {source_name}: {exc.message}"
    line, col = position
    return f"error[{exc.kind}] at {source_name}:{line}:{col}: {exc.message}"


def _configure_logging(verbose: int) -> None:
    level = logging.WARNING if verbose == 0 else (logging.INFO if verbose == 1 else logging.DEBUG)
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")


def _is_incomplete(exc: FrothyError) -> bool:
    # An unclosed '{' means the user is still typing a block
    return isinstance(exc, FrothyUnbalancedBlock) and exc.token is not None and exc.token.kind == lexer.LBRACE


def repl(interp: Interpreter) -> None:
    click.echo(f"frothy {__version__} - postfix stack language REPL; type 'exit' or Ctrl+D to quit.")
    options = DEFAULT_OPTIONS if sys.stdout.isatty() else PLAIN_OPTIONS
    source = ""
    while True:
        try:
            line = input(CONTINUATION_PROMPT if source else PROMPT)
        except (KeyboardInterrupt, EOFError):
            click.echo("")
            break
        if not source and line.strip() in ("quit", "exit"):
            break
        if not line.strip() and not source:
            continue
        source += line + "\n"
        try:
            stack = interp.eval(source)
        except FrothyError as exc:
            if _is_incomplete(exc):
                continue
            click.echo(format_error(exc, "<repl>"), err=True)
            source = ""
            continue
        source = ""
        if stack:
            click.echo(pprint_stack(stack, options))


@click.command()
@click.argument("files", nargs=-1, type=click.Path(exists=True, dir_okay=False))
@click.option("--command", "-c", "commands", multiple=True, type=str, help="Execute Frothy code from the command line.")
@click.option("--repl", "start_repl", is_flag=True, help="Start the REPL after running files and commands.")
@click.option("--strict", is_flag=True, help="Fail when values are left on the stack at end of program.")
@click.option("--max-depth", type=click.IntRange(min=1), default=None, help="Maximum nested call depth.")
@click.option("--verbose", "-v", count=True, help="Increase log verbosity (-v info, -vv debug).")
@click.version_option(__version__, prog_name="frothy")
def main(files: tuple, commands: tuple, start_repl: bool, strict: bool, max_depth: int | None, verbose: int):
    """Run Frothy FILES, then any --command sources, in one interpreter."""
    _configure_logging(verbose)
    interp = Interpreter(strict_stack=True if strict else None, max_depth=max_depth)

    items = [(Path(f).read_text(encoding="utf-8"), f) for f in files]
    items += [(cmd, f"<command-{i + 1}>") for i, cmd in enumerate(commands)]

    for source, name in items:
        logger.info("running %s", name)
        try:
            interp.run(source)
        except FrothyError as exc:
            click.echo(format_error(exc, name), err=True)
            sys.exit(1)

    if not items or start_repl:
        repl(interp)


if __name__ == "__main__":
    main()
